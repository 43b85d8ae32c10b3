"""Order page for Pizzeria.

Provides the interface for ordering a pizza.
"""

import logging

import streamlit as st

from frontend.config.settings import config
from frontend.services import get_order_service, load_topping_catalog
from frontend.utils import APIError, OrderForm, SessionState
from frontend.ui.components import render_order_form

logger = logging.getLogger(__name__)


def render_order_page() -> None:
    """Render the order page with the session's order form."""
    st.title(f"{config.APP_ICON} {config.APP_NAME}")
    st.caption("Pick a size, choose your toppings and we'll do the rest.")

    try:
        catalog = SessionState.get_topping_catalog(load_topping_catalog)
    except APIError as e:
        logger.error(f"Could not load topping catalog: {e}")
        st.error("The menu is unavailable right now. Please try again later.")
        return

    form = SessionState.get_order_form(
        lambda: OrderForm(service=get_order_service(), catalog=catalog)
    )
    render_order_form(form)
