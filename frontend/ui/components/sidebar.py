"""Sidebar component for Pizzeria.

Shows where orders go (simulated service or backend) and, in backend mode,
whether the backend is reachable.
"""

import logging

import streamlit as st

from frontend.config.settings import config
from frontend.services import get_api_client

logger = logging.getLogger(__name__)


def render_sidebar() -> None:
    """Render the sidebar with app info and backend status."""
    with st.sidebar:
        st.markdown(f"## {config.APP_ICON} {config.APP_NAME}")
        st.caption(f"v{config.APP_VERSION}")

        st.divider()

        if config.uses_backend:
            render_backend_status()
        else:
            st.caption("Orders are simulated locally")


def render_backend_status() -> None:
    """Render backend health status."""
    client = get_api_client()

    if client.health_check():
        st.caption("Backend connected")
    else:
        logger.warning(f"Backend health check failed: {client.base_url}")
        st.caption("Backend unavailable")
