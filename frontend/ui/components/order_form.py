"""Pizza order form component for Pizzeria.

Renders an OrderForm with Streamlit widgets. Widget callbacks forward every
change to the form, which revalidates immediately, so the errors and the
submit button reflect the latest values on the following rerun.
"""

import logging

import streamlit as st

from frontend.config.settings import config, SIZE_CHOICES, SIZE_PLACEHOLDER
from frontend.utils import (
    FIELD_FULL_NAME,
    FIELD_SIZE,
    FIELD_TOPPINGS,
    OrderForm,
    SessionState,
    SubmissionInProgressError,
)

logger = logging.getLogger(__name__)

# Widget keys
FULL_NAME_KEY = "order_full_name"
SIZE_KEY = "order_size"
SUBMIT_KEY = "order_submit"
SIZE_OPTIONS = [""] + list(SIZE_CHOICES)


def topping_key(topping_id: str) -> str:
    """Get the widget key of a topping checkbox."""
    return f"order_topping_{topping_id}"


def _format_size(size: str) -> str:
    return SIZE_CHOICES.get(size, SIZE_PLACEHOLDER)


def render_order_form(form: OrderForm) -> None:
    """Render the order form with its outcome banner.

    Args:
        form: The session's order form
    """
    st.subheader("Order Your Pizza")

    if form.outcome is not None:
        render_order_banner_polling(form)
    else:
        render_order_banner(form)

    # Shown once, e.g. a double-click while an order was in flight
    notice = SessionState.get('last_error')
    if notice:
        st.warning(notice)
        SessionState.set('last_error', None)

    _init_widgets(form)

    # Full name
    st.text_input(
        "Full Name",
        key=FULL_NAME_KEY,
        placeholder="Type full name",
        on_change=_handle_full_name_change,
        args=(form,),
    )
    _render_field_error(form, FIELD_FULL_NAME)

    # Size
    st.selectbox(
        "Size",
        SIZE_OPTIONS,
        key=SIZE_KEY,
        format_func=_format_size,
        on_change=_handle_size_change,
        args=(form,),
    )
    _render_field_error(form, FIELD_SIZE)

    # Toppings
    st.markdown("**Toppings**")
    for topping in form.catalog:
        st.checkbox(
            topping.label,
            key=topping_key(topping.topping_id),
            on_change=_handle_topping_change,
            args=(form, topping.topping_id),
        )
    _render_field_error(form, FIELD_TOPPINGS)

    st.divider()

    st.button(
        "Submit",
        key=SUBMIT_KEY,
        type="primary",
        disabled=form.is_submit_disabled,
        on_click=_handle_submit,
        args=(form,),
    )

    if form.is_submitting:
        st.info("Your order is being submitted...")


def render_order_banner(form: OrderForm) -> None:
    """Render the success/failure banner of the last submission."""
    outcome = form.outcome
    if outcome is None:
        return
    if outcome.success:
        st.success(outcome.message)
    else:
        st.error(outcome.message)


@st.fragment(run_every=config.BANNER_REFRESH_SECONDS)
def render_order_banner_polling(form: OrderForm) -> None:
    """Render the banner and rerun it periodically.

    The form clears its outcome from a timer thread; rerunning only this
    fragment makes the banner disappear without user action.
    """
    render_order_banner(form)


def _render_field_error(form: OrderForm, field: str) -> None:
    error = form.visible_error(field)
    if error:
        st.error(error)


def _init_widgets(form: OrderForm) -> None:
    """Seed widget values from the form on first render."""
    state = form.state
    st.session_state.setdefault(FULL_NAME_KEY, state.full_name)
    st.session_state.setdefault(SIZE_KEY, state.size)
    for topping in form.catalog:
        st.session_state.setdefault(
            topping_key(topping.topping_id),
            topping.topping_id in state.toppings,
        )


def _sync_widgets(form: OrderForm) -> None:
    """Overwrite widget values with the form state (after a reset)."""
    state = form.state
    st.session_state[FULL_NAME_KEY] = state.full_name
    st.session_state[SIZE_KEY] = state.size
    for topping in form.catalog:
        st.session_state[topping_key(topping.topping_id)] = topping.topping_id in state.toppings


# Widget callbacks
def _handle_full_name_change(form: OrderForm) -> None:
    value = st.session_state.get(FULL_NAME_KEY, "")
    logger.debug(f"Full name changed (length {len(value)})")
    form.set_full_name(value)


def _handle_size_change(form: OrderForm) -> None:
    value = st.session_state.get(SIZE_KEY, "")
    logger.debug(f"Size changed: {value!r}")
    form.set_size(value)


def _handle_topping_change(form: OrderForm, topping_id: str) -> None:
    checked = bool(st.session_state.get(topping_key(topping_id)))
    if (topping_id in form.state.toppings) != checked:
        form.toggle_topping(topping_id)


def _handle_submit(form: OrderForm) -> None:
    try:
        outcome = form.submit()
    except SubmissionInProgressError as e:
        logger.warning(f"Ignored submit: {e}")
        SessionState.set('last_error', str(e))
        return

    if outcome is not None and outcome.success:
        _sync_widgets(form)
