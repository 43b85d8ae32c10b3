"""
Unit tests for the Streamlit order form component.

Streamlit is replaced with a MagicMock whose session state is a plain dict,
so widget callbacks can be driven directly.
"""
import pytest
from unittest.mock import patch

from frontend.ui.components import order_form as component
from frontend.utils.form_state import FormStatus
from frontend.utils.session_state import SessionState


@pytest.fixture
def mock_st():
    state = {}
    with patch.object(component, 'st') as st_mock, \
            patch.object(SessionState, '_get_session_state', return_value=state):
        st_mock.session_state = state
        yield st_mock


def widgets(mock_st):
    return mock_st.session_state


def submit_button_kwargs(mock_st):
    mock_st.button.assert_called_once()
    return mock_st.button.call_args.kwargs


class TestFieldCallbacks:
    """Tests for the text input and selectbox callbacks."""

    def test_full_name_change(self, mock_st, order_form):
        widgets(mock_st)[component.FULL_NAME_KEY] = "Alice"
        component._handle_full_name_change(order_form)

        assert order_form.state.full_name == "Alice"
        assert "full_name" in order_form.touched

    def test_size_change(self, mock_st, order_form):
        widgets(mock_st)[component.SIZE_KEY] = "L"
        component._handle_size_change(order_form)

        assert order_form.state.size == "L"

    def test_cleared_size(self, mock_st, order_form):
        order_form.set_size("M")
        widgets(mock_st)[component.SIZE_KEY] = ""
        component._handle_size_change(order_form)

        assert order_form.state.size == ""
        assert order_form.visible_error("size") == "size is required"


class TestToppingCallback:
    """Tests for reconciling a topping checkbox with the form."""

    def test_checked_selects_topping(self, mock_st, order_form):
        widgets(mock_st)[component.topping_key("3")] = True
        component._handle_topping_change(order_form, "3")

        assert order_form.state.toppings == ("3",)

    def test_unchecked_deselects_topping(self, mock_st, order_form):
        order_form.toggle_topping("3")
        widgets(mock_st)[component.topping_key("3")] = False
        component._handle_topping_change(order_form, "3")

        assert order_form.state.toppings == ()

    def test_matching_state_not_toggled(self, mock_st, order_form):
        order_form.toggle_topping("2")
        widgets(mock_st)[component.topping_key("2")] = True

        with patch.object(order_form, 'toggle_topping') as toggle:
            component._handle_topping_change(order_form, "2")

        toggle.assert_not_called()
        assert order_form.state.toppings == ("2",)

    def test_missing_widget_value_means_unchecked(self, mock_st, order_form):
        component._handle_topping_change(order_form, "1")
        assert order_form.state.toppings == ()


class TestSubmitCallback:
    """Tests for the submit button callback."""

    def _fill_widgets(self, mock_st, form):
        state = widgets(mock_st)
        state[component.FULL_NAME_KEY] = "Alice"
        state[component.SIZE_KEY] = "M"
        state[component.topping_key("1")] = True
        component._handle_full_name_change(form)
        component._handle_size_change(form)
        component._handle_topping_change(form, "1")

    def test_success_clears_widgets(self, mock_st, order_form, accepting_service):
        self._fill_widgets(mock_st, order_form)

        component._handle_submit(order_form)

        assert len(accepting_service.orders) == 1
        assert order_form.status == FormStatus.SUCCEEDED
        state = widgets(mock_st)
        assert state[component.FULL_NAME_KEY] == ""
        assert state[component.SIZE_KEY] == ""
        assert all(state[component.topping_key(t)] is False for t in ("1", "2", "3", "4", "5"))

    def test_failure_keeps_widgets(self, mock_st, rejecting_service, manual_scheduler):
        from frontend.utils.order_form import OrderForm

        form = OrderForm(rejecting_service, require_topping=False, scheduler=manual_scheduler)
        self._fill_widgets(mock_st, form)

        component._handle_submit(form)

        assert form.status == FormStatus.FAILED
        assert widgets(mock_st)[component.FULL_NAME_KEY] == "Alice"
        assert widgets(mock_st)[component.topping_key("1")] is True

    def test_blocked_submit_keeps_widgets(self, mock_st, order_form, accepting_service):
        widgets(mock_st)[component.FULL_NAME_KEY] = "Al"
        component._handle_full_name_change(order_form)

        component._handle_submit(order_form)

        assert accepting_service.orders == []
        assert widgets(mock_st)[component.FULL_NAME_KEY] == "Al"

    def test_second_click_while_in_flight(self, mock_st, manual_scheduler):
        from frontend.utils.form_state import SubmissionResult
        from frontend.utils.order_form import OrderForm

        class ClickingService:
            """Clicks submit again while the first order is in flight."""

            def __init__(self):
                self.orders = []

            def submit(self, order):
                self.orders.append(order)
                component._handle_submit(form)
                return SubmissionResult.accepted("order-1")

        service = ClickingService()
        form = OrderForm(service, require_topping=False, scheduler=manual_scheduler)
        self._fill_widgets(mock_st, form)

        component._handle_submit(form)

        assert len(service.orders) == 1
        assert widgets(mock_st)['last_error'] == "An order is already being submitted"
        assert form.status == FormStatus.SUCCEEDED


class TestRenderOrderForm:
    """Tests for render_order_form."""

    def test_submit_disabled_for_empty_form(self, mock_st, order_form):
        component.render_order_form(order_form)

        kwargs = submit_button_kwargs(mock_st)
        assert kwargs['key'] == component.SUBMIT_KEY
        assert kwargs['disabled'] is True
        assert kwargs['on_click'] is component._handle_submit
        assert kwargs['args'] == (order_form,)

    def test_submit_enabled_for_valid_form(self, mock_st, order_form):
        order_form.set_full_name("Alice")
        order_form.set_size("S")

        component.render_order_form(order_form)

        assert submit_button_kwargs(mock_st)['disabled'] is False

    def test_widgets_seeded_from_form(self, mock_st, order_form):
        order_form.set_full_name("Alice")
        order_form.toggle_topping("4")

        component.render_order_form(order_form)

        state = widgets(mock_st)
        assert state[component.FULL_NAME_KEY] == "Alice"
        assert state[component.SIZE_KEY] == ""
        assert state[component.topping_key("4")] is True
        assert state[component.topping_key("5")] is False

    def test_touched_field_error_rendered(self, mock_st, order_form):
        order_form.set_full_name("Al")

        component.render_order_form(order_form)

        mock_st.error.assert_called_once_with("Full name must be at least 3 characters")

    def test_last_error_shown_once(self, mock_st, order_form):
        widgets(mock_st)['last_error'] = "An order is already being submitted"

        component.render_order_form(order_form)

        mock_st.warning.assert_called_once_with("An order is already being submitted")
        assert widgets(mock_st)['last_error'] is None

        component.render_order_form(order_form)
        assert mock_st.warning.call_count == 1
