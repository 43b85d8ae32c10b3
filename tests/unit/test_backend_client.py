"""
Unit tests for the backend API client.

The HTTP session is mocked; no server is needed.
"""
import pytest
import requests
from unittest.mock import MagicMock

from frontend.services.backend_client import PizzaAPIClient
from frontend.utils.exceptions import APIError, BackendUnavailableError
from frontend.utils.form_state import PizzaOrder


def make_response(status_code, data=None, text=""):
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    if data is None:
        response.json.side_effect = ValueError("No JSON")
    else:
        response.json.return_value = data
    return response


@pytest.fixture
def client():
    api = PizzaAPIClient(base_url="http://backend.test", timeout=5, max_retries=1)
    api.session = MagicMock()
    return api


class TestSubmit:
    """Tests for PizzaAPIClient.submit."""

    def test_accepted_order(self, client):
        client.session.request.return_value = make_response(
            201, {"id": "abc-123", "message": "Thank you"}
        )

        result = client.submit(PizzaOrder("Alice", "M", ("1",)))

        assert result.success
        assert result.order_id == "abc-123"
        method, url = client.session.request.call_args[0]
        assert method == "POST"
        assert url == "http://backend.test/api/v1/orders"
        assert client.session.request.call_args[1]["json"] == {
            "full_name": "Alice", "size": "M", "toppings": ["1"],
        }

    def test_rejected_order(self, client):
        client.session.request.return_value = make_response(
            503, {"detail": "Something went wrong", "error_code": "ORDER_REJECTED"}
        )

        result = client.submit(PizzaOrder("Alice", "M"))

        assert not result.success
        assert result.error == "Something went wrong"

    def test_validation_error_detail_list(self, client):
        client.session.request.return_value = make_response(
            422, {"detail": [{"msg": "Value error, size is required"}]}
        )

        result = client.submit(PizzaOrder("Alice", ""))

        assert result.error == "Value error, size is required"

    def test_connection_error(self, client):
        client.session.request.side_effect = requests.exceptions.ConnectionError("refused")

        result = client.submit(PizzaOrder("Alice", "M"))

        assert not result.success
        assert "refused" in result.error

    def test_invalid_json_on_success(self, client):
        client.session.request.return_value = make_response(201, None, text="oops")

        result = client.submit(PizzaOrder("Alice", "M"))

        assert not result.success
        assert result.error == "Invalid response from server"

    def test_session_header(self, client):
        client.session_id = "sess-1"
        client.session.request.return_value = make_response(201, {"id": "x"})

        client.submit(PizzaOrder("Alice", "M"))

        assert client.session.request.call_args[1]["headers"]["X-Session-ID"] == "sess-1"


class TestToppings:
    """Tests for PizzaAPIClient.get_toppings."""

    def test_loads_catalog(self, client):
        client.session.request.return_value = make_response(
            200, [{"id": "1", "label": "Pepperoni"}, {"id": "2", "label": "Green Peppers"}]
        )

        catalog = client.get_toppings()

        assert catalog.ids == ("1", "2")

    def test_unreachable_backend(self, client):
        client.session.request.side_effect = requests.exceptions.ConnectionError("refused")

        with pytest.raises(BackendUnavailableError):
            client.get_toppings()

    def test_error_status(self, client):
        client.session.request.return_value = make_response(500, {"detail": "boom"})

        with pytest.raises(APIError) as exc_info:
            client.get_toppings()
        assert exc_info.value.status_code == 500

    def test_invalid_catalog(self, client):
        client.session.request.return_value = make_response(200, [{"id": "1"}])

        with pytest.raises(APIError):
            client.get_toppings()


class TestOrdersAndHealth:
    """Tests for get_order and health_check."""

    def test_get_order(self, client):
        client.session.request.return_value = make_response(200, {"id": "abc"})
        assert client.get_order("abc") == {"id": "abc"}

    def test_get_unknown_order(self, client):
        client.session.request.return_value = make_response(404, {"detail": "Order not found"})
        assert client.get_order("nope") is None

    def test_health_check(self, client):
        client.session.request.return_value = make_response(200, {"status": "healthy"})
        assert client.health_check() is True

    def test_health_check_unreachable(self, client):
        client.session.request.side_effect = requests.exceptions.Timeout()
        assert client.health_check() is False


class TestRetryPolicy:
    """Tests for the mounted retry strategy."""

    def test_post_not_retried(self):
        api = PizzaAPIClient(base_url="http://backend.test", max_retries=3)
        retry = api.session.get_adapter("http://backend.test").max_retries

        assert retry.total == 3
        assert "POST" not in retry.allowed_methods
        assert "GET" in retry.allowed_methods
