"""
Unit tests for the backend OrderService and metrics.
"""
import pytest

from backend.core.metrics import Metrics, metrics
from backend.models.schemas import OrderCreate, OrderStatus
from backend.services.order_service import (
    OrderRejectedError,
    OrderService,
    confirmation_message,
    describe_toppings,
)


@pytest.fixture(autouse=True)
def reset_metrics():
    metrics.reset()
    yield
    metrics.reset()


@pytest.fixture
def order():
    return OrderCreate(full_name="Alice", size="L", toppings=["1", "2"])


class TestPlaceOrder:
    """Tests for OrderService.place_order."""

    def test_accepts_order(self, order):
        service = OrderService()
        response = service.place_order(order)

        assert response.status == OrderStatus.ACCEPTED
        assert response.message == "Thank you for your order, Alice! Your large pizza with 2 toppings is on the way."
        assert service.get_order(response.id) == response
        assert metrics.orders_received == 1
        assert metrics.orders_accepted == 1

    def test_rejects_at_full_failure_rate(self, order):
        service = OrderService(failure_rate=1.0)

        with pytest.raises(OrderRejectedError):
            service.place_order(order)

        assert metrics.orders_rejected == 1
        assert service.recent_count == 0

    def test_seeded_decisions_reproducible(self, order):
        def decisions(service):
            results = []
            for _ in range(20):
                try:
                    service.place_order(order)
                    results.append(True)
                except OrderRejectedError:
                    results.append(False)
            return results

        assert decisions(OrderService(failure_rate=0.5, seed=3)) == decisions(OrderService(failure_rate=0.5, seed=3))

    def test_require_topping(self):
        service = OrderService(require_topping=True)

        with pytest.raises(ValueError):
            service.place_order(OrderCreate(full_name="Alice", size="S", toppings=[]))
        assert metrics.orders_invalid == 1

    def test_recent_orders_bounded(self, order):
        service = OrderService(max_recent=2)
        first = service.place_order(order)
        service.place_order(order)
        third = service.place_order(order)

        assert service.recent_count == 2
        assert service.get_order(first.id) is None
        assert service.get_order(third.id) is not None

    def test_unknown_order(self):
        assert OrderService().get_order("missing") is None


class TestMessages:
    """Tests for backend confirmation text."""

    def test_describe_toppings(self):
        assert [describe_toppings(n) for n in (0, 1, 4)] == ["no toppings", "1 topping", "4 toppings"]

    def test_confirmation_without_toppings(self):
        message = confirmation_message(OrderCreate(full_name="Bob", size="S", toppings=[]))
        assert message == "Thank you for your order, Bob! Your small pizza with no toppings is on the way."


class TestMetrics:
    """Tests for the Metrics counters."""

    def test_increment_and_reset(self):
        m = Metrics()
        m.increment('orders_received')
        m.increment('orders_received', 2)
        assert m.to_dict()['orders_received'] == 3

        m.reset()
        assert m.orders_received == 0

    def test_acceptance_rate(self):
        m = Metrics()
        assert m.acceptance_rate == 1.0
        m.increment('orders_accepted', 3)
        m.increment('orders_rejected')
        assert m.acceptance_rate == 0.75
