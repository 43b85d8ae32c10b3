"""
Order service: accepts or rejects orders and remembers recent ones.

Nothing is persisted. Accepted orders are kept in a bounded in-memory
history so that clients can look them up shortly after ordering.
"""
import logging
import random
import threading
import uuid
from collections import OrderedDict
from datetime import datetime, timezone
from typing import Optional

from backend.config import settings
from backend.core.metrics import metrics
from backend.models.schemas import (
    OrderCreate,
    OrderResponse,
    OrderStatus,
    PIZZA_SIZES,
)

logger = logging.getLogger(__name__)


class OrderRejectedError(Exception):
    """Raised when the kitchen cannot take an order."""

    def __init__(self, message: str = "Order could not be processed"):
        self.message = message
        super().__init__(message)


def describe_toppings(count: int) -> str:
    """Pluralize a topping count ('no toppings', '1 topping', 'N toppings')."""
    if count == 0:
        return "no toppings"
    if count == 1:
        return "1 topping"
    return f"{count} toppings"


def confirmation_message(order: OrderCreate) -> str:
    """Build the confirmation text returned for an accepted order."""
    return (
        f"Thank you for your order, {order.full_name}! "
        f"Your {PIZZA_SIZES[order.size]} pizza with "
        f"{describe_toppings(len(order.toppings))} is on the way."
    )


class OrderService:
    """Decides on incoming orders.

    Thread-safe; FastAPI may call it from several worker threads.

    Args:
        failure_rate: Probability (0.0-1.0) of rejecting an order
        seed: Seed for the rejection RNG (optional)
        max_recent: Number of accepted orders kept for lookup
        require_topping: Reject orders without toppings
    """

    def __init__(
        self,
        failure_rate: float = 0.0,
        seed: Optional[int] = None,
        max_recent: int = 100,
        require_topping: bool = False,
    ):
        self.failure_rate = failure_rate
        self.max_recent = max_recent
        self.require_topping = require_topping
        self._rng = random.Random(seed)
        self._recent: "OrderedDict[str, OrderResponse]" = OrderedDict()
        self._lock = threading.Lock()

    def place_order(self, order: OrderCreate) -> OrderResponse:
        """Accept or reject a validated order.

        Args:
            order: Validated order request

        Returns:
            OrderResponse for the accepted order

        Raises:
            OrderRejectedError: If the order is rejected
        """
        metrics.increment('orders_received')

        if self.require_topping and not order.toppings:
            metrics.increment('orders_invalid')
            raise ValueError("At least one topping must be selected")

        with self._lock:
            rejected = bool(self.failure_rate) and self._rng.random() < self.failure_rate

        if rejected:
            metrics.increment('orders_rejected')
            logger.info(f"Order rejected (size={order.size}, toppings={len(order.toppings)})")
            raise OrderRejectedError()

        response = OrderResponse(
            id=str(uuid.uuid4()),
            status=OrderStatus.ACCEPTED,
            full_name=order.full_name,
            size=order.size,
            toppings=list(order.toppings),
            message=confirmation_message(order),
            created_at=datetime.now(timezone.utc),
        )

        with self._lock:
            self._recent[response.id] = response
            while len(self._recent) > self.max_recent:
                self._recent.popitem(last=False)

        metrics.increment('orders_accepted')
        logger.info(f"Order accepted: {response.id}")
        return response

    def get_order(self, order_id: str) -> Optional[OrderResponse]:
        """Get a recently accepted order by ID."""
        with self._lock:
            return self._recent.get(order_id)

    @property
    def recent_count(self) -> int:
        with self._lock:
            return len(self._recent)


# Global service instance configured from settings
order_service = OrderService(
    failure_rate=settings.ORDER_FAILURE_RATE,
    seed=settings.ORDER_RANDOM_SEED,
    max_recent=settings.MAX_RECENT_ORDERS,
    require_topping=settings.REQUIRE_TOPPING,
)
