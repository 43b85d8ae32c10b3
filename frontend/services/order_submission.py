"""Order submission services.

The order form only depends on the OrderSubmissionService contract:

    submit(order: PizzaOrder) -> SubmissionResult

Two implementations exist:
- SimulatedOrderService: decides locally (always accepts by default)
- PizzaAPIClient (frontend.services.backend_client): posts to the backend

Neither retries a rejected order; resubmitting is the user's decision.
"""

import logging
import random
import time
import uuid

from frontend.config.settings import config
from frontend.utils.form_state import (
    OrderSubmissionService,
    PizzaOrder,
    SubmissionResult,
    ToppingCatalog,
)

logger = logging.getLogger(__name__)


class SimulatedOrderService:
    """Accepts or rejects orders without any network call.

    With the default failure rate of 0.0 every order is accepted. A seeded
    ``random.Random`` makes rejections reproducible.

    Args:
        failure_rate: Probability (0.0-1.0) of rejecting an order
        latency_seconds: Artificial processing delay
        seed: Seed for the rejection RNG (optional)

    Example:
        >>> service = SimulatedOrderService()
        >>> service.submit(PizzaOrder("Alice", "S")).success
        True
    """

    def __init__(
        self,
        failure_rate: float = 0.0,
        latency_seconds: float = 0.0,
        seed: int = None,
    ):
        if not 0.0 <= failure_rate <= 1.0:
            raise ValueError("failure_rate must be between 0.0 and 1.0")
        self.failure_rate = failure_rate
        self.latency_seconds = latency_seconds
        self._rng = random.Random(seed)
        self.submitted_count = 0

    def submit(self, order: PizzaOrder) -> SubmissionResult:
        """Simulate placing an order."""
        if self.latency_seconds > 0:
            time.sleep(self.latency_seconds)

        self.submitted_count += 1

        if self.failure_rate and self._rng.random() < self.failure_rate:
            logger.info(f"Simulated rejection of order for {order.full_name!r}")
            return SubmissionResult.rejected("Order rejected by simulated service")

        order_id = str(uuid.uuid4())
        logger.info(f"Simulated acceptance of order {order_id[:8]}... ({order.size}, {len(order.toppings)} toppings)")
        return SubmissionResult.accepted(order_id)


def get_order_service() -> OrderSubmissionService:
    """Get the order submission service selected by SUBMISSION_MODE."""
    if config.uses_backend:
        # Imported here to avoid a circular import with backend_client
        from frontend.services.backend_client import get_api_client
        return get_api_client()

    return SimulatedOrderService(
        failure_rate=config.SIMULATED_FAILURE_RATE,
        latency_seconds=config.SIMULATED_LATENCY_SECONDS,
    )


def load_topping_catalog() -> ToppingCatalog:
    """Get the topping catalog for new order forms.

    In backend mode the catalog is served by the backend, otherwise the
    built-in catalog is used.

    Raises:
        APIError: If the backend catalog cannot be loaded
    """
    if config.uses_backend:
        from frontend.services.backend_client import get_api_client
        return get_api_client().get_toppings()
    return ToppingCatalog.default()
