"""Services for the Pizzeria frontend."""
from frontend.services.order_submission import (
    OrderSubmissionService,
    SimulatedOrderService,
    SubmissionResult,
    get_order_service,
    load_topping_catalog,
)
from frontend.services.backend_client import (
    PizzaAPIClient,
    get_api_client,
    set_session_id,
)

__all__ = [
    # Order submission
    "OrderSubmissionService",
    "SimulatedOrderService",
    "SubmissionResult",
    "get_order_service",
    "load_topping_catalog",
    # Backend client
    "PizzaAPIClient",
    "get_api_client",
    "set_session_id",
]
