# Services package
from backend.services.order_service import order_service, OrderService, OrderRejectedError

__all__ = [
    "order_service",
    "OrderService",
    "OrderRejectedError",
]
