"""
Order API endpoints.

- GET  /toppings: the topping menu
- POST /orders: place an order (201 accepted, 503 rejected)
- GET  /orders/{id}: look up a recently accepted order
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from backend.core.auth import validate_session_id, truncate_session_id
from backend.models.schemas import (
    TOPPINGS,
    ErrorResponse,
    OrderCreate,
    OrderResponse,
    ToppingSchema,
)
from backend.services.order_service import order_service, OrderRejectedError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/orders", tags=["Orders"])
menu_router = APIRouter(tags=["Menu"])

REJECTION_DETAIL = "Something went wrong"
REJECTION_CODE = "ORDER_REJECTED"


@menu_router.get("/toppings", response_model=List[ToppingSchema])
async def list_toppings() -> List[ToppingSchema]:
    """Return the toppings in menu order."""
    return [ToppingSchema(**topping) for topping in TOPPINGS]


@router.post(
    "",
    status_code=201,
    response_model=OrderResponse,
    responses={503: {"model": ErrorResponse}},
    summary="Place an order",
)
def create_order(
    request: OrderCreate,
    session_id: str = Depends(validate_session_id),
):
    """
    Place a pizza order.

    Headers:
        X-Session-ID: Session ID of the ordering browser (optional UUID)

    Returns:
        - 201 with OrderResponse when the order is accepted
        - 503 with ErrorResponse when the kitchen rejects it
        - 422 when the order fails validation
    """
    logger.info(
        f"Order received from session {truncate_session_id(session_id)}: "
        f"size={request.size}, toppings={len(request.toppings)}"
    )
    try:
        return order_service.place_order(request)
    except OrderRejectedError:
        return JSONResponse(
            status_code=503,
            content={"detail": REJECTION_DETAIL, "error_code": REJECTION_CODE},
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.get(
    "/{order_id}",
    response_model=OrderResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_order(order_id: str) -> OrderResponse:
    """Get a recently accepted order by ID."""
    order = order_service.get_order(order_id)
    if order is None:
        raise HTTPException(status_code=404, detail="Order not found")
    return order
