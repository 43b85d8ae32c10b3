"""
Pydantic schemas for API request/response validation.

OrderCreate applies the order form's rules and reports the form's own
messages (frontend.utils.validators), so a 422 from the API reads exactly
like the error shown next to the field.
"""
from datetime import datetime
from typing import Any, List, Optional
from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic_core import PydanticCustomError

# Menu
PIZZA_SIZES = {
    "S": "small",
    "M": "medium",
    "L": "large",
}

TOPPINGS = (
    {"id": "1", "label": "Pepperoni"},
    {"id": "2", "label": "Green Peppers"},
    {"id": "3", "label": "Pineapple"},
    {"id": "4", "label": "Mushrooms"},
    {"id": "5", "label": "Ham"},
)
TOPPING_IDS = frozenset(t["id"] for t in TOPPINGS)

FULL_NAME_MIN_LENGTH = 3
FULL_NAME_MAX_LENGTH = 20

# Field messages
FULL_NAME_REQUIRED = "Full name is required"
FULL_NAME_TOO_SHORT = f"Full name must be at least {FULL_NAME_MIN_LENGTH} characters"
FULL_NAME_TOO_LONG = f"Full name must be at most {FULL_NAME_MAX_LENGTH} characters"
SIZE_REQUIRED = "size is required"
SIZE_INCORRECT = "size must be S or M or L"
TOPPINGS_MISSING = "toppings is required"
TOPPINGS_NOT_A_LIST = "toppings must be a list"


# Enums
class OrderStatus(str, Enum):
    ACCEPTED = "accepted"
    REJECTED = "rejected"


# Order Schemas
class OrderCreate(BaseModel):
    """Request schema for placing an order.

    Every field is required. Defaults only exist so that a missing key
    reaches the validators (validate_default) and gets the form's message
    instead of pydantic's generic "Field required".
    """

    model_config = ConfigDict(validate_default=True)

    full_name: str = ""
    size: str = ""
    toppings: Optional[List[str]] = None

    @field_validator('full_name', mode='before')
    @classmethod
    def validate_full_name(cls, v: Any) -> str:
        """Trim the name and enforce the 3-20 character range."""
        name = v.strip() if isinstance(v, str) else ""
        if not name:
            raise PydanticCustomError('full_name_required', FULL_NAME_REQUIRED)
        if len(name) < FULL_NAME_MIN_LENGTH:
            raise PydanticCustomError('full_name_too_short', FULL_NAME_TOO_SHORT)
        if len(name) > FULL_NAME_MAX_LENGTH:
            raise PydanticCustomError('full_name_too_long', FULL_NAME_TOO_LONG)
        return name

    @field_validator('size', mode='before')
    @classmethod
    def validate_size(cls, v: Any) -> str:
        if v is None or v == "":
            raise PydanticCustomError('size_required', SIZE_REQUIRED)
        if v not in PIZZA_SIZES:
            raise PydanticCustomError('size_incorrect', SIZE_INCORRECT)
        return v

    @field_validator('toppings', mode='before')
    @classmethod
    def validate_toppings(cls, v: Any) -> List[str]:
        """Reject unknown ids and drop duplicates, keeping menu order."""
        if v is None:
            raise PydanticCustomError('toppings_missing', TOPPINGS_MISSING)
        if isinstance(v, (str, bytes)) or not isinstance(v, (list, tuple)):
            raise PydanticCustomError('toppings_type', TOPPINGS_NOT_A_LIST)

        selected = [str(t) for t in v]
        for topping_id in selected:
            if topping_id not in TOPPING_IDS:
                raise PydanticCustomError(
                    'topping_unknown',
                    'Unknown topping: {topping_id}',
                    {'topping_id': topping_id},
                )
        return [t["id"] for t in TOPPINGS if t["id"] in selected]


class OrderResponse(BaseModel):
    """Response schema for an accepted order."""
    id: str
    status: OrderStatus
    full_name: str
    size: str
    toppings: List[str]
    message: str
    created_at: datetime


class ToppingSchema(BaseModel):
    """A topping on the menu."""
    id: str
    label: str


class ErrorResponse(BaseModel):
    """Error response schema."""
    detail: str
    error_code: Optional[str] = None


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
    orders_received: int
    timestamp: datetime
