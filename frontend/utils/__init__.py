"""Utilities for the Pizzeria frontend."""
from frontend.utils.session_state import SessionState

from frontend.utils.exceptions import (
    PizzeriaError,
    UnknownToppingError,
    SubmissionError,
    SubmissionInProgressError,
    APIError,
    BackendUnavailableError,
)
from frontend.utils.form_state import (
    FIELD_FULL_NAME,
    FIELD_SIZE,
    FIELD_TOPPINGS,
    FORM_FIELDS,
    FAILURE_MESSAGE,
    Topping,
    ToppingCatalog,
    FormState,
    PizzaOrder,
    FormStatus,
    SubmissionOutcome,
    size_label,
    describe_toppings,
    build_confirmation_message,
)
from frontend.utils.validators import (
    ValidationErrors,
    PizzaOrderSchema,
    OrderValidator,
    validate_order,
)
from frontend.utils.scheduler import ThreadingScheduler
from frontend.utils.order_form import OrderForm, ValidationTicket

__all__ = [
    # Session state
    "SessionState",
    # Exceptions
    "PizzeriaError",
    "UnknownToppingError",
    "SubmissionError",
    "SubmissionInProgressError",
    "APIError",
    "BackendUnavailableError",
    # Form model
    "FIELD_FULL_NAME",
    "FIELD_SIZE",
    "FIELD_TOPPINGS",
    "FORM_FIELDS",
    "FAILURE_MESSAGE",
    "Topping",
    "ToppingCatalog",
    "FormState",
    "PizzaOrder",
    "FormStatus",
    "SubmissionOutcome",
    "size_label",
    "describe_toppings",
    "build_confirmation_message",
    # Validators
    "ValidationErrors",
    "PizzaOrderSchema",
    "OrderValidator",
    "validate_order",
    # Form
    "ThreadingScheduler",
    "OrderForm",
    "ValidationTicket",
]
