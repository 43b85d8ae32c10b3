"""Custom exceptions for the Pizzeria frontend.

This module defines a hierarchy of exceptions for better error handling
and more informative error messages.

Field validation problems are not exceptions: they are reported as a
mapping of field name to message (see frontend.utils.validators).

Exception Hierarchy:
    PizzeriaError (base)
    ├── UnknownToppingError
    ├── SubmissionError
    │   └── SubmissionInProgressError
    └── APIError
        └── BackendUnavailableError
"""


class PizzeriaError(Exception):
    """Base exception for Pizzeria.

    All custom exceptions in this application should inherit from this class.
    This allows catching all application-specific errors with a single except clause.

    Example:
        >>> try:
        ...     form.toggle_topping("99")
        ... except PizzeriaError as e:
        ...     handle_error(e)
    """

    def __init__(self, message: str = "An error occurred in Pizzeria"):
        self.message = message
        super().__init__(self.message)


class UnknownToppingError(PizzeriaError):
    """Raised when a topping id is not part of the topping catalog.

    Attributes:
        topping_id: The rejected topping id

    Example:
        >>> raise UnknownToppingError("99")
    """

    def __init__(self, topping_id: str, message: str = None):
        self.topping_id = topping_id
        self.message = message or f"Unknown topping: {topping_id}"
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"UnknownToppingError(topping_id={self.topping_id!r}, message={self.message!r})"


class SubmissionError(PizzeriaError):
    """Raised when an order could not be submitted.

    This is a whole-form error: the entered data is kept and the user can
    submit again. Unexpected exceptions raised by the order submission
    service are wrapped in this class.

    Attributes:
        order_id: ID assigned by the service, if any (optional)

    Example:
        >>> raise SubmissionError("Order service unavailable")
    """

    def __init__(self, message: str = "Order submission failed", order_id: str = None):
        self.order_id = order_id
        super().__init__(message)


class SubmissionInProgressError(SubmissionError):
    """Raised when submit is invoked while a submission is still in flight."""

    def __init__(self, message: str = "An order is already being submitted"):
        super().__init__(message)


class APIError(PizzeriaError):
    """Raised when a backend API call fails.

    Attributes:
        status_code: HTTP status code (if applicable)

    Example:
        >>> raise APIError("API request failed", status_code=500)
    """

    def __init__(self, message: str = "API call failed", status_code: int = None):
        self.status_code = status_code
        super().__init__(message)


class BackendUnavailableError(APIError):
    """Raised when the backend API is unavailable.

    Example:
        >>> raise BackendUnavailableError("Cannot connect to backend API")
    """

    def __init__(self, message: str = "Backend API is unavailable"):
        super().__init__(message)
