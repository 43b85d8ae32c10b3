"""Order form data model.

Immutable value types shared by the order form, its validator and the
order submission services:
- Topping / ToppingCatalog: the fixed list of selectable toppings
- FormState: snapshot of the editable form fields
- PizzaOrder: validated payload handed to a submission service
- SubmissionOutcome: transient success/failure shown in the banner
- SubmissionResult / OrderSubmissionService: the order submission contract
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Protocol, Tuple

from frontend.config.settings import DEFAULT_TOPPINGS, SIZE_CHOICES
from frontend.utils.exceptions import UnknownToppingError


# Form field names, also used as keys of the validation error mapping
FIELD_FULL_NAME = "full_name"
FIELD_SIZE = "size"
FIELD_TOPPINGS = "toppings"
FORM_FIELDS = (FIELD_FULL_NAME, FIELD_SIZE, FIELD_TOPPINGS)

FAILURE_MESSAGE = "Something went wrong"


@dataclass(frozen=True)
class Topping:
    """A selectable topping."""
    topping_id: str
    label: str


@dataclass(frozen=True)
class ToppingCatalog:
    """Fixed, ordered sequence of toppings.

    Example:
        >>> catalog = ToppingCatalog.from_records([{'id': '1', 'label': 'Ham'}])
        >>> '1' in catalog
        True
    """
    toppings: Tuple[Topping, ...] = ()

    def __post_init__(self):
        ids = [t.topping_id for t in self.toppings]
        if len(ids) != len(set(ids)):
            raise ValueError("Topping ids must be unique")

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> "ToppingCatalog":
        """Build a catalog from ``{id, label}`` records.

        Also accepts the ``topping_id``/``text`` keys used by older menus.
        Ids are normalised to strings.
        """
        toppings = []
        for record in records:
            topping_id = record.get('id', record.get('topping_id'))
            label = record.get('label', record.get('text'))
            if topping_id is None or label is None:
                raise ValueError(f"Invalid topping record: {record!r}")
            toppings.append(Topping(topping_id=str(topping_id), label=str(label)))
        return cls(toppings=tuple(toppings))

    @classmethod
    def default(cls) -> "ToppingCatalog":
        """Get the built-in topping catalog."""
        return cls.from_records(DEFAULT_TOPPINGS)

    @property
    def ids(self) -> Tuple[str, ...]:
        return tuple(t.topping_id for t in self.toppings)

    def label_for(self, topping_id: str) -> str:
        for topping in self.toppings:
            if topping.topping_id == topping_id:
                return topping.label
        raise UnknownToppingError(topping_id)

    def ordered(self, topping_ids: Iterable[str]) -> Tuple[str, ...]:
        """Return the known ids among ``topping_ids`` in catalog order."""
        wanted = set(topping_ids)
        return tuple(tid for tid in self.ids if tid in wanted)

    def to_records(self) -> List[Dict[str, str]]:
        return [{'id': t.topping_id, 'label': t.label} for t in self.toppings]

    def __contains__(self, topping_id: object) -> bool:
        return topping_id in self.ids

    def __iter__(self) -> Iterator[Topping]:
        return iter(self.toppings)

    def __len__(self) -> int:
        return len(self.toppings)


@dataclass(frozen=True)
class FormState:
    """Snapshot of the order form fields.

    Toppings are held in catalog order so that two snapshots with the same
    selection compare equal.
    """
    full_name: str = ""
    size: str = ""
    toppings: Tuple[str, ...] = ()

    def with_changes(self, **changes) -> "FormState":
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            FIELD_FULL_NAME: self.full_name,
            FIELD_SIZE: self.size,
            FIELD_TOPPINGS: list(self.toppings),
        }


@dataclass(frozen=True)
class PizzaOrder:
    """A validated order, as handed to an order submission service."""
    full_name: str
    size: str
    toppings: Tuple[str, ...] = ()

    @classmethod
    def from_state(cls, state: FormState) -> "PizzaOrder":
        return cls(
            full_name=state.full_name.strip(),
            size=state.size,
            toppings=tuple(state.toppings),
        )

    def to_payload(self) -> Dict[str, Any]:
        """Get the JSON payload sent to the backend."""
        return {
            "full_name": self.full_name,
            "size": self.size,
            "toppings": list(self.toppings),
        }


class FormStatus(str, Enum):
    """Submission state of the order form."""
    IDLE = "idle"
    VALIDATING = "validating"
    BLOCKED = "blocked"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class SubmissionOutcome:
    """Result of a submit attempt, displayed until it expires.

    Attributes:
        success: Whether the order was accepted
        message: Banner text
        order_id: ID assigned by the service (successful orders only)
        error: The underlying error for failed submissions (optional)
    """
    success: bool
    message: str
    order_id: Optional[str] = None
    error: Optional[Exception] = field(default=None, compare=False)

    @classmethod
    def succeeded(cls, message: str, order_id: str = None) -> "SubmissionOutcome":
        return cls(success=True, message=message, order_id=order_id)

    @classmethod
    def failed(cls, error: Exception = None) -> "SubmissionOutcome":
        return cls(success=False, message=FAILURE_MESSAGE, error=error)


def size_label(size: str) -> str:
    """Get the lowercase display name of a size code.

    Example:
        >>> size_label('S')
        'small'
    """
    try:
        return SIZE_CHOICES[size].lower()
    except KeyError:
        raise ValueError(f"Unknown pizza size: {size!r}") from None


def describe_toppings(count: int) -> str:
    """Pluralize a topping count.

    Example:
        >>> describe_toppings(0)
        'no toppings'
        >>> describe_toppings(1)
        '1 topping'
        >>> describe_toppings(3)
        '3 toppings'
    """
    if count < 0:
        raise ValueError("Topping count cannot be negative")
    if count == 0:
        return "no toppings"
    if count == 1:
        return "1 topping"
    return f"{count} toppings"


def build_confirmation_message(order: PizzaOrder) -> str:
    """Build the thank-you message shown after a successful order."""
    return (
        f"Thank you for your order, {order.full_name}! "
        f"Your {size_label(order.size)} pizza with "
        f"{describe_toppings(len(order.toppings))} is on the way."
    )


@dataclass(frozen=True)
class SubmissionResult:
    """Standardized answer of an order submission service."""
    success: bool
    order_id: Optional[str] = None
    message: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def accepted(cls, order_id: str, message: str = None) -> "SubmissionResult":
        return cls(success=True, order_id=order_id, message=message)

    @classmethod
    def rejected(cls, error: str) -> "SubmissionResult":
        return cls(success=False, error=error)


class OrderSubmissionService(Protocol):
    """Contract between the order form and whatever accepts orders.

    Implementations return a rejected SubmissionResult for orders they
    refuse; an exception is treated the same way by the form.
    """

    def submit(self, order: PizzaOrder) -> SubmissionResult:
        ...
