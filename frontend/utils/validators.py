"""Input validation for the pizza order form.

The order rules are declared once, as a pydantic model (PizzaOrderSchema),
and evaluated against a form snapshot by OrderValidator. Every failing field
contributes exactly one message; the first failing rule of a field wins:

- full_name: required, then 3-20 characters after trimming
- size: required, then one of S, M, L
- toppings: must be present and a list of known topping ids; at least one
  selection only when the require_topping policy is on

OrderValidator.validate() never raises for invalid input: it returns a
mapping of field name to message, empty when the form is valid.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from frontend.config.settings import config, SIZE_CHOICES
from frontend.utils.form_state import FormState, ToppingCatalog

logger = logging.getLogger(__name__)

ValidationErrors = Dict[str, str]

FULL_NAME_MIN_LENGTH = config.FULL_NAME_MIN_LENGTH
FULL_NAME_MAX_LENGTH = config.FULL_NAME_MAX_LENGTH
VALID_SIZES = tuple(SIZE_CHOICES)

# Messages shown next to the form fields
FULL_NAME_REQUIRED = "Full name is required"
FULL_NAME_TOO_SHORT = f"Full name must be at least {FULL_NAME_MIN_LENGTH} characters"
FULL_NAME_TOO_LONG = f"Full name must be at most {FULL_NAME_MAX_LENGTH} characters"
SIZE_REQUIRED = "size is required"
SIZE_INCORRECT = "size must be S or M or L"
TOPPINGS_MISSING = "toppings is required"
TOPPINGS_NOT_A_LIST = "toppings must be a list"
TOPPINGS_REQUIRED = "At least one topping must be selected"

# Keys of the pydantic validation context
CONTEXT_CATALOG = "catalog"
CONTEXT_REQUIRE_TOPPING = "require_topping"


class PizzaOrderSchema(BaseModel):
    """Declarative order rules.

    Field validators run in ``before`` mode so that they see the raw form
    values and can report the form's own messages instead of pydantic's
    type errors. The topping catalog and policy are passed through the
    validation context:

        PizzaOrderSchema.model_validate(
            data, context={"catalog": catalog, "require_topping": False}
        )
    """

    model_config = ConfigDict(validate_default=True, extra='ignore')

    full_name: str = ""
    size: str = ""
    toppings: Optional[List[str]] = None

    @field_validator('full_name', mode='before')
    @classmethod
    def validate_full_name(cls, v: Any) -> str:
        """Trim and check the length of the customer's name."""
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
        if v not in VALID_SIZES:
            raise PydanticCustomError('size_incorrect', SIZE_INCORRECT)
        return v

    @field_validator('toppings', mode='before')
    @classmethod
    def validate_toppings(cls, v: Any, info: ValidationInfo) -> List[str]:
        """Check topping presence, shape, catalog membership and policy."""
        if v is None:
            raise PydanticCustomError('toppings_missing', TOPPINGS_MISSING)
        if isinstance(v, (str, bytes)) or not isinstance(v, (list, tuple, set, frozenset)):
            raise PydanticCustomError('toppings_type', TOPPINGS_NOT_A_LIST)

        toppings = [str(t) for t in v]
        context = info.context or {}

        catalog = context.get(CONTEXT_CATALOG)
        if catalog is not None:
            for topping_id in toppings:
                if topping_id not in catalog:
                    raise PydanticCustomError(
                        'topping_unknown',
                        'Unknown topping: {topping_id}',
                        {'topping_id': topping_id},
                    )

        if context.get(CONTEXT_REQUIRE_TOPPING) and not toppings:
            raise PydanticCustomError('toppings_required', TOPPINGS_REQUIRED)

        return toppings


def collect_errors(exc: ValidationError) -> ValidationErrors:
    """Flatten a pydantic ValidationError into ``{field: message}``.

    Only the first message of each field is kept.
    """
    errors: ValidationErrors = {}
    for error in exc.errors():
        loc = error.get('loc') or ('__root__',)
        errors.setdefault(str(loc[0]), error['msg'])
    return errors


@dataclass(frozen=True)
class OrderValidator:
    """Validates order form snapshots against PizzaOrderSchema.

    Each form owns its validator, so the catalog and the topping policy are
    configuration of the form instance rather than module globals.

    Attributes:
        catalog: Toppings that may be selected
        require_topping: Whether an order needs at least one topping

    Example:
        >>> validator = OrderValidator(ToppingCatalog.default())
        >>> validator.validate(FormState(full_name="Al", size="M"))
        {'full_name': 'Full name must be at least 3 characters'}
    """
    catalog: ToppingCatalog = field(default_factory=ToppingCatalog.default)
    require_topping: bool = False

    def validate(self, state: Any) -> ValidationErrors:
        """Validate a FormState (or a raw mapping of form values).

        Args:
            state: FormState snapshot or mapping with full_name/size/toppings

        Returns:
            Mapping of field name to error message, empty if valid
        """
        data = state.to_dict() if isinstance(state, FormState) else dict(state)
        try:
            PizzaOrderSchema.model_validate(
                data,
                context={
                    CONTEXT_CATALOG: self.catalog,
                    CONTEXT_REQUIRE_TOPPING: self.require_topping,
                },
            )
        except ValidationError as e:
            errors = collect_errors(e)
            logger.debug(f"Order form invalid: {sorted(errors)}")
            return errors
        return {}

    def is_valid(self, state: Any) -> bool:
        return not self.validate(state)


def validate_order(
    state: Any,
    catalog: ToppingCatalog = None,
    require_topping: bool = None,
) -> ValidationErrors:
    """Validate form values with the default catalog and policy.

    Convenience wrapper around OrderValidator for one-off checks.
    """
    validator = OrderValidator(
        catalog=catalog if catalog is not None else ToppingCatalog.default(),
        require_topping=config.REQUIRE_TOPPING if require_topping is None else require_topping,
    )
    return validator.validate(state)


def describe_errors(errors: Mapping[str, str]) -> str:
    """Join an error mapping into one line for logs and notices."""
    return "; ".join(f"{name}: {message}" for name, message in errors.items())
