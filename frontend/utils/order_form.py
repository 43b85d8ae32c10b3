"""Order form state machine.

OrderForm owns everything the pizza order form needs between reruns:
- the field values (an immutable FormState snapshot, replaced on change)
- touched fields and whether a submit was attempted
- the current validation errors, recomputed after every change
- the in-flight flag and the transient submission outcome

Submission flow:

    IDLE -> VALIDATING -> BLOCKED                      (errors present)
                       -> SUBMITTING -> SUCCEEDED | FAILED -> (timeout) -> IDLE

The status is derived from the stored state, see ``OrderForm.status``.

The form is UI-agnostic; frontend.ui.components.order_form renders it with
Streamlit.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Dict, FrozenSet, Optional

from frontend.config.settings import config
from frontend.utils.exceptions import (
    SubmissionError,
    SubmissionInProgressError,
    UnknownToppingError,
)
from frontend.utils.form_state import (
    FIELD_FULL_NAME,
    FIELD_SIZE,
    FIELD_TOPPINGS,
    FORM_FIELDS,
    FormState,
    FormStatus,
    OrderSubmissionService,
    PizzaOrder,
    SubmissionOutcome,
    SubmissionResult,
    ToppingCatalog,
    build_confirmation_message,
)
from frontend.utils.scheduler import ScheduledCall, Scheduler, default_scheduler
from frontend.utils.validators import OrderValidator, ValidationErrors, describe_errors

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationTicket:
    """A validation run in progress.

    Attributes:
        revision: Form revision the snapshot was taken at
        state: The snapshot being validated
    """
    revision: int
    state: FormState


class OrderForm:
    """Pizza order form with validation and timed submission feedback.

    Args:
        service: Order submission service
        catalog: Selectable toppings (default catalog if omitted)
        require_topping: Require at least one topping (default from config)
        message_timeout: Seconds the outcome banner stays visible
        scheduler: Runs the banner timeout (threading timers by default)

    Example:
        >>> form = OrderForm(SimulatedOrderService())
        >>> form.set_full_name("Alice")
        >>> form.set_size("S")
        >>> form.submit().message
        'Thank you for your order, Alice! Your small pizza with no toppings is on the way.'
    """

    def __init__(
        self,
        service: OrderSubmissionService,
        catalog: ToppingCatalog = None,
        require_topping: bool = None,
        message_timeout: float = None,
        scheduler: Scheduler = None,
    ):
        self._service = service
        self._validator = OrderValidator(
            catalog=catalog if catalog is not None else ToppingCatalog.default(),
            require_topping=config.REQUIRE_TOPPING if require_topping is None else require_topping,
        )
        self._message_timeout = (
            config.ORDER_MESSAGE_TIMEOUT_SECONDS if message_timeout is None else message_timeout
        )
        self._scheduler = scheduler or default_scheduler
        self._lock = threading.RLock()

        self._state = FormState()
        self._touched: FrozenSet[str] = frozenset()
        self._attempted = False
        self._errors: ValidationErrors = {}
        self._revision = 0
        self._validated_revision = 0
        self._in_flight = False

        self._outcome: Optional[SubmissionOutcome] = None
        self._display_timer: Optional[ScheduledCall] = None
        # Bumped whenever the outcome changes; stale timers check it
        self._outcome_generation = 0
        self._closed = False

        self.revalidate()

    # Read-only views
    @property
    def catalog(self) -> ToppingCatalog:
        return self._validator.catalog

    @property
    def require_topping(self) -> bool:
        return self._validator.require_topping

    @property
    def state(self) -> FormState:
        return self._state

    @property
    def errors(self) -> ValidationErrors:
        with self._lock:
            return dict(self._errors)

    @property
    def touched(self) -> FrozenSet[str]:
        return self._touched

    @property
    def has_attempted_submit(self) -> bool:
        return self._attempted

    @property
    def is_submitting(self) -> bool:
        return self._in_flight

    @property
    def is_valid(self) -> bool:
        with self._lock:
            return not self._errors and self._validated_revision == self._revision

    @property
    def is_submit_disabled(self) -> bool:
        """Submit is disabled while the form is invalid or an order is in flight."""
        with self._lock:
            return self._in_flight or not self.is_valid

    @property
    def outcome(self) -> Optional[SubmissionOutcome]:
        return self._outcome

    @property
    def status(self) -> FormStatus:
        with self._lock:
            if self._in_flight:
                return FormStatus.SUBMITTING
            if self._outcome is not None:
                return FormStatus.SUCCEEDED if self._outcome.success else FormStatus.FAILED
            if self._validated_revision != self._revision:
                return FormStatus.VALIDATING
            if self._errors:
                return FormStatus.BLOCKED
            return FormStatus.IDLE

    # Field handlers
    def set_full_name(self, value: str) -> None:
        """Handle a change of the full name field."""
        self._update(FIELD_FULL_NAME, full_name="" if value is None else str(value))

    def set_size(self, value: str) -> None:
        """Handle a change of the size field ("" clears the selection)."""
        self._update(FIELD_SIZE, size="" if value is None else str(value))

    def toggle_topping(self, topping_id) -> bool:
        """Select or deselect a topping.

        Args:
            topping_id: Catalog id (converted to str)

        Returns:
            True if the topping is selected after the toggle

        Raises:
            UnknownToppingError: If the id is not in the catalog
        """
        topping_id = str(topping_id)
        if topping_id not in self.catalog:
            raise UnknownToppingError(topping_id)

        with self._lock:
            selected = set(self._state.toppings)
            if topping_id in selected:
                selected.discard(topping_id)
            else:
                selected.add(topping_id)
            self._update(FIELD_TOPPINGS, toppings=self.catalog.ordered(selected))
            return topping_id in selected

    def set_toppings(self, topping_ids) -> None:
        """Replace the topping selection."""
        topping_ids = [str(t) for t in topping_ids]
        for topping_id in topping_ids:
            if topping_id not in self.catalog:
                raise UnknownToppingError(topping_id)
        self._update(FIELD_TOPPINGS, toppings=self.catalog.ordered(topping_ids))

    def touch(self, field: str) -> None:
        """Mark a field as interacted with (e.g. on blur)."""
        if field not in FORM_FIELDS:
            raise ValueError(f"Unknown form field: {field!r}")
        with self._lock:
            self._touched = self._touched | {field}

    def _update(self, field: str, **changes) -> None:
        with self._lock:
            self._state = self._state.with_changes(**changes)
            self._touched = self._touched | {field}
            self._revision += 1
            logger.debug(f"Order form change: {field} (revision {self._revision})")
            self.revalidate()

    # Validation
    def begin_validation(self) -> ValidationTicket:
        """Snapshot the current state for validation."""
        with self._lock:
            return ValidationTicket(revision=self._revision, state=self._state)

    def complete_validation(self, ticket: ValidationTicket, errors: ValidationErrors) -> bool:
        """Store the result of a validation run.

        A result for an older revision than the latest stored one is
        discarded, so a slow validation cannot overwrite newer errors.

        Returns:
            True if the errors were stored
        """
        with self._lock:
            if ticket.revision < self._validated_revision or ticket.revision > self._revision:
                logger.debug(f"Discarding stale validation (revision {ticket.revision})")
                return False
            self._errors = dict(errors)
            self._validated_revision = ticket.revision
            return True

    def validate(self, state: FormState = None) -> ValidationErrors:
        """Validate a snapshot (the current state by default) without storing it."""
        return self._validator.validate(self._state if state is None else state)

    def revalidate(self) -> ValidationErrors:
        """Validate the current state and store the errors."""
        ticket = self.begin_validation()
        errors = self._validator.validate(ticket.state)
        self.complete_validation(ticket, errors)
        return errors

    def visible_error(self, field: str) -> Optional[str]:
        """Get the error to display for a field.

        Errors are shown only for touched fields, or for every field once
        a submit was attempted.
        """
        with self._lock:
            if not (self._attempted or field in self._touched):
                return None
            return self._errors.get(field)

    @property
    def visible_errors(self) -> Dict[str, str]:
        errors = {}
        for field in FORM_FIELDS:
            message = self.visible_error(field)
            if message:
                errors[field] = message
        return errors

    # Submission
    def submit(self) -> Optional[SubmissionOutcome]:
        """Validate and submit the order.

        Returns:
            The new outcome, or None if the form is invalid (blocked)

        Raises:
            SubmissionInProgressError: If an order is already in flight
        """
        with self._lock:
            if self._in_flight:
                raise SubmissionInProgressError()

            self._attempted = True
            self._set_outcome(None)

            errors = self.revalidate()
            if errors:
                logger.info(f"Order submission blocked: {describe_errors(errors)}")
                return None

            self._in_flight = True
            order = PizzaOrder.from_state(self._state)

        logger.info(f"Submitting order: size={order.size}, toppings={len(order.toppings)}")
        error: Optional[SubmissionError] = None
        try:
            result = self._service.submit(order)
        except Exception as e:
            logger.error(f"Order submission service raised {type(e).__name__}: {e}", exc_info=True)
            error = SubmissionError(f"Order submission failed: {e}")
            result = SubmissionResult.rejected(str(e))
        finally:
            # Runs for BaseException too, e.g. a Streamlit rerun
            with self._lock:
                self._in_flight = False

        with self._lock:
            if result.success:
                outcome = SubmissionOutcome.succeeded(
                    build_confirmation_message(order),
                    order_id=result.order_id,
                )
                self._reset_fields()
                logger.info(f"Order accepted: {result.order_id}")
            else:
                if error is None:
                    error = SubmissionError(result.error or "Order was rejected", order_id=result.order_id)
                outcome = SubmissionOutcome.failed(error)
                logger.warning(f"Order failed: {error.message}")

            self._set_outcome(outcome)
            return outcome

    def _reset_fields(self) -> None:
        self._state = FormState()
        self._touched = frozenset()
        self._attempted = False
        self._revision += 1
        self.revalidate()

    # Outcome display
    def _set_outcome(self, outcome: Optional[SubmissionOutcome]) -> None:
        """Replace the outcome, cancelling any pending auto-clear."""
        with self._lock:
            if self._display_timer is not None:
                self._display_timer.cancel()
                self._display_timer = None

            self._outcome = outcome
            self._outcome_generation += 1

            if outcome is not None and not self._closed:
                generation = self._outcome_generation
                self._display_timer = self._scheduler.call_later(
                    self._message_timeout,
                    lambda: self._expire_outcome(generation),
                )

    def _expire_outcome(self, generation: int) -> None:
        with self._lock:
            if generation != self._outcome_generation:
                return
            logger.debug("Order outcome display expired")
            self._display_timer = None
            self._outcome = None
            self._outcome_generation += 1

    def clear_outcome(self) -> None:
        """Hide the outcome banner now."""
        self._set_outcome(None)

    def close(self) -> None:
        """Tear down the form, cancelling the pending auto-clear."""
        with self._lock:
            self._closed = True
            if self._display_timer is not None:
                self._display_timer.cancel()
                self._display_timer = None
