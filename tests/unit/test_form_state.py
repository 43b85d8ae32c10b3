"""
Unit tests for the order form data model.
"""
import pytest

from frontend.utils.exceptions import UnknownToppingError
from frontend.utils.form_state import (
    FAILURE_MESSAGE,
    FormState,
    PizzaOrder,
    SubmissionOutcome,
    SubmissionResult,
    Topping,
    ToppingCatalog,
    build_confirmation_message,
    describe_toppings,
    size_label,
)


class TestToppingCatalog:
    """Tests for ToppingCatalog."""

    def test_default_catalog(self):
        catalog = ToppingCatalog.default()
        assert catalog.ids == ("1", "2", "3", "4", "5")
        assert catalog.label_for("3") == "Pineapple"
        assert len(catalog) == 5

    def test_from_records_accepts_legacy_keys(self):
        catalog = ToppingCatalog.from_records([{"topping_id": 7, "text": "Anchovies"}])
        assert "7" in catalog
        assert catalog.label_for("7") == "Anchovies"

    def test_from_records_rejects_incomplete_record(self):
        with pytest.raises(ValueError):
            ToppingCatalog.from_records([{"id": "1"}])

    def test_duplicate_ids_rejected(self):
        with pytest.raises(ValueError, match="unique"):
            ToppingCatalog((Topping("1", "Ham"), Topping("1", "Pepperoni")))

    def test_unknown_label_raises(self):
        with pytest.raises(UnknownToppingError) as exc_info:
            ToppingCatalog.default().label_for("42")
        assert exc_info.value.topping_id == "42"

    def test_ordered_uses_catalog_order(self):
        catalog = ToppingCatalog.default()
        assert catalog.ordered(["5", "1", "3"]) == ("1", "3", "5")

    def test_ordered_drops_unknown_ids(self):
        assert ToppingCatalog.default().ordered(["9", "2"]) == ("2",)

    def test_to_records_round_trip(self):
        catalog = ToppingCatalog.default()
        assert ToppingCatalog.from_records(catalog.to_records()) == catalog

    def test_empty_catalog(self):
        catalog = ToppingCatalog()
        assert len(catalog) == 0
        assert list(catalog) == []


class TestFormState:
    """Tests for FormState and PizzaOrder."""

    def test_defaults_are_empty(self):
        state = FormState()
        assert state.to_dict() == {"full_name": "", "size": "", "toppings": []}

    def test_with_changes_returns_new_snapshot(self):
        state = FormState()
        changed = state.with_changes(full_name="Alice")
        assert changed.full_name == "Alice"
        assert state.full_name == ""

    def test_order_from_state_trims_name(self):
        order = PizzaOrder.from_state(FormState(full_name="  Alice ", size="M", toppings=("1",)))
        assert order == PizzaOrder("Alice", "M", ("1",))

    def test_order_payload(self):
        order = PizzaOrder("Alice", "L", ("2", "4"))
        assert order.to_payload() == {"full_name": "Alice", "size": "L", "toppings": ["2", "4"]}


class TestMessages:
    """Tests for banner text helpers."""

    @pytest.mark.parametrize("count,expected", [
        (0, "no toppings"),
        (1, "1 topping"),
        (2, "2 toppings"),
        (5, "5 toppings"),
    ])
    def test_describe_toppings(self, count, expected):
        assert describe_toppings(count) == expected

    def test_describe_negative_count(self):
        with pytest.raises(ValueError):
            describe_toppings(-1)

    def test_size_labels(self):
        assert [size_label(s) for s in ("S", "M", "L")] == ["small", "medium", "large"]

    def test_unknown_size_label(self):
        with pytest.raises(ValueError):
            size_label("XL")

    def test_confirmation_without_toppings(self):
        message = build_confirmation_message(PizzaOrder("Alice", "S"))
        assert message == "Thank you for your order, Alice! Your small pizza with no toppings is on the way."

    def test_confirmation_with_one_topping(self):
        message = build_confirmation_message(PizzaOrder("Bob", "M", ("1",)))
        assert message == "Thank you for your order, Bob! Your medium pizza with 1 topping is on the way."

    def test_confirmation_with_three_toppings(self):
        message = build_confirmation_message(PizzaOrder("Carol", "L", ("1", "2", "3")))
        assert message == "Thank you for your order, Carol! Your large pizza with 3 toppings is on the way."


class TestOutcomes:
    """Tests for SubmissionOutcome and SubmissionResult."""

    def test_succeeded(self):
        outcome = SubmissionOutcome.succeeded("Thanks", order_id="abc")
        assert outcome.success
        assert outcome.order_id == "abc"

    def test_failed_uses_generic_message(self):
        outcome = SubmissionOutcome.failed(RuntimeError("boom"))
        assert not outcome.success
        assert outcome.message == FAILURE_MESSAGE == "Something went wrong"

    def test_result_factories(self):
        assert SubmissionResult.accepted("id-1").success
        rejected = SubmissionResult.rejected("nope")
        assert not rejected.success
        assert rejected.error == "nope"
