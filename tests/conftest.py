"""
Shared test fixtures for Pizzeria tests.
"""
import os
import pytest
from pathlib import Path

# Load .env file FIRST before any backend imports
from dotenv import load_dotenv
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(env_path, override=True)

# Deterministic order handling under test
os.environ["TESTING"] = "true"
os.environ["ORDER_FAILURE_RATE"] = "0.0"
os.environ["SUBMISSION_MODE"] = "simulated"
os.environ.setdefault("LOG_DIR", str(Path(__file__).parent.parent / "data" / "test-logs"))

# Now import and clear settings cache to pick up the values above
from backend.config import get_settings
get_settings.cache_clear()


class ManualCall:
    """Pending callback of a ManualScheduler."""

    def __init__(self, due: float, callback):
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Scheduler driven by an explicit clock instead of timer threads."""

    def __init__(self):
        self.now = 0.0
        self.calls = []

    def call_later(self, delay, callback):
        call = ManualCall(self.now + delay, callback)
        self.calls.append(call)
        return call

    @property
    def pending(self):
        return [c for c in self.calls if not c.cancelled and c.due > self.now]

    def advance(self, seconds: float) -> None:
        """Move the clock forward, running callbacks that became due."""
        start = self.now
        self.now += seconds
        for call in list(self.calls):
            if not call.cancelled and start < call.due <= self.now:
                call.callback()


class RecordingService:
    """Order service returning a fixed result and recording orders."""

    def __init__(self, result=None, error: Exception = None):
        from frontend.utils.form_state import SubmissionResult
        self.result = result or SubmissionResult.accepted("order-1")
        self.error = error
        self.orders = []

    def submit(self, order):
        self.orders.append(order)
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def manual_scheduler():
    """Scheduler whose clock is advanced by the test."""
    return ManualScheduler()


@pytest.fixture
def accepting_service():
    """Order service that accepts every order."""
    return RecordingService()


@pytest.fixture
def rejecting_service():
    """Order service that rejects every order."""
    from frontend.utils.form_state import SubmissionResult
    return RecordingService(result=SubmissionResult.rejected("Kitchen closed"))


@pytest.fixture
def raising_service():
    """Order service whose submit raises a connection error."""
    return RecordingService(error=ConnectionError("Backend down"))


@pytest.fixture
def order_form(accepting_service, manual_scheduler):
    """Order form with an accepting service, default catalog and a 30s banner."""
    from frontend.utils.order_form import OrderForm
    return OrderForm(
        service=accepting_service,
        require_topping=False,
        message_timeout=30.0,
        scheduler=manual_scheduler,
    )


@pytest.fixture
def valid_order_payload():
    """Valid order request body for the backend API."""
    return {"full_name": "Alice", "size": "M", "toppings": ["1", "3"]}
