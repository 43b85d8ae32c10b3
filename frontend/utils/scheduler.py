"""Deferred callbacks for transient UI state.

The order form hides its success/failure banner after a fixed delay. The
delay is run by a scheduler so that tests can substitute a manual clock for
real timer threads.
"""

import logging
import threading
from typing import Callable, Protocol

logger = logging.getLogger(__name__)


class ScheduledCall(Protocol):
    """Handle of a pending deferred callback."""

    def cancel(self) -> None:
        ...


class Scheduler(Protocol):
    """Runs a callback once after a delay."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        ...


class ThreadingScheduler:
    """Scheduler backed by daemon ``threading.Timer`` threads.

    Example:
        >>> scheduler = ThreadingScheduler()
        >>> handle = scheduler.call_later(30.0, banner.clear)
        >>> handle.cancel()
    """

    def __init__(self, name_prefix: str = "deferred"):
        self._name_prefix = name_prefix
        self._counter = 0
        self._lock = threading.Lock()

    def call_later(self, delay: float, callback: Callable[[], None]) -> threading.Timer:
        """Start a timer that runs ``callback`` after ``delay`` seconds."""
        with self._lock:
            self._counter += 1
            name = f"{self._name_prefix}-{self._counter}"

        timer = threading.Timer(delay, callback)
        timer.name = name
        timer.daemon = True
        timer.start()
        logger.debug(f"Scheduled {name} in {delay:.2f}s")
        return timer


# Shared by all forms; timers are independent threads
default_scheduler = ThreadingScheduler(name_prefix="order-banner")
