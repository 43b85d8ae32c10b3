"""
Unit tests for the ThreadingScheduler (banner timeouts).
"""
import threading

from frontend.utils.scheduler import ThreadingScheduler


class TestThreadingScheduler:
    """Tests for ThreadingScheduler."""

    def test_runs_callback_after_delay(self):
        fired = threading.Event()
        scheduler = ThreadingScheduler(name_prefix="test")

        timer = scheduler.call_later(0.05, fired.set)

        assert fired.wait(timeout=2)
        timer.join(timeout=1)

    def test_cancel_prevents_callback(self):
        fired = threading.Event()
        scheduler = ThreadingScheduler()

        timer = scheduler.call_later(0.2, fired.set)
        timer.cancel()

        assert not fired.wait(timeout=0.4)

    def test_timers_are_named_daemons(self):
        scheduler = ThreadingScheduler(name_prefix="banner")

        first = scheduler.call_later(10, lambda: None)
        second = scheduler.call_later(10, lambda: None)
        try:
            assert first.daemon and second.daemon
            assert first.name == "banner-1"
            assert second.name == "banner-2"
        finally:
            first.cancel()
            second.cancel()
