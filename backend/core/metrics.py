"""
Application metrics for monitoring and observability.

Provides thread-safe counters for order handling:
- orders received / accepted / rejected
- orders refused by validation

Usage:
    from backend.core.metrics import metrics

    metrics.increment('orders_received')

    data = metrics.to_dict()
"""
import time
from dataclasses import dataclass, field
from threading import Lock


@dataclass
class Metrics:
    """Thread-safe application metrics."""

    _lock: Lock = field(default_factory=Lock, repr=False)

    # Counters
    orders_received: int = 0
    orders_accepted: int = 0
    orders_rejected: int = 0
    orders_invalid: int = 0

    # Start time for uptime calculation
    _start_time: float = field(default_factory=time.time, repr=False)

    def increment(self, metric: str, value: int = 1) -> None:
        """Increment a counter metric.

        Args:
            metric: Name of the metric to increment
            value: Amount to increment by (default 1)
        """
        with self._lock:
            current = getattr(self, metric, 0)
            setattr(self, metric, current + value)

    @property
    def uptime_seconds(self) -> float:
        """Get application uptime in seconds."""
        return time.time() - self._start_time

    @property
    def acceptance_rate(self) -> float:
        """Calculate order acceptance rate (0.0 to 1.0)."""
        total = self.orders_accepted + self.orders_rejected
        if total == 0:
            return 1.0  # No orders = nothing rejected
        return self.orders_accepted / total

    def to_dict(self) -> dict:
        """Export all metrics as a dictionary."""
        with self._lock:
            return {
                'orders_received': self.orders_received,
                'orders_accepted': self.orders_accepted,
                'orders_rejected': self.orders_rejected,
                'orders_invalid': self.orders_invalid,
                'acceptance_rate': self.acceptance_rate,
                'uptime_seconds': self.uptime_seconds,
            }

    def reset(self) -> None:
        """Reset all metrics (useful for testing)."""
        with self._lock:
            self.orders_received = 0
            self.orders_accepted = 0
            self.orders_rejected = 0
            self.orders_invalid = 0
            self._start_time = time.time()


# Global metrics instance
metrics = Metrics()
