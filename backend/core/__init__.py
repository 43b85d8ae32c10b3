"""
Core backend modules.
- metrics: thread-safe order counters
- auth: X-Session-ID header validation
"""
from backend.core.metrics import metrics, Metrics
from backend.core.auth import validate_session_id, truncate_session_id

__all__ = [
    "metrics",
    "Metrics",
    "validate_session_id",
    "truncate_session_id",
]
