"""
Health check endpoints.

- /health: Quick overview
- /health/ready: Readiness probe
- /health/live: Liveness probe
- /health/metrics: Order counters
"""
import logging
from datetime import datetime, timezone
from typing import Dict, Any

from fastapi import APIRouter

from backend.config import settings
from backend.core.metrics import metrics
from backend.models.schemas import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Report service status.

    Returns:
        HealthResponse with version and the number of orders seen so far
    """
    return HealthResponse(
        status="healthy",
        version=settings.APP_VERSION,
        orders_received=metrics.orders_received,
        timestamp=datetime.now(timezone.utc),
    )


@router.get("/ready")
async def readiness_check() -> dict:
    """
    Container readiness probe.
    Orders live in memory, so the service is ready as soon as it is up.
    """
    return {"status": "ready"}


@router.get("/live")
async def liveness_check() -> dict:
    """Container liveness probe."""
    return {"status": "alive"}


@router.get("/metrics")
async def get_metrics() -> Dict[str, Any]:
    """
    Get application metrics.

    Returns order counters (received, accepted, rejected, invalid),
    the acceptance rate and uptime.
    """
    return {
        "metrics": metrics.to_dict(),
        "environment": "production" if settings.is_production else "development",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
