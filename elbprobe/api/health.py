# Health check endpoint - liveness stub for load-balancer probes

import logging

from fastapi import APIRouter, Depends

from elbprobe.api.deps import app_settings
from elbprobe.core.config import Settings
from elbprobe.models.schemas import HealthStatus
from elbprobe.services.system_service import isoformat_utc, memory_stats, process_uptime

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health", response_model=HealthStatus)
async def health_check(settings: Settings = Depends(app_settings)):
    """
    Report that the process is alive.

    No dependent resources are probed, so the status is always "healthy".
    """
    logger.info("Health check requested")
    return HealthStatus(
        status="healthy",
        timestamp=isoformat_utc(),
        uptime_seconds=process_uptime(),
        memory_stats=memory_stats(),
        environment=settings.environment,
    )
