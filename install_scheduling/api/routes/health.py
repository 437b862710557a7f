"""
Health check endpoints for the application.
"""

from typing import Any, Dict

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import JSONResponse, Response

from install_scheduling.api.dependencies import HealthCheckerDep
from install_scheduling.config.logging import get_logger
from install_scheduling.config.settings import settings
from install_scheduling.infrastructure.monitoring.metrics import (
    get_metrics,
    get_metrics_content_type,
)

logger = get_logger(__name__)
router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health_check(health_checker: HealthCheckerDep):
    """Overall health with per-dependency detail."""
    health = await health_checker.get_overall_health()
    status_code = (
        status.HTTP_200_OK
        if health["status"] == "healthy"
        else status.HTTP_503_SERVICE_UNAVAILABLE
    )
    return JSONResponse(status_code=status_code, content=health)


@router.get("/live")
async def liveness_check() -> Dict[str, Any]:
    """Liveness check for Kubernetes."""
    return {"status": "alive"}


@router.get("/metrics")
async def prometheus_metrics() -> Response:
    """Prometheus metrics endpoint."""
    if not settings.ENABLE_METRICS:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Metrics disabled")

    logger.debug("Prometheus metrics requested")
    return Response(content=get_metrics(), media_type=get_metrics_content_type())


@router.get("/{service_name}")
async def service_health(service_name: str, health_checker: HealthCheckerDep):
    """Health of a single dependency."""
    result = await health_checker.get_service_health(service_name)
    if result is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown service: {service_name}",
        )
    return result
