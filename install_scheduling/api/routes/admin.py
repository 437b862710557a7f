"""
Admin routes for distance lookups and cache management.
"""

from fastapi import APIRouter, Query

from install_scheduling.api.dependencies import DistanceServiceDep
from install_scheduling.api.schemas.scheduling import CacheClearResponse, DistanceResponse
from install_scheduling.config.logging import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/distance", response_model=DistanceResponse)
async def get_distance(
    distance_service: DistanceServiceDep,
    origin: str = Query(..., min_length=2),
    destination: str = Query(..., min_length=2),
):
    """Resolve a postcode-to-postcode distance through the cache."""
    result = await distance_service.lookup(origin, destination)
    return DistanceResponse(
        origin=result.origin,
        destination=result.destination,
        distance_miles=result.distance_miles,
        travel_minutes=result.travel_minutes,
        method=result.method,
        cached=result.cached,
    )


@router.post("/distance-cache/clear", response_model=CacheClearResponse)
async def clear_distance_cache(distance_service: DistanceServiceDep):
    """Drop every cached distance."""
    removed = await distance_service.clear_cache()
    logger.info("Distance cache cleared via admin API", removed_entries=removed)
    return CacheClearResponse(removed_entries=removed)
