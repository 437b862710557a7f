"""Scheduling policy endpoints."""

from fastapi import APIRouter

from install_scheduling.api.dependencies import SettingsProviderDep
from install_scheduling.api.schemas.scheduling import SchedulingSettingsSchema

router = APIRouter(prefix="/scheduling", tags=["scheduling"])


@router.get("/settings", response_model=SchedulingSettingsSchema)
async def get_scheduling_settings(settings_provider: SettingsProviderDep):
    """Effective scheduling settings, defaults included."""
    current = await settings_provider.get_settings()
    return SchedulingSettingsSchema(**current.model_dump())
