"""
Scheduling settings provider backed by the admin settings store.
"""

from install_scheduling.application.interfaces.repositories import (
    SchedulingSettingsRepositoryInterface,
)
from install_scheduling.config.logging import get_logger
from install_scheduling.domain.value_objects.scheduling_settings import (
    DEFAULT_SCHEDULING_SETTINGS,
    SchedulingSettings,
)

logger = get_logger(__name__)

SCHEDULING_RULES_KEY = "scheduling_rules"
BOOKING_RULES_KEY = "booking_rules"


class SchedulingSettingsProvider:
    """Loads scheduling policy, never failing the caller."""

    def __init__(self, settings_repo: SchedulingSettingsRepositoryInterface):
        self.settings_repo = settings_repo
        self.logger = logger

    async def get_settings(self) -> SchedulingSettings:
        """
        Read and validate the stored scheduling and booking rules.

        Any read or validation failure falls back to the defaults
        (48h notice, 90 miles, 3 jobs/day, 08:00-18:00, no weekends or
        holidays, client confirmation required).
        """
        try:
            rules = await self.settings_repo.get_rules(
                [SCHEDULING_RULES_KEY, BOOKING_RULES_KEY]
            )
            return SchedulingSettings.from_rules(
                rules.get(SCHEDULING_RULES_KEY) or {},
                rules.get(BOOKING_RULES_KEY) or {},
            )
        except Exception as e:
            self.logger.warning(
                "Falling back to default scheduling settings", error=str(e)
            )
            return DEFAULT_SCHEDULING_SETTINGS
