"""
Provider factory for creating distance provider instances.
"""

from typing import Callable, Dict

from install_scheduling.application.interfaces.providers import DistanceProviderInterface
from install_scheduling.config.settings import Settings
from install_scheduling.domain.exceptions.distance_error import (
    DistanceProviderConfigurationError,
)
from install_scheduling.infrastructure.providers.distance_api.provider import (
    HttpDistanceProvider,
)
from install_scheduling.infrastructure.providers.mapbox.client import MapboxClient
from install_scheduling.infrastructure.providers.mapbox.provider import (
    MapboxDistanceProvider,
)


def _create_mapbox(settings: Settings) -> DistanceProviderInterface:
    return MapboxDistanceProvider(
        MapboxClient(
            access_token=settings.MAPBOX_ACCESS_TOKEN,
            base_url=settings.MAPBOX_BASE_URL,
            country=settings.MAPBOX_COUNTRY,
            timeout=settings.HTTP_TIMEOUT,
        )
    )


def _create_http(settings: Settings) -> DistanceProviderInterface:
    return HttpDistanceProvider(settings.DISTANCE_API_URL, timeout=settings.HTTP_TIMEOUT)


class ProviderFactory:
    """Factory for creating distance provider instances."""

    def __init__(self):
        self._providers: Dict[str, Callable[[Settings], DistanceProviderInterface]] = {
            "mapbox": _create_mapbox,
            "http": _create_http,
        }

    def create_provider(self, settings: Settings) -> DistanceProviderInterface:
        """Create the provider named by DISTANCE_PROVIDER."""
        builder = self._providers.get(settings.DISTANCE_PROVIDER)

        if not builder:
            raise DistanceProviderConfigurationError(
                f"Distance provider '{settings.DISTANCE_PROVIDER}' not supported"
            )

        return builder(settings)

    def get_available_providers(self) -> list[str]:
        """Get list of available provider names."""
        return list(self._providers.keys())

    def register_provider(
        self, name: str, builder: Callable[[Settings], DistanceProviderInterface]
    ) -> None:
        """Register a new provider."""
        self._providers[name] = builder
