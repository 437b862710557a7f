"""
Mapbox distance provider implementation.
"""

from typing import Dict

from install_scheduling.application.interfaces.providers import (
    DistanceMatrix,
    DistanceMatrixRequest,
    DistanceProviderInterface,
)
from install_scheduling.config.logging import get_logger
from install_scheduling.domain.exceptions.distance_error import (
    DistanceProviderConfigurationError,
    DistanceProviderError,
)
from install_scheduling.domain.value_objects.postcode import normalize_postcode
from install_scheduling.infrastructure.providers.mapbox.client import MapboxClient
from install_scheduling.infrastructure.providers.mapbox.models import (
    Coordinates,
    meters_to_miles,
    seconds_to_minutes,
)

logger = get_logger(__name__)


class MapboxDistanceProvider(DistanceProviderInterface):
    """Driving distances from Mapbox; Directions for one pair, Matrix otherwise."""

    @property
    def name(self) -> str:
        """Provider name."""
        return "mapbox"

    def __init__(self, client: MapboxClient):
        if not client.access_token:
            raise DistanceProviderConfigurationError("MAPBOX_ACCESS_TOKEN not configured")
        self.client = client

    async def get_distance_matrix(self, request: DistanceMatrixRequest) -> DistanceMatrix:
        """Geocode every postcode, then route between them."""
        if not request.origins or not request.destinations:
            raise DistanceProviderError("Origins and destinations arrays cannot be empty")

        origins = [normalize_postcode(p) for p in request.origins]
        destinations = [normalize_postcode(p) for p in request.destinations]

        async with self.client.session() as http:
            coordinates: Dict[str, Coordinates] = {}
            for postcode in dict.fromkeys(origins + destinations):
                coordinates[postcode] = await self.client.geocode(http, postcode)

            origin_points = [coordinates[p] for p in origins]
            destination_points = [coordinates[p] for p in destinations]

            if len(origins) == 1 and len(destinations) == 1:
                route = await self.client.directions(
                    http, origin_points[0], destination_points[0]
                )
                logger.debug(
                    "Mapbox route resolved",
                    origin=origins[0],
                    destination=destinations[0],
                    distance_meters=route.distance_meters,
                )
                return DistanceMatrix(
                    distances=[[meters_to_miles(route.distance_meters)]],
                    durations=[[seconds_to_minutes(route.duration_seconds)]],
                    method="mapbox_directions",
                )

            matrix = await self.client.matrix(http, origin_points, destination_points)

        return DistanceMatrix(
            distances=[[meters_to_miles(cell) for cell in row] for row in matrix.distances],
            durations=[[seconds_to_minutes(cell) for cell in row] for row in matrix.durations],
            method="mapbox_matrix",
        )
