"""
Mapbox API client.
"""

from typing import Any, Dict, List, Optional

import httpx

from install_scheduling.config.logging import get_logger
from install_scheduling.domain.exceptions.distance_error import DistanceProviderError
from install_scheduling.infrastructure.external.http_client import HTTPClient
from install_scheduling.infrastructure.providers.mapbox.models import (
    Coordinates,
    MapboxMatrix,
    MapboxRoute,
)

logger = get_logger(__name__)


class MapboxClient:
    """Mapbox geocoding, directions and matrix client."""

    def __init__(
        self,
        access_token: str,
        base_url: str = "https://api.mapbox.com",
        country: str = "GB",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.access_token = access_token
        self.base_url = base_url.rstrip("/")
        self.country = country
        self.timeout = timeout
        self.transport = transport

    def session(self) -> HTTPClient:
        """HTTP session for a batch of calls."""
        return HTTPClient(timeout=self.timeout, transport=self.transport)

    async def geocode(self, http: HTTPClient, postcode: str) -> Coordinates:
        """Resolve a postcode to coordinates."""
        data = await self._get_json(
            http,
            f"/geocoding/v5/mapbox.places/{postcode}.json",
            {"country": self.country, "types": "postcode"},
            "Geocoding",
        )

        features = data.get("features") or []
        if not features:
            raise DistanceProviderError(f"Could not geocode postcode: {postcode}")

        try:
            longitude, latitude = features[0]["center"]
        except (KeyError, TypeError, ValueError):
            raise DistanceProviderError(f"Geocoding response has no center for {postcode}")

        return Coordinates(longitude=float(longitude), latitude=float(latitude))

    async def directions(
        self, http: HTTPClient, start: Coordinates, end: Coordinates
    ) -> MapboxRoute:
        """Driving route between two points."""
        data = await self._get_json(
            http,
            f"/directions/v5/mapbox/driving/{start.as_param()};{end.as_param()}",
            {"geometries": "geojson"},
            "Directions",
        )

        routes = data.get("routes") or []
        if not routes:
            raise DistanceProviderError("No routes found between the specified points")

        try:
            return MapboxRoute(
                distance_meters=float(routes[0]["distance"]),
                duration_seconds=float(routes[0]["duration"]),
            )
        except (KeyError, TypeError, ValueError):
            raise DistanceProviderError("Directions response route is malformed")

    async def matrix(
        self,
        http: HTTPClient,
        origins: List[Coordinates],
        destinations: List[Coordinates],
    ) -> MapboxMatrix:
        """Driving distance/duration matrix, origins as sources."""
        points = origins + destinations
        coordinates = ";".join(point.as_param() for point in points)
        sources = ";".join(str(i) for i in range(len(origins)))
        targets = ";".join(str(i + len(origins)) for i in range(len(destinations)))

        data = await self._get_json(
            http,
            f"/directions-matrix/v1/mapbox/driving/{coordinates}",
            {
                "sources": sources,
                "destinations": targets,
                "annotations": "distance,duration",
            },
            "Matrix",
        )

        if not data.get("distances") or not data.get("durations"):
            raise DistanceProviderError(
                "Invalid response from Mapbox Matrix API: missing distances or durations"
            )

        return MapboxMatrix(distances=data["distances"], durations=data["durations"])

    async def _get_json(
        self, http: HTTPClient, path: str, params: Dict[str, Any], api_name: str
    ) -> Dict[str, Any]:
        try:
            response = await http.get(
                f"{self.base_url}{path}",
                params={**params, "access_token": self.access_token},
            )
        except httpx.TimeoutException:
            raise DistanceProviderError(f"Mapbox {api_name} API request timed out")
        except httpx.HTTPError as e:
            raise DistanceProviderError(f"Mapbox {api_name} API network error: {str(e)}")

        try:
            data = response.json()
        except ValueError:
            raise DistanceProviderError(
                f"Mapbox {api_name} API returned non-JSON body ({response.status_code})"
            )

        if response.status_code != 200:
            message = "Unknown error"
            if isinstance(data, dict):
                message = data.get("message") or data.get("error") or message
            logger.error(
                "Mapbox API error",
                api=api_name,
                status_code=response.status_code,
                message=message,
            )
            raise DistanceProviderError(
                f"Mapbox {api_name} API error: {response.status_code} - {message}"
            )

        if not isinstance(data, dict):
            raise DistanceProviderError(
                f"Mapbox {api_name} API returned {type(data).__name__} instead of an object"
            )

        return data
