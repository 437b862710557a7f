"""
Generic HTTP distance-matrix endpoint provider.
"""

from typing import Optional

import httpx

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
from install_scheduling.infrastructure.external.http_client import HTTPClient

logger = get_logger(__name__)


class HttpDistanceProvider(DistanceProviderInterface):
    """
    POSTs {origins, destinations} to an endpoint answering
    {distances: [[miles]], durations?: [[minutes]]}.
    """

    @property
    def name(self) -> str:
        """Provider name."""
        return "http"

    def __init__(
        self,
        endpoint_url: str,
        timeout: float = 30.0,
        headers: Optional[dict] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not endpoint_url:
            raise DistanceProviderConfigurationError("DISTANCE_API_URL not configured")
        self.endpoint_url = endpoint_url
        self.timeout = timeout
        self.headers = headers or {}
        self.transport = transport

    async def get_distance_matrix(self, request: DistanceMatrixRequest) -> DistanceMatrix:
        """Ask the endpoint for the matrix in one call."""
        try:
            async with HTTPClient(timeout=self.timeout, transport=self.transport) as http:
                response = await http.post(
                    self.endpoint_url,
                    data={"origins": request.origins, "destinations": request.destinations},
                    headers=self.headers,
                )
        except httpx.HTTPError as e:
            raise DistanceProviderError(f"Distance API network error: {str(e)}")

        if response.status_code != 200:
            raise DistanceProviderError(
                f"Distance API error: {response.status_code} - {response.text[:200]}"
            )

        try:
            data = response.json()
        except ValueError:
            raise DistanceProviderError("Distance API returned a non-JSON body")

        if not isinstance(data, dict) or data.get("error"):
            raise DistanceProviderError(
                f"Distance API error: {data.get('error') if isinstance(data, dict) else data}"
            )

        distances = data.get("distances")
        if not isinstance(distances, list):
            raise DistanceProviderError("Distance API response has no distances")

        durations = data.get("durations")
        return DistanceMatrix(
            distances=distances,
            durations=durations if isinstance(durations, list) else None,
            method="distance_api",
        )
