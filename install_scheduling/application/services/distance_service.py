"""
Distance service resolving driving distance between two postcodes.
"""

import time
from dataclasses import dataclass
from typing import Optional

from install_scheduling.application.interfaces.providers import (
    DistanceMatrixRequest,
    DistanceProviderInterface,
)
from install_scheduling.application.services.distance_cache import DistanceCache
from install_scheduling.config.logging import get_logger
from install_scheduling.domain.exceptions.distance_error import (
    DistanceLookupError,
    DistanceProviderError,
)
from install_scheduling.domain.value_objects.postcode import normalize_postcode
from install_scheduling.infrastructure.monitoring.metrics import (
    record_distance_cache_lookup,
    record_distance_provider_call,
)

logger = get_logger(__name__)

SAME_POSTCODE_MILES = 0.5
SAME_POSTCODE_METHOD = "same_postcode"
# Average-speed approximation used when the provider gives no duration
MINUTES_PER_MILE = 2


@dataclass(frozen=True)
class DistanceResult:
    """Resolved distance between two postcodes."""

    origin: str
    destination: str
    distance_miles: float
    duration_minutes: Optional[float]
    method: str
    cached: bool = False

    @property
    def travel_minutes(self) -> int:
        """Provider duration when known, otherwise two minutes per mile."""
        if self.duration_minutes is not None:
            return int(round(self.duration_minutes))
        return int(round(self.distance_miles * MINUTES_PER_MILE))


class DistanceService:
    """Distance lookups through a TTL cache in front of a remote provider."""

    def __init__(self, provider: DistanceProviderInterface, cache: DistanceCache):
        self.provider = provider
        self.cache = cache
        self.logger = logger

    async def distance(self, postcode_a: str, postcode_b: str) -> float:
        """Driving distance in miles."""
        result = await self.lookup(postcode_a, postcode_b)
        return result.distance_miles

    async def lookup(self, postcode_a: str, postcode_b: str) -> DistanceResult:
        """
        Resolve distance and duration between two postcodes.

        Raises:
            DistanceLookupError: input is empty or the provider call failed.
                Never substituted with a guessed distance.
        """
        origin = normalize_postcode(postcode_a)
        destination = normalize_postcode(postcode_b)

        if not origin or not destination:
            raise DistanceLookupError(origin, destination, "postcode is required")

        if origin == destination:
            record_distance_cache_lookup(SAME_POSTCODE_METHOD)
            return DistanceResult(
                origin=origin,
                destination=destination,
                distance_miles=SAME_POSTCODE_MILES,
                duration_minutes=None,
                method=SAME_POSTCODE_METHOD,
            )

        cached = await self.cache.get(origin, destination)
        if cached is not None:
            return DistanceResult(
                origin=origin,
                destination=destination,
                distance_miles=cached.distance_miles,
                duration_minutes=cached.duration_minutes,
                method=cached.method,
                cached=True,
            )

        distance_miles, duration_minutes, method = await self._fetch(origin, destination)

        await self.cache.put(origin, destination, distance_miles, duration_minutes, method)

        return DistanceResult(
            origin=origin,
            destination=destination,
            distance_miles=distance_miles,
            duration_minutes=duration_minutes,
            method=method,
        )

    async def clear_cache(self) -> int:
        """Operator action for suspected stale distances."""
        return await self.cache.clear()

    async def _fetch(self, origin: str, destination: str):
        start_time = time.time()
        try:
            matrix = await self.provider.get_distance_matrix(
                DistanceMatrixRequest(origins=[origin], destinations=[destination])
            )
        except DistanceLookupError:
            record_distance_provider_call(
                self.provider.name, "error", time.time() - start_time
            )
            raise
        except DistanceProviderError as e:
            record_distance_provider_call(
                self.provider.name, "error", time.time() - start_time
            )
            raise DistanceLookupError(origin, destination, str(e)) from e
        except Exception as e:
            # Unparseable provider payloads surface as lookup failures
            record_distance_provider_call(
                self.provider.name, "malformed", time.time() - start_time
            )
            self.logger.error(
                "Distance provider raised unexpectedly",
                origin=origin,
                destination=destination,
                provider=self.provider.name,
                error=str(e),
                exc_info=True,
            )
            raise DistanceLookupError(
                origin, destination, f"{type(e).__name__}: {e}"
            ) from e

        distance_miles = matrix.distance_at(0, 0)
        if not isinstance(distance_miles, (int, float)) or isinstance(distance_miles, bool):
            record_distance_provider_call(
                self.provider.name, "malformed", time.time() - start_time
            )
            self.logger.error(
                "Distance provider response missing distance",
                origin=origin,
                destination=destination,
                provider=self.provider.name,
            )
            raise DistanceLookupError(
                origin, destination, "provider response has no distances[0][0]"
            )

        duration_minutes = matrix.duration_at(0, 0)
        if not isinstance(duration_minutes, (int, float)):
            duration_minutes = None

        record_distance_provider_call(self.provider.name, "success", time.time() - start_time)

        self.logger.debug(
            "Distance resolved by provider",
            origin=origin,
            destination=destination,
            distance_miles=distance_miles,
            duration_minutes=duration_minutes,
            method=matrix.method,
        )

        return float(distance_miles), duration_minutes, matrix.method
