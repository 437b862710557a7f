"""
Distance cache for memoizing postcode-pair lookups.
"""

import json
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Optional

from install_scheduling.application.interfaces.services import (
    CachedDistance,
    DistanceCacheInterface,
)
from install_scheduling.config.logging import get_logger
from install_scheduling.infrastructure.monitoring.metrics import record_distance_cache_lookup

logger = get_logger(__name__)

DEFAULT_TTL = timedelta(hours=24)


def pair_key(postcode_a: str, postcode_b: str) -> str:
    """Unordered key for two normalized postcodes."""
    first, second = sorted([postcode_a, postcode_b])
    return f"{first}|{second}"


class InMemoryDistanceCache(DistanceCacheInterface):
    """In-process distance cache for development/testing and single workers."""

    def __init__(self):
        self.entries: Dict[str, CachedDistance] = {}

    async def get(self, key: str) -> Optional[CachedDistance]:
        return self.entries.get(key)

    async def set(self, key: str, entry: CachedDistance) -> None:
        self.entries[key] = entry

    async def clear(self) -> int:
        removed = len(self.entries)
        self.entries = {}
        return removed


class RedisDistanceCache(DistanceCacheInterface):
    """Redis-backed distance cache shared between processes."""

    def __init__(self, redis_client, key_prefix: str = "distance", ttl: timedelta = DEFAULT_TTL):
        self.redis = redis_client
        self.key_prefix = key_prefix
        self.ttl = ttl

    def _redis_key(self, key: str) -> str:
        return f"{self.key_prefix}:{key}"

    async def get(self, key: str) -> Optional[CachedDistance]:
        raw = await self.redis.get(self._redis_key(key))
        if raw is None:
            return None
        try:
            return CachedDistance.from_dict(json.loads(raw))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Discarding unreadable distance cache entry", key=key, error=str(e))
            return None

    async def set(self, key: str, entry: CachedDistance) -> None:
        # Redis expiry only bounds memory; freshness is still judged by cached_at
        await self.redis.set(
            self._redis_key(key),
            json.dumps(entry.to_dict()),
            ex=int(self.ttl.total_seconds()),
        )

    async def clear(self) -> int:
        removed = 0
        async for redis_key in self.redis.scan_iter(match=f"{self.key_prefix}:*"):
            removed += await self.redis.delete(redis_key)
        return removed


class DistanceCache:
    """Distance cache with a time-to-live over an injectable backend."""

    def __init__(
        self,
        backend: Optional[DistanceCacheInterface] = None,
        ttl: timedelta = DEFAULT_TTL,
        clock: Callable[[], datetime] = None,
    ):
        self.backend = backend or InMemoryDistanceCache()
        self.ttl = ttl
        self.clock = clock or (lambda: datetime.now(timezone.utc))
        self.logger = logger

    def is_fresh(self, entry: CachedDistance) -> bool:
        """Check if an entry is younger than the TTL."""
        return self.clock() - entry.cached_at < self.ttl

    async def get(self, postcode_a: str, postcode_b: str) -> Optional[CachedDistance]:
        """Get a fresh entry for the pair, or None when missing or expired."""
        entry = await self.backend.get(pair_key(postcode_a, postcode_b))
        if entry is None:
            record_distance_cache_lookup("miss")
            return None
        if not self.is_fresh(entry):
            record_distance_cache_lookup("expired")
            self.logger.debug(
                "Distance cache entry expired",
                origin=postcode_a,
                destination=postcode_b,
                cached_at=entry.cached_at.isoformat(),
            )
            return None
        record_distance_cache_lookup("hit")
        return entry

    async def put(
        self,
        postcode_a: str,
        postcode_b: str,
        distance_miles: float,
        duration_minutes: Optional[float],
        method: str,
    ) -> CachedDistance:
        """Store a lookup result stamped with the current time."""
        entry = CachedDistance(
            distance_miles=distance_miles,
            duration_minutes=duration_minutes,
            method=method,
            cached_at=self.clock(),
        )
        await self.backend.set(pair_key(postcode_a, postcode_b), entry)
        return entry

    async def clear(self) -> int:
        """Drop every cached distance."""
        removed = await self.backend.clear()
        self.logger.info("Distance cache cleared", removed_entries=removed)
        return removed
