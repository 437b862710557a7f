"""
Health check implementations for the application.
"""

import time
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, Optional

from sqlalchemy import text

from install_scheduling.config.logging import get_logger

logger = get_logger(__name__)


class HealthChecker:
    """Health checker for application components."""

    def __init__(self, session_factory=None, redis_client=None):
        self.session_factory = session_factory
        self.redis_client = redis_client
        self.checks: Dict[str, Callable[[], Awaitable[Dict[str, Any]]]] = {
            "database": self._check_database,
            "distance_cache": self._check_distance_cache,
        }

    async def run_health_checks(self) -> Dict[str, Any]:
        """Run all health checks."""
        results = {}

        for check_name, check_func in self.checks.items():
            try:
                results[check_name] = await check_func()
            except Exception as e:
                logger.error("Health check failed", check_name=check_name, error=str(e))
                results[check_name] = {"status": "error", "error": str(e)}

        return results

    async def _check_database(self) -> Dict[str, Any]:
        """Check database connectivity."""
        if self.session_factory is None:
            return {"status": "unknown", "error": "Database not configured"}

        start_time = time.time()
        async with self.session_factory() as session:
            await session.execute(text("SELECT 1"))

        return {
            "status": "healthy",
            "response_time_ms": (time.time() - start_time) * 1000,
        }

    async def _check_distance_cache(self) -> Dict[str, Any]:
        """Check the shared distance cache backend."""
        if self.redis_client is None:
            return {"status": "healthy", "backend": "memory"}

        start_time = time.time()
        await self.redis_client.ping()
        return {
            "status": "healthy",
            "backend": "redis",
            "response_time_ms": (time.time() - start_time) * 1000,
        }

    async def get_overall_health(self) -> Dict[str, Any]:
        """Get overall application health status."""
        health_results = await self.run_health_checks()
        all_healthy = all(
            result.get("status") == "healthy" for result in health_results.values()
        )

        return {
            "status": "healthy" if all_healthy else "unhealthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "services": health_results,
        }

    async def get_service_health(self, service_name: str) -> Optional[Dict[str, Any]]:
        """Get health status for a specific service."""
        check_func = self.checks.get(service_name)
        if check_func is None:
            return None

        try:
            return await check_func()
        except Exception as e:
            logger.error("Service health check failed", service=service_name, error=str(e))
            return {"status": "error", "error": str(e)}
