"""
FastAPI application factory.
"""

from contextlib import asynccontextmanager
from datetime import timedelta
from typing import Optional

import redis.asyncio as redis
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from install_scheduling.api.middleware.error_handler import ErrorHandlerMiddleware
from install_scheduling.api.middleware.logging import LoggingMiddleware
from install_scheduling.api.routes import admin, engineers, health, jobs, scheduling
from install_scheduling.application.services.distance_cache import (
    DistanceCache,
    RedisDistanceCache,
)
from install_scheduling.application.services.distance_service import DistanceService
from install_scheduling.config.database import close_database_connections, get_session_factory
from install_scheduling.config.logging import configure_logging, get_logger
from install_scheduling.config.settings import Settings, settings
from install_scheduling.domain.exceptions.distance_error import (
    DistanceProviderConfigurationError,
)
from install_scheduling.infrastructure.monitoring.health_checks import HealthChecker
from install_scheduling.infrastructure.providers.factory import ProviderFactory

logger = get_logger(__name__)


def build_distance_service(app: FastAPI, config: Settings) -> None:
    """Wire the shared distance cache and provider onto app.state."""
    redis_client = None
    if config.DISTANCE_CACHE_BACKEND == "redis":
        redis_client = redis.from_url(config.REDIS_URL, decode_responses=True)
        backend = RedisDistanceCache(
            redis_client,
            key_prefix=config.DISTANCE_CACHE_KEY_PREFIX,
            ttl=timedelta(hours=config.DISTANCE_CACHE_TTL_HOURS),
        )
    else:
        backend = None

    cache = DistanceCache(backend, ttl=timedelta(hours=config.DISTANCE_CACHE_TTL_HOURS))
    app.state.redis_client = redis_client
    app.state.distance_cache = cache
    app.state.distance_service = None
    app.state.distance_provider_error = None

    try:
        provider = ProviderFactory().create_provider(config)
    except DistanceProviderConfigurationError as e:
        logger.error(
            "Distance provider not configured",
            provider=config.DISTANCE_PROVIDER,
            error=str(e),
        )
        app.state.distance_provider_error = e
    else:
        app.state.distance_service = DistanceService(provider, cache)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    configure_logging()
    logger.info("Application startup", environment=settings.ENVIRONMENT)

    yield

    logger.info("Application shutdown")
    redis_client = getattr(app.state, "redis_client", None)
    if redis_client is not None:
        await redis_client.aclose()
    await close_database_connections()


def create_app(distance_service: Optional[DistanceService] = None) -> FastAPI:
    """Create and configure FastAPI application."""

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Engineer recommendations, conflict detection and assignment for installs",
        openapi_url=f"{settings.API_PREFIX}/openapi.json" if settings.DEBUG else None,
        docs_url=f"{settings.API_PREFIX}/docs" if settings.DEBUG else None,
        redoc_url=f"{settings.API_PREFIX}/redoc" if settings.DEBUG else None,
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add custom middleware
    ErrorHandlerMiddleware(app)
    LoggingMiddleware(app)

    if distance_service is not None:
        app.state.redis_client = None
        app.state.distance_service = distance_service
        app.state.distance_provider_error = None
    else:
        build_distance_service(app, settings)

    app.state.health_checker = HealthChecker(
        session_factory=lambda: get_session_factory()(),
        redis_client=app.state.redis_client,
    )

    # Add routes
    app.include_router(health.router, prefix=settings.API_PREFIX, tags=["health"])
    app.include_router(jobs.router, prefix=settings.API_PREFIX, tags=["jobs"])
    app.include_router(engineers.router, prefix=settings.API_PREFIX, tags=["engineers"])
    app.include_router(scheduling.router, prefix=settings.API_PREFIX, tags=["scheduling"])

    if settings.ENABLE_ADMIN_ROUTES:
        app.include_router(admin.router, prefix=settings.API_PREFIX, tags=["admin"])

    return app
