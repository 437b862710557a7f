"""
Application settings using Pydantic BaseSettings.
"""

from datetime import date
from typing import Any, List, Optional, Union

from pydantic import ValidationInfo, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    # Application
    APP_NAME: str = "Install Scheduling Service"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "production"
    LOG_LEVEL: str = "INFO"

    # API Configuration
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    API_PREFIX: str = "/api/v1"
    CORS_ORIGINS: Union[str, List[str]] = "*"

    # Database
    POSTGRES_USER: Optional[str] = None
    POSTGRES_PASSWORD: Optional[str] = None
    POSTGRES_SERVER: Optional[str] = None
    POSTGRES_DB: Optional[str] = None
    # Declared after the POSTGRES_* parts so the validator can see them
    DATABASE_URL: Optional[str] = None
    DATABASE_POOL_SIZE: int = 10
    DATABASE_MAX_OVERFLOW: int = 20
    DATABASE_ECHO: bool = False
    DATABASE_POOL_TIMEOUT: int = 30
    DATABASE_POOL_RECYCLE: int = 3600

    # Redis
    REDIS_URL: str = "redis://localhost:6379/0"

    # Distance provider
    DISTANCE_PROVIDER: str = "mapbox"  # mapbox, http
    MAPBOX_ACCESS_TOKEN: Optional[str] = None
    MAPBOX_BASE_URL: str = "https://api.mapbox.com"
    MAPBOX_COUNTRY: str = "GB"
    DISTANCE_API_URL: Optional[str] = None
    HTTP_TIMEOUT: int = 30

    # Distance cache
    DISTANCE_CACHE_BACKEND: str = "memory"  # memory, redis
    DISTANCE_CACHE_TTL_HOURS: int = 24
    DISTANCE_CACHE_KEY_PREFIX: str = "distance"

    # Scheduling
    SCHEDULING_SEARCH_DAYS: int = 30
    BANK_HOLIDAYS: List[date] = []

    # Monitoring
    ENABLE_METRICS: bool = True

    # Development
    ENABLE_ADMIN_ROUTES: bool = False

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> List[str]:
        if isinstance(v, str):
            if v == "*":
                return ["*"]
            return [i.strip() for i in v.split(",")]
        elif isinstance(v, list):
            return v
        return ["*"]

    @field_validator("DATABASE_URL", mode="before")
    @classmethod
    def assemble_db_connection(cls, v: Optional[str], info: ValidationInfo) -> Any:
        if isinstance(v, str):
            return v
        # Build from individual components if DATABASE_URL is not provided
        values = info.data
        user = values.get("POSTGRES_USER") or "scheduling_user"
        password = values.get("POSTGRES_PASSWORD") or "scheduling_pass"
        host = values.get("POSTGRES_SERVER") or "localhost"
        db = values.get("POSTGRES_DB") or "install_scheduling"
        return f"postgresql+asyncpg://{user}:{password}@{host}:5432/{db}"

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        if v not in ["development", "staging", "production", "test"]:
            raise ValueError(
                "Environment must be one of: development, staging, production, test"
            )
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("DISTANCE_PROVIDER")
    @classmethod
    def validate_distance_provider(cls, v: str) -> str:
        if v not in ["mapbox", "http"]:
            raise ValueError("Distance provider must be one of: mapbox, http")
        return v

    @field_validator("DISTANCE_CACHE_BACKEND")
    @classmethod
    def validate_cache_backend(cls, v: str) -> str:
        if v not in ["memory", "redis"]:
            raise ValueError("Distance cache backend must be one of: memory, redis")
        return v

    model_config = {
        "env_file": ".env",
        "case_sensitive": True,
        "extra": "ignore",
        "validate_default": True,
    }


# Global settings instance
settings = Settings()
