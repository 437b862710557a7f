"""
Error handling middleware.
"""

import traceback

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from install_scheduling.api.schemas.common import ErrorResponse
from install_scheduling.config.logging import get_logger
from install_scheduling.domain.exceptions.assignment_error import (
    AssignmentError,
    ConcurrentAssignmentError,
)
from install_scheduling.domain.exceptions.distance_error import DistanceProviderError
from install_scheduling.domain.exceptions.not_found_error import NotFoundError
from install_scheduling.domain.exceptions.validation_error import ValidationError
from install_scheduling.infrastructure.monitoring.metrics import record_error

logger = get_logger(__name__)


def _error_response(status_code: int, error: str, message: str, error_type: str):
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error, message=message, type=error_type).model_dump(),
    )


class ErrorHandlerMiddleware:
    """Error handling middleware for FastAPI."""

    def __init__(self, app: FastAPI):
        self.app = app
        self.add_error_handlers()

    def add_error_handlers(self) -> None:
        """Add custom error handlers to FastAPI app."""
        add_error_handlers(self.app)


def add_error_handlers(app: FastAPI) -> None:
    """Add custom error handlers to FastAPI app."""

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        logger.warning("Validation error", error=str(exc), path=request.url.path)
        return _error_response(400, "Validation Error", str(exc), "validation_error")

    @app.exception_handler(NotFoundError)
    async def not_found_error_handler(request: Request, exc: NotFoundError):
        logger.info("Resource not found", error=str(exc), path=request.url.path)
        return _error_response(404, "Not Found", str(exc), "not_found")

    @app.exception_handler(ConcurrentAssignmentError)
    async def concurrent_assignment_handler(
        request: Request, exc: ConcurrentAssignmentError
    ):
        logger.warning(
            "Concurrent assignment rejected",
            job_id=str(exc.job_id),
            expected_version=exc.expected_version,
            actual_version=exc.actual_version,
        )
        return _error_response(409, "Conflict", str(exc), "concurrent_modification")

    @app.exception_handler(AssignmentError)
    async def assignment_error_handler(request: Request, exc: AssignmentError):
        logger.error("Assignment error", job_id=str(exc.job_id), error=str(exc))
        record_error("assignment_error", "api")
        return _error_response(500, "Assignment Error", str(exc), "assignment_error")

    @app.exception_handler(DistanceProviderError)
    async def distance_error_handler(request: Request, exc: DistanceProviderError):
        logger.error("Distance provider error", error=str(exc), path=request.url.path)
        record_error("distance_provider_error", "api")
        return _error_response(502, "Distance Provider Error", str(exc), "distance_error")

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error("Database error", error=str(exc), path=request.url.path)
        record_error("database_error", "api")
        return _error_response(
            500, "Database Error", "A database error occurred", "database_error"
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return _error_response(exc.status_code, "HTTP Error", exc.detail, "http_error")

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled exception",
            error=str(exc),
            path=request.url.path,
            traceback=traceback.format_exc(),
        )
        record_error(type(exc).__name__, "api")
        return _error_response(
            500, "Internal Server Error", "An unexpected error occurred", "internal_error"
        )
