"""
Request/Response logging middleware.
"""

import time
import uuid
from typing import Callable

import structlog
from fastapi import FastAPI, Request, Response

from install_scheduling.config.logging import get_logger
from install_scheduling.infrastructure.monitoring.metrics import record_api_request

logger = get_logger(__name__)


def _endpoint_label(request: Request) -> str:
    """Route template when matched, so metrics labels stay bounded."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or "unmatched"


class LoggingMiddleware:
    """Request/Response logging middleware for FastAPI."""

    def __init__(self, app: FastAPI):
        self.app = app
        self.add_logging_middleware()

    def add_logging_middleware(self) -> None:
        """Add request/response logging middleware."""

        @self.app.middleware("http")
        async def logging_middleware(request: Request, call_next: Callable) -> Response:
            request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
            structlog.contextvars.clear_contextvars()
            structlog.contextvars.bind_contextvars(request_id=request_id)
            start_time = time.time()

            logger.info(
                "Request started",
                request_id=request_id,
                method=request.method,
                path=request.url.path,
                query_params=str(request.query_params),
                client_host=request.client.host if request.client else None,
            )

            request.state.request_id = request_id

            try:
                response = await call_next(request)
            except Exception as e:
                process_time = time.time() - start_time
                logger.error(
                    "Request failed",
                    request_id=request_id,
                    method=request.method,
                    path=request.url.path,
                    error=str(e),
                    process_time=f"{process_time:.4f}s",
                )
                record_api_request(request.method, _endpoint_label(request), 500, process_time)
                raise

            process_time = time.time() - start_time

            logger.info(
                "Request completed",
                request_id=request_id,
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                process_time=f"{process_time:.4f}s",
            )
            record_api_request(
                request.method, _endpoint_label(request), response.status_code, process_time
            )

            response.headers["X-Request-ID"] = request_id
            response.headers["X-Process-Time"] = f"{process_time:.4f}"

            return response
