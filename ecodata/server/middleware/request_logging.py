"""
Request logging middleware.

Logs every ``/api`` request as ``METHOD path status in Xms``, forwards the
timing to Logfire when enabled and adds an ``X-Process-Time`` header.
"""

import time
from typing import Callable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from ecodata.core.logging_config import get_logger
from ecodata.core.monitoring import log_api_request

logger = get_logger(__name__)

SLOW_REQUEST_MS = 1000


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log API requests with their status and duration."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """
        Process the request and log metrics.

        Args:
            request: The incoming HTTP request
            call_next: The next middleware/handler

        Returns:
            The HTTP response
        """
        start_time = time.perf_counter()
        method = request.method
        path = request.url.path

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                f"API request failed: {method} {path}",
                exc_info=True,
                extra={"method": method, "path": path, "duration_ms": duration_ms, "error": str(e)},
            )
            log_api_request(method=method, path=path, status_code=500, duration_ms=duration_ms)
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        response.headers["X-Process-Time"] = f"{duration_ms:.2f}"

        if path.startswith("/api"):
            logger.info(f"{method} {path} {response.status_code} in {duration_ms:.0f}ms")
            log_api_request(method=method, path=path, status_code=response.status_code, duration_ms=duration_ms)

        if duration_ms > SLOW_REQUEST_MS:
            logger.warning(
                f"Slow API request: {method} {path} took {duration_ms:.2f}ms",
                extra={
                    "method": method,
                    "path": path,
                    "duration_ms": duration_ms,
                    "status_code": response.status_code,
                },
            )

        return response
