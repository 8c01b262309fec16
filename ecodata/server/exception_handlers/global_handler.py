"""
Exception handlers for the FastAPI application.

Every error leaves the API as a JSON object with a ``message`` key:

- ``EcodataError`` subclasses use their own status code and message, plus any
  extra fields they carry.
- ``HTTPException`` keeps its status code and headers.
- Request validation failures become 400 with pydantic's error list.
- Anything else is logged with a traceback and becomes 500 with an error ID
  that clients can quote when reporting the problem.
"""

import traceback

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ecodata.core.exceptions import EcodataError
from ecodata.core.logging_config import get_logger
from ecodata.core.monitoring import log_error

logger = get_logger(__name__)


async def ecodata_exception_handler(request: Request, exc: EcodataError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} in {request.method} {request.url.path}: {exc.message}")
    else:
        logger.debug(f"{type(exc).__name__} in {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message, **exc.extra})


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Return 400 with the list of validation errors."""
    errors = jsonable_encoder(exc.errors())
    logger.debug(f"Invalid request data for {request.method} {request.url.path}: {len(errors)} error(s)")
    return JSONResponse(status_code=400, content={"message": "Invalid request data", "errors": errors})


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Global exception handler to log detailed error information.

    This handler is called for any unhandled exception in the application.
    It logs the full error context and returns a JSON response with an error ID
    that clients can use to reference the error when reporting issues.

    Args:
        request: The HTTP request that caused the exception
        exc: The exception that was raised

    Returns:
        JSONResponse with error details and error ID
    """
    # Generate unique error ID for tracking
    error_id = id(exc)

    logger.error(
        f"Unhandled exception [{error_id}] in {request.method} {request.url.path}: {str(exc)}",
        exc_info=True,
        extra={
            "error_id": error_id,
            "method": request.method,
            "path": request.url.path,
            "query_params": dict(request.query_params),
            "client": request.client.host if request.client else "unknown",
            "error_type": type(exc).__name__,
            "traceback": traceback.format_exc(),
        },
    )
    log_error(type(exc).__name__, str(exc), {"path": request.url.path, "error_id": error_id})

    return JSONResponse(
        status_code=500,
        content={
            "message": "Internal server error",
            "error_id": error_id,
            "error_type": type(exc).__name__,
        },
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI application.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(EcodataError, ecodata_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)
    logger.debug("Exception handlers registered successfully")
