"""
Monitoring and Tracing Configuration Module.

This module provides optional integration with Pydantic Logfire for tracing
of the website backend, including:
- API endpoint tracing
- Database operation monitoring
- Payment and donation events
- Error tracking and logging

Logfire is disabled unless ``LOGFIRE_ENABLED`` is set; every helper degrades
to a debug log line when Logfire is unavailable.
"""

import logging
import os
from typing import Optional

from fastapi import FastAPI

logger = logging.getLogger(__name__)

# Logfire configuration from environment
LOGFIRE_ENABLED = os.getenv("LOGFIRE_ENABLED", "false").lower() in ("true", "1", "yes")
LOGFIRE_TOKEN = os.getenv("LOGFIRE_TOKEN", "")
LOGFIRE_ENVIRONMENT = os.getenv("LOGFIRE_ENVIRONMENT", "development")
LOGFIRE_SERVICE_NAME = os.getenv("LOGFIRE_SERVICE_NAME", "ecodata-web")
LOGFIRE_SERVICE_VERSION = os.getenv("LOGFIRE_SERVICE_VERSION", "1.0.0")

# Feature flags
LOGFIRE_TRACE_SQLALCHEMY = os.getenv("LOGFIRE_TRACE_SQLALCHEMY", "true").lower() in ("true", "1", "yes")
LOGFIRE_TRACE_FASTAPI = os.getenv("LOGFIRE_TRACE_FASTAPI", "true").lower() in ("true", "1", "yes")


def initialize_logfire(app: FastAPI | None = None) -> None:
    """
    Initialize Logfire for monitoring and tracing.

    Args:
        app: FastAPI application instance for endpoint instrumentation (optional).

    The initialization is conditional based on LOGFIRE_ENABLED environment variable.
    """
    if not LOGFIRE_ENABLED:
        logger.info("Logfire monitoring is disabled. Set LOGFIRE_ENABLED=true to enable.")
        return

    if not LOGFIRE_TOKEN:
        logger.warning(
            "Logfire is enabled but LOGFIRE_TOKEN is not set. "
            "Monitoring will not work. Set LOGFIRE_TOKEN to enable Logfire."
        )
        return

    try:
        import logfire

        logfire.configure(
            token=LOGFIRE_TOKEN,
            service_name=LOGFIRE_SERVICE_NAME,
            service_version=LOGFIRE_SERVICE_VERSION,
            environment=LOGFIRE_ENVIRONMENT,
        )

        if LOGFIRE_TRACE_SQLALCHEMY:
            try:
                logfire.instrument_sqlalchemy()
                logger.info("Logfire: SQLAlchemy instrumentation enabled")
            except Exception as e:
                logger.warning(f"Failed to instrument SQLAlchemy: {e}")

        if LOGFIRE_TRACE_FASTAPI:
            try:
                if app is not None:
                    logfire.instrument_fastapi(app=app)
                    logger.info("Logfire: FastAPI instrumentation enabled")
                else:
                    logger.debug("FastAPI app instance not provided, skipping FastAPI instrumentation")
            except Exception as e:
                logger.warning(f"Failed to instrument FastAPI: {e}")

        logger.info(
            f"Logfire monitoring initialized: environment={LOGFIRE_ENVIRONMENT}, service={LOGFIRE_SERVICE_NAME}"
        )

    except ImportError:
        logger.warning(
            "Logfire is enabled but 'logfire' package is not installed. Install it with: pip install logfire"
        )
    except Exception as e:
        logger.error(f"Failed to initialize Logfire: {e}", exc_info=True)


def log_api_request(method: str, path: str, status_code: int, duration_ms: float) -> None:
    """
    Log an API request with performance metrics.

    Args:
        method: HTTP method
        path: Request path
        status_code: HTTP status code
        duration_ms: Request duration in milliseconds
    """
    if not LOGFIRE_ENABLED:
        return
    try:
        import logfire

        logfire.info(
            "API request completed",
            method=method,
            path=path,
            status_code=status_code,
            duration_ms=duration_ms,
        )
    except Exception:
        logger.debug(f"Could not log API request to Logfire: {method} {path}")


def log_payment_event(event_type: str, reference: str, amount: Optional[float] = None) -> None:
    """
    Log a processed payment event (donation or subscription change).

    Args:
        event_type: Stripe event type
        reference: Stripe session or subscription identifier
        amount: Amount in pounds, when known
    """
    if not LOGFIRE_ENABLED:
        return
    try:
        import logfire

        logfire.info("Payment event processed", event_type=event_type, reference=reference, amount=amount)
    except Exception:
        logger.debug(f"Could not log payment event to Logfire: {event_type} {reference}")


def log_error(error_type: str, error_message: str, context: Optional[dict] = None) -> None:
    """
    Log an error with context for debugging.

    Args:
        error_type: Type of error
        error_message: Error message
        context: Additional context dictionary
    """
    if not LOGFIRE_ENABLED:
        return
    try:
        import logfire

        logfire.error(
            f"{error_type}: {error_message}",
            **(context or {}),
        )
    except Exception:
        logger.debug(f"Could not log error to Logfire: {error_type}")
