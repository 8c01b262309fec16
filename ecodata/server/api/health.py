"""
Health Check Endpoints.

This module provides basic system status endpoints (health, version)
used for monitoring and deployment verification.
"""

from fastapi import APIRouter, Request

from ecodata import __version__
from ecodata.server.core.constant import SCHEMA_VERSION

router = APIRouter()


@router.get(
    "/health",
    summary="Health Check",
    description="Check the operational status of the API server.",
    response_description="Status object.",
)
async def health_check(request: Request):
    """
    Health check endpoint.

    Returns a simple status indicator and the storage backend in use.
    """
    storage = getattr(request.app.state, "storage", None)
    return {"status": "ok", "storage": storage.backend if storage is not None else None}


@router.get(
    "/version",
    summary="Get Version",
    description="Retrieve version information for the API server.",
    response_description="Version object.",
)
async def version():
    """
    Get API version.

    Returns the current semantic version of the API and supported schema version.
    """
    return {"version": __version__, "schema_version": SCHEMA_VERSION}
