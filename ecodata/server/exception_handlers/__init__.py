"""
Exception handlers for the ECODATA server.

This package contains the exception handlers that turn errors into
``{"message": ...}`` JSON responses and a setup function to register them
with the FastAPI application.
"""

from .global_handler import setup_exception_handlers

__all__ = ["setup_exception_handlers"]
