"""
Core utilities and configuration for ECODATA.

This package provides core functionality including logging configuration,
monitoring, security helpers, the database entities and the storage layer.
"""

from ecodata.core.logging_config import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
