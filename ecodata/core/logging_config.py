"""
Logging Configuration Module.

This module provides centralized logging configuration for the ECODATA backend.
It sets up structured logging with different levels for different modules and environments.

Features:
- Configurable log levels per module
- Console and optional file logging
- Structured logging with JSON format support
- Quieter defaults for chatty third-party libraries (SQLAlchemy, SMTP, Stripe)
"""

import logging
import os
from pathlib import Path
from typing import Optional


def _get_logging_config():
    """Get logging configuration from settings model.

    This function is used to defer settings import until needed,
    avoiding circular imports during module initialization.
    """
    try:
        from ecodata.server.core.config import settings

        return {
            "log_level": settings.log_level.upper(),
            "log_format": settings.log_format,
            "log_file_dir": "logs",
            "enable_file_logging": settings.log_to_file,
        }
    except Exception:
        # Fallback to environment variables if settings not available
        return {
            "log_level": os.getenv("ECODATA_LOG_LEVEL", "INFO").upper(),
            "log_format": os.getenv("ECODATA_LOG_FORMAT", "detailed"),
            "log_file_dir": os.getenv("LOG_FILE_DIR", "logs"),
            "enable_file_logging": os.getenv("ECODATA_LOG_TO_FILE", "false").lower() in ("true", "1", "yes"),
        }


_config = _get_logging_config()
LOG_LEVEL = _config["log_level"]
LOG_FORMAT = _config["log_format"]
LOG_FILE_DIR = _config["log_file_dir"]
ENABLE_FILE_LOGGING = _config["enable_file_logging"]


# Define log formats
SIMPLE_FORMAT = "%(levelname)s - %(name)s - %(message)s"

DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(funcName)s() - %(message)s"

JSON_FORMAT = (
    '{"timestamp": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", '
    '"module": "%(filename)s", "function": "%(funcName)s", "line": %(lineno)d, '
    '"message": "%(message)s"}'
)


# Module-specific log levels
MODULE_LOG_LEVELS = {
    # Core modules
    "ecodata.core": "INFO",
    "ecodata.core.storage": "INFO",
    "ecodata.core.security": "INFO",
    # Server modules
    "ecodata.server": "INFO",
    "ecodata.server.api": "DEBUG",
    "ecodata.server.services": "DEBUG",
    "ecodata.server.middleware": "INFO",
    # Third-party libraries (reduce noise)
    "sqlalchemy": "WARNING",
    "sqlalchemy.engine": "WARNING",
    "sqlalchemy.pool": "WARNING",
    "aiosqlite": "WARNING",
    "aiosmtplib": "WARNING",
    "stripe": "WARNING",
    "httpx": "WARNING",
    "asyncio": "WARNING",
    "uvicorn": "INFO",
    "uvicorn.access": "WARNING",
}


def _format_string(fmt: str) -> str:
    if fmt == "json":
        return JSON_FORMAT
    if fmt == "simple":
        return SIMPLE_FORMAT
    return DETAILED_FORMAT


def setup_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    enable_file: Optional[bool] = None,
) -> None:
    """
    Configure logging for the application.

    Args:
        log_level: Override default log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Override default format (simple, detailed, json)
        enable_file: Override whether file logging is enabled
    """
    level = (log_level or LOG_LEVEL).upper()
    fmt = log_format or LOG_FORMAT
    file_logging = ENABLE_FILE_LOGGING if enable_file is None else enable_file

    formatter = logging.Formatter(_format_string(fmt), datefmt="%Y-%m-%d %H:%M:%S")

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)  # Capture all levels, filter at handler level

    # Remove handlers installed by a previous call to avoid duplicates
    for handler in root_logger.handlers[:]:
        if getattr(handler, "_ecodata_handler", False):
            root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    console_handler._ecodata_handler = True
    root_logger.addHandler(console_handler)

    if file_logging:
        Path(LOG_FILE_DIR).mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(Path(LOG_FILE_DIR) / "ecodata.log")
        file_handler.setLevel(logging.DEBUG)  # Always log DEBUG to file
        file_handler.setFormatter(formatter)
        file_handler._ecodata_handler = True
        root_logger.addHandler(file_handler)

    for module_name, module_level in MODULE_LOG_LEVELS.items():
        logging.getLogger(module_name).setLevel(module_level)

    root_logger.info(f"Logging configured: level={level}, format={fmt}, file_logging={file_logging}")


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: The module name (typically __name__)

    Returns:
        A configured logger instance
    """
    return logging.getLogger(name)
