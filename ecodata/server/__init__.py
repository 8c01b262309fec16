"""
ECODATA Server Package.

This package contains the web server implementation for the ECODATA CIC website.
It includes the API definition, configuration and the service layer.

Subpackages:
    api: FastAPI route definitions, endpoint logic and dependencies.
    core: Settings and constants.
    exception_handlers: Mapping of errors to JSON responses.
    middleware: Request logging and timing.
    services: Authentication, email, payment and campaign services.
"""
