"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware (CORS,
request logging), registers the exception handlers and includes all API
routers. It serves as the root of the web server.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ecodata import __version__
from ecodata.core.logging_config import get_logger, setup_logging
from ecodata.core.monitoring import initialize_logfire
from ecodata.core.storage import init_storage
from ecodata.server.services.email_service import email_service

from .api import admin, auth, forms, health, payments, public, user
from .core import constant
from .core.config import settings
from .exception_handlers import setup_exception_handlers
from .middleware import RequestLoggingMiddleware

# Initialize logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    Selects and seeds the storage backend and checks the SMTP connection on
    startup, and releases storage connections on shutdown.
    """
    # Startup
    logger.info(f"Starting up {constant.PROJECT_NAME} Server ({settings.environment})...")
    app.state.storage = await init_storage(settings.database, settings.auth)
    logger.info(f"Storage initialized: {app.state.storage.backend}")
    if not email_service.is_configured:
        logger.warning("SMTP credentials are not set; email notifications are disabled")
    elif await email_service.verify_connection():
        logger.info(f"Email service connected to {email_service.config.host}")
    else:
        logger.warning("Email service could not connect; notifications will fail until SMTP is reachable")

    yield

    # Shutdown
    logger.info(f"Shutting down {constant.PROJECT_NAME} Server...")
    await app.state.storage.close()


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    ECODATA CIC Website API

    This API provides the backend services for the ECODATA CIC website.
    It serves public content, handles contact and newsletter forms, donor accounts,
    Stripe donations and subscriptions, and the admin content management system.
    """,
    version=__version__,
    openapi_url=f"{constant.API_PREFIX}/openapi.json",
    docs_url=f"{constant.API_PREFIX}/docs",
    redoc_url=f"{constant.API_PREFIX}/redoc",
    lifespan=lifespan,
)

# Browsers reject credentialed requests to a wildcard origin
cors = settings.cors
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors.origins,
    allow_credentials=cors.allow_credentials and cors.origins != ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)

setup_exception_handlers(app)
initialize_logfire(app)

app.include_router(health.router, tags=["health"])
app.include_router(auth.router, prefix=f"{constant.API_PREFIX}/auth", tags=["auth"])
app.include_router(public.router, prefix=constant.API_PREFIX, tags=["content"])
app.include_router(forms.router, prefix=constant.API_PREFIX, tags=["forms"])
app.include_router(payments.router, prefix=constant.API_PREFIX, tags=["payments"])
app.include_router(user.router, prefix=f"{constant.API_PREFIX}/user", tags=["user"])
app.include_router(admin.router, prefix=constant.ADMIN_PREFIX, tags=["admin"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "ecodata.server.main:app",
        host=settings.server_host,
        port=settings.server_port,
        reload=settings.is_development,
    )
