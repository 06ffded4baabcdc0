"""
Application entry point.

Creates the FastAPI application and wires together:
- Routers (one per bounded context)
- Error handlers (centralized domain-to-HTTP mapping)
- Security middleware (headers, rate limiting)
- Logging configuration
- Startup/shutdown of the database engine and notification dispatcher

No business logic belongs here.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from slowapi.errors import RateLimitExceeded

from fleet.core.config import settings
from fleet.infrastructure.vessel.tables import create_schema
from fleet.interfaces.health import router as health_router
from fleet.interfaces.vessel.dependencies import get_engine, get_notifier
from fleet.interfaces.vessel.router import router as vessel_router
from fleet.shared.errors.handlers import register_error_handlers
from fleet.shared.logging import configure_logging
from fleet.shared.security.headers import SecurityHeadersMiddleware
from fleet.shared.security.rate_limiting import limiter, rate_limit_exceeded_handler

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: prepare the schema, release shared resources."""
    if settings.create_schema:
        create_schema(get_engine())

    yield

    # Shutdown
    get_notifier().shutdown(wait=True)
    get_engine().dispose()
    logger.info("Shutdown complete.")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Registers routers, error handlers, and security middleware.
    This is the composition root of the application.

    Returns:
        A fully configured FastAPI application instance.
    """
    configure_logging(level=settings.log_level, sql_echo=settings.db_echo)

    app = FastAPI(
        title=settings.project_name,
        version=settings.version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    # --- Rate Limiting ---
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    # --- Security Middleware ---
    app.add_middleware(SecurityHeadersMiddleware)

    # --- Error Handlers ---
    register_error_handlers(app)

    # --- Routers ---
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(vessel_router, prefix="/api/v1")

    return app


app = create_app()
