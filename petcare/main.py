"""
Application entry point.

Creates the FastAPI application and wires together:
- Routers (one per resource)
- Error handlers (centralized domain-to-HTTP mapping)
- Security middleware (headers, rate limiting)
- Logging configuration

No business logic belongs here.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from petcare.core.config import settings
from petcare.interfaces.health import router as health_router
from petcare.interfaces.pets.animals_router import router as animals_router
from petcare.interfaces.pets.dependencies import get_database
from petcare.interfaces.pets.owners_router import router as owners_router
from petcare.shared.errors.handlers import register_error_handlers
from petcare.shared.logging import configure_logging
from petcare.shared.security.headers import SecurityHeadersMiddleware
from petcare.shared.security.rate_limiting import limiter, rate_limit_exceeded_handler

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: make sure the schema exists before serving."""
    if settings.auto_create_schema:
        database = app.dependency_overrides.get(get_database, get_database)()
        database.create_schema()
    logger.info("%s %s started.", settings.project_name, settings.version)
    yield


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Registers routers, error handlers, and security middleware.
    This is the composition root of the application.

    Returns:
        A fully configured FastAPI application instance.
    """
    configure_logging(level=settings.log_level)

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
    app.add_middleware(SlowAPIMiddleware)

    # --- Security Middleware ---
    app.add_middleware(SecurityHeadersMiddleware)

    # --- Error Handlers ---
    register_error_handlers(app)

    # --- Routers ---
    app.include_router(health_router, prefix="/api")
    app.include_router(animals_router, prefix="/api")
    app.include_router(owners_router, prefix="/api")

    return app


app = create_app()
