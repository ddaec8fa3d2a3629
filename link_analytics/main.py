"""
FastAPI Application Entry Point

This module initializes the FastAPI application and configures:
- API routes (analytics API, then the catch-all redirect route)
- Middleware (logging, CORS)
- Exception handlers for the error taxonomy
- Startup/shutdown of the database pool and GeoIP reader
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from link_analytics.api import analytics, endpoints
from link_analytics.api.errors import register_exception_handlers
from link_analytics.core.lifecycle import initialize_resources, shutdown_resources
from link_analytics.core.rate_limit import limiter
from link_analytics.core.setting import EnvSettingsOptions, settings
from link_analytics.middleware.logging import add_logging_middleware


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app() -> FastAPI:
    """
    Build the application.

    Resources (database, geo resolver, click recorder) are attached on
    startup; tests may install their own before sending requests.
    """
    show_docs = settings.ENV_SETTING is not EnvSettingsOptions.production
    app = FastAPI(
        title="Link Analytics Service",
        description="Short link redirects with click tracking and analytics",
        version="1.0.0",
        docs_url="/docs" if show_docs else None,
        redoc_url="/redoc" if show_docs else None,
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    register_exception_handlers(app)

    add_logging_middleware(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Health endpoints defined before router to match before catch-all route
    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint for monitoring."""
        return {"status": "healthy"}

    app.include_router(analytics.router, tags=["Analytics"])
    # Catch-all redirect route must be registered last
    app.include_router(endpoints.router, tags=["Redirect"])

    @app.on_event("startup")
    async def startup_event():
        """Initialize services on startup."""
        await initialize_resources(app)

    @app.on_event("shutdown")
    async def shutdown_event():
        """Cleanup on shutdown."""
        await shutdown_resources(app)

    return app


configure_logging()
app = create_app()
