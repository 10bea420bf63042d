# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Assembly of the old-hemis REST application: routers, middleware and
the startup/shutdown of its connections.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded

from hemis import __version__
from hemis.api.middleware.auth import AuthMiddleware
from hemis.api.middleware.rate_limit import limiter, rate_limit_exceeded_handler
from hemis.api.middleware.request_logging import RequestLoggingMiddleware
from hemis.api.rest import router as rest_router
from hemis.api.rest.entities import entity_error_handler, entity_request_error_handler
from hemis.api.routes import health
from hemis.core.config import get_settings
from hemis.domains.entities import EntityServiceError
from hemis.infrastructure.cache import close_redis, init_redis
from hemis.infrastructure.database.connection import close_database, init_database
from hemis.infrastructure.http import close_http_client, init_http_client
from hemis.utils.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Open the database pool, Redis and the upstream HTTP client.

    A failing dependency is logged and skipped so that health checks can
    report it; everything is closed in reverse order on shutdown.
    """
    settings = get_settings()
    logger.info(
        "Starting hemis legacy API (environment=%s, debug=%s)",
        settings.environment,
        settings.debug,
    )

    # =========================================================================
    # Startup
    # =========================================================================

    try:
        await init_database(settings)
        logger.info("Database connection initialized")
    except Exception as e:
        logger.warning("Failed to initialize database connection: %s", str(e))

    try:
        await init_redis(settings)
        logger.info("Redis connection initialized")
    except Exception as e:
        logger.warning("Failed to initialize Redis: %s", str(e))

    try:
        init_http_client(settings)
        logger.info("Outbound HTTP client initialized")
    except Exception as e:
        logger.warning("Failed to initialize HTTP client: %s", str(e))

    yield

    # =========================================================================
    # Shutdown
    # =========================================================================

    try:
        await close_http_client()
        logger.info("Outbound HTTP client closed")
    except Exception as e:
        logger.warning("Error closing HTTP client: %s", str(e))

    try:
        await close_redis()
        logger.info("Redis connection closed")
    except Exception as e:
        logger.warning("Error closing Redis: %s", str(e))

    try:
        await close_database()
        logger.info("Database connection closed")
    except Exception as e:
        logger.warning("Error closing database connection: %s", str(e))

    logger.info("Shutting down hemis legacy API")


def create_app() -> FastAPI:
    """Build the application with logging configured from settings."""
    settings = get_settings()
    setup_logging(settings)

    app = FastAPI(
        title="HEMIS Legacy API",
        description="CUBA-compatible REST API of old-hemis",
        version=__version__,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
        # Legacy clients call exact paths
        redirect_slashes=False,
    )

    # =========================================================================
    # State
    # =========================================================================
    app.state.limiter = limiter

    # =========================================================================
    # Exception handlers
    # =========================================================================
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_exception_handler(EntityServiceError, entity_error_handler)
    app.add_exception_handler(RequestValidationError, entity_request_error_handler)

    # =========================================================================
    # Middleware (CORS outermost, auth innermost)
    # =========================================================================

    app.add_middleware(AuthMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.origins_list,
        allow_credentials=settings.cors.allow_credentials,
        allow_methods=settings.cors.allow_methods,
        allow_headers=settings.cors.allow_headers,
        expose_headers=["X-Total-Count", "X-Request-ID"],
    )

    # =========================================================================
    # Routes
    # =========================================================================
    app.include_router(health.router, tags=["Health"])
    app.include_router(rest_router)

    return app
