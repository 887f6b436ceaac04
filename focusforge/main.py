from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from focusforge.api.container import Container, build_container
from focusforge.api.exception_handlers import setup_exception_handlers
from focusforge.api.middleware import (
    AccessLogMiddleware,
    RateLimitMiddleware,
    RateLimiter,
    SecurityHeadersMiddleware,
)
from focusforge.api.routers import auth, health
from focusforge.core.db import connect_database, create_schema, disconnect_database
from focusforge.shared.config import ConfigError, Settings, get_settings
from focusforge.shared.logging_config import configure_logging


logger = logging.getLogger(__name__)

API_V1_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI):
    container: Container = app.state.container
    settings = container.settings
    logger.info("Starting FocusForge API (%s)", settings.environment)
    try:
        connect_database(container.engine)
        if settings.db_create_schema:
            create_schema(container.engine)
    except SQLAlchemyError:
        logger.critical("Database connection failed", exc_info=True)
        raise SystemExit(1) from None
    container.revocation_store.start()
    yield

    logger.info("Shutting down FocusForge API...")
    container.revocation_store.stop()
    disconnect_database(container.engine)


def create_app(settings: Settings | None = None, *, container: Container | None = None) -> FastAPI:
    if container is None:
        container = build_container(settings or get_settings())
    settings = container.settings

    app = FastAPI(title="FocusForge API", lifespan=lifespan)
    app.state.container = container

    # Last added runs outermost; CORS must wrap the rate limiter.
    app.add_middleware(
        RateLimitMiddleware,
        limiter=RateLimiter(
            max_requests=settings.rate_limit_max_requests,
            window_seconds=settings.rate_limit_window_ms / 1000,
        ),
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_exception_handlers(app, expose_errors=settings.is_development)

    app.include_router(health.router)
    app.include_router(auth.router, prefix=API_V1_PREFIX)
    return app


def run() -> None:
    try:
        settings = get_settings()
    except ConfigError as exc:
        configure_logging()
        logger.error("Invalid environment variables:")
        for problem in exc.problems:
            logger.error("  %s", problem)
        sys.exit(1)

    configure_logging(settings.log_level)
    app = create_app(settings)
    logger.info("FocusForge API listening on port %s", settings.port)
    uvicorn.run(app, host="0.0.0.0", port=settings.port, log_config=None)


if __name__ == "__main__":
    run()
