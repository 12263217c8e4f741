"""FastAPI application factory / entrypoint.

This service exposes HTTP endpoints for:
- creating, listing, retrieving and deleting plays
- exporting and importing plays in bulk
- health checks

The API is consumed by the play-drawing web frontend.

Operational notes:
- CORS is enabled for the configured frontend origins (`CORS_ORIGINS`).
- Store connectivity is checked at startup; the service refuses to start if the
  database is unreachable.
- On shutdown uvicorn drains in-flight requests for `SHUTDOWN_GRACE_SECONDS`
  before the lifespan disposes of the connection pool.
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .db import build_engine, build_session_factory, check_store
from .errors import register_exception_handlers
from .logging_config import configure_logging
from .provision import ensure_table
from .routes import router
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Check the play store on startup and release it on shutdown.

    Startup fails if the store is unreachable, then creates the plays table
    when `create_table_on_startup` is set. Shutdown runs after uvicorn has
    drained in-flight requests and disposes of the connection pool.

    Args:
        app: The application built by `create_app`.

    Yields:
        None: Control to the running server.
    """
    settings = app.state.settings
    engine = app.state.engine

    check_store(engine)
    logger.info("Successfully connected to the play store")
    if settings.create_table_on_startup:
        ensure_table(engine)

    yield

    engine.dispose()
    logger.info("Play store connection released")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the API application.

    Args:
        settings: Explicit configuration. Defaults to settings read from the
            environment.

    Returns:
        FastAPI: App with CORS, fault handlers and the `/api` router mounted.
    """
    settings = settings or get_settings()

    app = FastAPI(title="Playbook API", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.engine = build_engine(settings)
    app.state.session_factory = build_session_factory(app.state.engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    register_exception_handlers(app)
    app.include_router(router)
    return app


def run() -> None:
    """Serve the API with uvicorn using settings from the environment."""
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("Server starting on %s:%d", settings.host, settings.port)

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        timeout_graceful_shutdown=settings.shutdown_grace_seconds,
    )
    logger.info("Server exiting")


if __name__ == "__main__":
    run()
