"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from streamboard import __version__
from streamboard.config import Config
from streamboard.context import AppContext
from streamboard.datasources import StreamDataSource
from streamboard.errors import SchemaError, StreamboardError
from streamboard.api import router

logger = logging.getLogger(__name__)


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(p) for p in error.get("loc", ()) if p != "body")
        parts.append(f"{location}: {error.get('msg')}" if location else error.get("msg", ""))
    return "; ".join(parts) or "Invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    """Render every failure as ``{"error": message}``."""

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": _validation_message(exc)})

    @app.exception_handler(SchemaError)
    async def schema_error(request: Request, exc: SchemaError):
        return JSONResponse(status_code=400, content={"error": str(exc)})

    @app.exception_handler(StreamboardError)
    async def streams_error(request: Request, exc: StreamboardError):
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
        return JSONResponse(status_code=500, content={"error": str(exc)})

    @app.exception_handler(httpx.HTTPError)
    async def rpc_transport_error(request: Request, exc: httpx.HTTPError):
        logger.error(f"{request.method} {request.url.path} RPC transport error: {exc}")
        return JSONResponse(status_code=500, content={"error": str(exc)})


def create_app(
    config: Config | None = None,
    datasource: Optional[StreamDataSource] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: Application configuration. If None, loads from environment.
        datasource: Data source override, built from config if None

    Returns:
        Configured FastAPI application
    """
    if config is None:
        config = Config.from_env()
    config.validate(require_signer=True)

    context = AppContext.create(config, datasource)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler for startup/shutdown."""
        # Startup
        logger.info("Starting player score streams API")
        logger.info(f"Streams backend: {config.streams_backend} ({config.rpc_url})")
        if config.publisher_wallet:
            logger.info(f"Reading records of publisher: {config.publisher_wallet}")

        await context.bootstrap()
        app.state.context = context

        yield

        # Shutdown
        logger.info("Shutting down...")
        await context.close()

    app = FastAPI(
        title="Player Score Streams API",
        description="Publish player scores to Somnia data streams and rank them",
        version=__version__,
        lifespan=lifespan,
    )

    register_exception_handlers(app)

    # Include API routes
    app.include_router(router)

    # Health check endpoint
    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    return app
