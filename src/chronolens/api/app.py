"""
FastAPI Application Factory & Configuration.

This module builds the Chronolens HTTP application. It is responsible for:
1.  **Middleware Setup**: CORS for browser clients.
2.  **Exception Handling**: Global handlers so every error returns structured JSON.
3.  **Routing**: Mounting the events and insights routers.
4.  **Lifecycle**: Initialising the job table and event store on startup.

Design Pattern
--------------
An **Application Factory** (`create_app`) lets tests spin up isolated app
instances and override dependencies per instance.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from chronolens import __version__
from chronolens.api.dependencies import get_event_store
from chronolens.api.routers import events, insights
from chronolens.core.settings import get_logger, load_settings
from chronolens.ingestion.jobs import JobStore

logger = get_logger("chronolens.api")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    ASGI Lifespan context manager.

    - **Startup**: Initialise the job table and event store singletons.
    - **Shutdown**: Nothing to release for the in-memory backends.
    """
    logger.info("Chronolens API starting up")
    JobStore.get_instance()
    get_event_store()
    yield
    logger.info("Chronolens API shutting down")


def create_app() -> FastAPI:
    """
    Construct and configure the Chronolens FastAPI application.

    Returns
    -------
    FastAPI
        The configured ASGI application ready to be served by Uvicorn.
    """
    app = FastAPI(
        title="Chronolens API",
        description="Ingestion and temporal analytics over historical events",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # -----------------------------------------------------------------------
    # Middleware
    # -----------------------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -----------------------------------------------------------------------
    # Global Exception Handlers
    # -----------------------------------------------------------------------
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Return unhandled exceptions as a JSON 500 and log the traceback."""
        logger.exception("Unhandled error on %s", request.url.path)
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal Server Error",
                "detail": str(exc),
                "path": request.url.path,
            },
        )

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
        """Map Python ValueErrors (e.g. undecodable bodies) to HTTP 400."""
        return JSONResponse(
            status_code=400,
            content={
                "error": "Bad Request",
                "detail": str(exc),
            },
        )

    # -----------------------------------------------------------------------
    # Routes
    # -----------------------------------------------------------------------
    app.include_router(events.router)
    app.include_router(insights.router)

    @app.get("/health", tags=["System"])
    async def health_check() -> dict[str, str]:
        """Simple liveness check."""
        return {
            "status": "ok",
            "environment": load_settings().environment,
            "version": __version__,
        }

    return app


__all__ = ["create_app"]
