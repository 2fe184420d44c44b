"""
FastAPI Application Factory & Configuration.

This module initializes the FastAPI application instance. It is responsible for:
1.  **Middleware Setup**: CORS for browser clients.
2.  **Exception Handling**: Global handlers so all errors return structured JSON.
3.  **Routing**: Mounting the session, video and health routes.
4.  **State**: Creating the app-owned session store and video cache.

Design Pattern
--------------
We use an **Application Factory** pattern (`create_app`). Every call builds an
independent app with its own sessions and its own cache, which keeps tests
isolated and lets callers inject a specific :class:`VideoSource`.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from patternlab import __version__
from patternlab.api.routers import sessions, videos
from patternlab.api.session_store import SessionStore
from patternlab.core.settings import Settings, get_logger, load_settings
from patternlab.video import (
    CachingVideoSource,
    HttpVideoSource,
    VideoLibrary,
    VideoSource,
    VideoSourceError,
)

logger = get_logger(__name__)


def build_video_source(settings: Settings) -> VideoSource:
    """Return the remote catalogue when configured, else the in-memory demo library."""
    if settings.video_api_url:
        return HttpVideoSource.from_settings(settings)
    return VideoLibrary()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """ASGI lifespan: log startup and shutdown."""
    logger.info("PatternLab API starting (cache bound: %s)", app.state.videos.max_entries)
    yield
    logger.info("PatternLab API shutting down")


def create_app(
    video_source: VideoSource | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """
    Construct and configure the PatternLab FastAPI application.

    Parameters
    ----------
    video_source:
        Source placed behind the cache. Defaults to :func:`build_video_source`.
    settings:
        Configuration override; defaults to :func:`load_settings`.

    Returns
    -------
    FastAPI
        The configured ASGI application ready to be served by Uvicorn.
    """
    cfg = settings or load_settings()

    app = FastAPI(
        title="PatternLab API",
        description="Snapshot undo sessions and a cached video catalogue",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = cfg
    app.state.sessions = SessionStore()
    app.state.videos = CachingVideoSource(
        video_source if video_source is not None else build_video_source(cfg),
        max_entries=cfg.cache_max_entries,
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
        """Catch-all handler so unhandled exceptions still return JSON."""
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
        """Map Python ValueErrors to HTTP 400 Bad Request."""
        return JSONResponse(
            status_code=400,
            content={
                "error": "Bad Request",
                "detail": str(exc),
            },
        )

    @app.exception_handler(VideoSourceError)
    async def source_error_handler(request: Request, exc: VideoSourceError) -> JSONResponse:
        """Upstream catalogue failures become 502 Bad Gateway."""
        logger.warning("Video source failed on %s: %s", request.url.path, exc)
        return JSONResponse(
            status_code=502,
            content={
                "error": "Bad Gateway",
                "detail": str(exc),
            },
        )

    # -----------------------------------------------------------------------
    # Routes
    # -----------------------------------------------------------------------
    app.include_router(sessions.router)
    app.include_router(videos.router)

    @app.get("/health", tags=["System"])
    async def health_check() -> dict[str, str]:
        """Simple liveness check."""
        return {
            "status": "ok",
            "environment": cfg.environment,
            "version": __version__,
        }

    return app


__all__ = ["create_app", "build_video_source"]
