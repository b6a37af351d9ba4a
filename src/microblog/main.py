# src/microblog/main.py
"""Main entry point for the microblog application."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from microblog import __version__
from microblog.api import auth_router, comments_router, posts_router, views_router
from microblog.core.errors import MicroblogError, error_message, error_status
from microblog.core.settings import Settings
from microblog.db.session import build_engine, build_session_factory, create_tables

logger = logging.getLogger(__name__)


def _error_response(exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=error_status(exc), content={"error": error_message(exc)})


async def handle_microblog_error(request: Request, exc: MicroblogError) -> JSONResponse:
    """Translate domain errors into ``{"error": ...}`` responses."""
    return _error_response(exc)


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render request validation failures with the same body shape as other errors."""
    logger.debug("Rejected request to %s: %s", request.url.path, exc.errors())
    return _error_response(exc)


async def handle_store_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Translate unexpected store failures into 500 responses."""
    logger.exception("Store error on %s %s", request.method, request.url.path)
    return _error_response(exc)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application around an explicit settings instance.

    Args:
        settings: Configuration to run with; read from the environment when omitted.

    Returns:
        A configured FastAPI application with its engine and session factory on ``app.state``.
    """
    settings = settings or Settings()  # type: ignore[call-arg]
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    engine = build_engine(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if settings.auto_create_tables:
            create_tables(engine)
        yield
        engine.dispose()

    app = FastAPI(
        title=settings.app_name,
        description="Minimal blogging backend with posts, comments and sessions",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    # Add GZip middleware for compression
    app.add_middleware(GZipMiddleware)

    app.add_exception_handler(MicroblogError, handle_microblog_error)  # type: ignore[arg-type]
    app.add_exception_handler(SQLAlchemyError, handle_store_error)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, handle_validation_error)  # type: ignore[arg-type]

    app.include_router(views_router)
    app.include_router(auth_router)
    app.include_router(posts_router)
    app.include_router(comments_router)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint to verify the service is running."""
        return {"status": "ok"}

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("microblog.main:create_app", factory=True, host="0.0.0.0", port=8000)
