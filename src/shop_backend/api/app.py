# src/shop_backend/api/app.py

"""FastAPI application for the shop backend."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .. import __version__
from ..core.state import AppState
from ..workerpool import PoolState
from .models import HealthResponse, PoolStatusResponse

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Application lifespan context manager."""
    state: AppState = app.state.app_state
    logger.info("HTTP API starting (app=%s)", state.settings.app_name)

    yield

    # The worker pool is owned by the process, not by the HTTP app:
    # it is stopped by the CLI after the listener is closed.
    logger.info("HTTP API stopped accepting requests.")


def get_app_state(request: Request) -> AppState:
    """Get application state from app state."""
    return request.app.state.app_state


def create_app(state: AppState) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        state: Wired application state (settings + worker pool)

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="Shop Backend API",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.app_state = state

    @app.get("/health", response_model=HealthResponse)
    async def health_check(request: Request):
        """Health check endpoint.

        Reports 503 once the background worker pool is shutting down.
        """
        app_state = get_app_state(request)
        stats = app_state.worker_pool.stats()

        healthy = stats.state == PoolState.OPEN
        body = HealthResponse(
            status="ok" if healthy else "unavailable",
            app_name=app_state.settings.app_name,
            version=__version__,
            pool=PoolStatusResponse(
                name=stats.name,
                state=stats.state.value,
                size=stats.size,
                capacity=stats.capacity,
                queued=stats.queued,
                active=stats.active,
                completed=stats.completed,
                failed=stats.failed,
                discarded=stats.discarded,
            ),
        )
        if not healthy:
            return JSONResponse(status_code=503, content=body.model_dump())
        return body

    return app
