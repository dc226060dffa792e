"""
FastAPI application for Employee Time Report preview.

PURPOSE: Build the preview app around a time entry source and serve it.
AI CONTEXT: The source lives on app.state so routes and tests share one seam.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import uvicorn
from fastapi import FastAPI

from ..__version__ import __version__
from .routes import router

if TYPE_CHECKING:
    from ..sources import TimeEntrySource

__all__ = ["create_app", "run_preview"]

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Log preview start and stop, naming the configured source."""
    source = app.state.source
    where = source.describe() if source is not None else "default endpoint"
    logger.info(f"Employee Time Report preview v{__version__} reading from {where}")
    yield
    logger.info("Employee Time Report preview stopped")


def create_app(source: TimeEntrySource | None = None) -> FastAPI:
    """
    Create the preview application.

    Every request fetches fresh entries from the source stored on
    app.state, so tests can pass an in-memory source instead of
    patching the network.

    Business context: The preview lets someone check the current report
    in a browser without writing files, using the same rendering code
    as the generated outputs.

    Args:
        source: TimeEntrySource for all requests. Default: the HTTP
            endpoint from Config, created per request.

    Returns:
        FastAPI app with the report, chart and summary routes.

    Example:
        >>> from fastapi.testclient import TestClient
        >>> TestClient(create_app(source=my_source)).get("/api/summary").json()
        {'employees': [...], 'total_hours': 7.0}
    """
    app = FastAPI(
        title="Employee Time Report",
        description="Preview of per-employee hours report and chart",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.source = source
    app.include_router(router)
    return app


def run_preview(
    host: str = "127.0.0.1",
    port: int = 8000,
    source: TimeEntrySource | None = None,
    log_level: str = "info",
) -> None:
    """
    Serve the preview with uvicorn until interrupted.

    Args:
        host: Bind address. '127.0.0.1' keeps the report, which contains
            employee names, off the network.
        port: TCP port. Default 8000.
        source: TimeEntrySource handed to create_app().
        log_level: Uvicorn log level. Default 'info'.

    Raises:
        OSError: If the address cannot be bound.
    """
    uvicorn.run(
        create_app(source=source),
        host=host,
        port=port,
        log_level=log_level,
    )
