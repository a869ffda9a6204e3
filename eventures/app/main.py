"""
Main entrypoint for the Eventures backend.

This module assembles the FastAPI application, sets up logging and
includes the JSON API and web UI routers.  The ``create_app`` function
builds and configures the app, which is then instantiated at module
import time as ``app``, e.g.::

    uvicorn eventures.app.main:app --reload
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from .api.v1.router import router as v1_router
from .core.config import settings
from .core.db import init_db
from .core.logging_config import setup_logging
from .web.router import router as web_router


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Apply pending migrations before the first request is served."""
    init_db()
    yield


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Returns
    -------
    FastAPI
        A configured FastAPI instance ready to be served.
    """
    # Initialise logging before anything else so that startup can log.
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.include_router(v1_router, prefix="/api")
    app.include_router(web_router)
    return app


app = create_app()
