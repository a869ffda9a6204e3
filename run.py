"""Entry point for the Eventures server.

Starts the FastAPI application (JSON API under ``/api`` and the web
UI) with Uvicorn.  Host and port are read from ``API_HOST`` and
``API_PORT``; other settings such as ``DATABASE_URL`` and
``SECRET_KEY`` may be placed in a ``.env``-style environment.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from eventures.app.core.config import settings
from eventures.app.main import app


async def main() -> None:
    """Serve the application until interrupted."""
    config = Config(
        app=app,
        host=settings.api_host,
        port=settings.api_port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    logging.getLogger(__name__).info("Starting Eventures on %s:%s", settings.api_host, settings.api_port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
