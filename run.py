"""Entry point for the Date Planner API server.

Serves the FastAPI application with Uvicorn on the host and port from
the environment (``HOST``, default ``0.0.0.0``; ``PORT``, default
``5000``).  Set ``APP_ENV=production`` to serve the built front end
from ``STATIC_DIR``.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from date_planner_api.app.core.config import settings
from date_planner_api.app.main import create_app


async def main() -> None:
    """Build the application and serve it until interrupted."""
    app = create_app()
    config = Config(app=app, host=settings.host, port=settings.port, reload=False, log_level=settings.log_level.lower())
    server = Server(config)
    logging.getLogger(__name__).info("serving on port %s", settings.port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
