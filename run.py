"""Entry point for the Fibonacci memo service.

Starts the FastAPI application under uvicorn.  It is intended to be
executed from the project root, for example inside Docker, where you
only specify a single Python file to run.

Configuration (store backend, database path, timeouts, host and port)
is read from environment variables; see ``fibsrv_api/app/core/config.py``.
uvicorn logs through the service's root handlers (see
``core/logging_config.py``) and installs the SIGINT/SIGTERM handlers;
on shutdown the application's shutdown hook closes the memo store.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from fibsrv_api.app.core.config import settings
from fibsrv_api.app.main import app


async def main() -> None:
    """Serve the API until a termination signal arrives."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
        # Keep the handlers installed by setup_logging.
        log_config=None,
        timeout_graceful_shutdown=10,
    )
    server = Server(config)
    logging.getLogger(__name__).info("Listening for connections on port %s", settings.port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
