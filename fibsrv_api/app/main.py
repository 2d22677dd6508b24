"""
Main entrypoint for the Fibonacci memo service.

This module assembles the FastAPI application, sets up logging and
includes versioned routers.  The ``create_app`` function builds and
configures the app, which is then instantiated at module import time
as ``app``.  Importing the app here makes it easy to run with uvicorn
or another ASGI server, e.g.::

    uvicorn fibsrv_api.app.main:app

The memo store is opened in the startup hook rather than at import, so
importing this module never touches the database.
"""

import logging
from typing import Optional

from fastapi import FastAPI

from .api.v1.router import router as v1_router
from .core.config import Settings, settings as default_settings
from .core.logging_config import setup_logging
from .core.metrics import MemoStats
from .services.fib_service import FibService
from .stores import create_store


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use.  Defaults to the module-level settings
        read from the environment; tests pass their own.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings
    # Initialise logging before anything else so that the startup hook
    # can log the store it opens.
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version)
    app.state.settings = settings
    app.state.fib_service = None

    app.include_router(v1_router, prefix="/v1")

    @app.on_event("startup")
    def startup_event() -> None:
        # Opening the SQLite store retries a bounded number of times;
        # if it still fails the exception aborts startup.
        store = create_store(settings, stats=MemoStats())
        app.state.fib_service = FibService(store)
        logging.getLogger(__name__).info(
            "%s %s ready (store: %s)", settings.project_name, settings.api_version, store.backend
        )

    @app.on_event("shutdown")
    def shutdown_event() -> None:
        service = app.state.fib_service
        if service is not None:
            service.store.close()
            app.state.fib_service = None
        logging.getLogger(__name__).info("Server shutting down")

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
