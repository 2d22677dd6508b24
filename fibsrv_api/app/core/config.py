"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service starts with an SQLite memo store next to the package.  In a
production deployment you should override these via environment
variables (for example from the container definition).
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Fibonacci Memo Service")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    # Optional path of a log file in addition to the console handler.
    log_file: str = os.getenv("LOG_FILE", "")

    # Which memo store backs the service: ``sqlite`` (durable) or
    # ``memory`` (process-local, used for tests and simple deployments).
    store_backend: str = os.getenv("STORE_BACKEND", "sqlite")

    # Path to the SQLite database.  A relative path is resolved
    # relative to the package root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "fibsrv.db")
    # Seconds a connection waits on a locked database before failing.
    db_timeout: float = float(os.getenv("DB_TIMEOUT", "30"))

    # Store initialisation is retried this many times, this many
    # seconds apart.  Per-request operations are never retried.
    connect_attempts: int = int(os.getenv("CONNECT_ATTEMPTS", "10"))
    connect_interval: float = float(os.getenv("CONNECT_INTERVAL", "1.0"))

    # Deadline applied to every request's operation context.
    request_timeout: float = float(os.getenv("REQUEST_TIMEOUT", "30"))

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8080"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# must be set before importing this module.
settings = Settings()
