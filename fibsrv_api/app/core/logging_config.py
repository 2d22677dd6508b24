"""
Logging configuration for the Fibonacci memo service.

``setup_logging`` applies ``LOG_LEVEL`` to the root logger on every call
and attaches the service's console (and optional file) handler only
when nothing else has configured the root logger yet.  uvicorn's own
loggers are routed through the root handlers so server and access lines
share the service's format.
"""

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def resolve_level(level: str) -> int:
    """Map a level name such as ``"debug"`` to its numeric value.

    Unknown names fall back to ``INFO``.
    """
    numeric_level = logging.getLevelName(str(level).upper())
    if isinstance(numeric_level, int):
        return numeric_level
    return logging.INFO


def _route_uvicorn_loggers(numeric_level: int) -> None:
    for name in UVICORN_LOGGERS:
        uv_logger = logging.getLogger(name)
        uv_logger.handlers.clear()
        uv_logger.propagate = True
        uv_logger.setLevel(numeric_level)


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> int:
    """Configure the root logger and uvicorn's loggers.

    Parameters
    ----------
    level : str
        Logging level name, case insensitive.
    logfile : Optional[str]
        Path of a file to log to in addition to the console.  Only
        used when the root logger has no handlers yet.

    Returns the numeric level that was applied.
    """
    root = logging.getLogger()
    numeric_level = resolve_level(level)
    root.setLevel(numeric_level)
    _route_uvicorn_loggers(numeric_level)

    if root.handlers:
        # Someone else (pytest, an embedding app) owns the handlers.
        root.debug("Root logger already has handlers; applied level %s only",
                   logging.getLevelName(numeric_level))
        return numeric_level

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if logfile:
        file_handler = logging.FileHandler(Path(logfile).resolve(), encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
    return numeric_level
