"""Tests for root and uvicorn logger configuration."""

import logging

import pytest

from fibsrv_api.app.core.logging_config import UVICORN_LOGGERS, resolve_level, setup_logging


@pytest.fixture
def restore_loggers():
    """Put the root and uvicorn loggers back the way the test found them."""
    names = ("",) + UVICORN_LOGGERS
    saved = {}
    for name in names:
        lg = logging.getLogger(name)
        saved[name] = (lg.level, lg.handlers[:], lg.propagate)
    yield
    for name, (level, handlers, propagate) in saved.items():
        lg = logging.getLogger(name)
        lg.setLevel(level)
        lg.handlers[:] = handlers
        lg.propagate = propagate


@pytest.mark.parametrize("name, expected", [
    ("DEBUG", logging.DEBUG),
    ("warning", logging.WARNING),
    ("Error", logging.ERROR),
    ("verbose", logging.INFO),
])
def test_resolve_level(name, expected):
    assert resolve_level(name) == expected


def test_level_applied_when_handlers_already_exist(restore_loggers):
    root = logging.getLogger()
    marker = logging.NullHandler()
    root.addHandler(marker)
    before = root.handlers[:]

    assert setup_logging("WARNING") == logging.WARNING
    assert root.level == logging.WARNING
    assert root.handlers == before

    setup_logging("debug")
    assert root.level == logging.DEBUG


def test_handlers_added_on_bare_root(tmp_path, restore_loggers):
    root = logging.getLogger()
    root.handlers[:] = []
    logfile = tmp_path / "fibsrv.log"

    setup_logging("INFO", str(logfile))
    try:
        assert root.level == logging.INFO
        assert len(root.handlers) == 2
        file_handlers = [h for h in root.handlers if isinstance(h, logging.FileHandler)]
        assert len(file_handlers) == 1
        logging.getLogger("fibsrv.test").info("memo store ready")
        file_handlers[0].flush()
        assert "[INFO] fibsrv.test: memo store ready" in logfile.read_text(encoding="utf-8")
    finally:
        for handler in root.handlers:
            handler.close()


def test_uvicorn_loggers_share_root_handlers(restore_loggers):
    access = logging.getLogger("uvicorn.access")
    access.addHandler(logging.NullHandler())
    access.propagate = False

    setup_logging("ERROR")
    for name in UVICORN_LOGGERS:
        lg = logging.getLogger(name)
        assert lg.handlers == []
        assert lg.propagate
        assert lg.level == logging.ERROR
