"""Tests for logging setup.

pytest attaches its own capture handlers to the root logger, so each
test swaps in an empty handler list before calling ``setup_logging``.
"""

import logging

import pytest

from airline_api.app.core.logging_config import PACKAGE_LOGGER, setup_logging


@pytest.fixture
def root(monkeypatch):
    root = logging.getLogger()
    package = logging.getLogger(PACKAGE_LOGGER)
    root_level, package_level = root.level, package.level
    yield root
    root.setLevel(root_level)
    package.setLevel(package_level)


def clear_handlers(root, monkeypatch):
    handlers = []
    monkeypatch.setattr(root, "handlers", handlers)
    return handlers


def test_attaches_console_and_file_handlers(root, monkeypatch, tmp_path):
    handlers = clear_handlers(root, monkeypatch)
    logfile = tmp_path / "logs" / "airline.log"
    try:
        setup_logging("debug", str(logfile))
        assert len(handlers) == 2
        assert root.level == logging.DEBUG
        logging.getLogger(f"{PACKAGE_LOGGER}.tests").debug("written to file")
    finally:
        for handler in list(handlers):
            handler.close()
    assert "written to file" in logfile.read_text(encoding="utf-8")


def test_second_call_keeps_handlers(root, monkeypatch):
    handlers = clear_handlers(root, monkeypatch)
    setup_logging("INFO")
    setup_logging("WARNING")
    assert len(handlers) == 1
    assert logging.getLogger(PACKAGE_LOGGER).level == logging.WARNING


@pytest.mark.parametrize("name", ["verbose", "basicConfig"])
def test_unknown_level_falls_back_to_info(root, name):
    setup_logging(name)
    assert logging.getLogger(PACKAGE_LOGGER).level == logging.INFO
