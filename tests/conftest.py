"""
Pytest configuration and shared fixtures for all tests.

This module provides shared fixtures and configuration for the test suite,
including:
- Root logger cleanup between tests
- Plain (uncolored) console output
- Helpers for writing schema and document files
"""

import json
import logging
from logging.handlers import RotatingFileHandler

import pytest


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Remove the handlers configure_logging adds and restore the root level.

    The validate command attaches a stderr handler to the root logger. Left in
    place, that handler would point at a capture stream pytest has already
    closed. pytest's own handlers are StreamHandler subclasses and are left
    alone.
    """
    root_logger = logging.getLogger()
    level = root_logger.level

    yield

    for handler in list(root_logger.handlers):
        if type(handler) in (logging.StreamHandler, RotatingFileHandler):
            root_logger.removeHandler(handler)
            handler.close()
    root_logger.setLevel(level)


@pytest.fixture(autouse=True)
def plain_console(monkeypatch):
    """Keep rich from adding color codes to captured output."""
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    monkeypatch.delenv("DESIGN_TOKENS_DEBUG", raising=False)
    monkeypatch.setenv("NO_COLOR", "1")


@pytest.fixture
def write_json():
    """Return a helper that writes data as JSON to a path, creating parent directories."""

    def _write(path, data):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        return path

    return _write
