import logging

import pytest
import structlog


@pytest.fixture(autouse=True)
def _restore_logging():
    """The CLI reconfigures process-wide logging; put it back after each test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    structlog.reset_defaults()
