"""Shared pytest fixtures."""

import pytest
import structlog


@pytest.fixture(autouse=True)
def _reset_structlog():
    """Undo per-test structlog configuration so loggers never hold a closed capture stream."""
    yield
    structlog.reset_defaults()
