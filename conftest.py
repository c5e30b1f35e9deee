"""Pytest configuration for test logging."""
import pytest
from calc_engine.config import LOG_LEVEL
from calc_engine.observability.logging_config import configure_logging
from calc_engine.observability.telemetry import clear_trace

configure_logging(LOG_LEVEL)


@pytest.fixture(autouse=True)
def fresh_trace():
    """Every test starts with an empty trace log."""
    clear_trace()
    yield
    clear_trace()
