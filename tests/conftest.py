"""Pytest fixtures and configuration."""

import pytest
import structlog

from mindspace.analysis import EmotionAnalyzer
from mindspace.config import get_settings
from mindspace.tracking import ContinuousEmotionTracker


@pytest.fixture(autouse=True, scope="session")
def quiet_logging() -> None:
    """Drop log output and keep loggers uncached so capture_logs works."""
    structlog.configure(
        processors=[structlog.processors.add_log_level],
        logger_factory=structlog.ReturnLoggerFactory(),
        cache_logger_on_first_use=False,
    )


@pytest.fixture(autouse=True)
def clear_settings_cache() -> None:
    """Keep cached Settings from leaking between tests."""
    get_settings.cache_clear()


@pytest.fixture
def analyzer() -> EmotionAnalyzer:
    """Create an unbounded analyzer instance."""
    return EmotionAnalyzer()


@pytest.fixture
def tracker() -> ContinuousEmotionTracker:
    """Create a tracker with default history limits."""
    return ContinuousEmotionTracker()
