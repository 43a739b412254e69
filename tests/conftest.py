"""
Test Configuration Module
"""

import pytest

from httpstat.config import get_settings


class FakeClock:
    """Manually advanced monotonic clock (seconds)"""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> float:
        self.now += ms / 1000
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture(autouse=True)
def reset_settings():
    """Settings are cached; drop the cache so env overrides apply per test"""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
