"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import pytest

from api.dependencies import reset_container
from modules.auth.tokens import TokenCodec
from shared.config import get_settings


# Test signing secret (only for testing)
TEST_SESSION_SECRET = "test-secret-key-for-testing-only"


class FakeClock:
    """Manually advanced clock for time-dependent tests."""

    def __init__(self, start: float = 1_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset cached settings and the service container around each test."""
    get_settings.cache_clear()
    reset_container()
    yield
    reset_container()
    get_settings.cache_clear()


@pytest.fixture
def codec() -> TokenCodec:
    """Token codec signing with the test secret."""
    return TokenCodec(TEST_SESSION_SECRET)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def artist_id() -> str:
    return "artist-1"


@pytest.fixture
def gallery_id() -> str:
    return "gallery-1"
