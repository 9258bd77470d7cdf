"""Tests for the application factory and lifespan tasks."""

import asyncio
import os
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from api.app import create_app, reap_rate_limit_buckets
from shared.config import get_settings
from shared.exceptions import ConfigurationError
from shared.rate_limiter import RateLimiter
from tests.conftest import FakeClock


class TestCreateApp:

    def test_production_requires_session_secret(self):
        """Startup fails in production when SESSION_SECRET is unset."""
        with patch.dict(os.environ, {"ENVIRONMENT": "production", "SESSION_SECRET": ""}):
            get_settings.cache_clear()
            with pytest.raises(ConfigurationError):
                create_app()

    def test_production_with_secret(self):
        with patch.dict(os.environ, {"ENVIRONMENT": "production", "SESSION_SECRET": "s3cret"}):
            get_settings.cache_clear()
            app = create_app()
            assert app.docs_url is None

    def test_lifespan_starts_and_stops(self):
        """Entering the client runs startup and shutdown cleanly."""
        with TestClient(create_app()) as client:
            assert client.get("/api/health").status_code == 200

    def test_unknown_route(self):
        client = TestClient(create_app())
        assert client.get("/api/nope").status_code == 404


class TestReaper:

    @pytest.mark.asyncio
    async def test_evicts_stale_buckets(self):
        """The reaper drops buckets whose window ended more than the grace ago."""
        clock = FakeClock()
        limiter = RateLimiter(clock=clock)
        limiter.consume("admin-login:1.2.3.4:a@b.c", 8, 600)
        clock.advance(601)
        limiter.consume("admin-login:5.6.7.8:a@b.c", 8, 600)
        assert len(limiter) == 2

        task = asyncio.create_task(reap_rate_limit_buckets(limiter, 0.01, 0))
        await asyncio.sleep(0.05)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert len(limiter) == 1

    @pytest.mark.asyncio
    async def test_survives_a_failed_sweep(self):
        """One failing sweep does not stop later sweeps."""

        class FlakyLimiter(RateLimiter):
            def __init__(self):
                super().__init__()
                self.sweeps = 0

            def reap_expired(self, grace_seconds: float = 0.0) -> int:
                self.sweeps += 1
                if self.sweeps == 1:
                    raise RuntimeError("boom")
                return super().reap_expired(grace_seconds)

        limiter = FlakyLimiter()
        task = asyncio.create_task(reap_rate_limit_buckets(limiter, 0.01, 0))
        await asyncio.sleep(0.1)
        assert not task.done()
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert limiter.sweeps >= 2
