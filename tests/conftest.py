"""Shared fixtures for the greeting service test suite."""

import httpx
import pytest

from src.config.settings import get_settings
from src.main import create_app
from src.serverless import LazyASGIApp


@pytest.fixture
def override_settings(monkeypatch):
    """Factory fixture: set env vars and clear settings cache.

    Usage:
        override_settings(API_PREFIX="/api/v2", LOG_LEVEL="DEBUG")
    """
    def _override(**kwargs):
        for key, value in kwargs.items():
            monkeypatch.setenv(key.upper(), str(value))
        # Clear lru_cache so Settings re-reads env
        get_settings.cache_clear()

    yield _override

    # Always clear cache on teardown so other tests get fresh settings
    get_settings.cache_clear()


def make_client(app) -> httpx.AsyncClient:
    """httpx AsyncClient speaking ASGI directly to `app`."""
    transport = httpx.ASGITransport(app=app)
    return httpx.AsyncClient(transport=transport, base_url="http://test")


@pytest.fixture
async def app_client(override_settings):
    """Client wired to a fresh lazily built app, as the serverless host sees it."""
    override_settings()
    async with make_client(LazyASGIApp(create_app)) as client:
        yield client


@pytest.fixture
def asgi_client():
    """Factory fixture: build an AsyncClient for an arbitrary ASGI app."""
    return make_client
