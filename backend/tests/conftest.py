"""Shared test configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_settings
from api.router import limiter
from config import Settings
from main import app


def _build_settings(**overrides) -> Settings:
    """Settings isolated from the developer's environment and .env file."""
    defaults = dict(gemini_api_key="test-key", _env_file=None)
    defaults.update(overrides)
    return Settings(**defaults)


@pytest.fixture(autouse=True)
def _disable_rate_limit():
    limiter.enabled = False
    yield
    limiter.enabled = True


@pytest.fixture
def make_settings():
    return _build_settings


@pytest.fixture
def settings():
    return _build_settings()


@pytest.fixture
def client(settings):
    app.dependency_overrides[get_settings] = lambda: settings
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()
