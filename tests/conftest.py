import os
import urllib.request

import pytest
from fastapi.testclient import TestClient

from portal.config import Settings, get_settings
from portal.main import app

from .factories import FakeUpstream


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Drop cached settings so each test sees only its own environment."""
    for name in list(os.environ):
        if name.startswith("RICKMORTY_"):
            monkeypatch.delenv(name)
    # A developer's local .env must not leak into the suite.
    monkeypatch.setitem(Settings.model_config, "env_file", None)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def upstream(monkeypatch):
    fake = FakeUpstream()
    monkeypatch.setattr(urllib.request, "urlopen", fake)
    return fake


@pytest.fixture
def client(upstream):
    return TestClient(app)
