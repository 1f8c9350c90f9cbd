import os
from pathlib import Path

import pytest
from typer.testing import CliRunner

from kvcache.core.caching_store import CachingStore
from kvcache.infrastructure.cache.memory_cache import MemoryCache
from kvcache.infrastructure.config import settings
from kvcache.infrastructure.stores.memory_store import InMemoryStore


@pytest.fixture(scope="session")
def runner():
    """Provides a Typer CliRunner instance."""
    return CliRunner()


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def cache():
    return MemoryCache()


@pytest.fixture
def caching_store(store: InMemoryStore, cache: MemoryCache):
    """Decorator over a fresh in-memory store and cache, entries never expire."""
    return CachingStore(store, cache)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch):
    """Keeps tests away from the user's config file, .env files and KVCACHE_ variables."""
    for name in list(os.environ):
        if name.startswith(settings.ENV_PREFIX):
            monkeypatch.delenv(name)
    monkeypatch.setattr(settings, "DEFAULT_CONFIG_FILE", tmp_path / "no-config.yaml")
    monkeypatch.setattr(settings, "find_dotenv_path", lambda: None)
    settings.reset_configuration()
    settings.clear_test_config()
    yield
    settings.reset_configuration()
    settings.clear_test_config()
