import pytest
from typer.testing import CliRunner
from pathlib import Path

from kvcache.core.caching_store import CachingStore
from kvcache.main import app, parse_value
from kvcache.infrastructure.config import settings
from kvcache.infrastructure.stores.disk_store import DiskStore

# These fixtures are defined in tests/conftest.py:
# runner: CliRunner
# isolated_config: keeps the user's configuration out of the tests


@pytest.fixture
def dirs(tmp_path: Path, mocker):
    """Store and cache directories for one CLI session. Logging setup is stubbed out."""
    mocker.patch("kvcache.main.setup_logging")
    return {"store": tmp_path / "store", "cache": tmp_path / "cache"}


@pytest.fixture
def invoke(runner: CliRunner, dirs):
    def _invoke(*args):
        return runner.invoke(app, ["--store-dir", str(dirs["store"]), "--cache-dir", str(dirs["cache"]), *args])
    return _invoke


def test_set_get_flow(invoke):
    result = invoke("set", "answer", "42")
    assert result.exit_code == 0, f"CLI command failed: {result.stdout}"
    assert "Stored key 'answer'" in result.stdout

    result = invoke("get", "answer")
    assert result.exit_code == 0
    assert result.stdout.strip() == "42"


def test_get_missing_key_flow(invoke):
    result = invoke("get", "missing", "--default", '"none here"')
    assert result.exit_code == 0
    assert "none here" in result.stdout

    result = invoke("get", "missing", "--fail")
    assert result.exit_code == 1
    assert "does not exist" in result.stdout


def test_get_many_flow(invoke):
    invoke("set", "a", '{"x": 1}')

    result = invoke("get-many", "a", "b", "--default", "0")
    assert result.exit_code == 0
    assert "'x': 1" in result.stdout

    result = invoke("get-many", "a", "b", "--fail")
    assert result.exit_code == 1


def test_values_are_served_from_cache_across_invocations(invoke, dirs):
    invoke("set", "a", "1")

    # Change the store behind the cache's back
    with DiskStore(dirs["store"]) as store:
        store.set("a", 2)

    result = invoke("get", "a")
    assert result.stdout.strip() == "1"


def test_remove_exists_keys_clear_flow(invoke):
    invoke("set", "a", "1")
    invoke("set", "b", "2")

    result = invoke("keys")
    assert result.exit_code == 0
    assert result.stdout.split() == ["'a'", "'b'"]

    assert invoke("exists", "a").exit_code == 0
    assert invoke("remove", "a").exit_code == 0
    assert invoke("exists", "a").exit_code == 1

    result = invoke("clear")
    assert result.exit_code == 0
    assert invoke("exists", "b").exit_code == 1


def test_memory_backend_from_configuration(invoke):
    settings.set_config_for_testing({"cache.backend": "memory"})

    invoke("set", "a", "1")
    result = invoke("get", "a")

    assert result.exit_code == 0
    assert result.stdout.strip() == "1"


def test_invalid_configuration_exits_with_error(invoke):
    settings.set_config_for_testing({"cache.backend": "redis"})

    result = invoke("get", "a")

    assert result.exit_code == 1
    assert "Initialization failed" in result.stdout


@pytest.mark.parametrize("raw, expected", [
    ("42", 42),
    ('{"a": [1, 2]}', {"a": [1, 2]}),
    ("true", True),
    ("plain text", "plain text"),
    (None, None),
])
def test_parse_value(raw, expected):
    assert parse_value(raw) == expected


def test_command_line_options_outrank_environment(runner: CliRunner, dirs, tmp_path: Path, monkeypatch, mocker):
    env_store = tmp_path / "env-store"
    monkeypatch.setenv("KVCACHE_STORE_DIRECTORY", str(env_store))
    monkeypatch.setenv("KVCACHE_CACHE_TTL_SECONDS", "999")
    caching_store_class = mocker.patch("kvcache.main.CachingStore", wraps=CachingStore)

    result = runner.invoke(app, [
        "--store-dir", str(dirs["store"]),
        "--cache-dir", str(dirs["cache"]),
        "--ttl", "5",
        "set", "a", "1",
    ])

    assert result.exit_code == 0, f"CLI command failed: {result.stdout}"
    assert caching_store_class.call_args.kwargs["ttl"] == 5
    with DiskStore(dirs["store"]) as store:
        assert store.get("a") == 1
    assert not env_store.exists()
