import sqlite3
from pathlib import Path

import pytest

from kvcache.domain.exceptions import InvalidKeyError, NoSuchKeyError, StoreError
from kvcache.infrastructure.stores.disk_store import DiskStore


@pytest.fixture
def disk_store(tmp_path: Path):
    store = DiskStore(tmp_path / "store")
    yield store
    store.close()


def test_values_persist_across_instances(tmp_path: Path):
    with DiskStore(tmp_path / "store") as store:
        store.set("a", {"nested": [1, 2]})

    with DiskStore(tmp_path / "store") as reopened:
        assert reopened.get("a") == {"nested": [1, 2]}


def test_get_and_get_or_fail(disk_store: DiskStore):
    disk_store.set("a", None)

    assert disk_store.get("a", "default") is None
    assert disk_store.get("missing", "default") == "default"
    assert disk_store.get_or_fail("a") is None
    with pytest.raises(NoSuchKeyError):
        disk_store.get_or_fail("missing")


def test_batch_reads(disk_store: DiskStore):
    disk_store.set("a", 1)
    disk_store.set(2, "two")

    assert disk_store.get_multiple(["a", 2, "c"], 0) == {"a": 1, 2: "two", "c": 0}
    assert disk_store.get_multiple_or_fail(["a", 2]) == {"a": 1, 2: "two"}
    with pytest.raises(NoSuchKeyError) as exc_info:
        disk_store.get_multiple_or_fail(["a", "c", "d"])
    assert exc_info.value.keys == ("c", "d")


def test_remove_exists_keys_and_clear(disk_store: DiskStore):
    disk_store.set("a", 1)
    disk_store.set("b", 2)

    assert disk_store.exists("a")
    assert sorted(disk_store.keys()) == ["a", "b"]
    assert disk_store.remove("a") is True
    assert disk_store.remove("a") is False
    assert not disk_store.exists("a")

    disk_store.clear()

    assert disk_store.keys() == []


def test_rejects_invalid_keys(disk_store: DiskStore):
    with pytest.raises(InvalidKeyError):
        disk_store.set(1.5, "value")


def test_backend_write_failure_is_wrapped(disk_store: DiskStore, mocker):
    mocker.patch.object(disk_store._cache, "set", side_effect=sqlite3.OperationalError("database is locked"))

    with pytest.raises(StoreError, match="database is locked") as exc_info:
        disk_store.set("a", 1)

    assert isinstance(exc_info.value.__cause__, sqlite3.OperationalError)


def test_backend_read_failure_is_wrapped(disk_store: DiskStore, mocker):
    mocker.patch.object(disk_store._cache, "get", side_effect=OSError("I/O error"))

    with pytest.raises(StoreError):
        disk_store.get("a")
