from __future__ import annotations

import pytest

from tandem_analyzer.core.exceptions import (
    PersistenceError,
    StorageQuotaExceededError,
    TandemAnalyzerError,
)
from tandem_analyzer.services.storage import (
    InMemoryStorage,
    LocalFileSystemStorage,
    create_persistent_storage,
)


# -------------------------------------------------------------------------
# In-memory backend
# -------------------------------------------------------------------------

def test_in_memory_get_set_remove():
    storage = InMemoryStorage()
    assert storage.get_item("k") is None

    storage.set_item("k", "v")
    assert storage.get_item("k") == "v"
    assert storage.keys() == ["k"]

    storage.remove_item("k")
    storage.remove_item("k")
    assert storage.get_item("k") is None


def test_in_memory_quota_counts_other_keys_only():
    storage = InMemoryStorage(quota_bytes=10)
    storage.set_item("a", "12345")

    with pytest.raises(StorageQuotaExceededError):
        storage.set_item("b", "123456")
    assert storage.get_item("b") is None

    # Overwriting a key does not count its old value
    storage.set_item("a", "1234567890")
    assert storage.get_item("a") == "1234567890"


def test_quota_error_is_persistence_error():
    assert issubclass(StorageQuotaExceededError, PersistenceError)
    assert issubclass(PersistenceError, TandemAnalyzerError)


# -------------------------------------------------------------------------
# Local file system backend
# -------------------------------------------------------------------------

def test_local_storage_writes_one_file_per_key(tmp_path):
    storage = LocalFileSystemStorage(tmp_path / "data")
    storage.set_item("tandem_analyzer_settings", '{"apiToken": "x"}')

    path = tmp_path / "data" / "tandem_analyzer_settings.json"
    assert path.is_file()
    assert path.read_text(encoding="utf-8") == '{"apiToken": "x"}'


def test_local_storage_survives_new_instance(tmp_path):
    LocalFileSystemStorage(tmp_path).set_item("k", "[1, 2]")
    assert LocalFileSystemStorage(tmp_path).get_item("k") == "[1, 2]"


def test_local_storage_missing_key_and_remove(tmp_path):
    storage = LocalFileSystemStorage(tmp_path)
    assert storage.get_item("nope") is None

    storage.set_item("k", "v")
    storage.remove_item("k")
    storage.remove_item("k")
    assert storage.get_item("k") is None
    assert storage.keys() == []


def test_local_storage_keys_skip_hidden_and_foreign_files(tmp_path):
    storage = LocalFileSystemStorage(tmp_path)
    storage.set_item("b", "1")
    storage.set_item("a", "2")
    (tmp_path / ".a.123.json").write_text("partial")
    (tmp_path / "notes.txt").write_text("ignored")
    (tmp_path / "has space.json").write_text("ignored")

    assert storage.keys() == ["a", "b"]


@pytest.mark.parametrize("key", ["../evil", "a/b", "", ".."])
def test_local_storage_rejects_keys_outside_root(tmp_path, key):
    storage = LocalFileSystemStorage(tmp_path / "data")

    with pytest.raises(PersistenceError):
        storage.set_item(key, "x")
    with pytest.raises(PersistenceError):
        storage.get_item(key)
    assert not (tmp_path / "evil.json").exists()


def test_local_storage_quota(tmp_path):
    storage = LocalFileSystemStorage(tmp_path, quota_bytes=8)
    storage.set_item("a", "1234")

    with pytest.raises(StorageQuotaExceededError):
        storage.set_item("b", "12345")
    assert storage.get_item("b") is None
    assert storage.get_item("a") == "1234"


def test_local_storage_quota_size_failure_is_persistence_error(tmp_path, monkeypatch):
    storage = LocalFileSystemStorage(tmp_path, quota_bytes=100)
    storage.set_item("a", "1234")

    def broken_size(key):
        raise OSError("stat failed")

    monkeypatch.setattr(storage, "_size_of", broken_size)

    with pytest.raises(PersistenceError, match="Failed to write 'b'"):
        storage.set_item("b", "5678")
    assert storage.get_item("b") is None


def test_create_persistent_storage_uses_file_backend(tmp_path):
    storage = create_persistent_storage(tmp_path / "data", quota_bytes=100)
    assert isinstance(storage, LocalFileSystemStorage)
    assert storage.quota_bytes == 100


def test_create_persistent_storage_falls_back_to_memory(tmp_path):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("file")

    storage = create_persistent_storage(blocker / "data", quota_bytes=100)

    assert isinstance(storage, InMemoryStorage)
    assert storage.quota_bytes == 100
