from __future__ import annotations

import json
import logging

import pytest

from tandem_analyzer.core.exceptions import PersistenceError
from tandem_analyzer.core.settings import Settings, StorageType
from tandem_analyzer.services.settings_store import SETTINGS_KEY, SettingsStore
from tandem_analyzer.services.storage import InMemoryStorage
from tandem_analyzer.validation.errors import ValidationError


class UnreadableStorage(InMemoryStorage):
    def __init__(self, quota_bytes=None):
        super().__init__(quota_bytes)
        self.fail_reads = False

    def get_item(self, key):
        if self.fail_reads:
            raise PersistenceError(f"disk error reading {key}")
        return super().get_item(key)


def _stored(storage: InMemoryStorage) -> dict:
    return json.loads(storage.get_item(SETTINGS_KEY))


def test_load_without_stored_settings_keeps_defaults():
    store = SettingsStore(InMemoryStorage())
    assert store.load() is False
    assert store.settings == Settings()


def test_save_api_token_strips_and_persists():
    storage = InMemoryStorage()
    store = SettingsStore(storage)

    store.save_api_token("  abc123 ")

    assert store.settings.api_token == "abc123"
    assert store.has_api_token is True
    assert _stored(storage)["apiToken"] == "abc123"


@pytest.mark.parametrize("token", ["", "   ", None])
def test_save_api_token_rejects_empty(token):
    storage = InMemoryStorage()
    store = SettingsStore(storage)

    with pytest.raises(ValidationError) as exc:
        store.save_api_token(token)

    assert exc.value.codes == ["EMPTY_API_TOKEN"]
    assert exc.value.user_message == "Please enter a valid API token."
    assert store.has_api_token is False
    assert storage.get_item(SETTINGS_KEY) is None


def test_set_storage_type_accepts_strings():
    storage = InMemoryStorage()
    store = SettingsStore(storage)

    store.set_storage_type("session")

    assert store.storage_type is StorageType.SESSION
    assert _stored(storage)["storageType"] == "session"


def test_set_storage_type_rejects_unknown_value():
    store = SettingsStore(InMemoryStorage())

    with pytest.raises(ValidationError) as exc:
        store.set_storage_type("cloud")

    assert exc.value.codes == ["INVALID_STORAGE_TYPE"]
    assert store.storage_type is StorageType.PERSISTENT


def test_update_rejects_unknown_setting():
    store = SettingsStore(InMemoryStorage())

    with pytest.raises(ValidationError) as exc:
        store.update(dark_mode=True)

    assert exc.value.codes == ["UNKNOWN_SETTING"]


def test_update_coerces_flags():
    store = SettingsStore(InMemoryStorage())
    settings = store.update(enable_notifications=1, auto_analysis="")
    assert settings.enable_notifications is True
    assert settings.auto_analysis is False


def test_settings_reload_from_same_backend():
    storage = InMemoryStorage()
    first = SettingsStore(storage)
    first.save_api_token("tok")
    first.update(storage_type="session", auto_analysis=True)

    second = SettingsStore(storage)
    assert second.load() is True
    assert second.settings == first.settings


def test_malformed_stored_settings_are_ignored(caplog):
    storage = InMemoryStorage()
    storage.set_item(SETTINGS_KEY, "{not json")
    store = SettingsStore(storage)

    with caplog.at_level(logging.WARNING):
        assert store.load() is False

    assert store.settings == Settings()
    assert "malformed" in caplog.text


def test_non_object_stored_settings_are_ignored():
    storage = InMemoryStorage()
    storage.set_item(SETTINGS_KEY, "[1, 2]")
    store = SettingsStore(storage)

    assert store.load() is False
    assert store.settings == Settings()


def test_deeply_nested_stored_settings_are_ignored(caplog):
    storage = InMemoryStorage()
    storage.set_item(SETTINGS_KEY, "[" * 100000 + "]" * 100000)
    store = SettingsStore(storage)

    with caplog.at_level(logging.WARNING):
        assert store.load() is False

    assert store.settings == Settings()
    assert "malformed" in caplog.text


def test_read_failure_keeps_current_settings(caplog):
    storage = UnreadableStorage()
    store = SettingsStore(storage)
    store.update(auto_analysis=True)
    storage.fail_reads = True

    with caplog.at_level(logging.ERROR):
        assert store.load() is False

    assert store.settings.auto_analysis is True
    assert "Failed to read settings" in caplog.text


def test_save_failure_keeps_in_memory_settings(caplog):
    store = SettingsStore(InMemoryStorage(quota_bytes=5))

    with caplog.at_level(logging.ERROR):
        store.save_api_token("a-long-token")

    assert store.settings.api_token == "a-long-token"
    assert "Failed to save settings" in caplog.text


def test_update_notifies_listeners():
    store = SettingsStore(InMemoryStorage())
    calls = []
    unsubscribe = store.subscribe(lambda: calls.append(store.revision))

    store.update(auto_analysis=True)
    unsubscribe()
    store.update(auto_analysis=False)

    assert calls == [1]
    assert store.revision == 2
