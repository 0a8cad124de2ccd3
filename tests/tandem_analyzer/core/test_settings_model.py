from __future__ import annotations

import logging

from tandem_analyzer.core.settings import SETTING_NAMES, Settings, StorageType


def test_storage_type_parse():
    assert StorageType.parse("session") is StorageType.SESSION
    assert StorageType.parse(" PERSISTENT ") is StorageType.PERSISTENT
    assert StorageType.parse(StorageType.SESSION) is StorageType.SESSION
    assert StorageType.parse("cloud") is None
    assert StorageType.parse(None) is None


def test_settings_defaults():
    settings = Settings()
    assert settings.api_token == ""
    assert settings.storage_type is StorageType.PERSISTENT
    assert settings.enable_notifications is False
    assert settings.auto_analysis is False


def test_to_dict_uses_wire_keys():
    settings = Settings(api_token="t", storage_type=StorageType.SESSION, auto_analysis=True)
    assert settings.to_dict() == {
        "apiToken": "t",
        "storageType": "session",
        "enableNotifications": False,
        "autoAnalysis": True,
    }


def test_from_dict_merges_over_defaults():
    settings = Settings.from_dict({"autoAnalysis": True, "somethingElse": 1})
    assert settings.auto_analysis is True
    assert settings.storage_type is StorageType.PERSISTENT
    assert settings.api_token == ""


def test_from_dict_unknown_storage_type_falls_back(caplog):
    with caplog.at_level(logging.WARNING):
        settings = Settings.from_dict({"storageType": "cloud"})

    assert settings.storage_type is StorageType.PERSISTENT
    assert "Unknown storage type" in caplog.text


def test_from_dict_null_token_becomes_empty():
    assert Settings.from_dict({"apiToken": None}).api_token == ""


def test_from_dict_non_boolean_flags_fall_back(caplog):
    with caplog.at_level(logging.WARNING):
        settings = Settings.from_dict({"enableNotifications": "false", "autoAnalysis": "yes"})

    assert settings.enable_notifications is Settings().enable_notifications
    assert settings.auto_analysis is False
    assert "Non-boolean flag" in caplog.text


def test_from_dict_keeps_boolean_flags():
    settings = Settings.from_dict({"enableNotifications": False, "autoAnalysis": True})
    assert settings.enable_notifications is False
    assert settings.auto_analysis is True


def test_setting_names():
    assert SETTING_NAMES == {"api_token", "storage_type", "enable_notifications", "auto_analysis"}
