from __future__ import annotations

import json
import logging
from dataclasses import replace
from typing import Any, Union

from tandem_analyzer.core.exceptions import PersistenceError
from tandem_analyzer.core.settings import SETTING_NAMES, Settings, StorageType
from tandem_analyzer.services.notifier import ChangeNotifier
from tandem_analyzer.services.storage import KeyValueStorage
from tandem_analyzer.validation.errors import ValidationError

logger = logging.getLogger(__name__)

SETTINGS_KEY = "tandem_analyzer_settings"


class SettingsStore(ChangeNotifier):
    """
    Holds the Settings record and writes it back on every change.
    Always lives on the durable backend, whatever storage_type says.
    """

    def __init__(self, storage: KeyValueStorage, key: str = SETTINGS_KEY):
        super().__init__()
        self.storage = storage
        self.key = key
        self._settings = Settings()

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def storage_type(self) -> StorageType:
        return self._settings.storage_type

    @property
    def has_api_token(self) -> bool:
        return bool(self._settings.api_token)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def load(self) -> bool:
        """
        Merge persisted settings over the defaults.
        Missing or unreadable data keeps the current settings.
        """
        try:
            raw = self.storage.get_item(self.key)
        except PersistenceError:
            logger.exception("Failed to read settings")
            return False

        if raw is None:
            logger.info("No stored settings, using defaults")
            return False

        try:
            data = json.loads(raw)
            if not isinstance(data, dict):
                raise ValueError(f"expected an object, got {type(data).__name__}")
            self._settings = Settings.from_dict(data)
        except (ValueError, OverflowError, RecursionError):
            logger.warning("Ignoring malformed stored settings", exc_info=True)
            return False

        self._notify()
        return True

    def save(self) -> bool:
        try:
            self.storage.set_item(self.key, json.dumps(self._settings.to_dict()))
        except PersistenceError:
            logger.exception("Failed to save settings")
            return False
        return True

    # ------------------------------------------------------------------
    # Mutations (write-through)
    # ------------------------------------------------------------------
    def update(self, **changes: Any) -> Settings:
        unknown = sorted(set(changes) - SETTING_NAMES)
        if unknown:
            raise ValidationError.single("UNKNOWN_SETTING", f"Unknown setting(s): {', '.join(unknown)}.")

        if "storage_type" in changes:
            changes["storage_type"] = self._parse_storage_type(changes["storage_type"])
        for flag in ("enable_notifications", "auto_analysis"):
            if flag in changes:
                changes[flag] = bool(changes[flag])

        self._settings = replace(self._settings, **changes)
        self.save()
        self._notify()
        return self._settings

    def save_api_token(self, token: str | None) -> Settings:
        token = (token or "").strip()
        if not token:
            raise ValidationError.single("EMPTY_API_TOKEN", "Please enter a valid API token.")
        return self.update(api_token=token)

    def set_storage_type(self, value: Union[StorageType, str]) -> Settings:
        return self.update(storage_type=value)

    @staticmethod
    def _parse_storage_type(value: Any) -> StorageType:
        storage_type = StorageType.parse(value)
        if storage_type is None:
            raise ValidationError.single(
                "INVALID_STORAGE_TYPE",
                f"Storage type must be one of: {', '.join(t.value for t in StorageType)}.",
            )
        return storage_type
