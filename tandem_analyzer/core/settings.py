from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class StorageType(str, Enum):
    """Which backend the dataset collection is read from / written to."""

    PERSISTENT = "persistent"
    SESSION = "session"

    @classmethod
    def parse(cls, value: Any) -> Optional["StorageType"]:
        if isinstance(value, StorageType):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


def _stored_flag(data: Dict[str, Any], key: str, default: bool) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        logger.warning(
            "Non-boolean flag in stored settings, using default",
            extra={"setting": key, "stored_value": repr(value)},
        )
        return default
    return value


@dataclass
class Settings:
    """
    Process-wide user settings.

    Fields:

    - api_token: opaque token string, never interpreted
    - storage_type: backend used for the dataset collection
    - enable_notifications: show a notification when an analysis completes
    - auto_analysis: start analysing the current selection right after an upload
    """

    api_token: str = ""
    storage_type: StorageType = StorageType.PERSISTENT
    enable_notifications: bool = False
    auto_analysis: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "apiToken": self.api_token,
            "storageType": self.storage_type.value,
            "enableNotifications": self.enable_notifications,
            "autoAnalysis": self.auto_analysis,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Settings":
        """
        Merge stored values over the defaults. Unknown keys are ignored.
        """
        defaults = cls()

        storage_type = StorageType.parse(data.get("storageType", defaults.storage_type))
        if storage_type is None:
            logger.warning(
                "Unknown storage type in stored settings, using default",
                extra={"storage_type": data.get("storageType")},
            )
            storage_type = defaults.storage_type

        token = data.get("apiToken", defaults.api_token)

        return cls(
            api_token=str(token) if token is not None else "",
            storage_type=storage_type,
            enable_notifications=_stored_flag(data, "enableNotifications", defaults.enable_notifications),
            auto_analysis=_stored_flag(data, "autoAnalysis", defaults.auto_analysis),
        )


SETTING_NAMES = frozenset(f.name for f in fields(Settings))
