"""
Service layer: persistence backends and the write-through stores built on
top of them.
"""

from .dataset_store import DATASET_KEYS, DatasetStore
from .settings_store import SETTINGS_KEY, SettingsStore
from .storage import InMemoryStorage, KeyValueStorage, LocalFileSystemStorage, create_persistent_storage

__all__ = [
    "DATASET_KEYS",
    "DatasetStore",
    "SETTINGS_KEY",
    "SettingsStore",
    "InMemoryStorage",
    "KeyValueStorage",
    "LocalFileSystemStorage",
    "create_persistent_storage",
]
