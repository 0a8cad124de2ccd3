from __future__ import annotations

import logging
import os
import re
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional

from tandem_analyzer.core.exceptions import PersistenceError, StorageQuotaExceededError

logger = logging.getLogger(__name__)

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class KeyValueStorage(ABC):
    """
    Abstract string key-value store (local file, in-memory, ...).
    Values are JSON text produced by the stores.
    """

    def __init__(self, quota_bytes: Optional[int] = None):
        self.quota_bytes = quota_bytes

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """Return the stored value, or None if the key is absent."""
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        pass

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Delete the key. Missing keys are ignored."""
        pass

    @abstractmethod
    def keys(self) -> List[str]:
        pass

    @abstractmethod
    def _size_of(self, key: str) -> int:
        """Encoded size of the value currently stored under key (0 if absent)."""
        pass

    def _check_quota(self, key: str, value: str) -> None:
        if self.quota_bytes is None:
            return
        used = sum(self._size_of(k) for k in self.keys() if k != key)
        needed = used + len(value.encode("utf-8"))
        if needed > self.quota_bytes:
            raise StorageQuotaExceededError(
                f"Writing '{key}' needs {needed} bytes, quota is {self.quota_bytes}"
            )


class LocalFileSystemStorage(KeyValueStorage):
    """
    Durable backend: one '<key>.json' file per key under root.
    Survives process restarts.
    """

    suffix = ".json"

    def __init__(self, root: Path, quota_bytes: Optional[int] = None):
        super().__init__(quota_bytes)
        self.root = Path(root).resolve()
        self.root.mkdir(parents=True, exist_ok=True)

    def _resolve(self, key: str) -> Path:
        # Keys map 1:1 to file names, nothing may escape root
        if not _KEY_PATTERN.match(key) or key in (".", ".."):
            raise PersistenceError(f"Invalid storage key: {key!r}")
        full_path = (self.root / f"{key}{self.suffix}").resolve()
        if full_path.parent != self.root:
            raise PersistenceError(f"Access denied: {key}")
        return full_path

    def get_item(self, key: str) -> Optional[str]:
        p = self._resolve(key)
        if not p.is_file():
            return None
        try:
            return p.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise PersistenceError(f"Failed to read '{key}': {e}") from e

    def set_item(self, key: str, value: str) -> None:
        p = self._resolve(key)

        # Write to a temp file in the same dir, then atomically replace
        try:
            self._check_quota(key, value)
            fd, tmp_name = tempfile.mkstemp(dir=self.root, prefix=f".{key}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(value)
                os.replace(tmp_name, p)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise PersistenceError(f"Failed to write '{key}': {e}") from e

    def remove_item(self, key: str) -> None:
        try:
            self._resolve(key).unlink(missing_ok=True)
        except OSError as e:
            raise PersistenceError(f"Failed to remove '{key}': {e}") from e

    def keys(self) -> List[str]:
        return sorted(
            f.name[: -len(self.suffix)]
            for f in self.root.glob(f"*{self.suffix}")
            if f.is_file()
            and not f.name.startswith(".")
            and _KEY_PATTERN.match(f.name[: -len(self.suffix)])
        )

    def _size_of(self, key: str) -> int:
        p = self._resolve(key)
        return p.stat().st_size if p.is_file() else 0


class InMemoryStorage(KeyValueStorage):
    """
    Session-scoped backend: values live as long as the process.
    """

    def __init__(self, quota_bytes: Optional[int] = None):
        super().__init__(quota_bytes)
        self._items: Dict[str, str] = {}

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._check_quota(key, value)
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self) -> List[str]:
        return sorted(self._items)

    def _size_of(self, key: str) -> int:
        value = self._items.get(key)
        return len(value.encode("utf-8")) if value is not None else 0


def create_persistent_storage(root: Path, quota_bytes: Optional[int] = None) -> KeyValueStorage:
    """
    Build the durable backend. If its directory is unusable the app keeps
    running on an in-memory backend instead (nothing survives a restart).
    """
    try:
        return LocalFileSystemStorage(root, quota_bytes=quota_bytes)
    except OSError:
        logger.exception(
            "Persistent storage unavailable, falling back to in-memory storage",
            extra={"data_root": str(root)},
        )
        return InMemoryStorage(quota_bytes=quota_bytes)
