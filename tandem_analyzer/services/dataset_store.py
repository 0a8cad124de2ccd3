from __future__ import annotations

import json
import logging
import random
from datetime import date
from typing import Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Set, Tuple

from tandem_analyzer.core.dataset_record import (
    DatasetRecord,
    generate_dataset_id,
    record_from_dict,
    record_to_dict,
)
from tandem_analyzer.core.exceptions import PersistenceError
from tandem_analyzer.core.settings import StorageType
from tandem_analyzer.services.notifier import ChangeNotifier
from tandem_analyzer.services.settings_store import SettingsStore
from tandem_analyzer.services.storage import KeyValueStorage
from tandem_analyzer.validation.errors import ValidationError, ValidationIssue

logger = logging.getLogger(__name__)

DATASET_KEYS: Dict[StorageType, str] = {
    StorageType.PERSISTENT: "tandem_analyzer_datasets",
    StorageType.SESSION: "tandem_analyzer_datasets_session",
}


def _validate_upload(name: object, size_bytes: object) -> Tuple[str, int]:
    issues: list[ValidationIssue] = []

    clean_name = str(name).strip() if name is not None else ""
    if not clean_name:
        issues.append(ValidationIssue("EMPTY_DATASET_NAME", "A dataset needs a file name."))

    if isinstance(size_bytes, bool) or not isinstance(size_bytes, int) or size_bytes < 0:
        issues.append(ValidationIssue("INVALID_FILE_SIZE", f"File size must be a non-negative integer, got {size_bytes!r}."))

    if issues:
        raise ValidationError(issues)
    return clean_name, size_bytes


class DatasetStore(ChangeNotifier):
    """
    Authoritative, ordered list of dataset records.

    Every mutation is written through to the backend selected by the
    current settings. Backend failures are logged and swallowed: the
    in-memory list stays the source of truth for the rest of the process.
    Switching storage_type does not migrate anything, each backend keeps
    its own collection under its own key.
    """

    def __init__(
            self,
            settings_store: SettingsStore,
            backends: Mapping[StorageType, KeyValueStorage],
            *,
            id_factory: Callable[[], str] = generate_dataset_id,
            rng: Optional[random.Random] = None,
            today: Callable[[], date] = date.today,
    ):
        missing = [t.value for t in StorageType if t not in backends]
        if missing:
            raise ValueError(f"No backend configured for storage type(s): {missing}")

        super().__init__()
        self.settings_store = settings_store
        self.backends = dict(backends)
        self._id_factory = id_factory
        self._rng = rng
        self._today = today

        self._records: List[DatasetRecord] = []
        # Every id handed out or loaded, so none is ever reused in this process
        self._issued_ids: Set[str] = set()
        # Key the in-memory list was last loaded from or saved to
        self._source_key: Optional[str] = None

    # ------------------------------------------------------------------
    # Backend selection
    # ------------------------------------------------------------------
    @property
    def storage_type(self) -> StorageType:
        return self.settings_store.storage_type

    @property
    def storage_key(self) -> str:
        return DATASET_KEYS[self.storage_type]

    @property
    def backend(self) -> KeyValueStorage:
        return self.backends[self.storage_type]

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------
    @property
    def records(self) -> List[DatasetRecord]:
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[DatasetRecord]:
        return iter(list(self._records))

    def __contains__(self, dataset_id: object) -> bool:
        return any(r.id == dataset_id for r in self._records)

    def get(self, dataset_id: str) -> Optional[DatasetRecord]:
        return next((r for r in self._records if r.id == dataset_id), None)

    def selected(self) -> List[DatasetRecord]:
        """Selected records in display order; the input set for analysis."""
        return [r for r in self._records if r.selected]

    def all_selected(self) -> bool:
        return bool(self._records) and all(r.selected for r in self._records)

    def total_record_count(self) -> int:
        return sum(r.record_count for r in self._records)

    # ------------------------------------------------------------------
    # Mutations (write-through)
    # ------------------------------------------------------------------
    def add(self, name: str, size_bytes: int, *, selected: bool = False) -> DatasetRecord:
        clean_name, size = _validate_upload(name, size_bytes)
        record = self._new_record(clean_name, size, selected)
        self._records.append(record)
        logger.info("Dataset added", extra={"dataset_id": record.id, "dataset_name": record.name})
        self._commit()
        return record

    def add_many(self, files: Iterable[Tuple[str, int]]) -> List[DatasetRecord]:
        """
        Add several uploads with a single write. All files are validated
        first; one bad file rejects the whole batch.
        """
        validated = [_validate_upload(name, size) for name, size in files]
        if not validated:
            return []

        added = [self._new_record(name, size, False) for name, size in validated]
        self._records.extend(added)
        logger.info("Datasets added", extra={"n_added": len(added), "n_total": len(self._records)})
        self._commit()
        return added

    def insert_record(self, record: DatasetRecord) -> bool:
        """
        Append a pre-built record (demo data, imports). Returns False and
        changes nothing if its id is already in the collection.
        """
        if record.id in self:
            logger.warning("Refusing duplicate dataset id", extra={"dataset_id": record.id})
            return False
        self._issued_ids.add(record.id)
        self._records.append(record)
        self._commit()
        return True

    def remove(self, dataset_id: str) -> bool:
        """Remove by id. Unknown ids are a no-op. Returns whether anything was removed."""
        initial_len = len(self._records)
        self._records = [r for r in self._records if r.id != dataset_id]

        removed = len(self._records) != initial_len
        if removed:
            logger.info("Dataset removed", extra={"dataset_id": dataset_id})
        self._commit()
        return removed

    def toggle_selection(self, dataset_id: str) -> Optional[bool]:
        """Flip one record's flag. Returns the new flag, or None for unknown ids."""
        record = self.get(dataset_id)
        if record is None:
            return None
        return self.set_selected(dataset_id, not record.selected)

    def set_selected(self, dataset_id: str, selected: bool) -> Optional[bool]:
        idx = next((i for i, r in enumerate(self._records) if r.id == dataset_id), None)
        if idx is None:
            return None
        self._records[idx] = self._records[idx].with_selected(selected)
        self._commit()
        return self._records[idx].selected

    def toggle_all_selected(self) -> bool:
        """
        "Select all" button: if every record is selected deselect them all,
        otherwise select them all. Returns the flag now applied.
        """
        value = not all(r.selected for r in self._records)
        self.set_all_selected(value)
        return value

    def set_all_selected(self, selected: bool) -> None:
        self._records = [r.with_selected(selected) for r in self._records]
        self._commit()

    def clear(self) -> None:
        self._records = []
        logger.info("All datasets cleared", extra={"storage_type": self.storage_type.value})
        self._commit()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def load(self) -> bool:
        """
        Replace the in-memory list with the collection stored for the
        current storage_type. A missing key loads as empty.

        Unreadable or malformed data returns False. A reload of the same
        key keeps the list untouched; after a storage switch the list
        starts empty instead, so records never move between backends.
        """
        key = self.storage_key
        try:
            raw = self.backend.get_item(key)
        except PersistenceError:
            logger.exception("Failed to read datasets", extra={"storage_key": key})
            return self._reject_load(key)

        if raw is None:
            records: List[DatasetRecord] = []
        else:
            try:
                data = json.loads(raw)
                if not isinstance(data, list):
                    raise ValueError(f"expected a list, got {type(data).__name__}")
                records = [record_from_dict(item) for item in data]
                ids = [r.id for r in records]
                if len(set(ids)) != len(ids):
                    raise ValueError("duplicate dataset ids")
            except (ValueError, TypeError, KeyError, OverflowError, RecursionError):
                logger.warning(
                    "Ignoring malformed stored datasets",
                    extra={"storage_key": key},
                    exc_info=True,
                )
                return self._reject_load(key)

        self._records = records
        self._source_key = key
        self._issued_ids.update(r.id for r in records)
        logger.info(
            "Datasets loaded",
            extra={"storage_key": key, "n_datasets": len(records)},
        )
        self._notify()
        return True

    def save(self) -> bool:
        key = self.storage_key
        self._source_key = key
        payload = json.dumps([record_to_dict(r) for r in self._records])
        try:
            self.backend.set_item(key, payload)
        except PersistenceError:
            logger.exception(
                "Failed to save datasets",
                extra={"storage_key": key, "n_datasets": len(self._records)},
            )
            return False
        return True

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _reject_load(self, key: str) -> bool:
        if self._source_key is not None and self._source_key != key:
            logger.warning(
                "Starting with an empty dataset list for this storage",
                extra={"storage_key": key, "previous_storage_key": self._source_key},
            )
            self._records = []
            self._source_key = key
            self._notify()
        return False

    def _commit(self) -> None:
        self.save()
        self._notify()

    def _new_record(self, name: str, size_bytes: int, selected: bool) -> DatasetRecord:
        return DatasetRecord.create(
            record_id=self._next_id(),
            name=name,
            size_bytes=size_bytes,
            today=self._today(),
            rng=self._rng,
            selected=selected,
        )

    def _next_id(self) -> str:
        record_id = self._id_factory()
        while record_id in self._issued_ids:
            record_id = self._id_factory()
        self._issued_ids.add(record_id)
        return record_id
