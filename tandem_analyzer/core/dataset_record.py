from __future__ import annotations

import random
import string
import time
from dataclasses import dataclass, replace
from datetime import date, timedelta
from typing import Any, Dict, Optional

# -------------------------------------------------------------------------
# Helpers
# -------------------------------------------------------------------------

_ID_ALPHABET = string.digits + string.ascii_lowercase
_SIZE_UNITS = ["Bytes", "KB", "MB", "GB"]

MIN_RECORD_COUNT = 1000
MAX_RECORD_COUNT = 10999
DATE_RANGE_DAYS = 30


def generate_dataset_id(rng: Optional[random.Random] = None) -> str:
    """
    Generate an id from the current millisecond timestamp plus a random
    base-36 suffix, e.g. "dataset_1760860800000_k3j9x0a1b"
    """
    rng = rng or random
    suffix = "".join(rng.choice(_ID_ALPHABET) for _ in range(9))
    return f"dataset_{int(time.time() * 1000)}_{suffix}"


def format_file_size(size_bytes: int) -> str:
    """
    Human-readable size in base 1024, one decimal, trailing ".0" dropped.

    0 -> "0 Bytes", 1536 -> "1.5 KB", 2048 -> "2 KB"
    """
    if size_bytes == 0:
        return "0 Bytes"

    unit = 0
    while unit < len(_SIZE_UNITS) - 1 and size_bytes >= 1024 ** (unit + 1):
        unit += 1

    text = f"{size_bytes / 1024 ** unit:.1f}"
    if text.endswith(".0"):
        text = text[:-2]
    return f"{text} {_SIZE_UNITS[unit]}"


def generate_date_range(today: Optional[date] = None) -> str:
    """
    Display string for the mocked 30-day span ending today,
    e.g. "Sep 19 - Oct 19, 2026"
    """
    end = today or date.today()
    start = end - timedelta(days=DATE_RANGE_DAYS)
    return f"{start:%b} {start.day} - {end:%b} {end.day}, {end.year}"


def mock_record_count(rng: Optional[random.Random] = None) -> int:
    rng = rng or random
    return rng.randint(MIN_RECORD_COUNT, MAX_RECORD_COUNT)


# -------------------------------------------------------------------------
# Dataset record
# -------------------------------------------------------------------------

@dataclass
class DatasetRecord:
    """
    Metadata for one uploaded pump export. The file content is never parsed.

    - id: unique, immutable identifier ("dataset_<ms>_<suffix>")
    - name: original file name
    - upload_date: ISO date (YYYY-MM-DD) the file was ingested
    - file_size: formatted size string ("2.3 MB")
    - date_range: display string for the nominal span of the data
    - record_count: mocked number of pump records
    - selected: whether the record takes part in the next analysis
    """

    id: str
    name: str
    upload_date: str
    file_size: str
    date_range: str
    record_count: int
    selected: bool = False

    @classmethod
    def create(
        cls,
        *,
        record_id: str,
        name: str,
        size_bytes: int,
        today: Optional[date] = None,
        rng: Optional[random.Random] = None,
        selected: bool = False,
    ) -> "DatasetRecord":
        """
        Build a record for a freshly uploaded file, mocking the parts a
        real parser would fill in.
        """
        today = today or date.today()
        return cls(
            id=record_id,
            name=name,
            upload_date=today.isoformat(),
            file_size=format_file_size(size_bytes),
            date_range=generate_date_range(today),
            record_count=mock_record_count(rng),
            selected=selected,
        )

    def with_selected(self, selected: bool) -> "DatasetRecord":
        return replace(self, selected=bool(selected))


def record_to_dict(record: DatasetRecord) -> Dict[str, Any]:
    return {
        "id": record.id,
        "name": record.name,
        "uploadDate": record.upload_date,
        "fileSize": record.file_size,
        "dateRange": record.date_range,
        "recordCount": record.record_count,
        "selected": record.selected,
    }


def record_from_dict(data: Dict[str, Any]) -> DatasetRecord:
    """
    Rebuild a DatasetRecord from its persisted form.

    Raises:
        TypeError: if data is not a dict
        KeyError: if a required field is missing
        ValueError: if recordCount is not an integer
    """
    if not isinstance(data, dict):
        raise TypeError(f"Dataset record must be an object, got {type(data).__name__}")

    record_id = str(data["id"]).strip()
    if not record_id:
        raise ValueError("Dataset record id must not be empty")

    return DatasetRecord(
        id=record_id,
        name=str(data["name"]),
        upload_date=str(data.get("uploadDate", "")),
        file_size=str(data.get("fileSize", "")),
        date_range=str(data.get("dateRange", "")),
        record_count=int(data.get("recordCount", 0)),
        selected=bool(data.get("selected", False)),
    )
