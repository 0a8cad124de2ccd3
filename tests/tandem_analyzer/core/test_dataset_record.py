from __future__ import annotations

import random
import re
from datetime import date

import pytest

from tandem_analyzer.core.dataset_record import (
    MAX_RECORD_COUNT,
    MIN_RECORD_COUNT,
    DatasetRecord,
    format_file_size,
    generate_dataset_id,
    generate_date_range,
    mock_record_count,
    record_from_dict,
    record_to_dict,
)


def _record(**overrides) -> DatasetRecord:
    values = dict(
        id="dataset_1",
        name="export.csv",
        upload_date="2026-10-19",
        file_size="2.3 MB",
        date_range="Sep 19 - Oct 19, 2026",
        record_count=4321,
    )
    values.update(overrides)
    return DatasetRecord(**values)


@pytest.mark.parametrize(
    "size_bytes, expected",
    [
        (0, "0 Bytes"),
        (500, "500 Bytes"),
        (1024, "1 KB"),
        (1536, "1.5 KB"),
        (2_411_724, "2.3 MB"),
        (1024 ** 3, "1 GB"),
        (5 * 1024 ** 4, "5120 GB"),
    ],
)
def test_format_file_size(size_bytes, expected):
    assert format_file_size(size_bytes) == expected


def test_generate_date_range_spans_thirty_days_ending_today():
    assert generate_date_range(date(2026, 10, 19)) == "Sep 19 - Oct 19, 2026"


def test_generate_date_range_uses_end_year_across_new_year():
    assert generate_date_range(date(2025, 1, 15)) == "Dec 16 - Jan 15, 2025"


def test_generate_dataset_id_format():
    dataset_id = generate_dataset_id(random.Random(1))
    assert re.match(r"^dataset_\d+_[0-9a-z]{9}$", dataset_id)


def test_mock_record_count_stays_in_range():
    rng = random.Random(7)
    counts = [mock_record_count(rng) for _ in range(500)]
    assert all(MIN_RECORD_COUNT <= c <= MAX_RECORD_COUNT for c in counts)


def test_create_fills_mocked_fields():
    record = DatasetRecord.create(
        record_id="dataset_x",
        name="pump.csv",
        size_bytes=1536,
        today=date(2026, 10, 19),
        rng=random.Random(0),
    )

    assert record.id == "dataset_x"
    assert record.name == "pump.csv"
    assert record.upload_date == "2026-10-19"
    assert record.file_size == "1.5 KB"
    assert record.date_range == "Sep 19 - Oct 19, 2026"
    assert MIN_RECORD_COUNT <= record.record_count <= MAX_RECORD_COUNT
    assert record.selected is False


def test_with_selected_returns_copy():
    record = _record()
    selected = record.with_selected(True)

    assert selected.selected is True
    assert record.selected is False
    assert selected.id == record.id


def test_record_to_dict_uses_wire_keys():
    data = record_to_dict(_record(selected=True))
    assert data == {
        "id": "dataset_1",
        "name": "export.csv",
        "uploadDate": "2026-10-19",
        "fileSize": "2.3 MB",
        "dateRange": "Sep 19 - Oct 19, 2026",
        "recordCount": 4321,
        "selected": True,
    }


def test_record_from_dict_restores_record():
    record = _record(selected=True)
    assert record_from_dict(record_to_dict(record)) == record


def test_record_from_dict_defaults_optional_fields():
    record = record_from_dict({"id": "a", "name": "a.csv"})
    assert record.record_count == 0
    assert record.selected is False
    assert record.upload_date == ""


def test_record_from_dict_rejects_bad_input():
    with pytest.raises(TypeError):
        record_from_dict(["not", "a", "dict"])
    with pytest.raises(KeyError):
        record_from_dict({"id": "a"})
    with pytest.raises(ValueError):
        record_from_dict({"id": "a", "name": "a.csv", "recordCount": "lots"})
    with pytest.raises(ValueError):
        record_from_dict({"id": "  ", "name": "a.csv"})
