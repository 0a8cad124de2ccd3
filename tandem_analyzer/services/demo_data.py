from __future__ import annotations

import logging
from typing import List

from tandem_analyzer.core.dataset_record import DatasetRecord
from tandem_analyzer.services.dataset_store import DatasetStore

logger = logging.getLogger(__name__)


def demo_datasets() -> List[DatasetRecord]:
    """Two sample exports shown on first start."""
    return [
        DatasetRecord(
            id="dataset_001",
            name="tandem_export_2024_09.csv",
            upload_date="2024-09-25",
            file_size="2.3 MB",
            date_range="Sep 1-30, 2024",
            record_count=8640,
        ),
        DatasetRecord(
            id="dataset_002",
            name="tandem_export_2024_08.zip",
            upload_date="2024-09-20",
            file_size="1.8 MB",
            date_range="Aug 1-31, 2024",
            record_count=8928,
        ),
    ]


def seed_demo_datasets(store: DatasetStore) -> int:
    """
    Populate an empty store with the demo datasets.
    Returns how many were inserted (0 if the store already had data).
    """
    if len(store) > 0:
        return 0

    inserted = sum(1 for record in demo_datasets() if store.insert_record(record))
    logger.info("Seeded demo datasets", extra={"n_inserted": inserted, "storage_key": store.storage_key})
    return inserted
