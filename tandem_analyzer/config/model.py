from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULT_UI_TITLE = "Tandem Pump Analyzer"
DEFAULT_SUBTITLE = "Insulin pump data insights"
DEFAULT_STORAGE_QUOTA_BYTES = 5 * 1024 * 1024


@dataclass
class GlobalConfig:
    """
    Application-level configuration read from global.json.

    - ui_title / subtitle: navbar text
    - data_root: directory of the durable (persistent) backend
    - storage_quota_bytes: size cap per backend, None for unlimited
    - seed_demo_data: insert the demo datasets when the collection is empty
    - analysis_time_scale: multiplier for the simulated pipeline durations
    - progress_interval_ms: how often the UI samples pipeline progress
    """

    data_root: Path
    ui_title: str = DEFAULT_UI_TITLE
    subtitle: str = DEFAULT_SUBTITLE
    storage_quota_bytes: int | None = DEFAULT_STORAGE_QUOTA_BYTES
    seed_demo_data: bool = True
    analysis_time_scale: float = 1.0
    progress_interval_ms: int = 100
