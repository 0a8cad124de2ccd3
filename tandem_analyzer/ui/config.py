from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from tandem_analyzer.analysis.engine import AnalysisEngine
from tandem_analyzer.analysis.pipeline import PipelineSchedule
from tandem_analyzer.config.model import GlobalConfig
from tandem_analyzer.services.dataset_store import DatasetStore
from tandem_analyzer.services.settings_store import SettingsStore


@dataclass
class AppConfig:
    """
    Holds shared state for the Dash app: config, the two stores, the
    analysis engine and its schedule. This is passed into layout + callback
    registration functions instead of using module-level globals.
    """
    config_root: Path
    global_config: GlobalConfig

    settings_store: Optional[SettingsStore] = None
    dataset_store: Optional[DatasetStore] = None
    analysis_engine: Optional[AnalysisEngine] = None
    schedule: Optional[PipelineSchedule] = None

    def validate(self) -> None:
        """Ensure all required services are attached before the app starts."""
        if self.settings_store is None:
            raise RuntimeError("AppConfig.settings_store must be initialized.")
        if self.dataset_store is None:
            raise RuntimeError("AppConfig.dataset_store must be initialized.")
        if self.analysis_engine is None:
            raise RuntimeError("AppConfig.analysis_engine must be initialized.")
        if self.schedule is None:
            raise RuntimeError("AppConfig.schedule must be initialized.")
