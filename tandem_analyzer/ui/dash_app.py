from __future__ import annotations

import logging
from functools import partial
from pathlib import Path

import dash_bootstrap_components as dbc
from dash import Dash

from .config import AppConfig
from tandem_analyzer.analysis.engine import MockAnalysisEngine
from tandem_analyzer.analysis.pipeline import PipelineSchedule
from tandem_analyzer.config.io import load_global_config
from tandem_analyzer.core.settings import StorageType
from tandem_analyzer.services.dataset_store import DatasetStore
from tandem_analyzer.services.demo_data import seed_demo_datasets
from tandem_analyzer.services.settings_store import SettingsStore
from tandem_analyzer.services.storage import InMemoryStorage, create_persistent_storage
from tandem_analyzer.ui.layout.build_layout import build_layout
from tandem_analyzer.ui.callbacks.callbacks_navigation import register_navigation_callbacks
from tandem_analyzer.ui.callbacks.callbacks_datasets import register_datasets_callbacks
from tandem_analyzer.ui.callbacks.callbacks_analysis import register_analysis_callbacks
from tandem_analyzer.ui.callbacks.callbacks_settings import register_settings_callbacks

logger = logging.getLogger(__name__)


def build_app_config(config_root: Path | str = Path("config")) -> AppConfig:
    """
    Wire config, backends, stores and engine together. Kept separate from
    create_dash_app so the service layer can be started without Dash.
    """
    config_root = Path(config_root)

    # 1) Load Config
    global_config = load_global_config(config_root)

    # 2) Backends: durable one on disk, session one in process memory
    persistent = create_persistent_storage(global_config.data_root, global_config.storage_quota_bytes)
    session = InMemoryStorage(global_config.storage_quota_bytes)

    # 3) Stores (settings first: the dataset store reads storage_type from it)
    settings_store = SettingsStore(persistent)
    settings_store.load()

    dataset_store = DatasetStore(
        settings_store,
        {StorageType.PERSISTENT: persistent, StorageType.SESSION: session},
    )
    dataset_store.load()

    if global_config.seed_demo_data:
        seed_demo_datasets(dataset_store)

    # 4) Analysis
    ctx = AppConfig(
        config_root=config_root,
        global_config=global_config,
        settings_store=settings_store,
        dataset_store=dataset_store,
        analysis_engine=MockAnalysisEngine(),
        schedule=PipelineSchedule(time_scale=global_config.analysis_time_scale),
    )
    ctx.validate()
    return ctx


def create_dash_app(config_root: Path | str = Path("config")) -> Dash:
    ctx = build_app_config(config_root)

    assets_path = Path(__file__).parent / "assets"

    app = Dash(
        __name__,
        external_stylesheets=[dbc.themes.FLATLY],
        assets_folder=str(assets_path),
    )
    app.title = ctx.global_config.ui_title

    # Rebuilt per page load so controls show the current store contents
    app.layout = partial(build_layout, ctx)

    # Register callbacks
    register_navigation_callbacks(app, ctx)
    register_datasets_callbacks(app, ctx)
    register_analysis_callbacks(app, ctx)
    register_settings_callbacks(app, ctx)

    logger.info(
        "Dash app created",
        extra={
            "config_root": str(config_root),
            "storage_type": ctx.settings_store.storage_type.value,
            "n_datasets": len(ctx.dataset_store),
        },
    )
    return app
