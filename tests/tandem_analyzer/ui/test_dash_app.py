from __future__ import annotations

import json
from pathlib import Path

import pytest
from dash import Dash

from tandem_analyzer.analysis.engine import MockAnalysisEngine
from tandem_analyzer.core.dataset_record import record_from_dict
from tandem_analyzer.services.dataset_store import DATASET_KEYS
from tandem_analyzer.core.settings import StorageType
from tandem_analyzer.ui.callbacks.callbacks_analysis import start_analysis_run
from tandem_analyzer.ui.config import AppConfig
from tandem_analyzer.ui.dash_app import build_app_config, create_dash_app
from tandem_analyzer.validation.errors import ValidationError


def _config_root(tmp_path: Path, **overrides) -> Path:
    root = tmp_path / "config"
    root.mkdir()
    data = {"data_root": "data", "analysis_time_scale": 0, **overrides}
    (root / "global.json").write_text(json.dumps(data), encoding="utf-8")
    return root


def test_build_app_config_seeds_and_persists_demo_data(tmp_path):
    root = _config_root(tmp_path)

    ctx = build_app_config(root)

    assert isinstance(ctx, AppConfig)
    assert isinstance(ctx.analysis_engine, MockAnalysisEngine)
    assert [r.id for r in ctx.dataset_store] == ["dataset_001", "dataset_002"]

    stored = root / "data" / f"{DATASET_KEYS[StorageType.PERSISTENT]}.json"
    assert stored.is_file()


def test_second_start_loads_instead_of_reseeding(tmp_path):
    root = _config_root(tmp_path)
    first = build_app_config(root)
    first.dataset_store.remove("dataset_002")
    first.dataset_store.add("mine.csv", 10)

    second = build_app_config(root)

    assert [r.name for r in second.dataset_store] == ["tandem_export_2024_09.csv", "mine.csv"]


def test_seeding_can_be_disabled(tmp_path):
    ctx = build_app_config(_config_root(tmp_path, seed_demo_data=False))
    assert len(ctx.dataset_store) == 0


def test_settings_survive_restart(tmp_path):
    root = _config_root(tmp_path)
    build_app_config(root).settings_store.update(storage_type="session", auto_analysis=True)

    ctx = build_app_config(root)

    assert ctx.settings_store.storage_type is StorageType.SESSION
    assert ctx.settings_store.settings.auto_analysis is True


def test_app_config_validate_reports_missing_services(tmp_path):
    ctx = build_app_config(_config_root(tmp_path))
    ctx.analysis_engine = None

    with pytest.raises(RuntimeError):
        ctx.validate()


def test_start_analysis_run_snapshots_selection(tmp_path):
    ctx = build_app_config(_config_root(tmp_path))

    with pytest.raises(ValidationError):
        start_analysis_run(ctx)

    ctx.dataset_store.set_selected("dataset_002", True)
    run = start_analysis_run(ctx)

    assert run["run_id"]
    assert run["started_at"] > 0
    assert [record_from_dict(d).id for d in run["records"]] == ["dataset_002"]


def test_create_dash_app(tmp_path):
    app = create_dash_app(_config_root(tmp_path, ui_title="Pump Lab"))

    assert isinstance(app, Dash)
    assert app.title == "Pump Lab"
    assert callable(app.layout)
    assert app.layout() is not None
    assert len(app.callback_map) > 0
