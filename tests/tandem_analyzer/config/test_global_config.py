from __future__ import annotations

import json
from pathlib import Path

import pytest

from tandem_analyzer.config import GlobalConfig, load_global_config
from tandem_analyzer.core.exceptions import ConfigError

REPO_CONFIG = Path(__file__).resolve().parents[3] / "config"


def _write_global(root: Path, data) -> Path:
    root.mkdir(parents=True, exist_ok=True)
    (root / "global.json").write_text(json.dumps(data), encoding="utf-8")
    return root


def test_missing_global_json_uses_defaults(tmp_path):
    cfg = load_global_config(tmp_path)

    assert isinstance(cfg, GlobalConfig)
    assert cfg.data_root == (tmp_path / "data").resolve()
    assert cfg.ui_title == "Tandem Pump Analyzer"
    assert cfg.storage_quota_bytes == 5 * 1024 * 1024
    assert cfg.seed_demo_data is True
    assert cfg.analysis_time_scale == 1.0
    assert cfg.progress_interval_ms == 100


def test_load_global_config_values(tmp_path):
    root = _write_global(
        tmp_path / "config",
        {
            "ui_title": "Pump Lab",
            "subtitle": "Testing",
            "data_root": "../store",
            "storage_quota_bytes": 2048,
            "seed_demo_data": False,
            "analysis_time_scale": 0,
            "progress_interval_ms": 50,
        },
    )

    cfg = load_global_config(root)

    assert cfg.ui_title == "Pump Lab"
    assert cfg.subtitle == "Testing"
    assert cfg.data_root == (tmp_path / "store").resolve()
    assert cfg.storage_quota_bytes == 2048
    assert cfg.seed_demo_data is False
    assert cfg.analysis_time_scale == 0.0
    assert cfg.progress_interval_ms == 50


def test_absolute_data_root_is_kept(tmp_path):
    target = tmp_path / "elsewhere"
    root = _write_global(tmp_path / "config", {"data_root": str(target)})
    assert load_global_config(root).data_root == target


def test_null_quota_means_unlimited(tmp_path):
    root = _write_global(tmp_path, {"storage_quota_bytes": None})
    assert load_global_config(root).storage_quota_bytes is None


def test_invalid_json_raises(tmp_path):
    (tmp_path / "global.json").write_text("{oops", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_global_config(tmp_path)


@pytest.mark.parametrize(
    "data",
    [
        ["not", "an", "object"],
        {"seed_demo_data": "yes"},
        {"analysis_time_scale": -1},
        {"progress_interval_ms": 5},
        {"storage_quota_bytes": 0},
        {"storage_quota_bytes": True},
    ],
)
def test_invalid_values_raise(tmp_path, data):
    root = _write_global(tmp_path, data)
    with pytest.raises(ConfigError):
        load_global_config(root)


def test_repository_config_loads():
    cfg = load_global_config(REPO_CONFIG)
    assert cfg.ui_title == "Tandem Pump Analyzer"
    assert cfg.seed_demo_data is True
