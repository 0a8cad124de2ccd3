from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

from tandem_analyzer.config.model import (
    DEFAULT_STORAGE_QUOTA_BYTES,
    DEFAULT_SUBTITLE,
    DEFAULT_UI_TITLE,
    GlobalConfig,
)
from tandem_analyzer.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_DATA_ROOT = "data"


def _as_bool(raw: Dict[str, Any], key: str, default: bool) -> bool:
    value = raw.get(key, default)
    if not isinstance(value, bool):
        raise ConfigError(f"'{key}' must be true or false, got {value!r}")
    return value


def _as_number(raw: Dict[str, Any], key: str, default: float, *, minimum: float) -> float:
    value = raw.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value < minimum:
        raise ConfigError(f"'{key}' must be a number >= {minimum}, got {value!r}")
    return value


def load_global_config(root: Path) -> GlobalConfig:
    """
    Load configuration from a directory.

    Expected structure:

        root/
            global.json

    All keys in global.json are optional:

    - ui_title / subtitle: navbar text
    - data_root: directory for the persistent backend. Relative paths are
                 resolved relative to 'root'. Defaults to 'root/data'.
    - storage_quota_bytes: integer or null (unlimited), defaults to 5 MiB
    - seed_demo_data: bool, defaults to true
    - analysis_time_scale: number >= 0, defaults to 1.0
    - progress_interval_ms: integer >= 16, defaults to 100

    :param root: Directory containing 'global.json'.
    :return: A GlobalConfig instance.
    :raises ConfigError: if global.json is not valid JSON or holds invalid values.
    """
    root = Path(root)
    logger.info("Loading global config", extra={"config_root": str(root)})

    global_path = root / "global.json"
    if not global_path.is_file():
        logger.warning("global.json not found, using defaults", extra={"config_root": str(root)})
        raw_global: Dict[str, Any] = {}
    else:
        try:
            with global_path.open(encoding="utf-8") as f:
                raw_global = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in {global_path}: {e}") from e
        if not isinstance(raw_global, dict):
            raise ConfigError(f"{global_path} must contain a JSON object")

    # Resolve data_root properly:
    # - Absolute paths are used as-is.
    # - Relative paths are resolved relative to the config root directory.
    data_root_path = Path(raw_global.get("data_root") or DEFAULT_DATA_ROOT)
    if not data_root_path.is_absolute():
        data_root_path = (root / data_root_path).resolve()

    quota = raw_global.get("storage_quota_bytes", DEFAULT_STORAGE_QUOTA_BYTES)
    if quota is not None:
        quota = int(_as_number(raw_global, "storage_quota_bytes", DEFAULT_STORAGE_QUOTA_BYTES, minimum=1))

    return GlobalConfig(
        data_root=data_root_path,
        ui_title=raw_global.get("ui_title", DEFAULT_UI_TITLE),
        subtitle=raw_global.get("subtitle", DEFAULT_SUBTITLE),
        storage_quota_bytes=quota,
        seed_demo_data=_as_bool(raw_global, "seed_demo_data", True),
        analysis_time_scale=float(_as_number(raw_global, "analysis_time_scale", 1.0, minimum=0)),
        progress_interval_ms=int(_as_number(raw_global, "progress_interval_ms", 100, minimum=16)),
    )
