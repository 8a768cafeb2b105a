from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import AppConfig, ExportConfig, IngestSettings
from ..models.view_state import SortDirection, SortKey
from ..services.column_mapper import resolve_labels

"""Config loader.

Responsibilities:
- Resolve the config path (--config > TIMECARD_CONFIG > config/timecard.yml)
- Load YAML and validate it against the bundled config_schema.json
- Apply defaults for every omitted key
"""

__all__ = [
    "ConfigError",
    "SCHEMA_PATH",
    "DEFAULT_CONFIG_PATH",
    "CONFIG_ENV_VAR",
    "load_config",
    "resolve_config_path",
]

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/timecard.yml")
CONFIG_ENV_VAR = "TIMECARD_CONFIG"


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing/invalid, or the data fails validation
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")
    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def resolve_config_path(explicit: str | None = None) -> tuple[Path | None, bool]:
    """Return (path, required). required=True when the path was asked for explicitly."""
    if explicit:
        return Path(explicit), True
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path), True
    if DEFAULT_CONFIG_PATH.exists():
        return DEFAULT_CONFIG_PATH, False
    return None, False


def load_config(path: Path | None) -> AppConfig:
    """Load and validate a config file; None gives the built-in defaults."""
    if path is None:
        return AppConfig()
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError("config validation failed: top-level value must be a mapping")

    _validate_config_schema(data)

    ingest = IngestSettings(
        header_scan_rows=data.get("header_scan_rows", 20),
        hours_per_day=float(data.get("hours_per_day", 8)),
        unknown_label=data.get("unknown_label", "Unknown"),
        labels=resolve_labels(data.get("column_labels")),
    )
    export_raw = data.get("export", {})
    export = ExportConfig(
        path=export_raw.get("path", "Attendance_Analysis.xlsx"),
        format=export_raw.get("format", "xlsx"),
    )
    sort_raw = data.get("default_sort", {})
    return AppConfig(
        ingest=ingest,
        export=export,
        default_sort_key=SortKey(sort_raw.get("key", "empId")),
        default_sort_direction=SortDirection(sort_raw.get("direction", "asc")),
    )
