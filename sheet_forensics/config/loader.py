from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.strategy_results import StrategyName

"""Config loader.

Responsibilities:
- Load the YAML config (default config/forensics.yml)
- Validate it against config_schema.json (unknown keys are rejected)
- Apply defaults for everything except source_directory
"""

__all__ = [
    "ConfigError",
    "DetectionThresholds",
    "ForensicsConfig",
    "DEFAULT_CONFIG_PATH",
    "load_config",
]

SCHEMA_PATH = Path(__file__).parent / "config_schema.json"
DEFAULT_CONFIG_PATH = Path("config/forensics.yml")

DEFAULT_HEADER_ROW = 0
DEFAULT_MAX_ROWS = 5000


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class DetectionThresholds:
    """Tunable detection thresholds; defaults are the calibrated values."""
    min_number_entropy: float = 200
    min_size_adjusted_row_entropy_score: float = 4
    min_shared_columns: int = 2
    max_duplicate_rows: int = 1000
    min_sequence_length: int = 3
    max_value_occurrences: int = 50
    min_size_adjusted_value_entropy: float = 5


@dataclass(frozen=True)
class ForensicsConfig:
    source_directory: str
    header_row: int = DEFAULT_HEADER_ROW
    max_rows: int = DEFAULT_MAX_ROWS
    strategies: list[StrategyName] = field(default_factory=lambda: list(StrategyName))
    # sheet name -> {"unique": [...], "other": [...]}
    column_categories: dict[str, dict[str, list[str]]] = field(default_factory=dict)
    thresholds: DetectionThresholds = field(default_factory=DetectionThresholds)


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: if the schema file is missing or invalid, or the config
            fails validation (missing required keys, wrong types, unknown keys)
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


def load_config(path: Path) -> ForensicsConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping, got {type(data).__name__}")

    _validate_config_schema(data)

    strategies = [StrategyName(s) for s in data.get("strategies", [s.value for s in StrategyName])]
    return ForensicsConfig(
        source_directory=data["source_directory"],
        header_row=data.get("header_row", DEFAULT_HEADER_ROW),
        max_rows=data.get("max_rows", DEFAULT_MAX_ROWS),
        strategies=strategies,
        column_categories=data.get("column_categories") or {},
        thresholds=DetectionThresholds(**(data.get("thresholds") or {})),
    )
