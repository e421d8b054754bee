from __future__ import annotations

from pathlib import Path

import pytest

from sheet_forensics.config.loader import (
    DEFAULT_CONFIG_PATH,
    ConfigError,
    DetectionThresholds,
    load_config,
)
from sheet_forensics.models import StrategyName


def test_load_config_valid(write_config: Path):
    cfg = load_config(write_config)
    assert cfg.source_directory == "./data"
    assert cfg.header_row == 0
    assert cfg.max_rows == 5000
    assert cfg.strategies == [
        StrategyName.INDIVIDUAL_NUMBERS,
        StrategyName.REPEATED_COLUMN_SEQUENCES,
        StrategyName.DUPLICATE_ROWS,
    ]
    assert cfg.column_categories["Measurements"]["unique"] == ["sample_id", "weight", "concentration", "volume"]
    # unspecified thresholds keep their defaults
    assert cfg.thresholds.min_number_entropy == 200
    assert cfg.thresholds.max_duplicate_rows == 1000


def test_load_config_minimal_applies_defaults(temp_workdir: Path):
    cfg_path = temp_workdir / "config" / "forensics.yml"
    cfg_path.write_text("source_directory: ./data\n", encoding="utf-8")
    cfg = load_config(cfg_path)
    assert cfg.header_row == 0
    assert cfg.max_rows == 5000
    assert cfg.strategies == list(StrategyName)
    assert cfg.column_categories == {}
    assert cfg.thresholds == DetectionThresholds()


def test_load_config_strategy_subset_keeps_order(temp_workdir: Path):
    cfg_path = temp_workdir / "config" / "forensics.yml"
    cfg_path.write_text(
        "source_directory: ./data\nstrategies: [duplicate_rows, individual_numbers]\n"
        "thresholds:\n  min_shared_columns: 3\n",
        encoding="utf-8",
    )
    cfg = load_config(cfg_path)
    assert cfg.strategies == [StrategyName.DUPLICATE_ROWS, StrategyName.INDIVIDUAL_NUMBERS]
    assert cfg.thresholds.min_shared_columns == 3


def test_load_config_missing_file(temp_workdir: Path):
    with pytest.raises(ConfigError, match="config file not found"):
        load_config(temp_workdir / "config" / "nope.yml")


def test_load_config_invalid_yaml(temp_workdir: Path):
    cfg_path = temp_workdir / "config" / "forensics.yml"
    cfg_path.write_text("source_directory: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="invalid yaml"):
        load_config(cfg_path)


def test_load_config_root_must_be_mapping(temp_workdir: Path):
    cfg_path = temp_workdir / "config" / "forensics.yml"
    cfg_path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="must be a mapping"):
        load_config(cfg_path)


def test_load_config_empty_file_misses_source_directory(temp_workdir: Path):
    cfg_path = temp_workdir / "config" / "forensics.yml"
    cfg_path.write_text("", encoding="utf-8")
    with pytest.raises(ConfigError, match="source_directory"):
        load_config(cfg_path)


def test_default_config_path():
    assert DEFAULT_CONFIG_PATH == Path("config/forensics.yml")
