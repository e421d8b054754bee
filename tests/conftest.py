# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path
import pandas as pd
import pytest

from sheet_forensics.logging.init import reset_logging
from sheet_forensics.models.sheet import Sheet


@pytest.fixture(autouse=True)
def _fresh_logging():
    # Handlers bind sys.stdout when created; capsys swaps it per test
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_directory: ./data
header_row: 0
max_rows: 5000
strategies: [individual_numbers, repeated_column_sequences, duplicate_rows]
column_categories:
  Measurements:
    unique: [sample_id, weight, concentration, volume]
    other: [batch]
thresholds:
  min_number_entropy: 200
  min_shared_columns: 2
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "forensics.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def measurements_rows() -> list[list[object]]:
    """Header + 6 rows; rows 2 and 5 share sample_id, weight and concentration."""
    return [
        ["sample_id", "weight", "concentration", "volume", "batch"],
        [48213977, 12.48731, 0.0347219, 1.25, 1],
        [59310428, 17.90412, 0.0581376, 2.75, 1],
        [71125893, 14.66159, 0.0412987, 3.5, 2],
        [82904716, 11.30584, 0.0695402, 1.75, 2],
        [59310428, 17.90412, 0.0581376, 4.25, 3],
        [93648205, 19.02767, 0.0263848, 2.25, 3],
    ]


@pytest.fixture()
def measurements_sheet(measurements_rows) -> Sheet:
    return Sheet.from_rows("Measurements", measurements_rows)


def make_excel_file(directory: Path, name: str, sheets: dict[str, list[list[object]]]) -> Path:
    """Write a real workbook, one raw row list per sheet (no pandas header)."""
    excel_path = directory / name
    with pd.ExcelWriter(excel_path, engine="openpyxl") as writer:
        for sheet_name, rows in sheets.items():
            pd.DataFrame(rows).to_excel(writer, sheet_name=sheet_name, header=False, index=False)
    return excel_path


@pytest.fixture()
def excel_factory():
    return make_excel_file
