from __future__ import annotations

import re
from pathlib import Path
from typing import Any

import pandas as pd
import pytest

from sheet_forensics.cli import main as cli_main

"""Integration test: a full run over two workbooks with planted fabrications.

plate_reader.xlsx
- Counts: rows 1-4 of count_a were pasted into count_b two rows lower
  (one repeated sequence, four duplicated values)
- Samples: row 4 is a copy of row 2 apart from the batch number
  (one duplicate row pair, three duplicated values)
clean.xlsx
- Inventory: round quantities and years only, nothing to report
"""

CONFIG_YAML = """source_directory: ./data
header_row: 1
column_categories:
  Counts:
    unique: [sample_id, count_a, count_b]
  Samples:
    unique: [sample_id, weight_mg, volume_ul]
    other: [batch]
"""


@pytest.fixture
def multi_file_excel_setup(temp_workdir: Path, excel_factory) -> dict[str, Any]:
    data_dir = temp_workdir / "data"
    (temp_workdir / "config" / "forensics.yml").write_text(CONFIG_YAML, encoding="utf-8")

    count_a = [48213977, 93648205, 71125893, 82904716, 31415927, 27182819, 16180339, 57721567]
    count_b = [64937281, 75391846, 48213977, 93648205, 71125893, 82904716, 38461529, 29571843]
    plate_reader = excel_factory(
        data_dir,
        "plate_reader.xlsx",
        {
            "Counts": [["Plate reader export"], ["sample_id", "count_a", "count_b"]]
            + [[1001 + i, a, b] for i, (a, b) in enumerate(zip(count_a, count_b))],
            "Samples": [
                ["Sample register"],
                ["sample_id", "weight_mg", "volume_ul", "batch"],
                [50912837, 3418297, 7265193, 1],
                [61829374, 2947361, 8163927, 1],
                [72938416, 3859217, 6391842, 2],
                [61829374, 2947361, 8163927, 2],
                [83947152, 4172639, 5928371, 3],
            ],
        },
    )
    clean = excel_factory(
        data_dir,
        "clean.xlsx",
        {
            "Inventory": [
                ["Stock list"],
                ["item", "year", "qty"],
                ["bolt", 2019, 100],
                ["nut", 2020, 250],
                ["washer", 2021, 100],
            ]
        },
    )
    # Excel lock files are never analyzed
    (data_dir / "~$clean.xlsx").write_bytes(b"lock")
    return {"plate_reader": plate_reader, "clean": clean}


def test_multi_file_run_success_integration(
    temp_workdir: Path, multi_file_excel_setup: dict[str, Any], capsys: Any
) -> None:
    exit_code = cli_main([])
    output = capsys.readouterr().out

    assert exit_code == 0, f"Expected exit code 0 (success), got {exit_code}"
    summary = re.search(
        r"^SUMMARY files=(\d+)/(\d+) failed=(\d+) sheets=(\d+) duplicate_values=(\d+) "
        r"sequences=(\d+) duplicate_rows=(\d+) elapsed_sec=(\d+\.?\d*)$",
        output,
        re.MULTILINE,
    )
    assert summary is not None, f"SUMMARY line not found or malformed in output: {output}"
    assert tuple(int(g) for g in summary.groups()[:7]) == (2, 2, 0, 3, 7, 1, 1)

    # Findings are reported with workbook coordinates (title row is row 1)
    assert "INFO file=plate_reader.xlsx   B3<->C5 length=4 level=High" in output
    assert "INFO file=plate_reader.xlsx   rows=4,6 shared=3/3" in output
    assert "INFO file=clean.xlsx [Inventory] individual_numbers findings=0" in output
    assert "ERROR" not in output
    assert "WARN" not in output


def test_multi_file_excel_fixture_creates_valid_files(multi_file_excel_setup: dict[str, Any]) -> None:
    """Verify the fixture writes readable workbooks with the expected layout."""
    plate_reader = pd.ExcelFile(multi_file_excel_setup["plate_reader"])
    assert set(plate_reader.sheet_names) == {"Counts", "Samples"}
    counts = plate_reader.parse("Counts", header=None)
    assert len(counts) == 10
    assert counts.iloc[1, 0] == "sample_id"
