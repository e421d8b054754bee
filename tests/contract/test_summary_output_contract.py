from __future__ import annotations

import re
from pathlib import Path

from sheet_forensics.cli import main as cli_main

"""SUMMARY line format contract: one line, fixed key order, last line of a run."""

SUMMARY_PATTERN = re.compile(
    r"^SUMMARY\s+files=([0-9]+)/([0-9]+)\s+failed=([0-9]+)\s+sheets=([0-9]+)\s+"
    r"duplicate_values=([0-9]+)\s+sequences=([0-9]+)\s+duplicate_rows=([0-9]+)\s+"
    r"elapsed_sec=([0-9]+\.?[0-9]*)$"
)


def test_summary_pattern_example_line():
    line = (
        "SUMMARY files=1/1 failed=0 sheets=2 duplicate_values=3 sequences=0 "
        "duplicate_rows=1 elapsed_sec=0.84"
    )
    assert SUMMARY_PATTERN.match(line), "SUMMARY line should match contract regex"


def test_summary_is_last_line_of_run(temp_workdir: Path, write_config, excel_factory, measurements_rows, capsys):
    excel_factory(temp_workdir / "data", "lab.xlsx", {"Measurements": measurements_rows})
    assert cli_main([]) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert sum(1 for line in lines if line.startswith("SUMMARY")) == 1
    match = SUMMARY_PATTERN.match(lines[-1])
    assert match, lines[-1]
    files_ok, files_total, failed, sheets = (int(g) for g in match.group(1, 2, 3, 4))
    assert (files_ok, files_total, failed, sheets) == (1, 1, 0, 1)
    assert int(match.group(7)) == 1
