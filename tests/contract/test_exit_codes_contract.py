from __future__ import annotations

import re
from pathlib import Path

from sheet_forensics.cli import main as cli_main
from sheet_forensics.cli.__main__ import EXIT_FATAL, EXIT_PARTIAL_FAILURE, EXIT_SUCCESS_ALL

"""Exit code contract tests: 0 all files analyzed, 1 fatal startup error, 2 some files failed."""


def test_exit_code_values():
    assert (EXIT_SUCCESS_ALL, EXIT_FATAL, EXIT_PARTIAL_FAILURE) == (0, 1, 2)


def test_exit_code_fatal_startup(temp_workdir: Path, capsys):
    # config/forensics.yml missing -> exit 1
    code = cli_main([])
    captured = capsys.readouterr()
    assert code == 1
    assert "ERROR config:" in captured.out


def test_exit_code_fatal_invalid_config(temp_workdir: Path, capsys):
    (temp_workdir / "config" / "forensics.yml").write_text("source_directory: ./data\nunknown: 1\n", encoding="utf-8")
    code = cli_main([])
    assert code == 1
    assert "ERROR config: config validation failed" in capsys.readouterr().out


def test_exit_code_all_success(temp_workdir: Path, write_config, excel_factory, measurements_rows, capsys):
    data_dir = temp_workdir / "data"
    excel_factory(data_dir, "lab_a.xlsx", {"Measurements": measurements_rows})
    excel_factory(data_dir, "lab_b.xlsx", {"Other": [["x"], [1]]})

    code = cli_main([])
    out = capsys.readouterr().out
    assert code == 0
    assert "SUMMARY files=2/2 failed=0" in out


def test_exit_code_partial_failure(temp_workdir: Path, write_config, excel_factory, measurements_rows, capsys):
    """Exit code 2 when some files fail but others succeed."""
    data_dir = temp_workdir / "data"
    excel_factory(data_dir, "success.xlsx", {"Measurements": measurements_rows})
    (data_dir / "failure.xlsx").write_bytes(b"")

    code = cli_main([])
    out = capsys.readouterr().out
    assert code == 2
    assert "SUMMARY files=1/2" in out
    match = re.search(r"failed=(\d+)", out)
    assert match is not None, f"No 'failed=' found in output: {out}"
    assert int(match.group(1)) == 1
    assert "ERROR file=failure.xlsx" in out
