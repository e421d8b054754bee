from __future__ import annotations

from ..models.analysis_result import AnalysisResult
from ..models.strategy_results import (
    DuplicateRowsResult,
    IndividualNumbersResult,
    RepeatedColumnSequencesResult,
)
from ..models.workbook_report import SheetReport

"""Rendering of finding lines and the SUMMARY line.

SUMMARY line format:
SUMMARY files={ok}/{total} failed={failed} sheets={sheets} duplicate_values={n}
sequences={n} duplicate_rows={n} elapsed_sec={elapsed}
"""

__all__ = [
    "format_number",
    "render_summary_line",
    "render_sheet_findings",
]

# Finding lines per strategy and sheet; the rest is summarized as a count
MAX_LINES_PER_STRATEGY = 20


def format_number(value: float) -> str:
    """Format a float without scientific notation or a needless '.0'."""
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if abs(value) < 0.01:
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return f"{value:.3f}".rstrip("0").rstrip(".")


def render_summary_line(result: AnalysisResult) -> str:
    """Render the SUMMARY line for a whole run.

    Examples:
        >>> from datetime import datetime, timezone
        >>> start = datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
        >>> end = datetime(2024, 1, 1, 10, 0, 2, tzinfo=timezone.utc)
        >>> result = AnalysisResult(
        ...     success_files=1, failed_files=0, total_sheets=2, duplicate_values=3,
        ...     sequences=0, duplicate_rows=1, start_time=start, end_time=end,
        ...     elapsed_seconds=2.0,
        ... )
        >>> render_summary_line(result)
        'SUMMARY files=1/1 failed=0 sheets=2 duplicate_values=3 sequences=0 duplicate_rows=1 elapsed_sec=2'
    """
    return (
        f"SUMMARY files={result.success_files}/{result.total_files} "
        f"failed={result.failed_files} "
        f"sheets={result.total_sheets} "
        f"duplicate_values={result.duplicate_values} "
        f"sequences={result.sequences} "
        f"duplicate_rows={result.duplicate_rows} "
        f"elapsed_sec={format_number(result.elapsed_seconds)}"
    )


def _cap(lines: list[str], total: int, label: str) -> list[str]:
    if total > MAX_LINES_PER_STRATEGY:
        lines = lines[:MAX_LINES_PER_STRATEGY]
        lines.append(f"  ... {total - MAX_LINES_PER_STRATEGY} more {label}")
    return lines


def render_sheet_findings(report: SheetReport) -> list[str]:
    """Human-readable lines for every finding on one sheet, most suspicious first."""
    lines: list[str] = []
    for result in report.results:
        prefix = f"[{report.sheet_name}] {result.name.value}"
        if isinstance(result, IndividualNumbersResult):
            body = [
                f"  value={d.value!r} cells={','.join(d.cell_ids)} "
                f"score={format_number(d.matrix_size_adjusted_entropy_score)}"
                for d in result.duplicate_values
            ]
            body = _cap(body, len(result.duplicate_values), "values")
        elif isinstance(result, RepeatedColumnSequencesResult):
            body = [
                f"  {s.positions[0].cell_id}<->{s.positions[1].cell_id} length={s.length} "
                f"level={s.suspicion_level.label} score={format_number(s.matrix_size_adjusted_entropy_score)}"
                for s in result.sequences
            ]
            body = _cap(body, len(result.sequences), "sequences")
        elif isinstance(result, DuplicateRowsResult):
            body = [
                f"  rows={d.row_numbers[0]},{d.row_numbers[1]} shared={d.total_shared_count}/{d.compared_columns} "
                f"score={format_number(d.matrix_size_adjusted_entropy_score)}"
                for d in result.duplicate_rows
            ]
            body = _cap(body, len(result.duplicate_rows), "row pairs")
        else:  # pragma: no cover
            continue
        lines.append(
            f"{prefix} findings={result.findings} time_sec={format_number(result.execution_time)}"
        )
        lines.extend(body)
    return lines
