from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from dataclasses import replace
from datetime import UTC, datetime
from pathlib import Path

from ..config.loader import DetectionThresholds, ForensicsConfig
from ..excel.reader import WorkbookReadError, load_sheets
from ..models.analysis_result import AnalysisResult, StrategyTimingAccumulator
from ..models.column_categorization import ColumnCategorization
from ..models.sheet import Sheet
from ..models.strategy_results import StrategyName, StrategyResult
from ..models.workbook_report import FileStatus, SheetReport, WorkbookReport
from ..strategies.duplicate_rows import find_duplicate_rows
from ..strategies.individual_numbers import find_duplicate_values
from ..strategies.repeated_sequences import find_repeated_column_sequences
from .categorization import ColumnCategorizer, ConfiguredColumnCategorizer, HeuristicColumnCategorizer
from .progress import ProgressTracker, SheetProgressIndicator
from .summary import render_sheet_findings

"""Analysis orchestration.

Coordinates a run: scan the source directory for workbooks, load each one,
categorize the columns of every sheet, run the enabled strategies in order,
time them, and aggregate the findings into an AnalysisResult.

A workbook that cannot be read is reported as failed and the run continues;
only a missing or unreadable source directory is fatal.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "ProcessingError",
    "scan_excel_files",
    "run_strategies",
    "analyze_sheet",
    "analyze_workbook",
    "default_categorizer",
    "process_all",
]


class ProcessingError(Exception):
    """Fatal error that stops the whole run."""
    pass


StrategyRunner = Callable[[Sheet, ColumnCategorization, DetectionThresholds], StrategyResult]


def _run_individual_numbers(
    sheet: Sheet, categorization: ColumnCategorization, thresholds: DetectionThresholds
) -> StrategyResult:
    return find_duplicate_values(
        sheet, min_size_adjusted_entropy=thresholds.min_size_adjusted_value_entropy
    )


def _run_repeated_column_sequences(
    sheet: Sheet, categorization: ColumnCategorization, thresholds: DetectionThresholds
) -> StrategyResult:
    return find_repeated_column_sequences(
        sheet,
        min_length=thresholds.min_sequence_length,
        max_value_occurrences=thresholds.max_value_occurrences,
    )


def _run_duplicate_rows(
    sheet: Sheet, categorization: ColumnCategorization, thresholds: DetectionThresholds
) -> StrategyResult:
    return find_duplicate_rows(
        sheet,
        categorization,
        min_number_entropy=thresholds.min_number_entropy,
        min_size_adjusted_row_entropy_score=thresholds.min_size_adjusted_row_entropy_score,
        min_shared_columns=thresholds.min_shared_columns,
        max_duplicate_rows=thresholds.max_duplicate_rows,
    )


STRATEGY_RUNNERS: dict[StrategyName, StrategyRunner] = {
    StrategyName.INDIVIDUAL_NUMBERS: _run_individual_numbers,
    StrategyName.REPEATED_COLUMN_SEQUENCES: _run_repeated_column_sequences,
    StrategyName.DUPLICATE_ROWS: _run_duplicate_rows,
}


def scan_excel_files(directory: Path) -> list[Path]:
    """Scan directory for .xlsx files (non-recursive), sorted by name.

    Raises:
        ProcessingError: If directory doesn't exist or can't be read
    """
    if not directory.exists():
        raise ProcessingError(f"Directory not found: {directory}")

    if not directory.is_dir():
        raise ProcessingError(f"Path is not a directory: {directory}")

    try:
        # "~$" files are Excel lock files
        return sorted(
            p for p in directory.iterdir()
            if p.is_file() and p.suffix == ".xlsx" and not p.name.startswith("~$")
        )
    except OSError as e:
        raise ProcessingError(f"Error reading directory {directory}: {e}") from e


def run_strategies(
    sheet: Sheet,
    categorization: ColumnCategorization,
    strategies: Sequence[StrategyName],
    thresholds: DetectionThresholds | None = None,
) -> list[StrategyResult]:
    """Run strategies on one sheet in the given order, timing each one."""
    thresholds = thresholds or DetectionThresholds()
    results: list[StrategyResult] = []
    for name in strategies:
        started = time.perf_counter()
        result = STRATEGY_RUNNERS[name](sheet, categorization, thresholds)
        elapsed = time.perf_counter() - started
        logger.debug(f"sheet '{sheet.name}': {name.value} took {elapsed:.4f}s")
        results.append(replace(result, execution_time=elapsed))
    return results


def analyze_sheet(sheet: Sheet, categorizer: ColumnCategorizer, config: ForensicsConfig) -> SheetReport:
    categorization = categorizer.categorize(sheet)
    logger.debug(
        f"sheet '{sheet.name}': unique columns ({categorization.source}) = {categorization.unique}"
    )
    results = run_strategies(sheet, categorization, config.strategies, config.thresholds)
    return SheetReport(sheet_name=sheet.name, categorization=categorization, results=results)


def analyze_workbook(path: Path, config: ForensicsConfig, categorizer: ColumnCategorizer) -> WorkbookReport:
    """Analyze every sheet of one workbook; read errors yield a failed report."""
    started = time.perf_counter()
    try:
        sheets, skipped = load_sheets(path, header_row=config.header_row, max_rows=config.max_rows)
    except WorkbookReadError as e:
        logger.error(f"file={path.name} {e}")
        return WorkbookReport(
            path=path,
            name=path.name,
            status=FileStatus.FAILED,
            elapsed_seconds=time.perf_counter() - started,
            error=str(e),
        )

    indicator = SheetProgressIndicator(path.name, len(sheets))
    reports: list[SheetReport] = []
    for sheet in sheets:
        indicator.start_sheet(sheet.name)
        report = analyze_sheet(sheet, categorizer, config)
        indicator.finish_sheet(report.duplicate_values + report.sequences + report.duplicate_rows)
        for line in render_sheet_findings(report):
            logger.info(f"file={path.name} {line}")
        reports.append(report)

    return WorkbookReport(
        path=path,
        name=path.name,
        status=FileStatus.SUCCESS,
        sheets=reports,
        skipped_sheets=skipped,
        elapsed_seconds=time.perf_counter() - started,
    )


def default_categorizer(config: ForensicsConfig) -> ColumnCategorizer:
    """Config lists first, distinct-ratio heuristic for sheets the config does not name."""
    return ConfiguredColumnCategorizer(config.column_categories, fallback=HeuristicColumnCategorizer())


def process_all(config: ForensicsConfig, categorizer: ColumnCategorizer | None = None) -> AnalysisResult:
    """Analyze all workbooks in the configured directory.

    Raises:
        ProcessingError: if the source directory is missing or unreadable
    """
    start_time = datetime.now(UTC)
    categorizer = categorizer or default_categorizer(config)
    file_paths = scan_excel_files(Path(config.source_directory))

    timings = StrategyTimingAccumulator()
    workbook_reports: list[WorkbookReport] = []
    with ProgressTracker(len(file_paths)) as progress:
        for path in file_paths:
            progress.start_file(path)
            report = analyze_workbook(path, config, categorizer)
            workbook_reports.append(report)
            findings = 0
            for sheet_report in report.sheets:
                findings += sheet_report.duplicate_values + sheet_report.sequences + sheet_report.duplicate_rows
                for result in sheet_report.results:
                    timings.add(result.name, result.execution_time)
            progress.finish_file(success=report.status is FileStatus.SUCCESS, findings=findings)

    for name in config.strategies:
        runs, mean, p95 = timings.get_stats(name)
        if runs:
            logger.debug(f"{name.value}: runs={runs} mean_sec={mean:.4f} p95_sec={p95:.4f}")

    sheet_reports = [s for w in workbook_reports for s in w.sheets]
    end_time = datetime.now(UTC)
    return AnalysisResult(
        success_files=sum(1 for w in workbook_reports if w.status is FileStatus.SUCCESS),
        failed_files=sum(1 for w in workbook_reports if w.status is FileStatus.FAILED),
        total_sheets=len(sheet_reports),
        duplicate_values=sum(s.duplicate_values for s in sheet_reports),
        sequences=sum(s.sequences for s in sheet_reports),
        duplicate_rows=sum(s.duplicate_rows for s in sheet_reports),
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        workbook_reports=workbook_reports,
    )
