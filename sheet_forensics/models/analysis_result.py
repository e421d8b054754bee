from __future__ import annotations

import statistics
from dataclasses import dataclass, field
from datetime import datetime

from .strategy_results import StrategyName
from .workbook_report import WorkbookReport

"""Aggregated results of one analysis run across all workbooks."""

__all__ = [
    "AnalysisResult",
    "StrategyTimingAccumulator",
]


@dataclass(frozen=True)
class AnalysisResult:
    """Totals for the SUMMARY line plus the per-workbook reports."""
    success_files: int
    failed_files: int
    total_sheets: int
    duplicate_values: int
    sequences: int
    duplicate_rows: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    workbook_reports: list[WorkbookReport] = field(default_factory=list)

    @property
    def total_files(self) -> int:
        return self.success_files + self.failed_files


class StrategyTimingAccumulator:
    """Collects per-sheet strategy execution times and summarizes them."""

    def __init__(self) -> None:
        self.times: dict[StrategyName, list[float]] = {}

    def add(self, name: StrategyName, elapsed_seconds: float) -> None:
        self.times.setdefault(name, []).append(elapsed_seconds)

    def get_stats(self, name: StrategyName) -> tuple[int, float, float]:
        """Return (runs, mean seconds, p95 seconds) for one strategy."""
        samples = self.times.get(name, [])
        if not samples:
            return (0, 0.0, 0.0)
        if len(samples) == 1:
            return (1, samples[0], samples[0])
        # 19th of 20 inclusive quantiles is the 95th percentile
        p95 = statistics.quantiles(samples, n=20, method="inclusive")[18]
        return (len(samples), statistics.mean(samples), p95)
