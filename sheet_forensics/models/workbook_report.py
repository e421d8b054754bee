from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from .column_categorization import ColumnCategorization
from .strategy_results import (
    DuplicateRowsResult,
    IndividualNumbersResult,
    RepeatedColumnSequencesResult,
    StrategyResult,
)

"""Per-workbook and per-sheet analysis reports.

A WorkbookReport tracks one .xlsx file through analysis, from pending to
success/failed, and holds a SheetReport for every sheet that loaded.
"""

__all__ = [
    "FileStatus",
    "SheetReport",
    "WorkbookReport",
]


class FileStatus(Enum):
    """Analysis lifecycle of a workbook.

    State transitions: pending → analyzing → (success | failed)
    """
    PENDING = "pending"
    ANALYZING = "analyzing"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class SheetReport:
    sheet_name: str
    categorization: ColumnCategorization
    results: list[StrategyResult] = field(default_factory=list)

    def _first(self, kind: type) -> StrategyResult | None:
        for result in self.results:
            if isinstance(result, kind):
                return result
        return None

    @property
    def duplicate_values(self) -> int:
        result = self._first(IndividualNumbersResult)
        return result.findings if result else 0

    @property
    def sequences(self) -> int:
        result = self._first(RepeatedColumnSequencesResult)
        return result.findings if result else 0

    @property
    def duplicate_rows(self) -> int:
        result = self._first(DuplicateRowsResult)
        return result.findings if result else 0


@dataclass(frozen=True)
class WorkbookReport:
    path: Path
    name: str
    status: FileStatus = FileStatus.PENDING
    sheets: list[SheetReport] = field(default_factory=list)
    skipped_sheets: int = 0  # sheets that failed to load
    elapsed_seconds: float = 0.0
    error: str | None = None  # failure reason summary
