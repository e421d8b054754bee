"""Domain models for spreadsheet forensics.

Cells and sheets describe the loaded data; findings (duplicate values,
repeated column sequences, duplicate rows) carry their own scores; reports
aggregate strategy results per sheet, workbook and run.
"""

from .analysis_result import AnalysisResult, StrategyTimingAccumulator
from .column_categorization import ColumnCategorization
from .duplicate_row import DuplicateRow
from .duplicate_value import DuplicateValue
from .enhanced_cell import EnhancedCell
from .repeated_column_sequence import Position, RepeatedColumnSequence
from .sheet import Sheet
from .strategy_results import (
    DuplicateRowsResult,
    IndividualNumbersResult,
    RepeatedColumnSequencesResult,
    StrategyName,
)
from .suspicion import InvalidFindingError, SuspicionLevel
from .workbook_report import FileStatus, SheetReport, WorkbookReport

__all__ = [
    # Loaded data
    "EnhancedCell",
    "Sheet",
    "ColumnCategorization",
    # Findings
    "DuplicateRow",
    "DuplicateValue",
    "Position",
    "RepeatedColumnSequence",
    "SuspicionLevel",
    "InvalidFindingError",
    # Results
    "StrategyName",
    "IndividualNumbersResult",
    "RepeatedColumnSequencesResult",
    "DuplicateRowsResult",
    "FileStatus",
    "SheetReport",
    "WorkbookReport",
    "AnalysisResult",
    "StrategyTimingAccumulator",
]
