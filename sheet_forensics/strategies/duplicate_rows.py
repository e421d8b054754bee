from __future__ import annotations

import logging
from collections.abc import Iterator

from ..analysis.entropy import number_entropy
from ..models.column_categorization import ColumnCategorization
from ..models.duplicate_row import DuplicateRow
from ..models.enhanced_cell import EnhancedCell
from ..models.sheet import Sheet
from ..models.strategy_results import DuplicateRowsResult

"""Duplicate row detection.

Finds row pairs that share several high-entropy values in columns expected
to hold unique identifiers. Only values whose entropy signature reaches
MIN_NUMBER_ENTROPY are indexed, which keeps the index small and ignores
common values such as 0, 1, round numbers and years.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "MIN_NUMBER_ENTROPY",
    "MIN_SIZE_ADJUSTED_ROW_ENTROPY_SCORE",
    "MIN_SHARED_COLUMNS",
    "MAX_DUPLICATE_ROWS",
    "compare_rows",
    "resolve_unique_columns",
    "find_duplicate_rows",
]

# A value must have at least this entropy signature to seed a comparison
MIN_NUMBER_ENTROPY = 200
# Reported pairs need a size-adjusted row entropy score above this
MIN_SIZE_ADJUSTED_ROW_ENTROPY_SCORE = 4
# Reported pairs need at least this many shared columns
MIN_SHARED_COLUMNS = 2
# Hard cap on reported pairs per sheet
MAX_DUPLICATE_ROWS = 1000


def resolve_unique_columns(sheet: Sheet, categorization: ColumnCategorization) -> list[int]:
    """Physical numeric column indices behind the categorization's unique names."""
    numeric = set(sheet.numeric_column_indices)
    indices: list[int] = []
    for name in categorization.unique:
        for index in sheet.get_column_indices_of_combined_column_name(name):
            if index in numeric and index not in indices:
                indices.append(index)
    return indices


def compare_rows(
    row1: list[EnhancedCell], row2: list[EnhancedCell], col_indices: list[int], sheet: Sheet
) -> DuplicateRow:
    """Compare two full rows on every unique column and score what they share."""
    shared_values: list[float] = []
    shared_columns: list[int] = []
    for col in col_indices:
        cell1 = row1[col] if col < len(row1) else None
        cell2 = row2[col] if col < len(row2) else None
        if cell1 is None or cell2 is None:
            continue
        if cell1.is_analyzable and cell2.is_analyzable and cell1.value == cell2.value:
            shared_values.append(cell1.value)
            shared_columns.append(col)

    return DuplicateRow.create(
        (row1[0].row, row2[0].row),
        shared_values,
        shared_columns,
        sheet,
        compared_columns=len(col_indices),
    )


def _candidate_pairs(rows_by_value_by_column: dict[int, dict[float, set[int]]]) -> Iterator[tuple[int, int]]:
    """Yield (lower, higher) row pairs sharing an indexed value; repeats are possible."""
    for value_map in rows_by_value_by_column.values():
        for row_set in value_map.values():
            if len(row_set) < 2:
                continue
            row_list = sorted(row_set)
            for i, first in enumerate(row_list):
                for second in row_list[i + 1:]:
                    yield first, second


def find_duplicate_rows(
    sheet: Sheet,
    categorization: ColumnCategorization,
    *,
    min_number_entropy: float = MIN_NUMBER_ENTROPY,
    min_size_adjusted_row_entropy_score: float = MIN_SIZE_ADJUSTED_ROW_ENTROPY_SCORE,
    min_shared_columns: int = MIN_SHARED_COLUMNS,
    max_duplicate_rows: int = MAX_DUPLICATE_ROWS,
) -> DuplicateRowsResult:
    """Find row pairs that are implausibly similar in unique columns.

    Steps:
    1. Resolve unique column names to numeric column indices (none → empty result)
    2. Index value → rows per column, for high-entropy values only
    3. Enumerate each row pair sharing an indexed value, once per pair
    4. Compare the pair across all unique columns and keep it if it shares
       enough columns with enough size-adjusted entropy
    5. Sort by entropy score, then shared count, both descending

    The max_duplicate_rows cap is global: once reached no further pair is
    compared and the result is marked truncated.
    """
    unique_columns = resolve_unique_columns(sheet, categorization)
    if not unique_columns:
        logger.debug(f"sheet '{sheet.name}': no numeric unique columns, skipping duplicate rows")
        return DuplicateRowsResult(duplicate_rows=[])

    rows_by_value_by_column: dict[int, dict[float, set[int]]] = {col: {} for col in unique_columns}
    for row_index in range(1, sheet.num_rows):  # row 0 is the header
        row = sheet.enhanced_matrix[row_index]
        for col in unique_columns:
            cell = row[col] if col < len(row) else None
            if cell is None or not cell.is_analyzable:
                continue
            if number_entropy(cell.value) < min_number_entropy:
                continue
            rows_by_value_by_column[col].setdefault(cell.value, set()).add(row_index)

    duplicate_rows: list[DuplicateRow] = []
    already_compared: set[tuple[int, int]] = set()
    truncated = False
    for pair in _candidate_pairs(rows_by_value_by_column):
        if pair in already_compared:
            continue
        if len(duplicate_rows) >= max_duplicate_rows:
            truncated = True
            logger.warning(f"sheet '{sheet.name}': stopped after {max_duplicate_rows} duplicate row pairs")
            break
        already_compared.add(pair)
        first, second = pair
        duplicate_row = compare_rows(
            sheet.enhanced_matrix[first], sheet.enhanced_matrix[second], unique_columns, sheet
        )
        if (
            duplicate_row.matrix_size_adjusted_entropy_score > min_size_adjusted_row_entropy_score
            and duplicate_row.total_shared_count >= min_shared_columns
        ):
            duplicate_rows.append(duplicate_row)

    duplicate_rows.sort(key=lambda d: (-d.row_entropy_score, -d.total_shared_count))
    return DuplicateRowsResult(duplicate_rows=duplicate_rows, truncated=truncated)
