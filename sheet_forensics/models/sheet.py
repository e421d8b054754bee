from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Any

from .enhanced_cell import EnhancedCell, is_blank_value

"""Sheet model: the cell matrix of one worksheet plus derived statistics.

Row 0 of the matrix is the header row. Column names are resolved from it,
with merged headers (a named cell followed by blank cells) and repeated names
both mapping one logical name to several physical columns.
"""

__all__ = [
    "Sheet",
    "log_number_count_modifier",
]

# A column is numeric when at least this share of its non-blank data cells is analyzable
NUMERIC_COLUMN_MIN_SHARE = 0.5


def log_number_count_modifier(num_numeric_cells: int) -> float:
    """Sheet-size discount: >= 1 and strictly increasing in the numeric cell count.

    Larger sheets produce more coincidental matches, so their scores are divided
    by a larger modifier.
    """
    return math.log10(num_numeric_cells + 10)


class Sheet:
    """Read-only view of a worksheet used by the detection strategies."""

    def __init__(self, name: str, enhanced_matrix: list[list[EnhancedCell]], first_row_number: int = 1) -> None:
        self.name = name
        self.first_row_number = first_row_number  # workbook row of the header
        self.enhanced_matrix = enhanced_matrix
        self.num_rows = len(enhanced_matrix)
        self.num_columns = max((len(r) for r in enhanced_matrix), default=0)
        self.column_names = self._resolve_column_names()
        self._column_indices_by_name: dict[str, list[int]] = {}
        for index, column_name in enumerate(self.column_names):
            if column_name:
                self._column_indices_by_name.setdefault(column_name, []).append(index)

        self.numeric_column_indices: list[int] = []
        self.num_numeric_cells = 0
        for col in range(self.num_columns):
            analyzable = 0
            non_blank = 0
            for row in enhanced_matrix[1:]:
                cell = row[col] if col < len(row) else None
                if cell is None or is_blank_value(cell.value):
                    continue
                non_blank += 1
                if cell.is_analyzable:
                    analyzable += 1
            self.num_numeric_cells += analyzable
            if analyzable and analyzable >= NUMERIC_COLUMN_MIN_SHARE * non_blank:
                self.numeric_column_indices.append(col)

        self.log_number_count_modifier = log_number_count_modifier(self.num_numeric_cells)

    @classmethod
    def from_rows(cls, name: str, rows: Sequence[Sequence[Any]], first_row_number: int = 1) -> Sheet:
        """Build a sheet from raw row values; the first row is the header.

        first_row_number is the 1-based workbook row of the header, used for cell ids.
        """
        width = max((len(r) for r in rows), default=0)
        matrix = [
            [
                EnhancedCell.create(r, c, row[c] if c < len(row) else None, first_row_number)
                for c in range(width)
            ]
            for r, row in enumerate(rows)
        ]
        return cls(name, matrix, first_row_number)

    def _resolve_column_names(self) -> list[str]:
        if not self.enhanced_matrix:
            return []
        header = self.enhanced_matrix[0]
        names: list[str] = []
        previous = ""
        for col in range(self.num_columns):
            value = header[col].value if col < len(header) else None
            if is_blank_value(value):
                # Continuation of a merged header cell
                names.append(previous)
                continue
            if isinstance(value, float) and value.is_integer():
                value = int(value)
            previous = str(value).strip()
            names.append(previous)
        return names

    def get_column_indices_of_combined_column_name(self, name: str) -> list[int]:
        return list(self._column_indices_by_name.get(name.strip(), []))

    def cell(self, row: int, column: int) -> EnhancedCell | None:
        if row >= self.num_rows:
            return None
        cells = self.enhanced_matrix[row]
        return cells[column] if column < len(cells) else None

    def __repr__(self) -> str:
        return (
            f"Sheet(name={self.name!r}, rows={self.num_rows}, columns={self.num_columns}, "
            f"numeric_cells={self.num_numeric_cells})"
        )
