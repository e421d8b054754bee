from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..analysis.entropy import sequence_entropy_score
from .suspicion import InvalidFindingError

if TYPE_CHECKING:
    from .sheet import Sheet

"""DuplicateRow: two rows sharing values in columns expected to be unique."""

__all__ = [
    "DuplicateRow",
]


@dataclass(frozen=True)
class DuplicateRow:
    """A pair of rows and the values they share.

    shared_values[i] was found in column shared_columns[i] of both rows.
    """
    rows: tuple[int, int]  # matrix row indices, lower first
    row_numbers: tuple[int, int]  # 1-based workbook rows
    shared_values: tuple[float, ...]
    shared_columns: tuple[int, ...]
    total_shared_count: int
    row_entropy_score: float
    matrix_size_adjusted_entropy_score: float
    compared_columns: int  # unique columns the rows were compared on
    number_count: int
    sheet_name: str

    @staticmethod
    def create(
        rows: tuple[int, int],
        shared_values: Sequence[float],
        shared_columns: Sequence[int],
        sheet: Sheet,
        compared_columns: int,
    ) -> DuplicateRow:
        """Score a row pair.

        Raises:
            InvalidFindingError: for identical rows, no shared values or
                misaligned value/column lists
        """
        first, second = rows
        if first == second:
            raise InvalidFindingError(f"duplicate row pair uses the same row twice: {first}")
        if not shared_values:
            raise InvalidFindingError(f"rows {first} and {second} share no values")
        if len(shared_values) != len(shared_columns):
            raise InvalidFindingError(
                f"shared values ({len(shared_values)}) and columns ({len(shared_columns)}) differ in length"
            )

        low, high = min(first, second), max(first, second)
        score = sequence_entropy_score(shared_values)
        return DuplicateRow(
            rows=(low, high),
            row_numbers=(sheet.first_row_number + low, sheet.first_row_number + high),
            shared_values=tuple(shared_values),
            shared_columns=tuple(shared_columns),
            total_shared_count=len(shared_values),
            row_entropy_score=score,
            matrix_size_adjusted_entropy_score=score / sheet.log_number_count_modifier,
            compared_columns=compared_columns,
            number_count=sheet.num_numeric_cells,
            sheet_name=sheet.name,
        )
