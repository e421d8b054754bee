from __future__ import annotations

import logging

from ..models.repeated_column_sequence import Position, RepeatedColumnSequence
from ..models.sheet import Sheet
from ..models.strategy_results import RepeatedColumnSequencesResult
from ..models.suspicion import SuspicionLevel

"""Repeated column sequence discovery.

Finds maximal runs of equal values between two column segments: two
different columns, or one column at two different start rows (copy-pasted
blocks). Every run of at least min_length values is scored with
RepeatedColumnSequence and kept when its suspicion level is above None.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "MIN_SEQUENCE_LENGTH",
    "MAX_VALUE_OCCURRENCES",
    "find_repeated_column_sequences",
]

MIN_SEQUENCE_LENGTH = 3
# Values occurring more often than this are too common to seed a run
MAX_VALUE_OCCURRENCES = 50

Cell = tuple[int, int]  # (column, row)


def _matches(sheet: Sheet, a: Cell, b: Cell) -> bool:
    (col_a, row_a), (col_b, row_b) = a, b
    if min(row_a, row_b) < 1 or max(row_a, row_b) >= sheet.num_rows:
        return False
    cell_a = sheet.cell(row_a, col_a)
    cell_b = sheet.cell(row_b, col_b)
    if cell_a is None or cell_b is None:
        return False
    return cell_a.is_analyzable and cell_b.is_analyzable and cell_a.value == cell_b.value


def _extend_run(sheet: Sheet, a: Cell, b: Cell) -> tuple[Cell, Cell, int]:
    """Grow the match at (a, b) to a maximal run; return both starts and the length."""
    (col_a, row_a), (col_b, row_b) = a, b
    # Segments of the same column must not overlap
    max_length = abs(row_b - row_a) if col_a == col_b else sheet.num_rows

    start = 0
    while start - 1 > -max_length and _matches(sheet, (col_a, row_a + start - 1), (col_b, row_b + start - 1)):
        start -= 1
    length = 1
    while length < max_length and _matches(
        sheet, (col_a, row_a + start + length), (col_b, row_b + start + length)
    ):
        length += 1
    return (col_a, row_a + start), (col_b, row_b + start), length


def _position(sheet: Sheet, cell: Cell) -> Position:
    column, row = cell
    enhanced = sheet.cell(row, column)
    cell_id = enhanced.cell_id if enhanced is not None else ""
    return Position(column=column, start_row=row, cell_id=cell_id)


def find_repeated_column_sequences(
    sheet: Sheet,
    *,
    min_length: int = MIN_SEQUENCE_LENGTH,
    max_value_occurrences: int = MAX_VALUE_OCCURRENCES,
) -> RepeatedColumnSequencesResult:
    """Discover and score repeated segments in the numeric columns of sheet."""
    positions_by_value: dict[float, list[Cell]] = {}
    for col in sheet.numeric_column_indices:
        for row in range(1, sheet.num_rows):
            cell = sheet.cell(row, col)
            if cell is not None and cell.is_analyzable:
                positions_by_value.setdefault(cell.value, []).append((col, row))

    # Cell pairs already inside a found run; seeding from them again would
    # rebuild the same run once per value of a pasted column
    covered: set[tuple[Cell, Cell]] = set()
    sequences: list[RepeatedColumnSequence] = []
    for positions in positions_by_value.values():
        if len(positions) < 2 or len(positions) > max_value_occurrences:
            continue
        for i, a in enumerate(positions):
            for b in positions[i + 1:]:
                if (a, b) in covered:
                    continue
                start_a, start_b, length = _extend_run(sheet, a, b)
                (col_a, row_a), (col_b, row_b) = start_a, start_b
                covered.update(((col_a, row_a + k), (col_b, row_b + k)) for k in range(length))
                if length < min_length:
                    continue
                values = [sheet.enhanced_matrix[row_a + k][col_a].value for k in range(length)]
                sequence = RepeatedColumnSequence.create(
                    (_position(sheet, start_a), _position(sheet, start_b)), values, sheet
                )
                if sequence.suspicion_level is not SuspicionLevel.NONE:
                    sequences.append(sequence)

    sequences.sort(key=lambda s: (-s.matrix_size_adjusted_entropy_score, -s.length))
    logger.debug(f"sheet '{sheet.name}': {len(sequences)} suspicious repeated sequences")
    return RepeatedColumnSequencesResult(sequences=sequences)
