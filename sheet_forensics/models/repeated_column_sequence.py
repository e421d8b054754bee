from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..analysis.entropy import sequence_entropy_score
from ..analysis.sequence import calculate_sequence_regularity
from .suspicion import InvalidFindingError, SuspicionLevel, classify_suspicion

if TYPE_CHECKING:
    from .sheet import Sheet

"""RepeatedColumnSequence: two column segments holding the same run of values.

Scoring:
1. sequence_entropy_score: summed entropy score of the shared values
2. adjusted_sequence_entropy_score: discounted by arithmetic regularity, since
   counters and date series repeat legitimately
3. matrix_size_adjusted_entropy_score: divided by the sheet-size modifier
"""

__all__ = [
    "Position",
    "RepeatedColumnSequence",
]


@dataclass(frozen=True)
class Position:
    column: int
    start_row: int
    cell_id: str


@dataclass(frozen=True)
class RepeatedColumnSequence:
    positions: tuple[Position, Position]
    values: tuple[float, ...]
    sequence_entropy_score: float
    adjusted_sequence_entropy_score: float
    matrix_size_adjusted_entropy_score: float
    number_count: int  # numeric cells in the owning sheet
    sheet_name: str

    @staticmethod
    def create(
        positions: tuple[Position, Position], values: Sequence[float], sheet: Sheet
    ) -> RepeatedColumnSequence:
        """Score a repeated segment found on sheet.

        Raises:
            InvalidFindingError: if values is empty or both positions are the same
        """
        if not values:
            raise InvalidFindingError("repeated sequence needs at least one shared value")
        first, second = positions
        if (first.column, first.start_row) == (second.column, second.start_row):
            raise InvalidFindingError(f"repeated sequence positions are identical: {first.cell_id}")

        score = sequence_entropy_score(values)
        regularity = calculate_sequence_regularity(values)
        adjusted = score * (1 - regularity.most_common_interval_size_percentage)
        return RepeatedColumnSequence(
            positions=(first, second),
            values=tuple(values),
            sequence_entropy_score=score,
            adjusted_sequence_entropy_score=adjusted,
            matrix_size_adjusted_entropy_score=adjusted / sheet.log_number_count_modifier,
            number_count=sheet.num_numeric_cells,
            sheet_name=sheet.name,
        )

    @property
    def suspicion_level(self) -> SuspicionLevel:
        return classify_suspicion(self.matrix_size_adjusted_entropy_score)

    @property
    def length(self) -> int:
        return len(self.values)
