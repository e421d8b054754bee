from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..analysis.entropy import entropy_score, number_entropy
from .suspicion import InvalidFindingError

if TYPE_CHECKING:
    from .sheet import Sheet


__all__ = [
    "DuplicateValue",
]


@dataclass(frozen=True)
class DuplicateValue:
    """A single high-entropy number that occurs in several cells of a sheet."""
    value: float
    cell_ids: tuple[str, ...]
    occurrences: int
    entropy_score: float
    matrix_size_adjusted_entropy_score: float
    sheet_name: str

    @staticmethod
    def create(value: float, cell_ids: Sequence[str], sheet: Sheet) -> DuplicateValue:
        if len(cell_ids) < 2:
            raise InvalidFindingError(f"value {value!r} needs at least two cells to be a duplicate")
        score = entropy_score(number_entropy(value))
        return DuplicateValue(
            value=value,
            cell_ids=tuple(cell_ids),
            occurrences=len(cell_ids),
            entropy_score=score,
            matrix_size_adjusted_entropy_score=score / sheet.log_number_count_modifier,
            sheet_name=sheet.name,
        )
