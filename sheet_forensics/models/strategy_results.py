from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from .duplicate_row import DuplicateRow
from .duplicate_value import DuplicateValue
from .repeated_column_sequence import RepeatedColumnSequence

"""Result types returned by the detection strategies.

Each result carries the strategy tag and the wall-clock time the strategy
took on one sheet; the finding lists are ordered most suspicious first.
"""

__all__ = [
    "StrategyName",
    "IndividualNumbersResult",
    "RepeatedColumnSequencesResult",
    "DuplicateRowsResult",
    "StrategyResult",
]


class StrategyName(Enum):
    INDIVIDUAL_NUMBERS = "individual_numbers"
    REPEATED_COLUMN_SEQUENCES = "repeated_column_sequences"
    DUPLICATE_ROWS = "duplicate_rows"


@dataclass(frozen=True)
class IndividualNumbersResult:
    duplicate_values: list[DuplicateValue]
    execution_time: float = 0.0
    name: StrategyName = field(default=StrategyName.INDIVIDUAL_NUMBERS, init=False)

    @property
    def findings(self) -> int:
        return len(self.duplicate_values)


@dataclass(frozen=True)
class RepeatedColumnSequencesResult:
    sequences: list[RepeatedColumnSequence]
    execution_time: float = 0.0
    name: StrategyName = field(default=StrategyName.REPEATED_COLUMN_SEQUENCES, init=False)

    @property
    def findings(self) -> int:
        return len(self.sequences)


@dataclass(frozen=True)
class DuplicateRowsResult:
    duplicate_rows: list[DuplicateRow]
    execution_time: float = 0.0
    truncated: bool = False  # stopped at the duplicate pair cap
    name: StrategyName = field(default=StrategyName.DUPLICATE_ROWS, init=False)

    @property
    def findings(self) -> int:
        return len(self.duplicate_rows)


StrategyResult = Union[IndividualNumbersResult, RepeatedColumnSequencesResult, DuplicateRowsResult]
