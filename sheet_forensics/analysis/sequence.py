from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

"""Arithmetic regularity of value sequences.

Auto-incrementing ids and consecutive dates repeat the same step between
values. Such sequences are usually legitimate, so regularity is used to
discount, not amplify, the suspicion of a repeated sequence.
"""

__all__ = [
    "SequenceRegularity",
    "calculate_sequence_regularity",
]

# Intervals are compared after rounding away binary floating point noise
INTERVAL_DECIMALS = 9


@dataclass(frozen=True)
class SequenceRegularity:
    most_common_interval_size: float | None  # None when there are no intervals
    most_common_interval_size_percentage: float  # share of intervals, in [0, 1]


def calculate_sequence_regularity(values: Sequence[float]) -> SequenceRegularity:
    """Return how much of a sequence follows its most common step.

    A constant-step sequence yields 1.0; a sequence whose n-1 intervals are
    all distinct yields 1/(n-1). A single value has no intervals and yields 0.0.

    Raises:
        ValueError: if values is empty
    """
    if len(values) == 0:
        raise ValueError("cannot compute regularity of an empty sequence")
    if len(values) == 1:
        return SequenceRegularity(None, 0.0)

    intervals = np.round(np.diff(np.asarray(values, dtype=float)), INTERVAL_DECIMALS)
    # + 0.0 folds -0.0 into 0.0
    counts = Counter(float(i) + 0.0 for i in intervals)
    interval, count = counts.most_common(1)[0]
    return SequenceRegularity(interval, count / len(intervals))
