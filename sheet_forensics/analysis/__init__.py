"""Entropy and regularity scoring of numeric values."""

from .entropy import EntropyInputError, entropy_score, number_entropy, sequence_entropy_score
from .sequence import SequenceRegularity, calculate_sequence_regularity

__all__ = [
    "EntropyInputError",
    "entropy_score",
    "number_entropy",
    "sequence_entropy_score",
    "SequenceRegularity",
    "calculate_sequence_regularity",
]
