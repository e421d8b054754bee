from __future__ import annotations

from enum import Enum

"""Suspicion levels shared by the finding models."""

__all__ = [
    "InvalidFindingError",
    "SuspicionLevel",
    "classify_suspicion",
]

HIGH_SUSPICION_SCORE = 16
MEDIUM_SUSPICION_SCORE = 9
LOW_SUSPICION_SCORE = 7


class InvalidFindingError(ValueError):
    """Raised when a finding is built from degenerate input (no values, same row twice)."""


class SuspicionLevel(Enum):
    NONE = 0
    LOW = 1
    MEDIUM = 2
    HIGH = 3

    @property
    def label(self) -> str:
        return self.name.capitalize()


def classify_suspicion(score: float) -> SuspicionLevel:
    """Step classification; each lower bound is exclusive (exactly 16 is Medium)."""
    if score > HIGH_SUSPICION_SCORE:
        return SuspicionLevel.HIGH
    if score > MEDIUM_SUSPICION_SCORE:
        return SuspicionLevel.MEDIUM
    if score > LOW_SUSPICION_SCORE:
        return SuspicionLevel.LOW
    return SuspicionLevel.NONE
