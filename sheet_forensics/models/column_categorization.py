from __future__ import annotations

from dataclasses import dataclass, field

"""ColumnCategorization: logical column names partitioned into roles.

Only the `unique` role drives detection: columns expected to hold
non-repeating identifiers or measurements.
"""

__all__ = [
    "ColumnCategorization",
]


@dataclass(frozen=True)
class ColumnCategorization:
    unique: list[str] = field(default_factory=list)
    other: list[str] = field(default_factory=list)
    source: str = "config"  # which categorizer produced it (config | heuristic)
