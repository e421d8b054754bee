from __future__ import annotations

import logging
from typing import Any, Protocol

from ..models.column_categorization import ColumnCategorization
from ..models.sheet import Sheet

"""Column categorizers.

Detection only needs to know which logical columns are expected to hold
unique values. The categorizer is injected into the orchestrator so that it
can be swapped for a fake in tests or for an external classifier.

- ConfiguredColumnCategorizer: explicit per-sheet lists from the YAML config
- HeuristicColumnCategorizer: columns whose numbers are (almost) all distinct
"""

logger = logging.getLogger(__name__)

__all__ = [
    "ColumnCategorizer",
    "ConfiguredColumnCategorizer",
    "HeuristicColumnCategorizer",
]


class ColumnCategorizer(Protocol):
    def categorize(self, sheet: Sheet) -> ColumnCategorization: ...


class HeuristicColumnCategorizer:
    """Marks a column unique when its numeric values are mostly distinct."""

    def __init__(self, min_distinct_ratio: float = 0.9, min_values: int = 3) -> None:
        self.min_distinct_ratio = min_distinct_ratio
        self.min_values = min_values

    def categorize(self, sheet: Sheet) -> ColumnCategorization:
        unique: list[str] = []
        other: list[str] = []
        for name in dict.fromkeys(n for n in sheet.column_names if n):
            values = []
            for col in sheet.get_column_indices_of_combined_column_name(name):
                for row in range(1, sheet.num_rows):
                    cell = sheet.cell(row, col)
                    if cell is not None and cell.is_analyzable:
                        values.append(cell.value)
            if len(values) >= self.min_values and len(set(values)) >= self.min_distinct_ratio * len(values):
                unique.append(name)
            else:
                other.append(name)
        return ColumnCategorization(unique=unique, other=other, source="heuristic")


class ConfiguredColumnCategorizer:
    """Uses the config's column_categories, falling back for unlisted sheets."""

    def __init__(
        self,
        column_categories: dict[str, dict[str, Any]],
        fallback: ColumnCategorizer | None = None,
    ) -> None:
        self.column_categories = column_categories
        self.fallback = fallback

    def categorize(self, sheet: Sheet) -> ColumnCategorization:
        entry = self.column_categories.get(sheet.name)
        if entry is not None:
            unknown = [n for n in entry.get("unique", []) if not sheet.get_column_indices_of_combined_column_name(n)]
            if unknown:
                logger.warning(f"sheet '{sheet.name}': unique columns not found: {unknown}")
            return ColumnCategorization(
                unique=list(entry.get("unique", [])),
                other=list(entry.get("other", [])),
                source="config",
            )
        if self.fallback is not None:
            return self.fallback.categorize(sheet)
        return ColumnCategorization(source="config")
