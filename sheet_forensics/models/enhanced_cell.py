from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from typing import Any

import numpy as np
from openpyxl.utils import get_column_letter

"""EnhancedCell model: one spreadsheet cell plus its analyzability flag.

A cell is analyzable only when it holds a clean, comparable number: not text,
not a date, not a boolean, not blank and not a NaN/inf left behind by a
formula error.
"""

__all__ = [
    "EnhancedCell",
    "is_analyzable_value",
    "is_blank_value",
    "make_cell_id",
    "normalize_cell_value",
]


def normalize_cell_value(value: Any) -> Any:
    """Unwrap numpy scalars so values hash and compare like plain Python numbers."""
    if isinstance(value, np.generic):
        return value.item()
    return value


def is_analyzable_value(value: Any) -> bool:
    if isinstance(value, (bool, np.bool_)):
        return False
    if isinstance(value, numbers.Real):
        return math.isfinite(float(value))
    return False


def is_blank_value(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return isinstance(value, str) and value.strip() == ""


def make_cell_id(row_number: int, column: int) -> str:
    """A1-style id from a 1-based spreadsheet row number and a 0-based column index."""
    return f"{get_column_letter(column + 1)}{row_number}"


@dataclass(frozen=True)
class EnhancedCell:
    row: int  # index in the sheet matrix (header row = 0)
    column: int
    value: Any
    is_analyzable: bool
    cell_id: str  # A1-style, in the coordinates of the source workbook

    @staticmethod
    def create(row: int, column: int, raw_value: Any, first_row_number: int = 1) -> EnhancedCell:
        value = normalize_cell_value(raw_value)
        return EnhancedCell(
            row=row,
            column=column,
            value=value,
            is_analyzable=is_analyzable_value(value),
            cell_id=make_cell_id(first_row_number + row, column),
        )
