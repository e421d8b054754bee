"""Detection strategies run against one sheet at a time."""

from .duplicate_rows import find_duplicate_rows
from .individual_numbers import find_duplicate_values
from .repeated_sequences import find_repeated_column_sequences

__all__ = [
    "find_duplicate_rows",
    "find_duplicate_values",
    "find_repeated_column_sequences",
]
