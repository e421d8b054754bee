from __future__ import annotations

import logging

from ..analysis.entropy import entropy_score, number_entropy
from ..models.duplicate_value import DuplicateValue
from ..models.sheet import Sheet
from ..models.strategy_results import IndividualNumbersResult

"""Individual number duplicates: high-entropy values found in several cells."""

logger = logging.getLogger(__name__)

__all__ = [
    "MIN_SIZE_ADJUSTED_VALUE_ENTROPY",
    "find_duplicate_values",
]

MIN_SIZE_ADJUSTED_VALUE_ENTROPY = 5


def find_duplicate_values(
    sheet: Sheet, *, min_size_adjusted_entropy: float = MIN_SIZE_ADJUSTED_VALUE_ENTROPY
) -> IndividualNumbersResult:
    cells_by_value: dict[float, list[str]] = {}
    for col in sheet.numeric_column_indices:
        for row in range(1, sheet.num_rows):
            cell = sheet.cell(row, col)
            if cell is not None and cell.is_analyzable:
                cells_by_value.setdefault(cell.value, []).append(cell.cell_id)

    min_score = min_size_adjusted_entropy * sheet.log_number_count_modifier
    duplicates = [
        DuplicateValue.create(value, cell_ids, sheet)
        for value, cell_ids in cells_by_value.items()
        if len(cell_ids) > 1 and entropy_score(number_entropy(value)) > min_score
    ]
    duplicates.sort(key=lambda d: (-d.matrix_size_adjusted_entropy_score, -d.occurrences))
    logger.debug(f"sheet '{sheet.name}': {len(duplicates)} duplicated high-entropy values")
    return IndividualNumbersResult(duplicate_values=duplicates)
