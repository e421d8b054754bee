from __future__ import annotations

import math

import pytest

from sheet_forensics.models.sheet import Sheet, log_number_count_modifier


def test_sheet_statistics(measurements_sheet: Sheet):
    assert measurements_sheet.name == "Measurements"
    assert measurements_sheet.num_rows == 7
    assert measurements_sheet.num_columns == 5
    assert measurements_sheet.column_names == ["sample_id", "weight", "concentration", "volume", "batch"]
    assert measurements_sheet.numeric_column_indices == [0, 1, 2, 3, 4]
    assert measurements_sheet.num_numeric_cells == 30
    assert measurements_sheet.log_number_count_modifier == pytest.approx(math.log10(40))


def test_merged_header_maps_name_to_several_columns():
    sheet = Sheet.from_rows(
        "Merged",
        [
            ["id", "value", None, "note"],
            [1, 2.5, 3.5, "a"],
            [2, 4.5, 5.5, "b"],
        ],
    )
    assert sheet.column_names == ["id", "value", "value", "note"]
    assert sheet.get_column_indices_of_combined_column_name("value") == [1, 2]
    assert sheet.get_column_indices_of_combined_column_name(" value ") == [1, 2]
    assert sheet.get_column_indices_of_combined_column_name("missing") == []
    assert sheet.numeric_column_indices == [0, 1, 2]


def test_repeated_header_names_combine():
    sheet = Sheet.from_rows("Dup", [["x", "y", "x"], [1, 2, 3]])
    assert sheet.get_column_indices_of_combined_column_name("x") == [0, 2]


def test_integral_float_header_is_rendered_as_int():
    sheet = Sheet.from_rows("Years", [[2024.0, "label"], [1, "a"]])
    assert sheet.column_names == ["2024", "label"]


def test_numeric_column_majority_rule():
    sheet = Sheet.from_rows(
        "Mixed",
        [
            ["half", "minority", "with_blanks"],
            [1, 1, 1],
            ["n/a", "x", None],
            ["y", "z", None],
            [2, "w", 2],
        ],
    )
    # 2 of 4 non-blank cells is enough; 1 of 4 is not; blanks do not count
    assert sheet.numeric_column_indices == [0, 2]
    assert sheet.num_numeric_cells == 2 + 1 + 2


def test_ragged_rows_are_padded():
    sheet = Sheet.from_rows("Ragged", [["a", "b"], [1]])
    assert sheet.num_columns == 2
    cell = sheet.cell(1, 1)
    assert cell is not None
    assert cell.value is None
    assert cell.cell_id == "B2"


def test_cell_out_of_range():
    sheet = Sheet.from_rows("Small", [["a"], [1]])
    assert sheet.cell(5, 0) is None
    assert sheet.cell(1, 3) is None


def test_first_row_number_shifts_cell_ids():
    sheet = Sheet.from_rows("Offset", [["a"], [1]], first_row_number=3)
    assert sheet.cell(0, 0).cell_id == "A3"
    assert sheet.cell(1, 0).cell_id == "A4"


def test_empty_sheet():
    sheet = Sheet.from_rows("Empty", [])
    assert sheet.num_rows == 0
    assert sheet.column_names == []
    assert sheet.numeric_column_indices == []
    assert sheet.log_number_count_modifier == 1.0


def test_log_number_count_modifier_is_increasing():
    values = [log_number_count_modifier(n) for n in (0, 1, 10, 1000, 100_000)]
    assert values[0] == 1.0
    assert all(a < b for a, b in zip(values, values[1:]))


def test_repr_mentions_name():
    assert "Measurements" in repr(Sheet.from_rows("Measurements", [["a"], [1]]))
