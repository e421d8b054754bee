from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

import pandas as pd

from ..models.sheet import Sheet

"""Workbook reader.

Reads every worksheet raw (no pandas header inference) and turns it into a
Sheet whose matrix starts at the configured header row. Values are kept as
read: numbers stay numbers, text stays text, so analyzability is decided per
cell by the model.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "SheetHeaderError",
    "WorkbookReadError",
    "read_excel_file",
    "build_sheet",
    "load_sheets",
]


class WorkbookReadError(Exception):
    """Raised when a workbook cannot be opened or parsed."""


class SheetHeaderError(Exception):
    """Raised when the configured header row is missing from a sheet."""


def read_excel_file(
    path: Path, target_sheets: Iterable[str] | None = None, max_rows: int | None = None
) -> dict[str, pd.DataFrame]:
    """Read a workbook returning raw DataFrames keyed by sheet name.

    Parameters
    ----------
    path: workbook path
    target_sheets: restrict to these sheet names (None reads all)
    max_rows: rows read per sheet (None reads all)
    """
    try:
        xls = pd.ExcelFile(path)
    except Exception as e:
        raise WorkbookReadError(f"cannot open workbook {path.name}: {e}") from e

    dfs: dict[str, pd.DataFrame] = {}
    with xls:
        for name in xls.sheet_names:
            if target_sheets is not None and str(name) not in target_sheets:
                continue
            try:
                # "NA" and friends are legitimate text, not missing numbers
                dfs[str(name)] = xls.parse(name, header=None, nrows=max_rows, keep_default_na=False, na_values=[""])
            except Exception as e:
                raise WorkbookReadError(f"cannot parse sheet '{name}' of {path.name}: {e}") from e
    return dfs


def build_sheet(df: pd.DataFrame, sheet_name: str, header_row: int = 0) -> Sheet:
    """Build a Sheet from a raw DataFrame, dropping rows above header_row.

    Fully blank rows are kept so that row indices and cell ids stay aligned
    with the workbook.

    Raises:
        SheetHeaderError: if the sheet has no row at header_row
    """
    if df.shape[0] <= header_row:
        raise SheetHeaderError(f"sheet '{sheet_name}' lacks header row {header_row + 1}")
    rows = [list(r) for r in df.iloc[header_row:].itertuples(index=False, name=None)]
    return Sheet.from_rows(sheet_name, rows, first_row_number=header_row + 1)


def load_sheets(path: Path, header_row: int = 0, max_rows: int | None = None) -> tuple[list[Sheet], int]:
    """Load every sheet of a workbook, skipping the ones that fail.

    Returns:
        (loaded sheets, number of skipped sheets)

    Raises:
        WorkbookReadError: if the workbook itself cannot be read
    """
    nrows = None if max_rows is None else header_row + 1 + max_rows
    raw = read_excel_file(path, max_rows=nrows)
    sheets: list[Sheet] = []
    skipped = 0
    for sheet_name, df in raw.items():
        try:
            sheets.append(build_sheet(df, sheet_name, header_row))
        except SheetHeaderError as e:
            logger.warning(f"Skipping sheet '{sheet_name}' due to error: {e}")
            skipped += 1
    return sheets, skipped
