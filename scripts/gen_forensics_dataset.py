#!/usr/bin/env python3
"""Dataset generation script for detection and performance testing.

Generates synthetic Excel workbooks of plausible measurements and plants
known fabrications in them, so a run of sheet-forensics can be checked
against what was planted:
- a block of values pasted lower in the same column
- a block of values pasted into another column
- whole rows copied over other rows

The generated files follow the layout the analyzer expects by default:
- Row 1: Header row with column names
- Row 2+: Data rows
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

import numpy as np
import pandas as pd


def generate_measurements(rows: int, cols: int, rng: np.random.Generator) -> pd.DataFrame:
    """Generate a DataFrame of measurement-like columns.

    The first column is an auto-incrementing sample id; the others mix long
    integers (counts) and 5-decimal floats (weights, concentrations).
    """
    data: dict[str, list[object]] = {"sample_id": list(range(100_001, 100_001 + rows))}
    for i in range(1, cols):
        if i % 2:
            data[f"count_{i}"] = rng.integers(1_000_000, 99_999_999, rows).tolist()
        else:
            data[f"weight_{i}"] = np.round(rng.uniform(1, 1000, rows), 5).tolist()
    return pd.DataFrame(data)


def plant_fabrications(
    df: pd.DataFrame, rng: np.random.Generator, block: int, copied_rows: int
) -> list[str]:
    """Overwrite parts of df with copies and describe what was planted (1-based workbook rows)."""
    planted: list[str] = []
    rows, cols = df.shape
    if cols < 3 or rows < 4 * block:
        return planted

    # same column, pasted further down
    col = df.columns[1]
    src = int(rng.integers(0, rows // 2 - block))
    dst = int(rng.integers(rows // 2, rows - block))
    df.iloc[dst:dst + block, 1] = df.iloc[src:src + block, 1].to_numpy()
    planted.append(f"sequence {col} rows {src + 2}-{src + block + 1} -> {dst + 2}-{dst + block + 1}")

    # another column, same rows
    target = df.columns[3 if cols > 3 else 2]
    src = int(rng.integers(0, rows - block))
    df.iloc[src:src + block, df.columns.get_loc(target)] = df.iloc[src:src + block, 1].to_numpy()
    planted.append(f"sequence {df.columns[1]} -> {target} rows {src + 2}-{src + block + 1}")

    # duplicated rows (sample id left alone)
    for _ in range(copied_rows):
        a, b = (int(x) for x in rng.choice(rows, size=2, replace=False))
        for c in range(1, cols):
            df.iat[b, c] = df.iat[a, c]
        planted.append(f"duplicate row {a + 2} -> {b + 2}")
    return planted


def create_excel_file(
    output_path: Path,
    rows: int,
    cols: int,
    sheets: list[str] | None = None,
    block: int = 5,
    copied_rows: int = 2,
    seed: int = 42,
) -> list[str]:
    """Create an Excel file with synthetic data and planted fabrications.

    Returns:
        One description line per planted fabrication, prefixed by sheet name
    """
    if sheets is None:
        sheets = ["Measurements"]
    rng = np.random.default_rng(seed)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    planted: list[str] = []
    with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
        for sheet_name in sheets:
            df = generate_measurements(rows, cols, rng)
            planted.extend(f"{sheet_name}: {p}" for p in plant_fabrications(df, rng, block, copied_rows))
            df.to_excel(writer, sheet_name=sheet_name, index=False)
    return planted


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Generate synthetic Excel workbooks with planted fabrications",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # 5,000 rows, 8 columns
  %(prog)s data/synthetic.xlsx

  # Larger multi-sheet workbook for timing
  %(prog)s data/large.xlsx --rows 50000 --cols 12 --sheets A B C
        """,
    )
    parser.add_argument("output", type=Path, help="Output Excel file path")
    parser.add_argument("--rows", type=int, default=5_000, help="Data rows per sheet (default: 5,000)")
    parser.add_argument("--cols", type=int, default=8, help="Columns per sheet (default: 8)")
    parser.add_argument("--sheets", nargs="+", default=["Measurements"], help="Sheet names")
    parser.add_argument("--block", type=int, default=5, help="Length of pasted blocks (default: 5)")
    parser.add_argument("--copied-rows", type=int, default=2, help="Rows copied per sheet (default: 2)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    args = parser.parse_args()

    if args.rows <= 0 or args.cols <= 0:
        print("Error: --rows and --cols must be positive", file=sys.stderr)
        return 1

    try:
        planted = create_excel_file(
            args.output, args.rows, args.cols, args.sheets, args.block, args.copied_rows, args.seed
        )
    except OSError as e:
        print(f"Error generating dataset: {e}", file=sys.stderr)
        return 1

    print(f"Created Excel file: {args.output}")
    print(f"  Sheets: {len(args.sheets)} ({', '.join(args.sheets)})")
    print(f"  Rows per sheet: {args.rows} (+ header row)")
    for line in planted:
        print(f"  planted {line}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
