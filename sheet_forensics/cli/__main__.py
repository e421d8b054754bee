from __future__ import annotations

import argparse
import sys
from pathlib import Path

from ..config.loader import DEFAULT_CONFIG_PATH, ConfigError, ForensicsConfig, load_config
from ..excel.reader import SheetHeaderError, WorkbookReadError, build_sheet, read_excel_file
from ..logging.init import enable_debug, log_summary, setup_logging
from ..services.orchestrator import ProcessingError, process_all, scan_excel_files
from ..services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load and validate the config
- Scan source_directory for .xlsx files (non-recursive)
- Analyze every sheet, logging findings as they are found
- Print the SUMMARY line and exit with a contract exit code
"""

__all__ = [
    "EXIT_SUCCESS_ALL",
    "EXIT_FATAL",
    "EXIT_PARTIAL_FAILURE",
    "main",
]

EXIT_SUCCESS_ALL = 0
EXIT_FATAL = 1
EXIT_PARTIAL_FAILURE = 2


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Flag fabricated or duplicated numbers in spreadsheets")
    p.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="Path to the YAML config")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print sheet headers & first rows then exit")
    return p.parse_args(argv)


def _inspect_data(cfg: ForensicsConfig) -> int:
    try:
        excel_files = scan_excel_files(Path(cfg.source_directory))
    except ProcessingError as e:
        print(f"inspect: {e}")
        return EXIT_FATAL
    if not excel_files:
        print("inspect: no .xlsx files")
        return EXIT_SUCCESS_ALL
    for f in excel_files:
        print(f"FILE: {f.name}")
        try:
            raw = read_excel_file(f, max_rows=cfg.header_row + 4)
        except WorkbookReadError as e:
            print(f"  read_error: {e}")
            continue
        for sname, df in raw.items():
            try:
                sheet = build_sheet(df, sname, cfg.header_row)
            except SheetHeaderError as e:
                print(f"  SHEET: {sname} error={e}")
                continue
            print(f"  SHEET: {sname} cols={sheet.column_names} numeric_cols={sheet.numeric_column_indices}")
            # datetimes are not JSON-friendly, repr keeps the output on one line
            sample = [[repr(c.value) for c in row] for row in sheet.enhanced_matrix[1:4]]
            print("    sample_rows=", sample)
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None means "read sys.argv"; an explicit [] must not pick up pytest's arguments
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)

    if args.debug:
        enable_debug()
        logger.debug("debug mode enabled")

    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    directory = Path(cfg.source_directory)
    if not directory.exists():
        logger.error(f"directory not found: {directory}")
        return EXIT_FATAL

    if args.inspect_data:
        return _inspect_data(cfg)

    logger.info(f"Analyzing files from: {directory}")
    try:
        result = process_all(cfg)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    # log_summary adds the "SUMMARY " label itself
    log_summary(render_summary_line(result)[len("SUMMARY "):])

    if result.failed_files > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
