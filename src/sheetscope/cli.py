"""Command-line interface for SheetScope."""

import argparse
import logging
import sys
from typing import Optional

from .analyzer import FormulaAnalyzer
from .config import settings
from .errors import AnalysisError
from .reports import render_console_summary


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sheetscope",
        description="SheetScope - Excel formula complexity analyzer",
    )
    parser.add_argument("file", help="Path to the Excel workbook (.xlsx or .xlsm)")
    parser.add_argument(
        "--output-dir",
        "-o",
        default=None,
        help=f"Directory for the generated reports (default: {settings.export_dir})",
    )
    parser.add_argument(
        "--quiet", "-q", action="store_true", help="Do not print the analysis summary"
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help=f"Logging verbosity (default: {settings.log_level})",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        # argparse exits with 2 on usage errors; report those as plain failures
        return 0 if e.code == 0 else 1

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        run = FormulaAnalyzer().run(args.file, args.output_dir)
    except (AnalysisError, OSError) as e:
        print(f"Error analyzing file: {e}", file=sys.stderr)
        return 1

    if not args.quiet:
        print(render_console_summary(run.state))
        print()

    print("Analysis completed successfully!")
    print("Files generated:")
    for path in run.reports.as_list():
        print(f"  - {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
