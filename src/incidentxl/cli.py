"""Command-line parsing for incidentxl."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Optional

from incidentxl.report.writers import DEFAULT_FORMAT, WRITERS
from incidentxl.runner import ConvertOptions, ConvertResult, execute_conversion


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="incidentxl",
        description="Convert fall-incident report PDFs into incident analysis workbooks",
    )
    parser.add_argument(
        "inputs",
        nargs="+",
        metavar="INPUT",
        help="Incident report PDF (or extracted .txt) to convert.",
    )
    parser.add_argument(
        "--out-dir",
        dest="out_dir",
        help="Directory for converted files (default: <home>/Exports).",
    )
    parser.add_argument(
        "--format",
        dest="fmt",
        choices=sorted(WRITERS),
        default=DEFAULT_FORMAT,
        help=f"Output format (default: {DEFAULT_FORMAT}).",
    )
    parser.add_argument(
        "--log-dir",
        dest="log_dir",
        default="debug",
        help="Directory for per-run logs (default: debug).",
    )
    parser.add_argument(
        "--log-file",
        dest="log_file",
        help="Optional explicit log file path.",
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Enable debug logging of the parser.",
    )
    return parser


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse CLI arguments."""

    return build_parser().parse_args(argv)


def create_options(args: argparse.Namespace) -> ConvertOptions:
    """Return ``ConvertOptions`` derived from parsed ``args``."""

    return ConvertOptions(
        inputs=[Path(raw).expanduser() for raw in args.inputs],
        out_dir=Path(args.out_dir).expanduser() if args.out_dir else None,
        fmt=args.fmt,
        log_dir=Path(args.log_dir).expanduser(),
        log_file=Path(args.log_file).expanduser() if args.log_file else None,
        trace=bool(args.trace),
    )


def run_from_args(args: argparse.Namespace) -> ConvertResult:
    """Execute the conversion described by ``args``."""

    return execute_conversion(create_options(args))


__all__ = ["build_parser", "create_options", "parse_arguments", "run_from_args"]
