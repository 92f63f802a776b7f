"""Console entry point for incidentxl."""

from __future__ import annotations

import sys
from typing import List, Optional

from incidentxl.cli import parse_arguments, run_from_args
from incidentxl.runner import ConvertResult


def main(argv: Optional[List[str]] = None) -> int:
    """Run a conversion batch and return the process exit code."""

    raw_argv = list(argv if argv is not None else sys.argv[1:])
    args = parse_arguments(raw_argv)
    try:
        result = run_from_args(args)
    except ValueError as exc:
        print("ERROR reason=invalid_args", flush=True)
        print(f"incidentxl: {exc}", file=sys.stderr, flush=True)
        return 2
    _print_result(result)
    return result.exit_code


def _print_result(result: ConvertResult) -> None:
    for path in result.outputs:
        print(f"CONVERTED path={path}", flush=True)
    for warning in result.warnings:
        print(f"WARN {warning}", flush=True)
    print(result.summary_line, flush=True)
    print(f"LOG: {result.log_file}", flush=True)


if __name__ == "__main__":
    sys.exit(main())
