"""Batch conversion runner used by the CLI."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Set

from incidentxl.errors import ConversionError
from incidentxl.fs.exports import output_name_for, resolve_output_dir, unique_output_name
from incidentxl.logs.rotating import get_logger
from incidentxl.pdf.incident_parser import parse_document
from incidentxl.report.writers import DEFAULT_FORMAT, extension_for, get_writer

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class ConvertOptions:
    """Configuration for one conversion batch."""

    inputs: List[Path]
    out_dir: Optional[Path] = None
    fmt: str = DEFAULT_FORMAT
    log_dir: Path = field(default_factory=lambda: Path("debug"))
    log_file: Optional[Path] = None
    trace: bool = False


@dataclass(slots=True)
class ConvertResult:
    """Outcome of a conversion batch."""

    exit_code: int
    outputs: List[Path]
    warnings: List[str]
    summary_line: str
    log_file: Path
    entry_count: int = 0


def execute_conversion(options: ConvertOptions) -> ConvertResult:
    """Convert every input in ``options`` and return the batch outcome."""

    writer = get_writer(options.fmt)
    extension = extension_for(options.fmt)

    log_dir = options.log_dir.expanduser().resolve()
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = (options.log_file or (log_dir / _default_log_name())).expanduser().resolve()
    base_logger = _configure_logging(log_file, trace=options.trace)
    if options.trace:
        base_logger.debug("Trace mode enabled for conversion.")

    out_dir = resolve_output_dir(options.out_dir)
    LOGGER.info("Conversion start: %d input(s) format=%s out=%s", len(options.inputs), options.fmt, out_dir)

    outputs: List[Path] = []
    warnings: List[str] = []
    used_names: Set[str] = set()
    entry_count = 0

    for raw_input in options.inputs:
        source = Path(raw_input).expanduser()
        try:
            report = parse_document(source)
        except ConversionError as exc:
            if not exc.file_name:
                exc.file_name = source.name
            LOGGER.warning("Rejected %s: %s", source, exc.describe())
            warnings.append(f"{source.name}: {exc.describe()}")
            continue
        except (OSError, ValueError, RuntimeError) as exc:
            LOGGER.exception("Failed to read %s", source)
            warnings.append(f"{source.name}: {exc}")
            continue

        name = unique_output_name(output_name_for(source, extension), used_names)
        try:
            written = writer(report, out_dir / name)
        except OSError as exc:
            LOGGER.exception("Failed to write %s", out_dir / name)
            warnings.append(f"{source.name}: write failed: {exc}")
            continue
        outputs.append(written)
        entry_count += len(report)

    exit_code = 0 if outputs else 2
    summary_line = (
        f"Converted:{len(outputs)}/{len(options.inputs)} Entries:{entry_count} "
        f"Warnings:{len(warnings)} Format:{options.fmt.lower()}"
    )
    LOGGER.info("Conversion completed exit_code=%s %s", exit_code, summary_line)

    return ConvertResult(
        exit_code=exit_code,
        outputs=outputs,
        warnings=warnings,
        summary_line=summary_line,
        log_file=log_file,
        entry_count=entry_count,
    )


def _configure_logging(log_file: Path, *, trace: bool = False) -> logging.Logger:
    log_file.parent.mkdir(parents=True, exist_ok=True)
    base_logger = get_logger()
    level = logging.DEBUG if trace else logging.INFO
    base_logger.setLevel(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    if not any(isinstance(handler, logging.StreamHandler) for handler in root_logger.handlers):
        stream_handler = logging.StreamHandler()
        stream_handler.setLevel(logging.WARNING)
        root_logger.addHandler(stream_handler)

    existing_paths = {
        getattr(handler, "baseFilename", None)
        for handler in base_logger.handlers
        if hasattr(handler, "baseFilename")
    }
    if str(log_file) not in existing_paths:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            "%Y-%m-%d %H:%M:%S",
        )
        file_handler.setFormatter(formatter)
        base_logger.addHandler(file_handler)

    return base_logger


def _default_log_name() -> str:
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return f"convert_{timestamp}.log"


__all__ = ["ConvertOptions", "ConvertResult", "execute_conversion"]
