"""End-to-end parsing of one incident report into a :class:`ParsedReport`."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence, Union

from incidentxl.engine.assemble import order_entries, validate_entries
from incidentxl.report.model import ParsedReport

from .incident_blocks import parse_entries
from .incident_header import parse_metadata
from .text_lines import read_lines

LOGGER = logging.getLogger(__name__)


def parse_report(lines: Sequence[str], source_name: str = "") -> ParsedReport:
    """Parse an extracted line stream.

    Raises :class:`~incidentxl.errors.ConversionError` when the leading
    entries carry no usable incident date/time.
    """

    materialized = list(lines)
    metadata = parse_metadata(materialized)
    entries = parse_entries(materialized)
    validate_entries(entries, source_name)
    ordered = order_entries(entries)
    LOGGER.info(
        "Parsed %s: %d entries facility=%r",
        source_name or "<lines>",
        len(ordered),
        metadata.facility,
    )
    return ParsedReport(metadata=metadata, entries=ordered, source_name=source_name)


def parse_document(path: Union[str, Path]) -> ParsedReport:
    """Extract and parse the report at ``path``."""

    source = Path(path)
    return parse_report(read_lines(source), source_name=source.name)


__all__ = ["parse_document", "parse_report"]
