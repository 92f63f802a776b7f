"""Registry of output writers keyed by format name."""

from __future__ import annotations

from pathlib import Path
from types import MappingProxyType
from typing import Callable, Mapping

from .model import ParsedReport
from .txt_writer import write_report
from .xlsx_writer import write_workbook

Writer = Callable[[ParsedReport, Path], Path]

WRITERS: Mapping[str, Writer] = MappingProxyType(
    {
        "xlsx": write_workbook,
        "txt": write_report,
    }
)

DEFAULT_FORMAT = "xlsx"


def get_writer(fmt: str) -> Writer:
    """Return the writer registered for ``fmt``."""

    try:
        return WRITERS[fmt.lower()]
    except KeyError:
        raise ValueError(f"Unknown output format {fmt!r}; expected one of {sorted(WRITERS)}") from None


def extension_for(fmt: str) -> str:
    get_writer(fmt)
    return f".{fmt.lower()}"


__all__ = ["DEFAULT_FORMAT", "WRITERS", "Writer", "extension_for", "get_writer"]
