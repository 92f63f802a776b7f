"""PyMuPDF text extraction into the line stream the parser consumes."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterator, List, Union

try:  # pragma: no cover - optional dependency during docs builds
    import fitz  # type: ignore
except ImportError:  # pragma: no cover
    fitz = None  # type: ignore

LOGGER = logging.getLogger(__name__)

_LINE_SPLIT_RE = re.compile(r"\r?\n")

SUPPORTED_SUFFIXES = (".pdf", ".txt")

DocumentLike = Union[str, Path, "fitz.Document"]


def split_lines(text: str) -> List[str]:
    """Split ``text`` on line boundaries, dropping stray carriage returns."""

    return [line.rstrip("\r") for line in _LINE_SPLIT_RE.split(text or "")]


def iter_page_text(source: DocumentLike) -> Iterator[str]:
    """Yield the plain text of every page of ``source``."""

    if fitz is None:  # pragma: no cover - handled by callers
        raise RuntimeError("PyMuPDF (fitz) is required for PDF text extraction")

    close_doc = False
    if isinstance(source, (str, Path)):
        doc = fitz.open(str(source))
        close_doc = True
    elif isinstance(source, fitz.Document):
        doc = source
    else:  # pragma: no cover - defensive
        raise TypeError(f"Unsupported document source type: {type(source)!r}")

    try:
        for page_index in range(doc.page_count):
            page = doc.load_page(page_index)
            yield page.get_text("text") or ""
    finally:
        if close_doc:
            doc.close()


def read_pdf_lines(source: DocumentLike) -> List[str]:
    """Return the extracted lines of every page of ``source`` in reading order."""

    lines: List[str] = []
    for text in iter_page_text(source):
        lines.extend(split_lines(text))
    return lines


def read_lines(path: Union[str, Path]) -> List[str]:
    """Return the line stream for a ``.pdf`` or already-extracted ``.txt`` file."""

    source = Path(path).expanduser()
    if not source.exists():
        raise FileNotFoundError(f"Input not found: {source}")

    suffix = source.suffix.lower()
    if suffix == ".pdf":
        lines = read_pdf_lines(source)
    elif suffix == ".txt":
        lines = split_lines(source.read_text(encoding="utf-8"))
    else:
        raise ValueError(f"Unsupported input type {suffix or '<none>'!r}; expected one of {SUPPORTED_SUFFIXES}")

    LOGGER.info("Extracted %d lines from %s", len(lines), source.name)
    return lines


__all__ = [
    "SUPPORTED_SUFFIXES",
    "iter_page_text",
    "read_lines",
    "read_pdf_lines",
    "split_lines",
]
