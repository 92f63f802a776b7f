"""Application directories and safe output file naming."""

from __future__ import annotations

import errno
import logging
import os
import re
from pathlib import Path
from typing import Final, MutableSet

_LOGGER = logging.getLogger(__name__)

HOME_ENV: Final[str] = "INCIDENTXL_HOME"
_DEFAULT_HOME: Final[Path] = Path.home() / ".incidentxl"
_SAFE_CHAR_RE: Final[re.Pattern[str]] = re.compile(r"[^a-zA-Z0-9._\- ]+")
_SPACE_RE: Final[re.Pattern[str]] = re.compile(r"\s+")
_DOUBLE_DOT_RE: Final[re.Pattern[str]] = re.compile(r"\.{2,}")

_MAX_FILENAME_LEN: Final[int] = 120
_FALLBACK_STEM: Final[str] = "incident_report"


def app_home() -> Path:
    """Return the application directory (``$INCIDENTXL_HOME`` or ``~/.incidentxl``)."""

    override = os.environ.get(HOME_ENV)
    return Path(override).expanduser() if override else _DEFAULT_HOME


def exports_dir() -> Path:
    """Return the default Exports directory, creating it if needed."""

    path = app_home() / "Exports"
    path.mkdir(parents=True, exist_ok=True)
    return path


def sanitize_filename(base: str) -> str:
    """Sanitize ``base`` so it is safe for filesystem use."""

    base = (base or "").strip()
    name, ext = os.path.splitext(base)
    if not name:
        name = _FALLBACK_STEM
    if ext and not ext.startswith("."):
        ext = f".{ext}"

    sanitized_name = _SAFE_CHAR_RE.sub("_", name)
    sanitized_name = _SPACE_RE.sub(" ", sanitized_name)
    sanitized_name = _DOUBLE_DOT_RE.sub(".", sanitized_name)
    sanitized_name = sanitized_name.strip(" .") or _FALLBACK_STEM

    sanitized_ext = _SAFE_CHAR_RE.sub("", ext)
    sanitized_ext = _DOUBLE_DOT_RE.sub(".", sanitized_ext)

    candidate = f"{sanitized_name}{sanitized_ext}"
    if len(candidate) <= _MAX_FILENAME_LEN:
        return candidate

    trim_len = max(0, _MAX_FILENAME_LEN - len(sanitized_ext))
    trimmed_name = sanitized_name[:trim_len].rstrip(" .") or _FALLBACK_STEM
    return f"{trimmed_name}{sanitized_ext}"


def unique_output_name(name: str, used: MutableSet[str]) -> str:
    """Return ``name`` or ``stem_N.ext`` so it does not clash with ``used``; records the result."""

    if name not in used:
        used.add(name)
        return name
    stem, ext = os.path.splitext(name)
    counter = 1
    candidate = f"{stem}_{counter}{ext}"
    while candidate in used:
        counter += 1
        candidate = f"{stem}_{counter}{ext}"
    used.add(candidate)
    return candidate


def output_name_for(source: Path, extension: str) -> str:
    """Return the sanitized output file name for ``source`` with ``extension``."""

    suffix = extension if extension.startswith(".") else f".{extension}"
    return sanitize_filename(f"{source.stem}{suffix}")


def resolve_output_dir(user_value: str | os.PathLike[str] | None) -> Path:
    """Return a writable output directory, defaulting to :func:`exports_dir`."""

    if not user_value:
        return exports_dir()
    candidate = Path(user_value).expanduser()
    try:
        candidate.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        if exc.errno not in (errno.EPERM, errno.EACCES):
            raise
        fallback = exports_dir()
        _LOGGER.warning(
            "Output directory not writable (errno=%s) requested=%s fallback=%s",
            exc.errno,
            candidate,
            fallback,
        )
        return fallback
    return candidate


__all__ = [
    "HOME_ENV",
    "app_home",
    "exports_dir",
    "output_name_for",
    "resolve_output_dir",
    "sanitize_filename",
    "unique_output_name",
]
