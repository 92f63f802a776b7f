"""Document-level conversion errors."""

from __future__ import annotations

from typing import Optional, Sequence, Tuple


class ConversionError(ValueError):
    """Raised when a document cannot be converted into a usable workbook.

    Carries the source file, target sheet, the spreadsheet rows that would have
    been affected and the missing field labels. ``looks_like_merged_columns``
    is set when the failure resembles the vendor layout that glues adjacent
    columns together rather than an unknown document.
    """

    def __init__(
        self,
        message: str,
        file_name: str = "",
        sheet_name: str = "",
        row_numbers: Optional[Sequence[int]] = None,
        missing_fields: Optional[Sequence[str]] = None,
        looks_like_merged_columns: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.file_name = file_name
        self.sheet_name = sheet_name
        self.row_numbers: Tuple[int, ...] = tuple(row_numbers or ())
        self.missing_fields: Tuple[str, ...] = tuple(missing_fields or ())
        self.looks_like_merged_columns = looks_like_merged_columns

    def describe(self) -> str:
        """Return a one-line summary suitable for CLI warnings and logs."""

        parts = [self.message]
        if self.file_name:
            parts.append(f"file={self.file_name}")
        if self.row_numbers:
            parts.append("rows=" + ",".join(str(row) for row in self.row_numbers))
        if self.missing_fields:
            parts.append("missing=" + ",".join(self.missing_fields))
        if self.looks_like_merged_columns:
            parts.append("hint=merged-columns layout")
        return " ".join(parts)


__all__ = ["ConversionError"]
