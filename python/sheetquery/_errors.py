"""Exception types raised by sheetquery.

Each error also subclasses the builtin a plain Python caller would expect,
so ``except KeyError`` around a column access keeps working.
"""

from __future__ import annotations


class SheetQueryError(Exception):
    """Base class for every error raised by sheetquery."""


class InvalidRangeError(SheetQueryError, ValueError):
    """A row or column range is malformed (e.g. start after end)."""


class OutOfBoundsError(SheetQueryError, IndexError):
    """A range or cell position lies outside the available data."""


class ColumnNotFoundError(SheetQueryError, KeyError):
    """A referenced column is not part of the table."""

    def __init__(self, column: str, available: tuple[str, ...] = ()) -> None:
        self.column = column
        self.available = available
        super().__init__(column)

    def __str__(self) -> str:
        if self.available:
            return f"Column {self.column!r} does not exist (available: {list(self.available)})"
        return f"Column {self.column!r} does not exist"


class InvalidArgumentError(SheetQueryError, ValueError):
    """An argument violates a precondition (empty column set, bad index, ...)."""


class SourceNotFoundError(SheetQueryError, FileNotFoundError):
    """The spreadsheet file to load does not exist."""


class SheetNotFoundError(SheetQueryError, KeyError):
    """The requested worksheet is not present in the workbook."""

    def __init__(self, sheet: str, available: list[str] | None = None) -> None:
        self.sheet = sheet
        self.available = list(available or [])
        super().__init__(sheet)

    def __str__(self) -> str:
        return f"Worksheet {self.sheet!r} does not exist (available: {self.available})"
