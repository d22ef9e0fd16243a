"""Coordinate helpers: column letters, A1 references, cell text."""

from __future__ import annotations

import datetime
import re
from typing import Any

_A1_RE = re.compile(r"^\$?([A-Za-z]{1,3})\$?(\d+)$")
_COLUMN_RE = re.compile(r"^[A-Za-z]{1,3}$")

# Excel's widest sheet is XFD (16384 columns).
MAX_COLUMN = 16384


def column_letter(index: int) -> str:
    """1-based column index -> Excel letters (1 -> "A", 27 -> "AA")."""
    if index < 1 or index > MAX_COLUMN:
        raise ValueError(f"Column index out of range: {index}")
    letters = ""
    while index:
        index, rem = divmod(index - 1, 26)
        letters = chr(ord("A") + rem) + letters
    return letters


def column_index(letters: str) -> int:
    """Excel column letters -> 1-based index. Case-insensitive."""
    if not _COLUMN_RE.match(letters):
        raise ValueError(f"Invalid column letters: {letters!r}")
    index = 0
    for ch in letters.upper():
        index = index * 26 + (ord(ch) - ord("A") + 1)
    if index > MAX_COLUMN:
        raise ValueError(f"Column index out of range: {letters!r}")
    return index


def a1_to_rowcol(ref: str) -> tuple[int, int]:
    """``"B3"`` -> ``(3, 2)``. Dollar signs are ignored."""
    m = _A1_RE.match(ref.strip())
    if not m:
        raise ValueError(f"Invalid A1 reference: {ref!r}")
    row = int(m.group(2))
    if row < 1:
        raise ValueError(f"Invalid A1 reference: {ref!r}")
    return row, column_index(m.group(1))


def rowcol_to_a1(row: int, col: int) -> str:
    return f"{column_letter(col)}{row}"


def cell_text(value: Any) -> str:
    """Render a cell value the way a spreadsheet displays it as text.

    ``None`` becomes ``""``, integral floats drop their ``.0`` and booleans
    render as ``TRUE`` / ``FALSE``.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime.datetime) and value.time() == datetime.time():
        return value.date().isoformat()
    if isinstance(value, (datetime.date, datetime.time)):
        return value.isoformat()
    return str(value)
