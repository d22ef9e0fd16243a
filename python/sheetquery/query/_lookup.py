"""VLOOKUP-style first-match lookup across a set of columns."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from typing import Any

from sheetquery._errors import InvalidArgumentError
from sheetquery._table import Row, RowRange, Table, row_value
from sheetquery._utils import cell_text
from sheetquery.query._slice import slice_rows

logger = logging.getLogger(__name__)

Comparator = Callable[[Any, Any], bool]
Selector = Callable[[Any], Any]


class _NotFound:
    """Result of a lookup that matched no row.

    Distinct from any cell value, including ``""`` and ``None``. Falsy.
    """

    __slots__ = ()
    _instance: _NotFound | None = None

    def __new__(cls) -> _NotFound:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NOT_FOUND"

    def __reduce__(self) -> str:
        return "NOT_FOUND"


NOT_FOUND = _NotFound()


def is_not_found(value: Any) -> bool:
    return value is NOT_FOUND


# ---------------------------------------------------------------------------
# Comparators: (cell_value, lookup_value) -> bool
# ---------------------------------------------------------------------------


def exact(cell: Any, target: Any) -> bool:
    return cell == target


def case_insensitive(cell: Any, target: Any) -> bool:
    """Text comparison the way Excel matches: case and edge-space insensitive."""
    if isinstance(cell, str) and isinstance(target, str):
        return cell.strip().casefold() == target.strip().casefold()
    return cell == target


def numeric(cell: Any, target: Any) -> bool:
    """Compare as numbers when both sides coerce, else fall back to ``==``."""
    if isinstance(cell, bool) or isinstance(target, bool):
        return cell == target
    try:
        return float(cell) == float(target)
    except (TypeError, ValueError):
        return cell == target


# ---------------------------------------------------------------------------
# Lookup
# ---------------------------------------------------------------------------


def _check_columns(columns: Sequence[str], result_index: int) -> tuple[str, ...]:
    cols = tuple(columns)
    if not cols:
        raise InvalidArgumentError("columns can not be empty")
    for name in cols:
        if not isinstance(name, str) or not name.strip():
            raise InvalidArgumentError(f"Column names can not be blank, got {name!r}")
    if len(set(cols)) != len(cols):
        raise InvalidArgumentError(f"columns contains duplicates: {list(cols)}")
    if isinstance(result_index, bool) or not 0 <= result_index < len(cols):
        raise InvalidArgumentError(
            f"result_index {result_index} is not a valid index into {list(cols)}"
        )
    return cols


def _scan(
    rows: Iterable[Row],
    lookup_value: Any,
    cols: tuple[str, ...],
    result_index: int,
    comparator: Comparator,
    selector: Selector,
) -> Any:
    if isinstance(rows, Table):
        for name in cols:
            rows.require_column(name)

    for row in rows:
        if any(comparator(selector(row_value(row, col)), lookup_value) for col in cols):
            return selector(row_value(row, cols[result_index]))

    logger.debug("No row matched %r in columns %s", lookup_value, list(cols))
    return NOT_FOUND


def lookup(
    rows: Iterable[Row],
    lookup_value: Any,
    columns: Sequence[str],
    result_index: int,
    comparator: Comparator = exact,
    *,
    selector: Selector = cell_text,
) -> Any:
    """Return ``columns[result_index]`` of the first row matching *lookup_value*.

    A row matches when ``comparator(selector(row[col]), lookup_value)`` holds
    for any col in *columns* (tested in order, stopping at the first hit).
    Rows are scanned in order, so the earliest match wins. *selector* turns a
    raw cell into the compared / returned value and defaults to the cell's
    text. Rows may be any mappings, not only :class:`Row`.

    Returns :data:`NOT_FOUND` when no row matches.
    """
    cols = _check_columns(columns, result_index)
    return _scan(rows, lookup_value, cols, result_index, comparator, selector)


def vlookup(
    table: Table,
    lookup_value: Any,
    row_range: RowRange | tuple[int, int],
    columns: Sequence[str],
    result_index: int,
    comparator: Comparator = exact,
    *,
    selector: Selector = cell_text,
) -> Any:
    """:func:`lookup` restricted to the sheet rows in *row_range*."""
    cols = _check_columns(columns, result_index)
    return _scan(
        slice_rows(table, row_range),
        lookup_value,
        cols,
        result_index,
        comparator,
        selector,
    )
