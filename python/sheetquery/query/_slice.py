"""Range slicing: spreadsheet row/column ranges -> table offsets."""

from __future__ import annotations

import logging

from sheetquery._errors import InvalidRangeError, OutOfBoundsError
from sheetquery._table import RowRange, Table
from sheetquery._utils import column_index

logger = logging.getLogger(__name__)


def slice_rows(
    table: Table,
    row_range: RowRange | tuple[int, int],
    *,
    strict: bool = False,
) -> Table:
    """Rows covered by a 1-based, end-exclusive sheet *row_range*.

    ``(2, 4)`` selects sheet rows 2 and 3, the first two data rows of a table
    whose header is on row 1. Offsets are taken from ``table.first_row``, so
    tables loaded with a lower header row keep their sheet numbering. Ranges
    running past the last row are clamped to the rows that exist unless
    *strict* is set, in which case :class:`OutOfBoundsError` is raised.

    The result is a view sharing the table's Row objects.
    """
    rng = RowRange.coerce(row_range)
    offset, count = rng.start - table.first_row, rng.count
    if offset < 0:
        raise InvalidRangeError(
            f"Rows {rng.start}:{rng.end} start before the first data row ({table.first_row})"
        )
    available = len(table)
    if offset + count > available:
        if strict:
            raise OutOfBoundsError(
                f"Rows {rng.start}:{rng.end} exceed the table "
                f"(last data row is {table.first_row + available - 1})"
            )
        logger.debug(
            "Clamping rows %d:%d to %d available rows", rng.start, rng.end, available,
        )
    return table[offset : offset + count]


def column_range(table: Table, first: str, last: str) -> list[str]:
    """Column names covered by the inclusive letter range *first*..*last*."""
    try:
        lo, hi = column_index(first), column_index(last)
    except ValueError as e:
        raise InvalidRangeError(str(e)) from None
    if lo > hi:
        raise InvalidRangeError(f"Column range {first}:{last} is reversed")
    if hi > len(table.columns):
        raise OutOfBoundsError(
            f"Column {last.upper()} is beyond the table's {len(table.columns)} columns"
        )
    return list(table.columns[lo - 1 : hi])
