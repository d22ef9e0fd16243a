"""Distinct counting over a column."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from sheetquery._table import Row, Table, row_value
from sheetquery._utils import cell_text


def distinct_values(rows: Iterable[Row], column: str) -> list[Any]:
    """First-seen raw values of *column*, distinct by their cell text."""
    if isinstance(rows, Table):
        rows.require_column(column)
    seen: set[str] = set()
    values: list[Any] = []
    for row in rows:
        val = row_value(row, column)
        key = cell_text(val)
        if key not in seen:
            seen.add(key)
            values.append(val)
    return values


def count_distinct(rows: Iterable[Row], column: str) -> int:
    """Number of distinct cell texts in *column*.

    ``5``, ``5.0`` and ``"5"`` count once. Raises ColumnNotFoundError when
    the column is missing, even for an empty table.
    """
    if isinstance(rows, Table):
        rows.require_column(column)
    return len({cell_text(row_value(row, column)) for row in rows})
