"""Table, Row and RowRange: the read-only in-memory data model.

Row numbers follow the spreadsheet convention: by default row 1 holds the
column names and row 2 is the first data row (index 0 of the table). A
table loaded with a lower header row keeps the sheet's numbering.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, overload

from sheetquery._errors import (
    ColumnNotFoundError,
    InvalidArgumentError,
    InvalidRangeError,
    OutOfBoundsError,
)
from sheetquery._utils import a1_to_rowcol, cell_text, column_letter

HEADER_ROW = 1
FIRST_DATA_ROW = 2


@dataclass(frozen=True)
class RowRange:
    """1-based, end-exclusive range of sheet rows.

    ``RowRange(2, 4)`` covers sheet rows 2 and 3, i.e. the first two data rows.
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise InvalidRangeError(
                f"Row range start {self.start} is after end {self.end}"
            )
        if self.start < FIRST_DATA_ROW:
            raise InvalidRangeError(
                f"Row range start {self.start} is before the first data row ({FIRST_DATA_ROW})"
            )

    @property
    def offset(self) -> int:
        """Zero-based index of the first row in the table."""
        return self.start - FIRST_DATA_ROW

    @property
    def count(self) -> int:
        return self.end - self.start

    @classmethod
    def coerce(cls, value: RowRange | tuple[int, int]) -> RowRange:
        if isinstance(value, RowRange):
            return value
        start, end = value
        return cls(start, end)


class Row(Mapping[str, Any]):
    """A read-only record mapping column name -> cell value."""

    __slots__ = ("_index", "_values", "_number")

    def __init__(
        self, index: Mapping[str, int], values: Sequence[Any], number: int | None = None,
    ) -> None:
        self._index = index
        self._values = tuple(values)
        self._number = number

    @property
    def number(self) -> int | None:
        """1-based sheet row number, or None for rows built outside a table."""
        return self._number

    def __getitem__(self, column: str) -> Any:
        try:
            pos = self._index[column]
        except KeyError:
            raise ColumnNotFoundError(column, tuple(self._index)) from None
        return self._values[pos]

    def __iter__(self) -> Iterator[str]:
        return iter(self._index)

    def __len__(self) -> int:
        return len(self._index)

    def text(self, column: str) -> str:
        """Cell text for *column* (see :func:`cell_text`)."""
        return cell_text(self[column])

    def __repr__(self) -> str:
        body = ", ".join(f"{k!r}: {v!r}" for k, v in zip(self._index, self._values))
        return f"<Row {self._number} {{{body}}}>"


def row_value(row: Mapping[str, Any], column: str) -> Any:
    """``row[column]`` for any mapping, raising ColumnNotFoundError when absent."""
    try:
        return row[column]
    except ColumnNotFoundError:
        raise
    except KeyError:
        raise ColumnNotFoundError(column, tuple(row)) from None


class Table:
    """Ordered, immutable collection of rows sharing one column set.

    Rows shorter than the header are padded with ``None``; longer rows are
    truncated to the header width. *first_row* is the sheet row number of
    the first data row; the header sits on the row above it.
    """

    __slots__ = ("_columns", "_index", "_rows", "_title", "_first_row")

    def __init__(
        self,
        columns: Iterable[str],
        rows: Iterable[Sequence[Any]] = (),
        title: str | None = None,
        first_row: int = FIRST_DATA_ROW,
    ) -> None:
        cols = tuple(columns)
        seen: set[str] = set()
        for name in cols:
            if not isinstance(name, str) or not name.strip():
                raise InvalidArgumentError(f"Column names must be non-blank strings, got {name!r}")
            if name in seen:
                raise InvalidArgumentError(f"Duplicate column name: {name!r}")
            seen.add(name)
        if first_row < FIRST_DATA_ROW:
            raise InvalidArgumentError(
                f"first_row must be >= {FIRST_DATA_ROW}, got {first_row}"
            )

        self._columns = cols
        self._index: dict[str, int] = {name: i for i, name in enumerate(cols)}
        self._title = title
        self._first_row = first_row
        width = len(cols)
        built: list[Row] = []
        for i, values in enumerate(rows):
            if isinstance(values, (str, bytes)):
                raise InvalidArgumentError(
                    f"Row {first_row + i} must be a sequence of cells, got {values!r}"
                )
            vals = list(values)[:width]
            if len(vals) < width:
                vals.extend([None] * (width - len(vals)))
            built.append(Row(self._index, vals, first_row + i))
        self._rows: tuple[Row, ...] = tuple(built)

    @classmethod
    def _view(cls, parent: Table, rows: tuple[Row, ...]) -> Table:
        """A table over a subset of *parent*'s rows, sharing the Row objects."""
        view = object.__new__(cls)
        view._columns = parent._columns
        view._index = parent._index
        view._title = parent._title
        view._rows = rows
        first = rows[0].number if rows else None
        view._first_row = first if first is not None else parent._first_row
        return view

    @classmethod
    def from_rows(
        cls, header: Sequence[str], rows: Iterable[Sequence[Any]], title: str | None = None,
    ) -> Table:
        """Build from a header row plus positional data rows."""
        return cls(header, rows, title=title)

    @classmethod
    def from_records(
        cls,
        records: Iterable[Mapping[str, Any]],
        columns: Sequence[str] | None = None,
        title: str | None = None,
    ) -> Table:
        """Build from dicts. Columns default to the first record's key order."""
        recs = list(records)
        if columns is None:
            columns = list(recs[0].keys()) if recs else []
        return cls(columns, ([rec.get(c) for c in columns] for rec in recs), title=title)

    # ------------------------------------------------------------------
    # Shape
    # ------------------------------------------------------------------

    @property
    def columns(self) -> tuple[str, ...]:
        return self._columns

    @property
    def title(self) -> str | None:
        return self._title

    @property
    def first_row(self) -> int:
        """Sheet row number of the first data row."""
        return self._first_row

    def has_column(self, name: str) -> bool:
        return name in self._index

    def require_column(self, name: str) -> None:
        if name not in self._index:
            raise ColumnNotFoundError(name, self._columns)

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(self._rows)

    @overload
    def __getitem__(self, key: int) -> Row: ...

    @overload
    def __getitem__(self, key: slice) -> Table: ...

    def __getitem__(self, key: int | slice) -> Row | Table:
        if isinstance(key, slice):
            return Table._view(self, self._rows[key])
        return self._rows[key]

    # ------------------------------------------------------------------
    # Cell access by sheet position
    # ------------------------------------------------------------------

    def row(self, row_number: int) -> Row:
        """Row at 1-based sheet *row_number* (``first_row`` is the first data row)."""
        if row_number < self._first_row:
            raise InvalidRangeError(
                f"Row {row_number} is not a data row (data starts at row {self._first_row})"
            )
        offset = row_number - self._first_row
        if offset >= len(self._rows):
            raise OutOfBoundsError(
                f"Row {row_number} is beyond the last row ({self._first_row + len(self._rows) - 1})"
            )
        return self._rows[offset]

    def cell_value(self, row_number: int, column: str) -> Any:
        return self.row(row_number)[column]

    def cell_text(self, row_number: int, column: str) -> str:
        return cell_text(self.cell_value(row_number, column))

    def cell(self, ref: str) -> Any:
        """Value at an A1 reference. The header row returns the column name."""
        row_number, col = a1_to_rowcol(ref)
        if col > len(self._columns):
            raise OutOfBoundsError(
                f"Column {column_letter(col)} is beyond the last column "
                f"({column_letter(len(self._columns)) if self._columns else 'none'})"
            )
        name = self._columns[col - 1]
        if row_number == self._first_row - 1:
            return name
        return self.cell_value(row_number, name)

    def column_values(self, name: str) -> list[Any]:
        self.require_column(name)
        return [row[name] for row in self._rows]

    def __repr__(self) -> str:
        title = f" {self._title!r}" if self._title else ""
        return f"<Table{title} columns={list(self._columns)} rows={len(self._rows)}>"
