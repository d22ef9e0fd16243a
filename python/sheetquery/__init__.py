"""sheetquery: distinct counts, VLOOKUP-style lookups and dense ranks over sheets.

Usage::

    from sheetquery import load_table
    from sheetquery.query import count_distinct, slice_rows, vlookup

    table = load_table("TestInput.xlsx", "Sheet1")
    count_distinct(slice_rows(table, (2, 15)), "UserName")

    sheet3 = load_table("TestInput.xlsx", "Sheet3")
    vlookup(sheet3, sheet3.cell_text(8, "Id"), (2, 7), ["Id", "Length"], 1)
"""

from __future__ import annotations

import os
from collections.abc import Callable
from typing import TypeVar

from sheetquery._errors import (
    ColumnNotFoundError,
    InvalidArgumentError,
    InvalidRangeError,
    OutOfBoundsError,
    SheetNotFoundError,
    SheetQueryError,
    SourceNotFoundError,
)
from sheetquery._loader import ExcelTableLoader
from sheetquery._protocol import TableLoader
from sheetquery._table import FIRST_DATA_ROW, HEADER_ROW, Row, RowRange, Table

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ColumnNotFoundError",
    "ExcelTableLoader",
    "FIRST_DATA_ROW",
    "HEADER_ROW",
    "InvalidArgumentError",
    "InvalidRangeError",
    "OutOfBoundsError",
    "Row",
    "RowRange",
    "SheetNotFoundError",
    "SheetQueryError",
    "SourceNotFoundError",
    "Table",
    "TableLoader",
    "load_table",
    "query_sheet",
]

T = TypeVar("T")


def load_table(
    filename: str | os.PathLike[str],
    sheet: str | None = None,
    header_row: int = HEADER_ROW,
    data_only: bool = True,
) -> Table:
    """Read one worksheet of an .xlsx file into a :class:`Table`.

    Parameters
    ----------
    sheet : str | None
        Worksheet name. ``None`` reads the workbook's active sheet.
    header_row : int
        1-based row holding the column names.
    data_only : bool
        Read cached formula results rather than formula strings.
    """
    return ExcelTableLoader(header_row=header_row, data_only=data_only).load(filename, sheet)


def query_sheet(
    filename: str | os.PathLike[str],
    sheet: str | None,
    fn: Callable[[Table], T],
    loader: TableLoader | None = None,
) -> T:
    """Load *sheet* and return ``fn(table)``.

    The file is closed before *fn* runs; *fn* only sees the in-memory table.
    """
    table = (loader or ExcelTableLoader()).load(filename, sheet)
    return fn(table)
