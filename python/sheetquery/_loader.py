"""openpyxl-backed TableLoader.

The workbook is opened read-only and always closed before ``load`` returns,
whether reading succeeded or not.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from typing import Any

from sheetquery._errors import (
    InvalidArgumentError,
    SheetNotFoundError,
    SourceNotFoundError,
)
from sheetquery._table import HEADER_ROW, Table
from sheetquery._utils import cell_text, column_letter

logger = logging.getLogger(__name__)


def _header_names(header: Iterable[Any]) -> list[str]:
    """Stringify header cells; blanks are named after their column letter.

    Trailing blank header cells are padding and do not become columns.
    """
    cells = [cell_text(val).strip() for val in header]
    while cells and not cells[-1]:
        cells.pop()
    return [name or column_letter(i) for i, name in enumerate(cells, start=1)]


def _is_blank(values: tuple[Any, ...]) -> bool:
    return all(v is None or (isinstance(v, str) and not v.strip()) for v in values)


class ExcelTableLoader:
    """Load a worksheet from an .xlsx file into a :class:`Table`.

    Parameters
    ----------
    header_row : int
        1-based row holding the column names. Data starts on the next row.
    data_only : bool
        Read cached formula results instead of formula strings (default).
    """

    def __init__(self, header_row: int = HEADER_ROW, data_only: bool = True) -> None:
        if header_row < 1:
            raise InvalidArgumentError(f"header_row must be >= 1, got {header_row}")
        self.header_row = header_row
        self.data_only = data_only

    def load(self, path: str | os.PathLike[str], sheet: str | None = None) -> Table:
        import openpyxl

        filename = os.fspath(path)
        if not os.path.isfile(filename):
            raise SourceNotFoundError(f"Spreadsheet not found: {filename}")

        wb = openpyxl.load_workbook(filename, read_only=True, data_only=self.data_only)
        try:
            if sheet is None:
                ws = wb.active
                if ws is None:
                    raise SheetNotFoundError("<active>", wb.sheetnames)
            elif sheet not in wb.sheetnames:
                raise SheetNotFoundError(sheet, wb.sheetnames)
            else:
                ws = wb[sheet]
            title = ws.title
            rows = ws.iter_rows(min_row=self.header_row, values_only=True)
            header = next(rows, ())
            columns = _header_names(header)
            data = list(rows)
        finally:
            wb.close()

        while data and _is_blank(data[-1]):
            data.pop()
        logger.debug(
            "Loaded sheet %r from %s: %d columns, %d rows",
            title, filename, len(columns), len(data),
        )
        return Table(columns, data, title=title, first_row=self.header_row + 1)
