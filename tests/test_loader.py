"""Tests for the openpyxl-backed table loader."""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path

import openpyxl
import pytest
from sheetquery import (
    ExcelTableLoader,
    InvalidArgumentError,
    InvalidRangeError,
    SheetNotFoundError,
    SourceNotFoundError,
    Table,
    TableLoader,
    load_table,
    query_sheet,
)
from sheetquery.query import NOT_FOUND, count_distinct, slice_rows, vlookup


def _write_workbook(path: Path) -> Path:
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = "Sheet1"
    ws.append(["UserName", "Length"])
    for name, length in [("alice", 3), ("bob", 5), ("alice", 3), ("carol", 7)]:
        ws.append([name, length])

    ws3 = wb.create_sheet("Sheet3")
    ws3.append(["Id", "Length"])
    for ident, length in [("A", 10), ("B", 20), ("C", 30), ("D", 40), ("E", 50), ("F", 60)]:
        ws3.append([ident, length])
    ws3.append(["  ", None])

    gaps = wb.create_sheet("Gaps")
    gaps.append(["Id", None, "Length"])
    gaps.append(["A", "x", 1])

    dup = wb.create_sheet("Dup")
    dup.append(["Id", "Id"])

    wb.save(path)
    return path


@pytest.fixture
def workbook_path(tmp_path: Path) -> Path:
    return _write_workbook(tmp_path / "input.xlsx")


class TestExcelTableLoader:
    def test_implements_protocol(self) -> None:
        assert isinstance(ExcelTableLoader(), TableLoader)

    def test_load_named_sheet(self, workbook_path: Path) -> None:
        t = load_table(workbook_path, "Sheet1")
        assert isinstance(t, Table)
        assert t.title == "Sheet1"
        assert t.columns == ("UserName", "Length")
        assert len(t) == 4
        assert t.cell_value(3, "UserName") == "bob"
        assert t.cell_value(3, "Length") == 5

    def test_active_sheet_by_default(self, workbook_path: Path) -> None:
        assert load_table(workbook_path).title == "Sheet1"

    def test_accepts_str_path(self, workbook_path: Path) -> None:
        assert len(load_table(str(workbook_path), "Sheet3")) == 6

    def test_trailing_blank_rows_dropped(self, workbook_path: Path) -> None:
        t = load_table(workbook_path, "Sheet3")
        assert [r["Id"] for r in t] == ["A", "B", "C", "D", "E", "F"]

    def test_blank_header_named_by_letter(self, workbook_path: Path) -> None:
        t = load_table(workbook_path, "Gaps")
        assert t.columns == ("Id", "B", "Length")
        assert t[0]["B"] == "x"

    def test_duplicate_headers_rejected(self, workbook_path: Path) -> None:
        with pytest.raises(InvalidArgumentError):
            load_table(workbook_path, "Dup")

    def test_header_row_option(self, tmp_path: Path) -> None:
        wb = openpyxl.Workbook()
        ws = wb.active
        ws.append(["Report title"])
        ws.append(["Id", "Length"])
        ws.append(["A", 1])
        path = tmp_path / "offset.xlsx"
        wb.save(path)
        t = load_table(path, header_row=2)
        assert t.columns == ("Id", "Length")
        assert len(t) == 1

    def test_header_row_keeps_sheet_numbering(self, tmp_path: Path) -> None:
        wb = openpyxl.Workbook()
        ws = wb.active
        ws.append(["Report title"])
        ws.append(["Id", "Length"])
        ws.append(["A", 1])
        ws.append(["B", 2])
        path = tmp_path / "offset.xlsx"
        wb.save(path)

        t = load_table(path, header_row=2)
        assert t.first_row == 3
        assert [r.number for r in t] == [3, 4]
        assert t.cell_value(3, "Id") == "A"
        assert t.cell("A2") == "Id"
        assert t.cell("B4") == 2
        assert [r["Id"] for r in slice_rows(t, (4, 5))] == ["B"]
        with pytest.raises(InvalidRangeError):
            t.row(2)
        with pytest.raises(InvalidRangeError):
            slice_rows(t, (2, 4))

    def test_invalid_header_row(self) -> None:
        with pytest.raises(InvalidArgumentError):
            ExcelTableLoader(header_row=0)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(SourceNotFoundError):
            load_table(tmp_path / "nope.xlsx", "Sheet1")

    def test_missing_file_is_file_not_found(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_table(tmp_path / "nope.xlsx")

    def test_missing_sheet(self, workbook_path: Path) -> None:
        with pytest.raises(SheetNotFoundError) as exc_info:
            load_table(workbook_path, "Sheet9")
        assert exc_info.value.sheet == "Sheet9"
        assert "Sheet3" in exc_info.value.available
        assert "Sheet9" in str(exc_info.value)


class TestWorkbookClosed:
    """The workbook handle is released on every exit path."""

    def _track(self, monkeypatch: pytest.MonkeyPatch) -> list[object]:
        opened: list[object] = []
        real_load = openpyxl.load_workbook

        def tracking_load(*args: object, **kwargs: object) -> object:
            wb = real_load(*args, **kwargs)
            closed = {"value": False}
            real_close = wb.close

            def close() -> None:
                closed["value"] = True
                real_close()

            wb.close = close
            opened.append(closed)
            return wb

        monkeypatch.setattr(openpyxl, "load_workbook", tracking_load)
        return opened

    def test_closed_after_success(self, workbook_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        opened = self._track(monkeypatch)
        load_table(workbook_path, "Sheet1")
        assert opened == [{"value": True}]

    def test_closed_after_missing_sheet(
        self, workbook_path: Path, monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        opened = self._track(monkeypatch)
        with pytest.raises(SheetNotFoundError):
            load_table(workbook_path, "Sheet9")
        assert opened == [{"value": True}]


class TestQuerySheet:
    def test_count_distinct_example(self, workbook_path: Path) -> None:
        result = query_sheet(
            workbook_path, "Sheet1",
            lambda t: count_distinct(slice_rows(t, (2, 15)), "UserName"),
        )
        assert result == 3

    def test_vlookup_example(self, workbook_path: Path) -> None:
        def find(row_number: int) -> Callable[[Table], object]:
            return lambda t: vlookup(t, t.cell_text(row_number, "Id"), (2, 7), ["Id", "Length"], 1)

        # Sheet rows 2..6 hold A..E; F sits on row 7, outside the range
        assert query_sheet(workbook_path, "Sheet3", find(6)) == "50"
        assert query_sheet(workbook_path, "Sheet3", find(7)) is NOT_FOUND

    def test_custom_loader(self) -> None:
        class MemoryLoader:
            def load(self, path: str | os.PathLike[str], sheet: str | None = None) -> Table:
                return Table(["v"], [[1], [2], [2]], title=sheet)

        loader = MemoryLoader()
        assert isinstance(loader, TableLoader)
        assert query_sheet("unused", "S", lambda t: count_distinct(t, "v"), loader=loader) == 2
