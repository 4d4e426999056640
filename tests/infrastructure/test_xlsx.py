"""Tests for reading and writing .xlsx sheets."""

import pytest
from openpyxl import Workbook, load_workbook

from stockroom.domain.exceptions import ValidationError
from stockroom.infrastructure.spreadsheet.xlsx_reader import read_rows
from stockroom.infrastructure.spreadsheet.xlsx_writer import SHEET_TITLE, write_rows


def _workbook(path, rows):
    wb = Workbook()
    ws = wb.active
    for row in rows:
        ws.append(row)
    wb.save(path)
    return path


class TestReadRows:

    def test_rows_keyed_by_header(self, tmp_path):
        path = _workbook(tmp_path / "inventory.xlsx", [
            ["ItemID", " ItemName ", "Stock"],
            [1, "  Multimeter ", 10.0],
            [None, None, None],
            [2, "Breadboard", 4],
        ])

        assert read_rows(path) == [
            {"ItemID": 1, "ItemName": "Multimeter", "Stock": 10},
            {"ItemID": 2, "ItemName": "Breadboard", "Stock": 4},
        ]

    def test_missing_cells_are_blank(self, tmp_path):
        path = _workbook(tmp_path / "users.xlsx", [
            ["UserID", "UserName", "UserSpecs"],
            [11, "Ana"],
        ])
        assert read_rows(path) == [{"UserID": 11, "UserName": "Ana", "UserSpecs": ""}]

    def test_empty_sheet(self, tmp_path):
        assert read_rows(_workbook(tmp_path / "empty.xlsx", [])) == []

    def test_not_a_workbook(self, tmp_path):
        path = tmp_path / "inventory.xlsx"
        path.write_text("ItemID,ItemName\n1,Multimeter\n")
        with pytest.raises(ValidationError, match="Cannot open spreadsheet"):
            read_rows(path)


class TestWriteRows:

    def test_header_and_rows_in_column_order(self, tmp_path):
        path = write_rows(
            tmp_path / "out" / "activity.xlsx",
            ("ActivityID", "Action", "Notes"),
            [{"Action": "Lost", "ActivityID": 2, "Notes": None}],
        )

        ws = load_workbook(path).active
        assert ws.title == SHEET_TITLE
        assert ws.freeze_panes == "A2"
        values = list(ws.iter_rows(values_only=True))
        assert values[0] == ("ActivityID", "Action", "Notes")
        assert values[1][:2] == (2, "Lost")
        assert values[1][2] in (None, "")
