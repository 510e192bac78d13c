"""Tests for Excel report generator."""

import pytest
from decimal import Decimal

import openpyxl

from hours_invoice.engine import build_invoice
from hours_invoice.excel.generator import (
    DATA_START_ROW,
    DOLLAR_FORMAT,
    SHEET_TITLE,
    generate_excel_report,
)
from hours_invoice.models import TimeRecord


def _make_summary():
    records = [
        TimeRecord("Acme", Decimal("1.5")),
        TimeRecord("Globex", Decimal("2")),
        TimeRecord("Acme", Decimal("0.5")),
    ]
    return build_invoice(records, Decimal("50"), Decimal("0.05"))


def _labelled_values(ws) -> dict:
    return {
        ws.cell(row=r, column=1).value: ws.cell(row=r, column=2)
        for r in range(1, ws.max_row + 1)
        if ws.cell(row=r, column=1).value
    }


class TestExcelGenerator:
    def test_creates_file(self, tmp_path):
        out = tmp_path / "out" / "Invoice.xlsx"
        result = generate_excel_report(_make_summary(), out)
        assert result == out
        assert out.exists()

    def test_project_rows(self, tmp_path):
        out = generate_excel_report(_make_summary(), tmp_path / "Invoice.xlsx")
        ws = openpyxl.load_workbook(out)[SHEET_TITLE]
        assert ws.cell(row=DATA_START_ROW, column=1).value == "Acme"
        assert ws.cell(row=DATA_START_ROW, column=2).value == pytest.approx(2.0)
        assert ws.cell(row=DATA_START_ROW + 1, column=1).value == "Globex"
        assert ws.cell(row=DATA_START_ROW + 1, column=2).value == pytest.approx(2.0)

    def test_totals_block(self, tmp_path):
        out = generate_excel_report(_make_summary(), tmp_path / "Invoice.xlsx")
        cells = _labelled_values(openpyxl.load_workbook(out)[SHEET_TITLE])
        assert cells["Total Time (h)"].value == pytest.approx(4.0)
        assert cells["Subtotal at $50/hr"].value == pytest.approx(200.0)
        assert cells["GST at 5%"].value == pytest.approx(10.0)
        assert cells["TOTAL"].value == pytest.approx(210.0)
        assert cells["TOTAL"].number_format == DOLLAR_FORMAT

    def test_no_formulas(self, tmp_path):
        out = generate_excel_report(_make_summary(), tmp_path / "Invoice.xlsx")
        ws = openpyxl.load_workbook(out)[SHEET_TITLE]
        for row in ws.iter_rows():
            for cell in row:
                assert not (isinstance(cell.value, str) and cell.value.startswith("="))

    def test_empty_invoice(self, tmp_path):
        out = generate_excel_report(build_invoice([], 10), tmp_path / "Empty.xlsx")
        cells = _labelled_values(openpyxl.load_workbook(out)[SHEET_TITLE])
        assert cells["TOTAL"].value == 0
