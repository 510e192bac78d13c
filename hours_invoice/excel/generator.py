"""Excel Report Generator.

Writes a fresh single-sheet workbook: a project/hours table followed by the
totals block. Excel formulas are NOT relied upon; all values are pre-computed
in Python.
"""

from __future__ import annotations

from pathlib import Path

import openpyxl
from openpyxl.styles import Alignment, Border, Font, Side

from hours_invoice.models import InvoiceSummary
from hours_invoice.report import format_rate, round_to_hundredth

SHEET_TITLE = "Invoice"

# Layout constants
TITLE_ROW = 1
TABLE_HEADER_ROW = 3
DATA_START_ROW = 4
LABEL_COL = 1
VALUE_COL = 2

# Formatting constants
THIN_BORDER = Border(
    left=Side(style='thin'),
    right=Side(style='thin'),
    top=Side(style='thin'),
    bottom=Side(style='thin'),
)

HEADER_FONT = Font(name='Calibri', size=11, bold=True)
DATA_FONT = Font(name='Calibri', size=11)
TITLE_FONT = Font(name='Calibri', size=12, bold=True)
CENTER_ALIGN = Alignment(horizontal='center', vertical='center')
DOLLAR_FORMAT = '_("$"* #,##0.00_);_("$"* \\(#,##0.00\\);_("$"* "-"??_);_(@_)'
NUMBER_FORMAT = '#,##0.00'


def _write_row(ws, row: int, label: str, value, number_format: str, bold: bool = False) -> None:
    font = HEADER_FONT if bold else DATA_FONT

    label_cell = ws.cell(row=row, column=LABEL_COL)
    label_cell.value = label
    label_cell.font = font
    label_cell.border = THIN_BORDER

    value_cell = ws.cell(row=row, column=VALUE_COL)
    value_cell.value = value
    value_cell.font = font
    value_cell.border = THIN_BORDER
    value_cell.number_format = number_format


def generate_excel_report(
    summary: InvoiceSummary,
    output_path: str | Path,
) -> Path:
    """Generate the Excel invoice from a computed summary.

    Money cells hold cent-rounded values; the TOTAL cell is the sum of the
    rounded subtotal and GST cells so the sheet adds up on its own.
    """
    output_path = Path(output_path)

    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = SHEET_TITLE

    ws.merge_cells(start_row=TITLE_ROW, start_column=LABEL_COL, end_row=TITLE_ROW, end_column=VALUE_COL)
    title_cell = ws.cell(row=TITLE_ROW, column=LABEL_COL)
    title_cell.value = 'Invoice Summary for Hours Worked'
    title_cell.font = TITLE_FONT
    title_cell.alignment = CENTER_ALIGN

    for col, label in ((LABEL_COL, 'Project'), (VALUE_COL, 'Hours')):
        cell = ws.cell(row=TABLE_HEADER_ROW, column=col)
        cell.value = label
        cell.font = HEADER_FONT
        cell.alignment = CENTER_ALIGN
        cell.border = THIN_BORDER

    row = DATA_START_ROW
    for project, hours in summary.per_project.items():
        _write_row(ws, row, project, float(hours), NUMBER_FORMAT)
        row += 1

    subtotal = round_to_hundredth(summary.subtotal)
    gst = round_to_hundredth(summary.tax_amount)

    # --- Totals block, separated by one empty row ---
    row += 1
    _write_row(ws, row, 'Total Time (h)', float(summary.grand_hours), NUMBER_FORMAT, bold=True)
    row += 2
    _write_row(ws, row, f'Subtotal at ${format_rate(summary.pay_rate)}/hr', float(subtotal), DOLLAR_FORMAT)
    row += 1
    _write_row(ws, row, f'GST at {format_rate(summary.tax_rate * 100)}%', float(gst), DOLLAR_FORMAT)
    row += 1
    _write_row(ws, row, 'TOTAL', float(subtotal + gst), DOLLAR_FORMAT, bold=True)

    ws.column_dimensions['A'].width = 33
    ws.column_dimensions['B'].width = 14

    output_path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(str(output_path))
    return output_path
