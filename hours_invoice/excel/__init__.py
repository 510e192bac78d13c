"""Excel output layer."""
from hours_invoice.excel.generator import generate_excel_report

__all__ = ["generate_excel_report"]
