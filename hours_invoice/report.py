"""Plain-text invoice renderer.

This is where full-precision figures are rounded to cents for display.
"""

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP

from hours_invoice.models import InvoiceSummary

LABEL_WIDTH = 30
VALUE_WIDTH = 10
RULE = "-" * (LABEL_WIDTH + 1 + VALUE_WIDTH)

CENT = Decimal("0.01")


def round_to_hundredth(value: Decimal | int | float) -> Decimal:
    """Round half-up to two decimal places."""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENT, ROUND_HALF_UP)


def format_rate(value: Decimal) -> str:
    """Shortest plain rendering of a rate: 50.00 -> '50', 0.125 -> '0.125'."""
    text = format(value.normalize(), "f")
    return text if text != "-0" else "0"


def _line(label: str, value: Decimal) -> str:
    return f"{label:<{LABEL_WIDTH}} {round_to_hundredth(value):>{VALUE_WIDTH}.2f}"


def render_invoice(summary: InvoiceSummary) -> str:
    """Render the invoice as a fixed-width table.

    The TOTAL line is the sum of the displayed subtotal and GST lines, so the
    printed column always adds up.
    """
    subtotal = round_to_hundredth(summary.subtotal)
    gst = round_to_hundredth(summary.tax_amount)

    lines = [f"{'Project':<{LABEL_WIDTH}} {'Hours':>{VALUE_WIDTH}}", RULE]
    for project, hours in summary.per_project.items():
        lines.append(_line(project, hours))

    lines.append("")
    lines.append(_line("Total Time (h)", summary.grand_hours))
    lines.append("")
    lines.append(_line(f"Subtotal at ${format_rate(summary.pay_rate)}/hr", subtotal))
    lines.append(_line(f"GST at {format_rate(summary.tax_rate * 100)}%", gst))
    lines.append(_line("TOTAL", subtotal + gst))

    return "\n".join(lines) + "\n"
