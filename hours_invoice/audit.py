"""Audit output: machine-readable JSON of a computed invoice."""

from __future__ import annotations

import json
from decimal import Decimal
from pathlib import Path

from hours_invoice.models import InvoiceSummary
from hours_invoice.report import round_to_hundredth


class DecimalEncoder(json.JSONEncoder):
    """JSON encoder that handles Decimal values."""
    def default(self, obj):
        if isinstance(obj, Decimal):
            return float(obj)
        return super().default(obj)


def generate_audit_dict(summary: InvoiceSummary) -> dict:
    """Build audit dictionary from a computed invoice (no file I/O)."""
    return {
        "rates": {
            "pay_rate": float(summary.pay_rate),
            "tax_rate": float(summary.tax_rate),
        },
        "projects": [
            {"project": project, "hours": float(hours)}
            for project, hours in summary.per_project.items()
        ],
        "summary": {
            "total_records": summary.record_count,
            "total_projects": len(summary.per_project),
            "total_hours": float(summary.grand_hours),
            "subtotal": float(summary.subtotal),
            "tax_amount": float(summary.tax_amount),
            "grand_total": float(summary.grand_total),
        },
        "display": {
            "total_hours": float(round_to_hundredth(summary.grand_hours)),
            "subtotal": float(round_to_hundredth(summary.subtotal)),
            "tax_amount": float(round_to_hundredth(summary.tax_amount)),
            "grand_total": float(
                round_to_hundredth(summary.subtotal) + round_to_hundredth(summary.tax_amount)
            ),
        },
    }


def generate_audit(summary: InvoiceSummary, output_path: str | Path) -> Path:
    """Generate audit JSON file from a computed invoice."""
    output_path = Path(output_path)
    audit = generate_audit_dict(summary)
    output_path.write_text(json.dumps(audit, indent=2, cls=DecimalEncoder), encoding='utf-8')
    return output_path
