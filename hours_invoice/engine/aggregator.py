"""Invoice Aggregator.

All arithmetic is done in Decimal at full precision. Rounding to cents is
left to the presentation layer.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Iterable

from hours_invoice.engine.validator import Number, validate_parameters
from hours_invoice.models import (
    InvoiceSummary,
    ProjectTotals,
    ReconciliationError,
    TimeRecord,
)

logger = logging.getLogger(__name__)

# Decimal division by 60/3600 is inexact, so sums taken in a different order
# may differ in the last digit.
HOURS_TOLERANCE = Decimal("1e-9")


def aggregate(records: Iterable[TimeRecord]) -> ProjectTotals:
    """Fold records left to right into per-project and grand totals."""
    totals = ProjectTotals()
    for record in records:
        totals.add(record)
    return totals


def build_invoice(
    records: Iterable[TimeRecord],
    pay_rate: Number,
    tax_rate: Number = Decimal("0"),
) -> InvoiceSummary:
    """Validate the rates, fold the records, and compute the invoice figures."""
    rate, tax = validate_parameters(pay_rate, tax_rate)

    totals = aggregate(records)
    summary = InvoiceSummary.from_totals(totals, rate, tax)

    # --- Final reconciliation ---
    errors: list[str] = []
    if abs(totals.projects_sum - summary.grand_hours) > HOURS_TOLERANCE:
        errors.append(
            f"Hours mismatch: sum of projects={totals.projects_sum} vs grand={summary.grand_hours}"
        )
    if summary.subtotal + summary.tax_amount != summary.grand_total:
        errors.append(
            f"Total mismatch: subtotal+tax={summary.subtotal + summary.tax_amount} "
            f"vs grand_total={summary.grand_total}"
        )
    if errors:
        raise ReconciliationError("; ".join(errors))

    logger.info(
        "Invoice built: %d record(s), %d project(s), %s hours, total %s",
        summary.record_count,
        len(summary.per_project),
        summary.grand_hours,
        summary.grand_total,
    )
    return summary
