"""Canonical data model and error taxonomy for the invoice pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Optional


@dataclass(frozen=True)
class TimeRecord:
    """One parsed export row: a project label and a duration in hours."""
    project: str
    hours: Decimal
    row: Optional[int] = None

    def __post_init__(self) -> None:
        if not self.project or not self.project.strip():
            raise ValueError("TimeRecord project must be non-empty")
        if not isinstance(self.hours, Decimal):
            if isinstance(self.hours, bool):
                raise ValueError(f"TimeRecord hours must be a number, got {self.hours!r}")
            try:
                object.__setattr__(self, "hours", Decimal(str(self.hours).strip()))
            except InvalidOperation:
                raise ValueError(f"TimeRecord hours must be a number, got {self.hours!r}") from None
        if not self.hours.is_finite():
            raise ValueError(f"TimeRecord hours must be finite, got {self.hours}")
        if self.hours < 0:
            raise ValueError(f"TimeRecord hours must be non-negative, got {self.hours}")


@dataclass
class ProjectTotals:
    """Accumulator folded over TimeRecords, one record at a time."""
    totals: dict[str, Decimal] = field(default_factory=dict)
    grand_hours: Decimal = Decimal("0")
    record_count: int = 0

    def add(self, record: TimeRecord) -> ProjectTotals:
        self.totals[record.project] = self.totals.get(record.project, Decimal("0")) + record.hours
        self.grand_hours += record.hours
        self.record_count += 1
        return self

    @property
    def projects_sum(self) -> Decimal:
        return sum(self.totals.values(), Decimal("0"))


@dataclass(frozen=True)
class InvoiceSummary:
    """Final invoice figures at full precision. Rounding happens at render time."""
    per_project: dict[str, Decimal]
    grand_hours: Decimal
    pay_rate: Decimal
    tax_rate: Decimal
    subtotal: Decimal
    tax_amount: Decimal
    grand_total: Decimal
    record_count: int = 0

    @classmethod
    def from_totals(
        cls,
        totals: ProjectTotals,
        pay_rate: Decimal,
        tax_rate: Decimal,
    ) -> InvoiceSummary:
        subtotal = totals.grand_hours * pay_rate
        tax_amount = subtotal * tax_rate
        return cls(
            per_project=dict(totals.totals),
            grand_hours=totals.grand_hours,
            pay_rate=pay_rate,
            tax_rate=tax_rate,
            subtotal=subtotal,
            tax_amount=tax_amount,
            grand_total=subtotal + tax_amount,
            record_count=totals.record_count,
        )


class InvoiceError(Exception):
    """Base class for every error the pipeline raises."""


class SchemaError(InvoiceError):
    """Raised when the header row is missing or lacks a required column."""
    def __init__(self, message: str, field: Optional[str] = None, header: Optional[list[str]] = None):
        self.field = field
        self.header = header or []
        super().__init__(message)


class DurationParseError(InvoiceError, ValueError):
    """Raised when a duration cell matches neither accepted encoding."""
    def __init__(self, raw: str, reason: str, row: Optional[int] = None):
        self.raw = raw
        self.reason = reason
        self.row = row
        location = f"row {row}: " if row is not None else ""
        super().__init__(f"{location}cannot parse duration '{raw}': {reason}")


class RowError(InvoiceError):
    """A single data row that cannot be turned into a TimeRecord."""
    def __init__(self, row: int, field: str, raw: str, reason: str):
        self.row = row
        self.field = field
        self.raw = raw
        self.reason = reason
        super().__init__(f"row {row}: invalid {field} '{raw}': {reason}")


class RowErrors(InvoiceError):
    """Raised in collect-all mode when one or more rows failed."""
    def __init__(self, errors: list[RowError]):
        self.errors = errors
        super().__init__(f"Parsing failed with {len(errors)} row error(s):\n" +
                         "\n".join(f"  - {e}" for e in errors))


class ParameterError(InvoiceError, ValueError):
    """Raised when the pay rate or tax rate is out of range."""


class ReconciliationError(InvoiceError):
    """Raised when the computed totals fail their own cross-checks."""
