"""Invoice figures from time-tracking exports."""
from hours_invoice.config import ParserConfig
from hours_invoice.engine import aggregate, build_invoice, validate_parameters
from hours_invoice.models import (
    DurationParseError,
    InvoiceError,
    InvoiceSummary,
    ParameterError,
    ProjectTotals,
    ReconciliationError,
    RowError,
    RowErrors,
    SchemaError,
    TimeRecord,
)
from hours_invoice.parsers import parse_duration, parse_records, parse_records_file

__all__ = [
    "ParserConfig",
    "aggregate",
    "build_invoice",
    "validate_parameters",
    "DurationParseError",
    "InvoiceError",
    "InvoiceSummary",
    "ParameterError",
    "ProjectTotals",
    "ReconciliationError",
    "RowError",
    "RowErrors",
    "SchemaError",
    "TimeRecord",
    "parse_duration",
    "parse_records",
    "parse_records_file",
]
