"""Export parsing layer."""
from hours_invoice.parsers.duration import parse_duration
from hours_invoice.parsers.records import parse_records, parse_records_file, resolve_columns

__all__ = ["parse_duration", "parse_records", "parse_records_file", "resolve_columns"]
