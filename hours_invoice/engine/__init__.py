"""Validation and aggregation engines."""
from hours_invoice.engine.validator import validate_parameters
from hours_invoice.engine.aggregator import aggregate, build_invoice

__all__ = ["validate_parameters", "aggregate", "build_invoice"]
