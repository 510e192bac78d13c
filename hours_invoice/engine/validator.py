"""Parameter validation, run once before any folding."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

from hours_invoice.models import ParameterError

Number = Decimal | int | float | str


def _to_decimal(name: str, value: Number) -> Decimal:
    if isinstance(value, bool):
        raise ParameterError(f"{name} must be a number, got {value!r}")
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ParameterError(f"{name} must be a number, got {value!r}") from None
    if not result.is_finite():
        raise ParameterError(f"{name} must be finite, got {value!r}")
    return result


def validate_parameters(pay_rate: Number, tax_rate: Number) -> tuple[Decimal, Decimal]:
    """Return (pay_rate, tax_rate) as Decimals, or raise ParameterError.

    pay_rate must be non-negative; tax_rate is a fraction in [0, 1].
    """
    errors: list[str] = []
    rate = _to_decimal("pay_rate", pay_rate)
    tax = _to_decimal("tax_rate", tax_rate)

    if rate < 0:
        errors.append(f"pay_rate must be non-negative, got {rate}")
    if not Decimal("0") <= tax <= Decimal("1"):
        errors.append(f"tax_rate must be a fraction between 0 and 1, got {tax}")

    if errors:
        raise ParameterError("; ".join(errors))

    return rate, tax
