"""Duration normalization.

A duration cell arrives in one of two encodings:
  Clock-style:   H:MM:SS (or H:MM)  ->  H + MM/60 + SS/3600 hours
  Decimal hours: 1.5, 2, .25         ->  used as-is

The encoding is chosen by the presence of the clock separator in the cell.
"""

from __future__ import annotations

import logging
import re
from decimal import Decimal
from typing import Optional

from hours_invoice.config import DEFAULT_CLOCK_SEPARATOR
from hours_invoice.models import DurationParseError

logger = logging.getLogger(__name__)

_DECIMAL_HOURS = re.compile(r"^(\d+(\.\d*)?|\.\d+)$")
_CLOCK_COMPONENT = re.compile(r"^\d+$")

SECONDS_PER_HOUR = Decimal("3600")
MINUTES_PER_HOUR = Decimal("60")

EXPECTED_FORMATS = "expected H:MM:SS, H:MM, or decimal hours such as 1.5"


def parse_clock(text: str, separator: str = DEFAULT_CLOCK_SEPARATOR) -> Decimal:
    """Convert clock-style text to hours.

    Minutes and seconds above 59 are accepted as-is. Components past the
    seconds are ignored.
    """
    parts = [p.strip() for p in text.split(separator)]

    if len(parts) < 2:
        raise DurationParseError(text, EXPECTED_FORMATS)
    if len(parts) > 3:
        logger.debug("Ignoring trailing clock components in %r", text)
        parts = parts[:3]

    for name, part in zip(("hours", "minutes", "seconds"), parts):
        if not _CLOCK_COMPONENT.match(part):
            raise DurationParseError(
                text, f"{name} component '{part}' is not a non-negative integer; {EXPECTED_FORMATS}"
            )

    hours = Decimal(int(parts[0]))
    minutes = Decimal(int(parts[1]))
    seconds = Decimal(int(parts[2])) if len(parts) == 3 else Decimal("0")

    return hours + minutes / MINUTES_PER_HOUR + seconds / SECONDS_PER_HOUR


def parse_decimal_hours(text: str) -> Decimal:
    """Convert a bare non-negative decimal number of hours."""
    if not _DECIMAL_HOURS.match(text):
        raise DurationParseError(text, EXPECTED_FORMATS)
    return Decimal(text)


def parse_duration(
    raw: str | None,
    separator: str = DEFAULT_CLOCK_SEPARATOR,
    row: Optional[int] = None,
) -> Decimal:
    """Normalize a raw duration cell to hours.

    ``row`` is only used to locate the failure in the error message.
    """
    text = (raw or "").strip()
    if not text:
        raise DurationParseError(raw or "", f"duration is empty; {EXPECTED_FORMATS}", row=row)

    try:
        if separator in text:
            return parse_clock(text, separator)
        return parse_decimal_hours(text)
    except DurationParseError as e:
        if row is None:
            raise
        raise DurationParseError(e.raw, e.reason, row=row) from None
