"""Shared utility functions: rounding and date parsing."""

from __future__ import annotations

import math
import sys
from datetime import date, datetime

# ── Supported date formats (most specific first) ─────────────────────────
_DATE_FORMATS = [
    "%Y-%m-%d",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%dT%H:%M:%S",
    "%d.%m.%Y",
]

CANONICAL_FORMAT = "%Y-%m-%d"

EPSILON = sys.float_info.epsilon


# ── Rounding ──────────────────────────────────────────────────────────────

def round_money(value: float) -> float:
    """Round to 2 decimal places, halves away from zero on the upper side.

    ``EPSILON`` is added first so values like ``1.005`` (stored as
    ``1.00499999…``) round to ``1.01``.  Non-finite values are returned as-is.
    """
    if not math.isfinite(value):
        return value
    return math.floor((value + EPSILON) * 100 + 0.5) / 100


def round_to(value: float, precision: int = 0) -> float:
    """Round *value* to *precision* decimal digits (half-up)."""
    if not math.isfinite(value):
        return value
    multiplier = 10 ** precision
    return math.floor(value * multiplier + 0.5) / multiplier


# ── Dates ─────────────────────────────────────────────────────────────────

def parse_date(value: str) -> date:
    """Parse a date string using the accepted format variants.

    Raises ``ValueError`` if the string cannot be parsed.
    """
    value = value.strip()
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    raise ValueError(
        f"Invalid date format: '{value}'. Expected YYYY-MM-DD or DD.MM.YYYY."
    )


def format_date(d: date) -> str:
    """Format a date to the canonical string representation."""
    return d.strftime(CANONICAL_FORMAT)
