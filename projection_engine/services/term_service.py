"""Term normalisation: years / months resolution and calendar month counting.

A term is given either in years (fractional, takes priority) or in whole
months.  Rate exponentiation works in years; monthly schedules work in
months:

    years_of   = years            if years given, else months / 12
    months_of  = round(years × 12) if years given, else round(months)
"""

from __future__ import annotations

import calendar
import math
from dataclasses import dataclass
from datetime import date
from typing import Optional

from projection_engine.services.errors import InvalidTerm

_MISSING_TERM = "Term is not set: provide years or months."


@dataclass(frozen=True)
class Term:
    years: Optional[float] = None
    months: Optional[float] = None


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def years_of(term: Term) -> float:
    """Fractional number of years in *term*."""
    if term.years is not None:
        return term.years
    if term.months is not None:
        return term.months / 12
    raise InvalidTerm(_MISSING_TERM)


def months_of(term: Term) -> int:
    """Whole number of months in *term*."""
    if term.years is not None:
        return _round_half_up(term.years * 12)
    if term.months is not None:
        return _round_half_up(term.months)
    raise InvalidTerm(_MISSING_TERM)


# ── Calendar helpers ──────────────────────────────────────────────────────

def add_months(start: date, months: int) -> date:
    """Shift *start* by *months*, clamping the day to the target month's end."""
    index = start.month - 1 + months
    year = start.year + index // 12
    month = index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def months_between(start: date, end: date) -> int:
    """Number of whole calendar months from *start* to *end*.

    Partial months are truncated toward zero, so 15 Jan → 14 Mar is 1 month
    and 31 Jan → 29 Feb 2024 is 1 month.
    """
    if end < start:
        return -months_between(end, start)
    months = (end.year - start.year) * 12 + (end.month - start.month)
    if add_months(start, months) > end:
        months -= 1
    return months
