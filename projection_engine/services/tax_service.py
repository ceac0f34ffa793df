"""Tax treatment of individual investment accounts (IIS).

Type A deduction (simplified):
    deduction = min(principal × tax_rate, cap_per_year × years)

The deduction is returned by the tax authority and added on top of the
portfolio value.  The base IIS account has no deduction.
"""

from __future__ import annotations

from projection_engine.config import DEFAULT_RATES, RateTable


def calculate_type_a_deduction(
    principal: float,
    years: float,
    tax_rate: float | None = None,
    cap_per_year: float | None = None,
    rates: RateTable = DEFAULT_RATES,
) -> float:
    """Eligible type A deduction = min(principal × tax_rate, cap × years).

    Returns the raw (unrounded) amount.
    """
    if tax_rate is None:
        tax_rate = rates.iis_tax_rate
    if cap_per_year is None:
        cap_per_year = rates.iis_cap_per_year
    return min(principal * tax_rate, cap_per_year * years)
