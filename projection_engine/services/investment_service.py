"""Investment return calculations for every supported product.

Products:
    Deposit – 9 % compounded k times a year
    Bonds   – 10.5 % simple coupon + purchase discount (price 98 %)
    Stocks  – 12 % compounded k times a year
    Gold    – 11 % compounded k times a year
    Piggy   – monthly contributions, annuity at 10.5 % / 12
    IIS A   – 70/30 bond/stock portfolio + capped tax deduction
    IIS     – 70/30 bond/stock portfolio

Compound interest:   A = P × (1 + r/k)^(k·t)
Annuity (ordinary):  A = m × ((1 + r)^n − 1) / r
CAGR:                (A / P)^(1/t) − 1

Every formula derives profit, profit % and CAGR from the *raw* terminal
value and rounds each output independently.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from projection_engine.config import DEFAULT_RATES, RateTable
from projection_engine.services.errors import InvalidShares, InvalidTerm, NegativePrincipal
from projection_engine.services.tax_service import calculate_type_a_deduction
from projection_engine.services.term_service import Term, months_of, years_of
from projection_engine.utils.helpers import round_money


# ── Inputs & result ───────────────────────────────────────────────────────

@dataclass(frozen=True)
class ProductInput:
    principal: float
    years: Optional[float] = None
    months: Optional[float] = None

    @property
    def term(self) -> Term:
        return Term(years=self.years, months=self.months)


@dataclass(frozen=True)
class CompoundInput(ProductInput):
    """Deposit, stocks and gold: compounding periods per year (default 1)."""

    compounding_per_year: Optional[int] = None


@dataclass(frozen=True)
class BondsInput(ProductInput):
    coupon_rate: Optional[float] = None
    price_percent: Optional[float] = None


@dataclass(frozen=True)
class PiggyInput(ProductInput):
    """``principal`` is the total of all monthly contributions."""


@dataclass(frozen=True)
class IISInput(ProductInput):
    bond_share: Optional[float] = None
    stock_share: Optional[float] = None
    bond_annual_rate: Optional[float] = None
    stock_annual_rate: Optional[float] = None


@dataclass(frozen=True)
class IISTypeAInput(IISInput):
    tax_rate: Optional[float] = None
    cap_per_year: Optional[float] = None


@dataclass(frozen=True)
class CalculationResult:
    final_amount: float
    profit: float
    profit_percent: float
    annualized_percent: float

    def to_dict(self) -> dict:
        return {
            "finalAmount": self.final_amount,
            "profit": self.profit,
            "profitPercent": self.profit_percent,
            "annualizedPercent": self.annualized_percent,
        }


# ── Building blocks ───────────────────────────────────────────────────────

def _power(base: float, exponent: float) -> float:
    """``base ** exponent`` with IEEE results instead of exceptions.

    Overflow gives ``±inf``, a negative base with a fractional exponent
    gives ``nan`` (never a ``complex``) and ``0 ** -n`` gives ``inf``.
    """
    if base < 0 and not float(exponent).is_integer():
        return math.nan
    try:
        return base ** exponent
    except OverflowError:
        return -math.inf if base < 0 and exponent % 2 == 1 else math.inf
    except ZeroDivisionError:
        return math.inf


def compound_interest(principal: float, rate: float, years: float, periods_per_year: int = 1) -> float:
    """A = P × (1 + r/k)^(k·t)."""
    return principal * _power(1 + rate / periods_per_year, periods_per_year * years)


def annuity_future_value(contribution: float, monthly_rate: float, months: int) -> float:
    """Future value of an ordinary annuity (payments at period end)."""
    if monthly_rate == 0:
        return contribution * months
    return contribution * ((_power(1 + monthly_rate, months) - 1) / monthly_rate)


def annualized_percent(principal: float, final_amount: float, years: float) -> float:
    """CAGR in percent, rounded to 2 dp.

    ``principal == 0`` or ``years == 0`` yield ``nan``; callers are expected
    to reject those inputs upstream.  A very short term can push the growth
    factor past the float range, which yields ``inf``.  A negative terminal
    value yields ``nan`` unless ``1 / years`` is a whole number.
    """
    if principal == 0 or years == 0:
        return math.nan
    cagr = _power(final_amount / principal, 1 / years) - 1
    return round_money(cagr * 100)


def _profit_percent(profit: float, principal: float) -> float:
    if principal == 0:
        return math.nan
    return round_money(profit / principal * 100)


def _check_principal(principal: float) -> None:
    if principal < 0:
        raise NegativePrincipal(principal)


def _build_result(principal: float, final_raw: float, years: float) -> CalculationResult:
    profit_raw = final_raw - principal
    return CalculationResult(
        final_amount=round_money(final_raw),
        profit=round_money(profit_raw),
        profit_percent=_profit_percent(profit_raw, principal),
        annualized_percent=annualized_percent(principal, final_raw, years),
    )


def _compound_product(data: CompoundInput, rate: float) -> CalculationResult:
    _check_principal(data.principal)
    years = years_of(data.term)
    k = data.compounding_per_year or 1
    final_raw = compound_interest(data.principal, rate, years, k)
    return _build_result(data.principal, final_raw, years)


def _portfolio_value(principal: float, years: float, data: IISInput, rates: RateTable) -> float:
    """Bond and stock tranches compounding independently, shares normalised to 1."""
    bond_share = rates.iis_bond_share if data.bond_share is None else data.bond_share
    stock_share = rates.iis_stock_share if data.stock_share is None else data.stock_share
    bond_rate = rates.iis_bond_rate if data.bond_annual_rate is None else data.bond_annual_rate
    stock_rate = rates.iis_stock_rate if data.stock_annual_rate is None else data.stock_annual_rate

    total_share = bond_share + stock_share
    if total_share <= 0:
        raise InvalidShares(bond_share, stock_share)

    bonds = compound_interest(principal * bond_share / total_share, bond_rate, years)
    stocks = compound_interest(principal * stock_share / total_share, stock_rate, years)
    return bonds + stocks


# ── Public API ────────────────────────────────────────────────────────────

def calculate_deposit(data: CompoundInput, rates: RateTable = DEFAULT_RATES) -> CalculationResult:
    """Bank deposit at the fixed deposit rate."""
    return _compound_product(data, rates.deposit_rate)


def calculate_stocks(data: CompoundInput, rates: RateTable = DEFAULT_RATES) -> CalculationResult:
    """Stocks at the fixed expected equity rate."""
    return _compound_product(data, rates.stocks_rate)


def calculate_gold(data: CompoundInput, rates: RateTable = DEFAULT_RATES) -> CalculationResult:
    """Gold at the fixed expected rate."""
    return _compound_product(data, rates.gold_rate)


def calculate_bonds(data: BondsInput, rates: RateTable = DEFAULT_RATES) -> CalculationResult:
    """Coupon income plus the one-time gain of buying below par.

    profit = P × coupon × t  +  P × (100 − price%) / 100
    """
    _check_principal(data.principal)
    years = years_of(data.term)
    coupon_rate = rates.bond_coupon_rate if data.coupon_rate is None else data.coupon_rate
    price_percent = rates.bond_price_percent if data.price_percent is None else data.price_percent

    coupon_income = data.principal * coupon_rate * years
    discount_income = data.principal * (100 - price_percent) / 100
    final_raw = data.principal + coupon_income + discount_income
    return _build_result(data.principal, final_raw, years)


def calculate_piggy(data: PiggyInput, rates: RateTable = DEFAULT_RATES) -> CalculationResult:
    """Auto-invest piggy bank: the principal is spread evenly over the term.

    Each month ``principal / n`` is contributed and earns the piggy rate
    compounded monthly.  CAGR is measured over ``n / 12`` years.
    """
    _check_principal(data.principal)
    months = months_of(data.term)
    if months <= 0:
        raise InvalidTerm(f"Number of months must be positive (got {months}).")

    monthly_contribution = data.principal / months
    final_raw = annuity_future_value(monthly_contribution, rates.piggy_rate / 12, months)
    return _build_result(data.principal, final_raw, months / 12)


def calculate_iis_base(data: IISInput, rates: RateTable = DEFAULT_RATES) -> CalculationResult:
    """Individual investment account without a tax deduction."""
    _check_principal(data.principal)
    years = years_of(data.term)
    final_raw = _portfolio_value(data.principal, years, data, rates)
    return _build_result(data.principal, final_raw, years)


def calculate_iis_a(data: IISTypeAInput, rates: RateTable = DEFAULT_RATES) -> CalculationResult:
    """Individual investment account with the type A deduction added on top."""
    _check_principal(data.principal)
    years = years_of(data.term)
    portfolio = _portfolio_value(data.principal, years, data, rates)
    deduction = calculate_type_a_deduction(
        data.principal,
        years,
        tax_rate=data.tax_rate,
        cap_per_year=data.cap_per_year,
        rates=rates,
    )
    return _build_result(data.principal, portfolio + deduction, years)
