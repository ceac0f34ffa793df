"""Product dispatch table and multi-product comparison.

Every ``ProductType`` maps to exactly one formula and one input record.
The comparison runs the same principal and date range through a selection
of products and marks the one(s) with the highest terminal value.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Callable, Dict, Iterable, List, Mapping, Sequence, Tuple, Type, Union

from projection_engine.config import DEFAULT_RATES, RateTable
from projection_engine.services.errors import InvalidTerm
from projection_engine.services.investment_service import (
    BondsInput,
    CalculationResult,
    CompoundInput,
    IISInput,
    IISTypeAInput,
    PiggyInput,
    ProductInput,
    calculate_bonds,
    calculate_deposit,
    calculate_gold,
    calculate_iis_a,
    calculate_iis_base,
    calculate_piggy,
    calculate_stocks,
)
from projection_engine.services.term_service import months_between
from projection_engine.utils.helpers import format_date

logger = logging.getLogger(__name__)


class ProductType(str, Enum):
    DEPOSIT = "deposit"
    BONDS = "bonds"
    STOCKS = "stocks"
    GOLD = "gold"
    PIGGY = "piggy"
    IIS_A = "iis_a"
    IIS_BASE = "iis_base"


PRODUCT_TITLES: Dict[ProductType, str] = {
    ProductType.DEPOSIT: "Deposit",
    ProductType.BONDS: "Bonds",
    ProductType.STOCKS: "Stocks",
    ProductType.GOLD: "Gold",
    ProductType.PIGGY: "Invest piggy bank",
    ProductType.IIS_A: "IIS type A",
    ProductType.IIS_BASE: "IIS (base)",
}

Calculator = Callable[..., CalculationResult]

CALCULATORS: Dict[ProductType, Tuple[Type[ProductInput], Calculator]] = {
    ProductType.DEPOSIT: (CompoundInput, calculate_deposit),
    ProductType.BONDS: (BondsInput, calculate_bonds),
    ProductType.STOCKS: (CompoundInput, calculate_stocks),
    ProductType.GOLD: (CompoundInput, calculate_gold),
    ProductType.PIGGY: (PiggyInput, calculate_piggy),
    ProductType.IIS_A: (IISTypeAInput, calculate_iis_a),
    ProductType.IIS_BASE: (IISInput, calculate_iis_base),
}

_unmapped = set(ProductType) - set(CALCULATORS)
if _unmapped:
    raise RuntimeError(f"No calculator registered for: {sorted(p.value for p in _unmapped)}")


@dataclass(frozen=True)
class ComparisonEntry:
    product: ProductType
    title: str
    result: CalculationResult
    is_best: bool


# ── Dispatch ──────────────────────────────────────────────────────────────

def build_input(product: ProductType, data: Mapping[str, object]) -> ProductInput:
    """Build the product's input record from a plain mapping.

    ``None`` values are dropped so the configured defaults apply; keys the
    product does not accept are ignored.
    """
    input_cls, _ = CALCULATORS[product]
    accepted = {f.name for f in dataclasses.fields(input_cls)}
    if data.get("principal") is None:
        raise ValueError("principal is required")

    kwargs = {}
    ignored = []
    for key, value in data.items():
        if value is None:
            continue
        if key in accepted:
            kwargs[key] = value
        else:
            ignored.append(key)
    if ignored:
        logger.debug("Ignoring overrides %s for product %s", sorted(ignored), product.value)
    return input_cls(**kwargs)


def calculate(
    product: Union[ProductType, str],
    data: Union[ProductInput, Mapping[str, object]],
    rates: RateTable = DEFAULT_RATES,
) -> CalculationResult:
    """Run the formula registered for *product*."""
    product = ProductType(product)
    input_cls, calc_fn = CALCULATORS[product]
    if not isinstance(data, ProductInput):
        data = build_input(product, data)
    elif not isinstance(data, input_cls):
        raise TypeError(f"{product.value} expects {input_cls.__name__}, got {type(data).__name__}")
    return calc_fn(data, rates=rates)


def best_by_final_amount(
    results: Iterable[Tuple[ProductType, CalculationResult]],
) -> List[Tuple[ProductType, CalculationResult]]:
    """All (product, result) pairs whose final amount equals the maximum."""
    results = list(results)
    if not results:
        return []
    top = max(result.final_amount for _, result in results)
    return [(product, result) for product, result in results if result.final_amount == top]


# ── Comparison ────────────────────────────────────────────────────────────

def compare_products(
    principal: float,
    start: date,
    end: date,
    products: Sequence[Union[ProductType, str]],
    rates: RateTable = DEFAULT_RATES,
) -> Tuple[int, List[ComparisonEntry]]:
    """Calculate every selected product over the whole months in [start, end].

    Returns ``(months, entries)``; entries keep the selection order with
    duplicates collapsed.
    """
    selection: List[ProductType] = []
    for product in products:
        product = ProductType(product)
        if product not in selection:
            selection.append(product)
    if not selection:
        raise ValueError("Select at least one product.")

    months = months_between(start, end)
    if months <= 0:
        raise InvalidTerm(
            f"End date must be at least one month after start date (got {months} months)."
        )

    logger.info(
        "Comparing %d product(s) for principal=%s from %s to %s (%d month(s))",
        len(selection), principal, format_date(start), format_date(end), months,
    )

    results = [
        (product, calculate(product, {"principal": principal, "months": months}, rates=rates))
        for product in selection
    ]
    best = {product for product, _ in best_by_final_amount(results)}

    entries = [
        ComparisonEntry(
            product=product,
            title=PRODUCT_TITLES[product],
            result=result,
            is_best=product in best,
        )
        for product, result in results
    ]
    return months, entries
