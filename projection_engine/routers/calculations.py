"""Routers for projection endpoints:
    GET   /api/v1/products
    POST  /api/v1/calculate/{product}
    POST  /api/v1/compare
"""

from __future__ import annotations

import logging
import math
from typing import List

from fastapi import APIRouter, HTTPException

from projection_engine.models.schemas import (
    CalculateRequest,
    CalculateResponse,
    ComparedProduct,
    CompareRequest,
    CompareResponse,
    ProductInfo,
)
from projection_engine.services.calculator_service import (
    PRODUCT_TITLES,
    ProductType,
    calculate,
    compare_products,
)
from projection_engine.services.investment_service import CalculationResult
from projection_engine.utils.helpers import parse_date

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1",
    tags=["Projections"],
)


def _require_finite(product: ProductType, result: CalculationResult) -> None:
    """JSON has no nan or inf; such a projection is rejected as a bad request."""
    if not all(math.isfinite(value) for value in result.to_dict().values()):
        raise ValueError(f"The {product.value} projection is not a finite number for this term.")


# ── Catalogue ─────────────────────────────────────────────────────────────

@router.get(
    "/products",
    response_model=List[ProductInfo],
    summary="List supported investment products",
)
async def list_products() -> List[ProductInfo]:
    return [ProductInfo(id=product, title=title) for product, title in PRODUCT_TITLES.items()]


# ── Single product ────────────────────────────────────────────────────────

@router.post(
    "/calculate/{product}",
    response_model=CalculateResponse,
    summary="Project the return of a single product",
)
async def calculate_product(product: ProductType, body: CalculateRequest) -> CalculateResponse:
    """Terminal value, profit, profit % and CAGR for one product.

    The term is given in years or months; product-specific overrides that
    do not apply to *product* are ignored.
    """
    try:
        result = calculate(product, body.to_input())
        _require_finite(product, result)
    except ValueError as exc:
        logger.info("Rejected %s calculation: %s", product.value, exc)
        raise HTTPException(status_code=422, detail=str(exc))

    return CalculateResponse(
        product=product,
        title=PRODUCT_TITLES[product],
        **result.to_dict(),
    )


# ── Comparison ────────────────────────────────────────────────────────────

@router.post(
    "/compare",
    response_model=CompareResponse,
    summary="Compare selected products over a date range",
)
async def compare(body: CompareRequest) -> CompareResponse:
    """Run every selected product for the same principal and dates and
    flag the product(s) with the highest terminal value.
    """
    try:
        start = parse_date(body.startDate)
        end = parse_date(body.endDate)
        months, entries = compare_products(body.principal, start, end, body.products)
        for entry in entries:
            _require_finite(entry.product, entry.result)
    except ValueError as exc:
        logger.info("Rejected comparison: %s", exc)
        raise HTTPException(status_code=422, detail=str(exc))

    results = [
        ComparedProduct(
            product=entry.product,
            title=entry.title,
            isBest=entry.is_best,
            **entry.result.to_dict(),
        )
        for entry in entries
    ]
    return CompareResponse(
        months=months,
        results=results,
        best=[entry.product for entry in entries if entry.is_best],
    )
