"""Pydantic request / response schemas for all API endpoints.

Field names follow the front-end contract (camelCase):
  - finalAmount, profit, profitPercent, annualizedPercent
"""

from __future__ import annotations
from typing import List, Optional
from pydantic import BaseModel, Field, model_validator

from projection_engine.config import settings
from projection_engine.services.calculator_service import ProductType

class ProductInfo(BaseModel):
    """Catalogue entry."""
    id: ProductType
    title: str

class CalculationResultOut(BaseModel):
    """Uniform result shape returned for every product."""
    finalAmount: float = Field(..., description="Terminal value, rounded to 2 dp")
    profit: float = Field(..., description="finalAmount − principal")
    profitPercent: float = Field(..., description="profit / principal × 100")
    annualizedPercent: float = Field(..., description="Compound annual growth rate, %")

# ── 1. Single product  (/calculate/{product}) ────────────────────────────

class CalculateRequest(BaseModel):
    principal: float = Field(..., gt=0, le=settings.MAX_PRINCIPAL, description="Invested sum")
    years: Optional[float] = Field(None, gt=0, le=100, description="Term in years (takes priority)")
    months: Optional[int] = Field(None, ge=1, le=1200, description="Term in months (used if years is absent)")

    # Product-specific overrides; ignored by products that do not use them.
    compoundingPerYear: Optional[int] = Field(None, ge=1, le=365, description="Deposit / stocks / gold")
    couponRate: Optional[float] = Field(None, ge=0, description="Bonds annual coupon, e.g. 0.105")
    pricePercent: Optional[float] = Field(None, gt=0, le=200, description="Bonds purchase price, % of par")
    bondShare: Optional[float] = Field(None, ge=0, description="IIS bond share")
    stockShare: Optional[float] = Field(None, ge=0, description="IIS stock share")
    bondAnnualRate: Optional[float] = Field(None, ge=0, description="IIS bond tranche rate")
    stockAnnualRate: Optional[float] = Field(None, ge=0, description="IIS stock tranche rate")
    taxRate: Optional[float] = Field(None, ge=0, le=1, description="IIS type A tax rate")
    typeACapPerYear: Optional[float] = Field(None, ge=0, description="IIS type A deduction cap per year")

    @model_validator(mode="after")
    def _require_term(self) -> "CalculateRequest":
        if self.years is None and self.months is None:
            raise ValueError("Either 'years' or 'months' must be provided")
        return self

    def to_input(self) -> dict:
        """Map to the calculation core's field names."""
        return {
            "principal": self.principal,
            "years": self.years,
            "months": self.months,
            "compounding_per_year": self.compoundingPerYear,
            "coupon_rate": self.couponRate,
            "price_percent": self.pricePercent,
            "bond_share": self.bondShare,
            "stock_share": self.stockShare,
            "bond_annual_rate": self.bondAnnualRate,
            "stock_annual_rate": self.stockAnnualRate,
            "tax_rate": self.taxRate,
            "cap_per_year": self.typeACapPerYear,
        }

class CalculateResponse(CalculationResultOut):
    product: ProductType
    title: str

# ── 2. Comparison  (/compare) ────────────────────────────────────────────

class CompareRequest(BaseModel):
    principal: float = Field(..., gt=0, le=settings.MAX_PRINCIPAL, description="Invested sum")
    startDate: str = Field(..., description="Start date (YYYY-MM-DD or DD.MM.YYYY)")
    endDate: str = Field(..., description="End date (YYYY-MM-DD or DD.MM.YYYY)")
    products: List[ProductType] = Field(..., min_length=1, description="Selected products")

class ComparedProduct(CalculationResultOut):
    product: ProductType
    title: str
    isBest: bool = Field(False, description="Highest finalAmount in the selection (ties all marked)")

class CompareResponse(BaseModel):
    months: int = Field(..., description="Whole months between startDate and endDate")
    results: List[ComparedProduct]
    best: List[ProductType]

# ── 3. Performance Report  (/performance) ────────────────────────────────

class PerformanceResponse(BaseModel):
    time: str = Field(..., description="Last response time (HH:mm:ss.SSS)")
    uptime: str = Field(..., description="Time since startup (HH:mm:ss.SSS)")
    memory: str = Field(..., description="Current memory usage (e.g. '123.45 MB')")
    threads: int = Field(..., description="Number of active threads")
