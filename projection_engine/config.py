"""Application configuration loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class RateTable:
    """Fixed annual rates and default tunables used by the product formulas."""

    deposit_rate: float
    stocks_rate: float
    gold_rate: float
    piggy_rate: float

    bond_coupon_rate: float
    bond_price_percent: float

    iis_bond_share: float
    iis_stock_share: float
    iis_bond_rate: float
    iis_stock_rate: float
    iis_tax_rate: float
    iis_cap_per_year: float


class Settings:
    """Centralized application settings."""

    # Server
    APP_HOST: str = os.getenv("APP_HOST", "0.0.0.0")
    APP_PORT: int = int(os.getenv("APP_PORT", "5477"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Fixed annual rates
    DEPOSIT_RATE: float = float(os.getenv("DEPOSIT_RATE", "0.09"))
    STOCKS_RATE: float = float(os.getenv("STOCKS_RATE", "0.12"))
    GOLD_RATE: float = float(os.getenv("GOLD_RATE", "0.11"))
    PIGGY_RATE: float = float(os.getenv("PIGGY_RATE", "0.105"))

    # Bonds
    BOND_COUPON_RATE: float = float(os.getenv("BOND_COUPON_RATE", "0.105"))
    BOND_PRICE_PERCENT: float = float(os.getenv("BOND_PRICE_PERCENT", "98"))

    # Individual investment account (IIS) portfolio
    IIS_BOND_SHARE: float = float(os.getenv("IIS_BOND_SHARE", "0.7"))
    IIS_STOCK_SHARE: float = float(os.getenv("IIS_STOCK_SHARE", "0.3"))
    IIS_BOND_RATE: float = float(os.getenv("IIS_BOND_RATE", "0.105"))
    IIS_STOCK_RATE: float = float(os.getenv("IIS_STOCK_RATE", "0.12"))
    IIS_TAX_RATE: float = float(os.getenv("IIS_TAX_RATE", "0.13"))
    IIS_CAP_PER_YEAR: float = float(os.getenv("IIS_CAP_PER_YEAR", "52000"))

    # Form constraints
    MAX_PRINCIPAL: float = float(os.getenv("MAX_PRINCIPAL", "1000000000"))

    def rate_table(self) -> RateTable:
        return RateTable(
            deposit_rate=self.DEPOSIT_RATE,
            stocks_rate=self.STOCKS_RATE,
            gold_rate=self.GOLD_RATE,
            piggy_rate=self.PIGGY_RATE,
            bond_coupon_rate=self.BOND_COUPON_RATE,
            bond_price_percent=self.BOND_PRICE_PERCENT,
            iis_bond_share=self.IIS_BOND_SHARE,
            iis_stock_share=self.IIS_STOCK_SHARE,
            iis_bond_rate=self.IIS_BOND_RATE,
            iis_stock_rate=self.IIS_STOCK_RATE,
            iis_tax_rate=self.IIS_TAX_RATE,
            iis_cap_per_year=self.IIS_CAP_PER_YEAR,
        )


settings = Settings()
DEFAULT_RATES: RateTable = settings.rate_table()
