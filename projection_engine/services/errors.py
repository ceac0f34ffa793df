"""Validation errors raised by the calculation core."""

from __future__ import annotations


class CalculationError(ValueError):
    """Base class for rejected calculation inputs."""


class NegativePrincipal(CalculationError):
    def __init__(self, principal: float):
        super().__init__(f"Principal cannot be negative (got {principal}).")
        self.principal = principal


class InvalidTerm(CalculationError):
    """Term missing, or resolves to a non-positive number of months."""


class InvalidShares(CalculationError):
    def __init__(self, bond_share: float, stock_share: float):
        super().__init__(
            f"Portfolio shares must sum to a positive value "
            f"(bond={bond_share}, stock={stock_share})."
        )
        self.bond_share = bond_share
        self.stock_share = stock_share
