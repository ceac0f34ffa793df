# Test type: Unit Test
# Validation to be executed: Validates the product dispatch table: mapping
#   completeness, input building from plain mappings, best-result selection
#   with ties, and the multi-product comparison over a date range.
# Command: pytest test/test_unit_calculator.py -v

"""Unit tests for projection_engine.services.calculator_service module."""

from datetime import date

import pytest

from projection_engine.services.calculator_service import (
    CALCULATORS,
    PRODUCT_TITLES,
    ProductType,
    best_by_final_amount,
    build_input,
    calculate,
    compare_products,
)
from projection_engine.services.errors import InvalidTerm, NegativePrincipal
from projection_engine.services.investment_service import (
    CalculationResult,
    CompoundInput,
    IISInput,
    IISTypeAInput,
    calculate_deposit,
)


def _result(final_amount: float) -> CalculationResult:
    return CalculationResult(final_amount=final_amount, profit=0.0, profit_percent=0.0, annualized_percent=0.0)


class TestDispatchTable:
    def test_every_product_registered(self):
        assert set(CALCULATORS) == set(ProductType)
        assert set(PRODUCT_TITLES) == set(ProductType)

    def test_string_identifier_accepted(self):
        assert calculate("deposit", {"principal": 10_000, "years": 1}).final_amount == 10900.00

    def test_matches_direct_formula(self):
        via_table = calculate(ProductType.DEPOSIT, {"principal": 25_000, "months": 30})
        direct = calculate_deposit(CompoundInput(principal=25_000, months=30))
        assert via_table == direct

    def test_input_record_accepted(self):
        result = calculate(ProductType.IIS_BASE, IISInput(principal=10_000, years=1))
        assert result.final_amount == 11095.00

    def test_wrong_input_record_rejected(self):
        with pytest.raises(TypeError):
            calculate(ProductType.IIS_A, IISInput(principal=10_000, years=1))

    def test_unknown_product_rejected(self):
        with pytest.raises(ValueError):
            calculate("crypto", {"principal": 1_000, "years": 1})

    def test_errors_propagate(self):
        with pytest.raises(NegativePrincipal):
            calculate(ProductType.GOLD, {"principal": -1, "years": 1})

    @pytest.mark.parametrize("product", list(ProductType))
    def test_missing_term_for_every_product(self, product):
        with pytest.raises(InvalidTerm):
            calculate(product, {"principal": 1_000})


class TestBuildInput:
    def test_none_values_fall_back_to_defaults(self):
        data = build_input(ProductType.BONDS, {"principal": 10_000, "years": 2, "coupon_rate": None})
        assert data.coupon_rate is None
        assert calculate(ProductType.BONDS, data).final_amount == 12300.00

    def test_inapplicable_overrides_ignored(self):
        plain = calculate(ProductType.GOLD, {"principal": 10_000, "years": 1})
        noisy = calculate(ProductType.GOLD, {"principal": 10_000, "years": 1, "coupon_rate": 0.5, "tax_rate": 0.3})
        assert noisy == plain

    def test_type_a_fields(self):
        data = build_input(ProductType.IIS_A, {"principal": 10_000, "years": 1, "tax_rate": 0.0})
        assert isinstance(data, IISTypeAInput)
        assert calculate(ProductType.IIS_A, data).final_amount == 11095.00

    def test_principal_required(self):
        with pytest.raises(ValueError, match="principal"):
            build_input(ProductType.DEPOSIT, {"years": 1})


class TestBestByFinalAmount:
    def test_single_maximum(self):
        results = [(ProductType.DEPOSIT, _result(100)), (ProductType.GOLD, _result(120))]
        assert best_by_final_amount(results) == [(ProductType.GOLD, _result(120))]

    def test_ties_all_returned(self):
        results = [
            (ProductType.DEPOSIT, _result(150)),
            (ProductType.GOLD, _result(120)),
            (ProductType.STOCKS, _result(150)),
        ]
        best = [product for product, _ in best_by_final_amount(results)]
        assert best == [ProductType.DEPOSIT, ProductType.STOCKS]

    def test_empty(self):
        assert best_by_final_amount([]) == []


class TestCompareProducts:
    def test_one_year_selection(self):
        months, entries = compare_products(
            100_000,
            date(2024, 1, 1),
            date(2025, 1, 1),
            [ProductType.DEPOSIT, ProductType.STOCKS, ProductType.GOLD, ProductType.IIS_A],
        )
        assert months == 12
        finals = {e.product: e.result.final_amount for e in entries}
        assert finals == {
            ProductType.DEPOSIT: 109000.00,
            ProductType.STOCKS: 112000.00,
            ProductType.GOLD: 111000.00,
            ProductType.IIS_A: 123950.00,
        }
        assert [e.product for e in entries if e.is_best] == [ProductType.IIS_A]

    def test_keeps_order_and_collapses_duplicates(self):
        _, entries = compare_products(
            10_000, date(2024, 1, 1), date(2024, 7, 1), ["gold", "deposit", "gold"]
        )
        assert [e.product for e in entries] == [ProductType.GOLD, ProductType.DEPOSIT]
        assert entries[0].title == "Gold"

    def test_exactly_one_best_without_ties(self):
        _, entries = compare_products(
            10_000, date(2024, 1, 1), date(2026, 1, 1), [ProductType.STOCKS, ProductType.IIS_BASE]
        )
        assert [e.product for e in entries if e.is_best] == [ProductType.STOCKS]

    def test_empty_selection_rejected(self):
        with pytest.raises(ValueError, match="at least one product"):
            compare_products(10_000, date(2024, 1, 1), date(2025, 1, 1), [])

    def test_short_range_rejected(self):
        with pytest.raises(InvalidTerm):
            compare_products(10_000, date(2024, 1, 10), date(2024, 2, 9), [ProductType.PIGGY])

    def test_reversed_range_rejected(self):
        with pytest.raises(InvalidTerm):
            compare_products(10_000, date(2025, 1, 1), date(2024, 1, 1), [ProductType.DEPOSIT])
