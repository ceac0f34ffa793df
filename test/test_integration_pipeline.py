# Test type: Integration Test
# Validation to be executed: End-to-end business logic integration: combines
#   date parsing, month counting, per-product dispatch and best-result
#   selection the way the comparison form uses them, without HTTP.
# Command: pytest test/test_integration_pipeline.py -v

"""Integration tests that exercise the full comparison pipeline without HTTP."""

import pytest

from projection_engine.services.calculator_service import (
    ProductType,
    best_by_final_amount,
    calculate,
    compare_products,
)
from projection_engine.services.term_service import months_between
from projection_engine.utils.helpers import parse_date


class TestThreeYearComparison:
    """500 000 invested from 2024-03-10 to 2027-03-10, all seven products."""

    @pytest.fixture
    def dates(self):
        return parse_date("10.03.2024"), parse_date("2027-03-10")

    @pytest.fixture
    def comparison(self, dates):
        start, end = dates
        return compare_products(500_000, start, end, list(ProductType))

    def test_step1_term(self, dates):
        start, end = dates
        assert months_between(start, end) == 36

    def test_step2_every_product_calculated(self, comparison):
        months, entries = comparison
        assert months == 36
        assert [e.product for e in entries] == list(ProductType)

    def test_step3_matches_single_calls(self, comparison):
        _, entries = comparison
        for entry in entries:
            assert entry.result == calculate(entry.product, {"principal": 500_000, "months": 36})

    def test_step4_best_is_iis_a(self, comparison):
        """Portfolio growth plus min(65 000, 156 000) deduction beats 12 % stocks."""
        _, entries = comparison
        best = [e.product for e in entries if e.is_best]
        assert best == [ProductType.IIS_A]
        assert best == [p for p, _ in best_by_final_amount((e.product, e.result) for e in entries)]

    def test_step5_expected_figures(self, comparison):
        _, entries = comparison
        finals = {e.product: e.result.final_amount for e in entries}
        assert finals[ProductType.DEPOSIT] == pytest.approx(647_514.50, abs=0.01)
        assert finals[ProductType.BONDS] == pytest.approx(667_500.00, abs=0.01)
        assert finals[ProductType.STOCKS] == pytest.approx(702_464.00, abs=0.01)
        assert finals[ProductType.IIS_A] - finals[ProductType.IIS_BASE] == pytest.approx(65_000, abs=0.01)

    def test_step6_piggy_below_lump_sum(self, comparison):
        """Spreading contributions over time earns less than investing up front."""
        _, entries = comparison
        finals = {e.product: e.result for e in entries}
        piggy = finals[ProductType.PIGGY]
        assert piggy.final_amount > 500_000
        assert piggy.final_amount < finals[ProductType.BONDS].final_amount
