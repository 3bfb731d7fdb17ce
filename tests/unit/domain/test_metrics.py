"""Unit tests for percentage helpers"""

import math
import pytest
from decimal import Decimal
from src.domain.metrics import percentage, sum_amounts


class TestPercentage:
    def test_zero_denominator_is_zero(self):
        assert percentage(5, 0) == Decimal("0")
        assert percentage(0, 0, 1) == Decimal("0")

    def test_missing_values_are_zero(self):
        assert percentage(None, 10) == Decimal("0")
        assert percentage(10, None) == Decimal("0")

    def test_rounds_to_requested_decimals(self):
        assert percentage(1, 3) == Decimal("33")
        assert percentage(1, 3, 1) == Decimal("33.3")
        assert percentage(2, 3, 2) == Decimal("66.67")

    def test_half_up(self):
        assert percentage(1, 8, 1) == Decimal("12.5")
        assert percentage(1, 16, 1) == Decimal("6.3")

    def test_over_hundred(self):
        """Over-allocation is reported, not capped"""
        assert percentage(50, 40, 1) == Decimal("125.0")

    def test_decimal_inputs(self):
        assert percentage(Decimal("37.5"), Decimal("40"), 1) == Decimal("93.8")

    @pytest.mark.parametrize("value", [math.inf, -math.inf, math.nan])
    def test_non_finite_inputs_yield_zero(self, value):
        assert percentage(value, 10) == Decimal("0")
        assert percentage(10, value) == Decimal("0")

    def test_never_nan_or_infinite(self):
        result = percentage(1, Decimal("1e-30"))
        assert result.is_finite()


class TestSumAmounts:
    def test_sums_mixed_values(self):
        assert sum_amounts([Decimal("1.10"), 2, None, 0.2]) == Decimal("3.30")

    def test_empty(self):
        assert sum_amounts([]) == Decimal("0")
