# tests/test_context_adjustment.py

"""
Contextual Adjustment Tests

Verifies each factor rule, the [0.90, 1.15] clamp and how the factor is
applied to weighted dimension scores.
"""

from decimal import Decimal

import pytest

from simscore.models.context import ContextFactors
from simscore.scoring.context_adjustment import ContextAdjustmentCalculator


@pytest.fixture
def calculator():
    return ContextAdjustmentCalculator()


class TestCalculate:

    def test_neutral_factors(self, calculator):
        result = calculator.calculate(ContextFactors())
        assert result.factor == Decimal("1.0")
        assert result.reasons == []
        assert not result.clamped

    @pytest.mark.parametrize("overrides,expected", [
        ({"difficulty": 85}, Decimal("1.05")),
        ({"difficulty": 30}, Decimal("0.97")),
        ({"time_constraints": 90}, Decimal("1.03")),
        ({"customer_complexity": 80}, Decimal("1.04")),
        ({"technical_complexity": 90}, Decimal("1.05")),
        ({"resource_availability": 40}, Decimal("1.02")),
    ])
    def test_single_factor(self, calculator, overrides, expected):
        result = calculator.calculate(ContextFactors(**overrides))
        assert result.factor == expected
        assert len(result.reasons) == 1

    def test_thresholds_are_strict(self, calculator):
        """Values exactly on a threshold do not trigger the rule."""
        result = calculator.calculate(ContextFactors(
            difficulty=80,
            time_constraints=80,
            customer_complexity=75,
            technical_complexity=85,
            resource_availability=50,
        ))
        assert result.factor == Decimal("1.0")

    def test_stacked_factors_clamped_to_max(self, calculator):
        """Raw 1.19 is clamped to 1.15."""
        result = calculator.calculate(ContextFactors(
            difficulty=90,
            time_constraints=90,
            customer_complexity=80,
            technical_complexity=90,
            resource_availability=40,
        ))
        assert result.raw_factor == Decimal("1.19")
        assert result.factor == Decimal("1.15")
        assert result.clamped
        assert "limited resources" in result.reasons


class TestApply:

    @pytest.mark.parametrize("weighted,factor,expected", [
        (79, Decimal("1.15"), 91),
        (74, Decimal("1.15"), 85),
        (78, Decimal("1.15"), 90),
        (80, Decimal("0.97"), 78),
        (95, Decimal("1.15"), 100),
        (0, Decimal("1.15"), 0),
    ])
    def test_round_and_clamp(self, weighted, factor, expected):
        assert ContextAdjustmentCalculator.apply(weighted, factor) == expected
