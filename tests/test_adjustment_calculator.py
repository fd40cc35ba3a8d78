# tests/test_adjustment_calculator.py
"""
Price adjustment calculator: strict single calculation, validation order,
rounding, and the best-effort batch variant.
"""

import math

import pytest

from app.services.adjustment_calculator import (
    AdjustmentRequest,
    AdjustmentType,
    IncrementType,
    calculate_adjustment,
    calculate_batch_adjustments,
    clamp_price,
    round_price,
)
from app.services.exceptions import (
    CalculationError,
    DecreaseExceedsBase,
    InvalidAdjustmentValue,
    InvalidBasePrice,
    PercentageOutOfRange,
    UnsupportedAdjustmentMode,
)


# ==============================================================================
# 1. Formulas
# ==============================================================================
class TestFixedAdjustment:

    def test_fixed_increase(self):
        assert calculate_adjustment(100, "fixed", 20, "increase") == 120

    def test_fixed_increase_with_decimals(self):
        assert calculate_adjustment(99.99, "fixed", 10.50, "increase") == 110.49

    def test_fixed_increase_has_no_upper_bound(self):
        assert calculate_adjustment(10, "fixed", 1_000_000, "increase") == 1_000_010

    def test_fixed_decrease(self):
        assert calculate_adjustment(100, "fixed", 15, "decrease") == 85

    def test_fixed_decrease_to_exactly_zero(self):
        assert calculate_adjustment(50, "fixed", 50, "decrease") == 0

    def test_fixed_decrease_exceeding_base_is_rejected(self):
        with pytest.raises(DecreaseExceedsBase):
            calculate_adjustment(50, "fixed", 150, "decrease")


class TestDynamicAdjustment:

    def test_percentage_increase(self):
        assert calculate_adjustment(100, "dynamic", 10, "increase") == 110

    def test_percentage_increase_full_hundred(self):
        assert calculate_adjustment(100, "dynamic", 100, "increase") == 200

    def test_decimal_percentage(self):
        assert calculate_adjustment(100, "dynamic", 12.5, "increase") == 112.5

    def test_percentage_decrease(self):
        assert calculate_adjustment(100, "dynamic", 20, "decrease") == 80

    def test_full_percentage_decrease_reaches_zero(self):
        assert calculate_adjustment(100, "dynamic", 100, "decrease") == 0

    @pytest.mark.parametrize("increment_type", ["increase", "decrease"])
    def test_percentage_above_hundred_is_rejected(self, increment_type):
        with pytest.raises(PercentageOutOfRange):
            calculate_adjustment(100, "dynamic", 150, increment_type)

    @pytest.mark.parametrize("base_price, value, expected_increase, expected_decrease", [
        (200, 10, 220, 180),
        (59.99, 10, 65.99, 53.99),
        (0, 50, 0, 0),
        (1234.56, 7.5, 1327.15, 1141.97),
    ])
    def test_percentage_bounds(self, base_price, value, expected_increase, expected_decrease):
        increased = calculate_adjustment(base_price, "dynamic", value, "increase")
        decreased = calculate_adjustment(base_price, "dynamic", value, "decrease")

        assert increased == expected_increase
        assert decreased == expected_decrease
        assert increased >= base_price
        assert 0 <= decreased <= base_price

    def test_accepts_enum_members(self):
        result = calculate_adjustment(100, AdjustmentType.DYNAMIC, 20, IncrementType.INCREASE)
        assert result == 120


# ==============================================================================
# 2. Validation
# ==============================================================================
class TestValidation:

    @pytest.mark.parametrize("base_price", [-10, math.nan, math.inf, None, "100"])
    def test_invalid_base_price(self, base_price):
        with pytest.raises(InvalidBasePrice):
            calculate_adjustment(base_price, "fixed", 20, "increase")

    @pytest.mark.parametrize("value", [0, -10, math.nan, math.inf, None])
    def test_invalid_adjustment_value(self, value):
        with pytest.raises(InvalidAdjustmentValue):
            calculate_adjustment(100, "fixed", value, "increase")

    def test_overflowing_result_is_rejected(self):
        with pytest.raises(InvalidAdjustmentValue):
            calculate_adjustment(1e307, "fixed", 1e307, "increase")

    def test_overflow_falls_back_in_batch(self):
        [result] = calculate_batch_adjustments([
            AdjustmentRequest(1e308, AdjustmentType.FIXED, 1e308, IncrementType.INCREASE),
        ])

        assert result.new_price == 1e308
        assert isinstance(result.error, InvalidAdjustmentValue)

    def test_zero_base_price_is_allowed(self):
        assert calculate_adjustment(0, "fixed", 20, "increase") == 20

    def test_base_price_checked_before_adjustment_value(self):
        with pytest.raises(InvalidBasePrice):
            calculate_adjustment(-1, "fixed", -1, "increase")

    def test_adjustment_value_checked_before_percentage_range(self):
        with pytest.raises(InvalidAdjustmentValue):
            calculate_adjustment(100, "dynamic", math.nan, "increase")

    def test_percentage_range_checked_before_decrease_bound(self):
        # 150 also exceeds the base price, but dynamic values never hit the fixed rule
        with pytest.raises(PercentageOutOfRange):
            calculate_adjustment(50, "dynamic", 150, "decrease")

    def test_unknown_adjustment_type(self):
        with pytest.raises(UnsupportedAdjustmentMode):
            calculate_adjustment(100, "tiered", 10, "increase")

    def test_unknown_increment_type(self):
        with pytest.raises(UnsupportedAdjustmentMode):
            calculate_adjustment(100, "fixed", 10, "sideways")

    def test_errors_share_a_base_class(self):
        with pytest.raises(CalculationError) as exc_info:
            calculate_adjustment(50, "fixed", 150, "decrease")
        assert "cannot exceed base price" in exc_info.value.message


# ==============================================================================
# 3. Rounding and clamping
# ==============================================================================
class TestRounding:

    @pytest.mark.parametrize("base_price, value, expected", [
        (100.123, 20.456, 120.58),
        (100.111, 20.222, 120.33),
        (100.005, 20.005, 120.01),
    ])
    def test_result_rounded_to_cents(self, base_price, value, expected):
        assert calculate_adjustment(base_price, "fixed", value, "increase") == expected

    def test_round_price_half_up(self):
        assert round_price(0.125) == 0.13
        assert round_price(10.5) == 10.5
        assert round_price(7) == 7.0

    def test_clamp_price(self):
        assert clamp_price(-0.01) == 0
        assert clamp_price(5) == 5
        assert clamp_price(3, minimum=4) == 4

    def test_result_never_negative(self):
        assert calculate_adjustment(10, "fixed", 5, "decrease") >= 0
        assert calculate_adjustment(0.01, "dynamic", 99.9, "decrease") >= 0


# ==============================================================================
# 4. Batch calculation
# ==============================================================================
class TestBatchCalculation:

    def test_batch_preserves_order(self):
        results = calculate_batch_adjustments([
            AdjustmentRequest(100, AdjustmentType.FIXED, 20, IncrementType.INCREASE),
            AdjustmentRequest(200, AdjustmentType.DYNAMIC, 10, IncrementType.INCREASE),
            AdjustmentRequest(50, AdjustmentType.FIXED, 10, IncrementType.DECREASE),
        ])

        assert [r.new_price for r in results] == [120, 220, 40]
        assert [r.adjustment for r in results] == [20, 20, -10]
        assert all(r.succeeded for r in results)

    def test_invalid_item_falls_back_to_base_price(self):
        results = calculate_batch_adjustments([
            AdjustmentRequest(100, AdjustmentType.FIXED, 20, IncrementType.INCREASE),
            AdjustmentRequest(-10, AdjustmentType.FIXED, 20, IncrementType.INCREASE),
        ])

        assert len(results) == 2
        assert results[0].new_price == 120
        assert results[1].new_price == -10
        assert results[1].adjustment == 0
        assert isinstance(results[1].error, InvalidBasePrice)

    def test_batch_is_lenient_where_single_is_strict(self):
        request = AdjustmentRequest(50, AdjustmentType.FIXED, 150, IncrementType.DECREASE)

        [result] = calculate_batch_adjustments([request])
        assert result.new_price == 50
        assert result.adjustment == 0
        assert isinstance(result.error, DecreaseExceedsBase)

        with pytest.raises(DecreaseExceedsBase):
            calculate_adjustment(
                request.base_price,
                request.adjustment_type,
                request.adjustment_value,
                request.increment_type,
            )

    def test_unknown_mode_does_not_abort_batch(self):
        results = calculate_batch_adjustments([
            AdjustmentRequest(100, "tiered", 10, "increase"),
            AdjustmentRequest(100, "dynamic", 150, "increase"),
            AdjustmentRequest(100, "fixed", 1, "increase"),
        ])

        assert isinstance(results[0].error, UnsupportedAdjustmentMode)
        assert isinstance(results[1].error, PercentageOutOfRange)
        assert results[2].new_price == 101

    def test_empty_batch(self):
        assert calculate_batch_adjustments([]) == []
