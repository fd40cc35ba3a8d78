"""
Price adjustment calculator.

Formulas:
    Fixed + Increase:    base + value
    Fixed + Decrease:    base - value
    Dynamic + Increase:  base + (value% * base)
    Dynamic + Decrease:  base - (value% * base)

e.g. a $500.00 base with a 20% dynamic increase gives $600.00.

Two entry points with different contracts:
- calculate_adjustment() is strict and raises a CalculationError for bad input.
- calculate_batch_adjustments() is best-effort: an item that fails validation
  keeps its base price, reports a zero adjustment and carries the error.
"""

import logging
import math
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import List, Optional, Sequence

from app.services.exceptions import (
    CalculationError,
    InvalidBasePrice,
    InvalidAdjustmentValue,
    PercentageOutOfRange,
    DecreaseExceedsBase,
    UnsupportedAdjustmentMode,
)

logger = logging.getLogger(__name__)

MAX_PERCENTAGE = 100


class AdjustmentType(str, Enum):
    """Flat amount or percentage of the base price"""
    FIXED = "fixed"
    DYNAMIC = "dynamic"


class IncrementType(str, Enum):
    """Direction of the adjustment"""
    INCREASE = "increase"
    DECREASE = "decrease"


@dataclass(frozen=True)
class AdjustmentRequest:
    """One calculation request for the batch calculator"""
    base_price: float
    adjustment_type: AdjustmentType
    adjustment_value: float
    increment_type: IncrementType


@dataclass(frozen=True)
class AdjustmentResult:
    """Outcome of one batch calculation; error is set when the item fell back"""
    base_price: float
    new_price: float
    adjustment: float
    adjustment_type: AdjustmentType
    adjustment_value: float
    increment_type: IncrementType
    error: Optional[CalculationError] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


# ============================================================================
# Money helpers
# ============================================================================

def round_price(price: float) -> float:
    """Round to 2 decimal places, half-up on the cent boundary"""
    cents = Decimal(repr(float(price) * 100)).to_integral_value(rounding=ROUND_HALF_UP)
    return float(cents / 100)


def clamp_price(price: float, minimum: float = 0) -> float:
    """Never let a price drop below minimum"""
    return max(price, minimum)


def _is_finite_number(value) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return False
    return math.isfinite(value)


def _coerce(enum_cls, field, value):
    try:
        return enum_cls(value)
    except ValueError:
        raise UnsupportedAdjustmentMode(field, value) from None


# ============================================================================
# Strict calculation
# ============================================================================

def validate_adjustment(base_price, adjustment_type, adjustment_value, increment_type) -> None:
    """
    Check calculation input in a fixed order; the first failing rule wins.

    Raises:
        InvalidBasePrice: base price missing, not finite or negative
        InvalidAdjustmentValue: adjustment value missing, not finite or <= 0
            (calculate_adjustment also raises it when the result overflows)
        PercentageOutOfRange: dynamic adjustment above 100%
        DecreaseExceedsBase: fixed decrease larger than the base price
        UnsupportedAdjustmentMode: unknown adjustment or increment type
    """
    if not _is_finite_number(base_price) or base_price < 0:
        raise InvalidBasePrice(base_price)

    if not _is_finite_number(adjustment_value) or adjustment_value <= 0:
        raise InvalidAdjustmentValue(adjustment_value)

    adjustment_type = _coerce(AdjustmentType, "adjustment type", adjustment_type)
    increment_type = _coerce(IncrementType, "increment type", increment_type)

    if adjustment_type is AdjustmentType.DYNAMIC and adjustment_value > MAX_PERCENTAGE:
        raise PercentageOutOfRange(adjustment_value)

    if (
        increment_type is IncrementType.DECREASE
        and adjustment_type is AdjustmentType.FIXED
        and adjustment_value > base_price
    ):
        raise DecreaseExceedsBase(base_price, adjustment_value)


def calculate_adjustment(base_price, adjustment_type, adjustment_value, increment_type) -> float:
    """
    Calculate a new price from a base price and adjustment parameters.

    Args:
        base_price: Price the adjustment is computed against
        adjustment_type: "fixed" or "dynamic"
        adjustment_value: Amount, or percentage in (0, 100] for dynamic
        increment_type: "increase" or "decrease"

    Returns:
        New price rounded to 2 decimal places, never negative

    Raises:
        CalculationError: If validation fails (see validate_adjustment)
    """
    validate_adjustment(base_price, adjustment_type, adjustment_value, increment_type)

    base_price = float(base_price)
    adjustment_value = float(adjustment_value)

    if AdjustmentType(adjustment_type) is AdjustmentType.FIXED:
        amount = adjustment_value
    else:
        amount = (adjustment_value / 100) * base_price

    if IncrementType(increment_type) is IncrementType.INCREASE:
        new_price = base_price + amount
    else:
        new_price = base_price - amount

    new_price = round_price(new_price)

    # Finite inputs can still overflow float range
    if not math.isfinite(new_price):
        raise InvalidAdjustmentValue(adjustment_value)

    return clamp_price(new_price)


# ============================================================================
# Best-effort batch calculation
# ============================================================================

def calculate_batch_adjustments(requests: Sequence[AdjustmentRequest]) -> List[AdjustmentResult]:
    """
    Calculate prices for many independent requests, preserving input order.

    Unlike calculate_adjustment(), this never raises for a bad item: the item
    keeps its base price, its adjustment is 0 and result.error holds the
    CalculationError that strict calculation would have raised.
    """
    results = []
    for request in requests:
        try:
            new_price = calculate_adjustment(
                request.base_price,
                request.adjustment_type,
                request.adjustment_value,
                request.increment_type,
            )
        except CalculationError as e:
            logger.warning(f"Batch item fell back to base price {request.base_price}: {e.message}")
            results.append(AdjustmentResult(
                base_price=request.base_price,
                new_price=request.base_price,
                adjustment=0,
                adjustment_type=request.adjustment_type,
                adjustment_value=request.adjustment_value,
                increment_type=request.increment_type,
                error=e,
            ))
            continue

        results.append(AdjustmentResult(
            base_price=request.base_price,
            new_price=new_price,
            adjustment=round_price(new_price - request.base_price),
            adjustment_type=request.adjustment_type,
            adjustment_value=request.adjustment_value,
            increment_type=request.increment_type,
        ))

    return results
