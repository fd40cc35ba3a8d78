"""
Named failures raised by the pricing services.
Routers translate these into HTTP responses.
"""

from typing import Iterable, Optional


class PricingServiceError(Exception):
    """Base exception for all pricing service errors."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


# ============================================================================
# Calculation input violations
# ============================================================================

class CalculationError(PricingServiceError):
    """Raised when adjustment calculation input is invalid."""
    pass


class InvalidBasePrice(CalculationError):
    """Base price is not a finite number >= 0."""
    def __init__(self, base_price):
        self.base_price = base_price
        super().__init__(f"Base price must be a valid non-negative number, got {base_price!r}")


class InvalidAdjustmentValue(CalculationError):
    """Adjustment value is not a finite number > 0."""
    def __init__(self, adjustment_value):
        self.adjustment_value = adjustment_value
        super().__init__(f"Adjustment value must be a valid positive number, got {adjustment_value!r}")


class PercentageOutOfRange(CalculationError):
    """Dynamic (percentage) adjustment above 100%."""
    def __init__(self, adjustment_value):
        self.adjustment_value = adjustment_value
        super().__init__(f"Percentage adjustment cannot exceed 100%, got {adjustment_value}%")


class UnsupportedAdjustmentMode(CalculationError):
    """Adjustment type or increment type is not one of the known values."""
    def __init__(self, field: str, value):
        self.field = field
        self.value = value
        super().__init__(f"Unsupported {field}: {value!r}")


class DecreaseExceedsBase(CalculationError):
    """Fixed decrease larger than the base price."""
    def __init__(self, base_price, adjustment_value):
        self.base_price = base_price
        self.adjustment_value = adjustment_value
        super().__init__(
            f"Fixed decrease amount {adjustment_value} cannot exceed base price {base_price}"
        )


# ============================================================================
# Profile lifecycle failures
# ============================================================================

class InvalidProductBasePrice(PricingServiceError):
    """A resolved product has a missing, zero or negative stored price."""
    def __init__(self, product_id: int, title: str, base_price):
        self.product_id = product_id
        self.title = title
        self.base_price = base_price
        super().__init__(f'Product "{title}" (id={product_id}) has invalid base price: {base_price}')


class NoProductsFound(PricingServiceError):
    """None of the requested product ids resolved to a product."""
    def __init__(self, product_ids: Optional[Iterable[int]] = None):
        self.product_ids = list(product_ids or [])
        super().__init__("No products found for the provided product IDs")


class ProfileNotFound(PricingServiceError):
    """Referenced pricing profile does not exist."""
    def __init__(self, profile_id: int):
        self.profile_id = profile_id
        super().__init__(f"Pricing profile with id {profile_id} not found")


class PriceCalculationFailed(PricingServiceError):
    """A calculation failed for one product during a strict operation."""
    def __init__(self, product_id: int, title: str, reason: CalculationError):
        self.product_id = product_id
        self.title = title
        self.reason = reason
        super().__init__(
            f'Failed to calculate price for product "{title}" (id={product_id}): {reason.message}'
        )
