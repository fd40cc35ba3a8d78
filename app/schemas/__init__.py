"""
Schemas for the application.

This module exports all Pydantic models and schemas used for request/response validation.
"""

from app.schemas.product import (
    ReferenceItemResponse,
    SkuResponse,
    ProductResponse,
    ProductFilter,
    ProductListResponse,
)

from app.schemas.pricing_profile import (
    PricingProfileCreate,
    PricingProfileUpdate,
    PriceCalculationRequest,
    PricingTableRow,
    PricingProfileResponse,
    PriceCalculationRow,
    PriceCalculationResponse,
    SuccessResponse,
)

__all__ = [
    # Product catalog
    "ReferenceItemResponse",
    "SkuResponse",
    "ProductResponse",
    "ProductFilter",
    "ProductListResponse",
    # Pricing profiles
    "PricingProfileCreate",
    "PricingProfileUpdate",
    "PriceCalculationRequest",
    "PricingTableRow",
    "PricingProfileResponse",
    "PriceCalculationRow",
    "PriceCalculationResponse",
    "SuccessResponse",
]
