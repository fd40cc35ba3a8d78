"""
Pydantic schemas for pricing profiles.
Request and response models for pricing profile API endpoints.
Fields are exchanged in camelCase; snake_case is accepted on input too.
"""

from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.services.adjustment_calculator import AdjustmentType, IncrementType


class CamelModel(BaseModel):
    """Base model using camelCase aliases"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================================
# Request Schemas
# ============================================================================

class PricingProfileCreate(CamelModel):
    """Schema for creating a pricing profile"""
    name: str = Field(..., min_length=1, max_length=255, description="Unique profile name")
    adjustment_type: AdjustmentType = Field(..., description="fixed amount or dynamic percentage")
    adjustment_value: float = Field(..., description="Amount, or percentage for dynamic adjustments")
    increment_type: IncrementType = Field(..., description="increase or decrease")
    product_ids: List[int] = Field(..., description="Products to price")


class PricingProfileUpdate(CamelModel):
    """Schema for updating a pricing profile; omitted fields keep their value"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    adjustment_type: Optional[AdjustmentType] = None
    adjustment_value: Optional[float] = None
    increment_type: Optional[IncrementType] = None
    product_ids: Optional[List[int]] = None


class PriceCalculationRequest(CamelModel):
    """Schema for previewing prices without creating a profile"""
    product_ids: List[int] = Field(..., description="Products to price")
    adjustment_type: AdjustmentType
    adjustment_value: float
    increment_type: IncrementType


# ============================================================================
# Response Schemas
# ============================================================================

class PricingTableRow(CamelModel):
    """One row of a profile's pricing table"""
    product_id: Optional[int] = None
    title: str
    sku: str
    category: str
    wholesale_price: float
    adjustment: float = Field(..., description="new_price - wholesale_price; negative for decreases")
    new_price: float


class PricingProfileResponse(CamelModel):
    """Pricing profile with its pricing table"""
    id: int
    name: str
    adjustment_type: str
    adjustment_value: float
    increment_type: str
    created_at: datetime
    updated_at: datetime
    pricing_table: List[PricingTableRow] = []


class PriceCalculationRow(CamelModel):
    """Preview row; error is set when the product kept its wholesale price"""
    product_id: int
    title: str
    sku: str
    category: str
    wholesale_price: Optional[float] = None
    adjustment: float
    new_price: Optional[float] = None
    error: Optional[str] = None


class PriceCalculationResponse(CamelModel):
    """Preview result"""
    items: List[PriceCalculationRow]
    total: int


class SuccessResponse(BaseModel):
    """Generic success response"""
    success: bool = True
    message: str
    data: Optional[dict] = None
