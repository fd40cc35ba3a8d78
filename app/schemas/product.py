"""
Pydantic schemas for the product catalog.
Response models for products and their reference data.
"""

from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Reference Data Schemas
# ============================================================================

class ReferenceItemResponse(BaseModel):
    """Brand, category, sub-category or segment"""
    id: int
    name: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SkuResponse(BaseModel):
    """SKU entry"""
    id: int
    sku_code: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


# ============================================================================
# Product Schemas
# ============================================================================

class ProductResponse(BaseModel):
    """Product with reference names flattened in"""
    id: int
    title: str
    sku_code: Optional[str] = None
    brand_id: int
    brand_name: Optional[str] = None
    category_id: int
    category_name: Optional[str] = None
    sub_category_id: int
    sub_category_name: Optional[str] = None
    segment_id: Optional[int] = None
    segment_name: Optional[str] = None
    global_wholesale_price: float
    quantity: int

    @classmethod
    def from_product(cls, product) -> "ProductResponse":
        """Build from a Product row with its references loaded"""
        return cls(
            id=product.id,
            title=product.title,
            sku_code=product.sku.sku_code if product.sku else None,
            brand_id=product.brand_id,
            brand_name=product.brand.name if product.brand else None,
            category_id=product.category_id,
            category_name=product.category.name if product.category else None,
            sub_category_id=product.sub_category_id,
            sub_category_name=product.sub_category.name if product.sub_category else None,
            segment_id=product.segment_id,
            segment_name=product.segment.name if product.segment else None,
            global_wholesale_price=product.global_wholesale_price,
            quantity=product.quantity,
        )


class ProductFilter(BaseModel):
    """Catalog filters; every name filter is an exact match"""
    category: Optional[str] = Field(None, description="Filter by category name")
    sub_category: Optional[str] = Field(None, description="Filter by sub-category name")
    segment: Optional[str] = Field(None, description="Filter by segment name")
    brand: Optional[str] = Field(None, description="Filter by brand name")
    sku: Optional[str] = Field(None, description="Filter by SKU code (partial match)")
    search: Optional[str] = Field(None, description="Search in title and SKU code")


class ProductListResponse(BaseModel):
    """List of products"""
    items: List[ProductResponse]
    total: int
