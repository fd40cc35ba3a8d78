"""
Database models for the application.
"""

from app.core.database import Base
from app.models.product import Brand, Category, SubCategory, Segment, Sku, Product
from app.models.pricing_profile import PricingProfile, PricingProfileProduct

__all__ = [
    "Base",
    "Brand",
    "Category",
    "SubCategory",
    "Segment",
    "Sku",
    "Product",
    "PricingProfile",
    "PricingProfileProduct",
]
