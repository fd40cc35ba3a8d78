"""
API routers for the application.
"""

from fastapi import APIRouter
from app.routers import product, pricing_profile

api_router = APIRouter()

# Include routers
api_router.include_router(product.router)  # Product catalog & reference data
api_router.include_router(pricing_profile.router)  # Pricing profiles

__all__ = ["api_router", "product", "pricing_profile"]
