"""
API Router for the product catalog.
Product listing, search and reference data lookups.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.services.product_repository import ProductRepository
from app.schemas.product import (
    ProductFilter,
    ProductListResponse,
    ProductResponse,
    ReferenceItemResponse,
    SkuResponse,
)

router = APIRouter(prefix="/products", tags=["Products"])


def get_product_repository(db: Session = Depends(get_db)) -> ProductRepository:
    return ProductRepository(db)


def _to_list_response(products) -> ProductListResponse:
    return ProductListResponse(
        items=[ProductResponse.from_product(p) for p in products],
        total=len(products),
    )


# ============================================================================
# PRODUCT ENDPOINTS
# ============================================================================

@router.get("/", response_model=ProductListResponse)
def get_all_products(
    category: Optional[str] = Query(None, description="Filter by category name"),
    sub_category: Optional[str] = Query(None, alias="subCategory", description="Filter by sub-category name"),
    segment: Optional[str] = Query(None, description="Filter by segment name"),
    brand: Optional[str] = Query(None, description="Filter by brand name"),
    sku: Optional[str] = Query(None, description="Filter by SKU code (partial match)"),
    search: Optional[str] = Query(None, description="Search in title and SKU code"),
    repository: ProductRepository = Depends(get_product_repository),
):
    """
    Get all products with optional filters.

    **Query Parameters:**
    - category, subCategory, segment, brand: exact name match
    - sku: partial SKU code match
    - search: case-insensitive match on title or SKU code
    """
    filters = ProductFilter(
        category=category,
        sub_category=sub_category,
        segment=segment,
        brand=brand,
        sku=sku,
        search=search,
    )
    return _to_list_response(repository.get_all(filters))


@router.get("/search", response_model=ProductListResponse)
def search_products(
    q: Optional[str] = Query(None, description="Search text for title or SKU code"),
    category: Optional[str] = Query(None),
    sub_category: Optional[str] = Query(None, alias="subCategory"),
    segment: Optional[str] = Query(None),
    brand: Optional[str] = Query(None),
    sku: Optional[str] = Query(None),
    repository: ProductRepository = Depends(get_product_repository),
):
    """
    Search products by title or SKU code, narrowed by the dropdown filters.
    """
    filters = ProductFilter(
        category=category,
        sub_category=sub_category,
        segment=segment,
        brand=brand,
        sku=sku,
    )
    return _to_list_response(repository.search(q, filters))


# ============================================================================
# REFERENCE DATA ENDPOINTS
# ============================================================================

@router.get("/brands", response_model=List[ReferenceItemResponse])
def get_all_brands(repository: ProductRepository = Depends(get_product_repository)):
    """Get all brands"""
    return repository.get_all_brands()


@router.get("/categories", response_model=List[ReferenceItemResponse])
def get_all_categories(repository: ProductRepository = Depends(get_product_repository)):
    """Get all categories"""
    return repository.get_all_categories()


@router.get("/sub-categories", response_model=List[ReferenceItemResponse])
def get_all_sub_categories(repository: ProductRepository = Depends(get_product_repository)):
    """Get all sub-categories"""
    return repository.get_all_sub_categories()


@router.get("/segments", response_model=List[ReferenceItemResponse])
def get_all_segments(repository: ProductRepository = Depends(get_product_repository)):
    """Get all segments"""
    return repository.get_all_segments()


@router.get("/skus", response_model=List[SkuResponse])
def get_all_skus(repository: ProductRepository = Depends(get_product_repository)):
    """Get all SKUs"""
    return repository.get_all_skus()
