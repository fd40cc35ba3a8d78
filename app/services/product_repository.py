"""
Repository layer for the product catalog.
Handles product listing, search and reference data, and resolves
products for pricing calculations.
"""

from typing import List, Optional, Sequence
from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload

from app.models.product import Product, Brand, Category, SubCategory, Segment, Sku
from app.schemas.product import ProductFilter
from app.services.interfaces import ProductLookup, ProductSnapshot


class ProductRepository(ProductLookup):
    """Repository for Product and reference data operations"""

    def __init__(self, db: Session):
        self.db = db

    def _base_query(self):
        """Products joined with every reference table"""
        return (
            self.db.query(Product)
            .outerjoin(Sku, Product.sku_id == Sku.id)
            .outerjoin(Brand, Product.brand_id == Brand.id)
            .outerjoin(Category, Product.category_id == Category.id)
            .outerjoin(SubCategory, Product.sub_category_id == SubCategory.id)
            .outerjoin(Segment, Product.segment_id == Segment.id)
            .options(
                joinedload(Product.sku),
                joinedload(Product.brand),
                joinedload(Product.category),
                joinedload(Product.sub_category),
                joinedload(Product.segment),
            )
        )

    @staticmethod
    def _apply_filters(query, filters: Optional[ProductFilter]):
        if not filters:
            return query

        if filters.category:
            query = query.filter(Category.name == filters.category)

        if filters.sub_category:
            query = query.filter(SubCategory.name == filters.sub_category)

        if filters.segment:
            query = query.filter(Segment.name == filters.segment)

        if filters.brand:
            query = query.filter(Brand.name == filters.brand)

        if filters.sku:
            query = query.filter(Sku.sku_code.ilike(f"%{filters.sku}%"))

        if filters.search:
            search_pattern = f"%{filters.search}%"
            query = query.filter(
                or_(
                    Product.title.ilike(search_pattern),
                    Sku.sku_code.ilike(search_pattern)
                )
            )

        return query

    # ============================================================================
    # CATALOG
    # ============================================================================

    def get_all(self, filters: Optional[ProductFilter] = None) -> List[Product]:
        """Get all products, optionally filtered by reference names or search text"""
        query = self._apply_filters(self._base_query(), filters)
        return query.order_by(Product.id).all()

    def search(self, text: Optional[str], filters: Optional[ProductFilter] = None) -> List[Product]:
        """Search products by title or SKU code, combined with the dropdown filters"""
        filters = filters.model_copy(update={"search": text}) if filters else ProductFilter(search=text)
        return self.get_all(filters)

    def get_by_id(self, product_id: int) -> Optional[Product]:
        """Get product by ID"""
        return self._base_query().filter(Product.id == product_id).first()

    # ============================================================================
    # REFERENCE DATA
    # ============================================================================

    def get_all_brands(self) -> List[Brand]:
        return self.db.query(Brand).order_by(Brand.name).all()

    def get_all_categories(self) -> List[Category]:
        return self.db.query(Category).order_by(Category.name).all()

    def get_all_sub_categories(self) -> List[SubCategory]:
        return self.db.query(SubCategory).order_by(SubCategory.name).all()

    def get_all_segments(self) -> List[Segment]:
        return self.db.query(Segment).order_by(Segment.name).all()

    def get_all_skus(self) -> List[Sku]:
        return self.db.query(Sku).order_by(Sku.sku_code).all()

    # ============================================================================
    # PRICING LOOKUP
    # ============================================================================

    def get_products_by_ids(self, product_ids: Sequence[int]) -> List[ProductSnapshot]:
        """
        Resolve product ids for pricing.
        Ids with no product are left out of the result.
        """
        if not product_ids:
            return []

        products = (
            self._base_query()
            .filter(Product.id.in_(list(product_ids)))
            .order_by(Product.id)
            .all()
        )

        return [
            ProductSnapshot(
                id=product.id,
                title=product.title,
                base_price=product.global_wholesale_price,
                sku=product.sku.sku_code if product.sku else None,
                category=product.category.name if product.category else None,
                brand=product.brand.name if product.brand else None,
                sub_category=product.sub_category.name if product.sub_category else None,
                segment=product.segment.name if product.segment else None,
            )
            for product in products
        ]
