"""
Repository layer for pricing profiles.
Handles the pricing_profiles and pricing_profile_products tables.
Writes are flushed, never committed here; the service owns the transaction.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence
from sqlalchemy.orm import Session

from app.models.pricing_profile import PricingProfile, PricingProfileProduct
from app.models.product import Product, Sku, Category
from app.services.interfaces import PricingProfileStore, NewLineItem, LineItemView


class PricingProfileRepository(PricingProfileStore):
    """Repository for PricingProfile and line item operations"""

    def __init__(self, db: Session):
        self.db = db

    # ============================================================================
    # PROFILES
    # ============================================================================

    def create_profile(
        self,
        name: str,
        adjustment_type: str,
        adjustment_value: float,
        increment_type: str,
    ) -> PricingProfile:
        """Stage a new pricing profile and assign its id"""
        db_profile = PricingProfile(
            name=name,
            adjustment_type=adjustment_type,
            adjustment_value=adjustment_value,
            increment_type=increment_type,
        )
        self.db.add(db_profile)
        self.db.flush()
        return db_profile

    def get_profile(self, profile_id: int) -> Optional[PricingProfile]:
        """Get pricing profile by ID"""
        return self.db.query(PricingProfile).filter(PricingProfile.id == profile_id).first()

    def list_profiles(self) -> List[PricingProfile]:
        """Get all pricing profiles, newest first"""
        return (
            self.db.query(PricingProfile)
            .order_by(PricingProfile.created_at.desc(), PricingProfile.id.desc())
            .all()
        )

    def update_profile(self, profile: PricingProfile, changes: Dict[str, Any]) -> PricingProfile:
        """Apply changed fields; updated_at is refreshed on every call"""
        for field, value in changes.items():
            setattr(profile, field, value)
        profile.updated_at = datetime.now(timezone.utc)
        self.db.flush()
        return profile

    def delete_profile(self, profile: PricingProfile) -> None:
        """Delete a pricing profile row"""
        self.db.delete(profile)
        self.db.flush()

    # ============================================================================
    # LINE ITEMS
    # ============================================================================

    def add_line_items(self, profile_id: int, items: Sequence[NewLineItem]) -> None:
        """Insert calculated prices for a profile"""
        self.db.add_all([
            PricingProfileProduct(
                profile_id=profile_id,
                product_id=item.product_id,
                based_on_price=item.based_on_price,
                new_price=item.new_price,
            )
            for item in items
        ])
        self.db.flush()

    def get_line_items(self, profile_id: int) -> List[LineItemView]:
        """Get a profile's line items with product title, SKU and category"""
        rows = (
            self.db.query(
                PricingProfileProduct.id,
                PricingProfileProduct.product_id,
                PricingProfileProduct.based_on_price,
                PricingProfileProduct.new_price,
                Product.title,
                Sku.sku_code,
                Category.name,
            )
            .outerjoin(Product, PricingProfileProduct.product_id == Product.id)
            .outerjoin(Sku, Product.sku_id == Sku.id)
            .outerjoin(Category, Product.category_id == Category.id)
            .filter(PricingProfileProduct.profile_id == profile_id)
            .order_by(PricingProfileProduct.id)
            .all()
        )

        return [
            LineItemView(
                id=row_id,
                product_id=product_id,
                based_on_price=based_on_price,
                new_price=new_price,
                title=title,
                sku=sku_code,
                category=category_name,
            )
            for row_id, product_id, based_on_price, new_price, title, sku_code, category_name in rows
        ]

    def delete_line_items(self, profile_id: int) -> int:
        """Delete every line item belonging to a profile"""
        deleted = (
            self.db.query(PricingProfileProduct)
            .filter(PricingProfileProduct.profile_id == profile_id)
            .delete(synchronize_session=False)
        )
        self.db.flush()
        return deleted

    # ============================================================================
    # TRANSACTION
    # ============================================================================

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()
