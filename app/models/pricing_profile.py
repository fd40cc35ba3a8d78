"""
Pricing profile models.
A profile stores adjustment parameters; its line items store the
snapshotted base price and calculated price for each selected product.
"""

from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey
from sqlalchemy.sql import func
from app.core.database import Base


class PricingProfile(Base):
    """
    Pricing profile model.

    Table: pricing_profiles
    adjustment_type is "fixed" or "dynamic" (percentage);
    increment_type is "increase" or "decrease".
    """
    __tablename__ = "pricing_profiles"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(255), nullable=False, unique=True, index=True)
    adjustment_type = Column(String(20), nullable=False)
    adjustment_value = Column(Float, nullable=False)
    increment_type = Column(String(20), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self):
        return f"<PricingProfile(id={self.id}, name='{self.name}', type='{self.adjustment_type}')>"


class PricingProfileProduct(Base):
    """
    Line item linking one product to one pricing profile.

    Table: pricing_profile_products
    Prices are snapshots taken at calculation time; the product itself may
    later disappear from the catalog, which nulls product_id.
    """
    __tablename__ = "pricing_profile_products"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    profile_id = Column(
        Integer,
        ForeignKey("pricing_profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    product_id = Column(Integer, ForeignKey("products.id", ondelete="SET NULL"), nullable=True, index=True)
    based_on_price = Column(Float, nullable=False)
    new_price = Column(Float, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self):
        return (
            f"<PricingProfileProduct(profile_id={self.profile_id}, product_id={self.product_id}, "
            f"new_price={self.new_price})>"
        )
