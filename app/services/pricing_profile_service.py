"""
Pricing profile service.

Business logic for pricing profiles:
- Resolve base prices for the selected products
- Calculate every line item strictly (one bad product aborts the operation)
- Persist the profile and its line items in a single unit of work
- Recalculate all line items when adjustment parameters or products change
- Build the pricing table shown to callers

The pricing table adjustment is signed: new_price - wholesale_price, so
decreases show as negative amounts.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from app.services.adjustment_calculator import (
    AdjustmentRequest,
    calculate_adjustment,
    calculate_batch_adjustments,
    round_price,
)
from app.services.exceptions import (
    CalculationError,
    InvalidProductBasePrice,
    NoProductsFound,
    PriceCalculationFailed,
    ProfileNotFound,
)
from app.services.interfaces import (
    LineItemView,
    NewLineItem,
    PricingProfileStore,
    ProductLookup,
    ProductSnapshot,
)

logger = logging.getLogger(__name__)


def _enum_value(value):
    return getattr(value, "value", value)


def _has_usable_price(product: ProductSnapshot) -> bool:
    return bool(product.base_price) and product.base_price > 0


def build_pricing_row(item: LineItemView) -> Dict[str, Any]:
    """Format one stored line item for the pricing table"""
    return {
        "product_id": item.product_id,
        "title": item.title or "",
        "sku": item.sku or "",
        "category": item.category or "",
        "wholesale_price": item.based_on_price,
        "adjustment": round_price(item.new_price - item.based_on_price),
        "new_price": item.new_price,
    }


class PricingProfileService:
    """Creates, reads, recalculates and deletes pricing profiles"""

    def __init__(self, products: ProductLookup, profiles: PricingProfileStore):
        self.products = products
        self.profiles = profiles

    # ============================================================================
    # CALCULATION
    # ============================================================================

    def _resolve_products(self, product_ids: Optional[Sequence[int]]) -> List[ProductSnapshot]:
        requested = list(dict.fromkeys(product_ids or []))
        if not requested:
            raise NoProductsFound(requested)

        products = self.products.get_products_by_ids(requested)
        if not products:
            raise NoProductsFound(requested)

        if len(products) < len(requested):
            found = {product.id for product in products}
            missing = [pid for pid in requested if pid not in found]
            logger.info(f"Ignoring unknown product ids {missing}")

        return products

    def _calculate_line_items(
        self,
        product_ids: Optional[Sequence[int]],
        adjustment_type,
        adjustment_value,
        increment_type,
    ) -> List[NewLineItem]:
        """
        Calculate a line item for every resolvable product.

        Raises:
            NoProductsFound: no ids given, or none of them exist
            InvalidProductBasePrice: a product has no usable stored price
            PriceCalculationFailed: the calculator rejected a product
        """
        line_items = []
        for product in self._resolve_products(product_ids):
            base_price = product.base_price
            if not _has_usable_price(product):
                raise InvalidProductBasePrice(product.id, product.title, base_price)

            try:
                new_price = calculate_adjustment(
                    base_price,
                    adjustment_type,
                    adjustment_value,
                    increment_type,
                )
            except CalculationError as e:
                logger.warning(f"Price calculation rejected for product {product.id}: {e.message}")
                raise PriceCalculationFailed(product.id, product.title, e) from e

            line_items.append(NewLineItem(
                product_id=product.id,
                based_on_price=base_price,
                new_price=new_price,
            ))

        return line_items

    # ============================================================================
    # VIEWS
    # ============================================================================

    def _build_profile_view(self, profile) -> Dict[str, Any]:
        line_items = self.profiles.get_line_items(profile.id)
        return {
            "id": profile.id,
            "name": profile.name,
            "adjustment_type": profile.adjustment_type,
            "adjustment_value": profile.adjustment_value,
            "increment_type": profile.increment_type,
            "created_at": profile.created_at,
            "updated_at": profile.updated_at,
            "pricing_table": [build_pricing_row(item) for item in line_items],
        }

    def _get_profile_or_raise(self, profile_id: int):
        profile = self.profiles.get_profile(profile_id)
        if profile is None:
            raise ProfileNotFound(profile_id)
        return profile

    # ============================================================================
    # OPERATIONS
    # ============================================================================

    def create_profile(
        self,
        name: str,
        adjustment_type,
        adjustment_value: float,
        increment_type,
        product_ids: Sequence[int],
    ) -> Dict[str, Any]:
        """
        Create a pricing profile with one calculated line item per product.

        Nothing is written unless every product prices successfully.
        """
        line_items = self._calculate_line_items(product_ids, adjustment_type, adjustment_value, increment_type)

        try:
            profile = self.profiles.create_profile(
                name=name,
                adjustment_type=_enum_value(adjustment_type),
                adjustment_value=adjustment_value,
                increment_type=_enum_value(increment_type),
            )
            self.profiles.add_line_items(profile.id, line_items)
            self.profiles.commit()
        except Exception:
            self.profiles.rollback()
            raise

        logger.info(f"Created pricing profile {profile.id} '{name}' with {len(line_items)} products")
        return self._build_profile_view(profile)

    def get_all_profiles(self) -> List[Dict[str, Any]]:
        """Every profile with its stored pricing table, newest first"""
        return [self._build_profile_view(profile) for profile in self.profiles.list_profiles()]

    def get_profile_by_id(self, profile_id: int) -> Dict[str, Any]:
        """Get one profile with its stored pricing table"""
        return self._build_profile_view(self._get_profile_or_raise(profile_id))

    def update_profile(
        self,
        profile_id: int,
        name: Optional[str] = None,
        adjustment_type=None,
        adjustment_value: Optional[float] = None,
        increment_type=None,
        product_ids: Optional[Sequence[int]] = None,
    ) -> Dict[str, Any]:
        """
        Update a pricing profile. Arguments left as None are not changed.

        A name-only update leaves line items alone. Changing the adjustment
        type, value, increment type or product set recalculates every line
        item from scratch using the merged parameters; without new
        product_ids the profile's current products are repriced.
        """
        profile = self._get_profile_or_raise(profile_id)

        changes = {}
        if name is not None:
            changes["name"] = name
        if adjustment_type is not None:
            changes["adjustment_type"] = _enum_value(adjustment_type)
        if adjustment_value is not None:
            changes["adjustment_value"] = adjustment_value
        if increment_type is not None:
            changes["increment_type"] = _enum_value(increment_type)

        needs_recalculation = any(
            value is not None
            for value in (adjustment_type, adjustment_value, increment_type, product_ids)
        )

        line_items = None
        if needs_recalculation:
            if product_ids is None:
                product_ids = [
                    item.product_id
                    for item in self.profiles.get_line_items(profile_id)
                    if item.product_id is not None
                ]

            line_items = self._calculate_line_items(
                product_ids,
                changes.get("adjustment_type", profile.adjustment_type),
                changes.get("adjustment_value", profile.adjustment_value),
                changes.get("increment_type", profile.increment_type),
            )

        try:
            self.profiles.update_profile(profile, changes)
            if line_items is not None:
                self.profiles.delete_line_items(profile_id)
                self.profiles.add_line_items(profile_id, line_items)
            self.profiles.commit()
        except Exception:
            self.profiles.rollback()
            raise

        if line_items is not None:
            logger.info(f"Recalculated pricing profile {profile_id} with {len(line_items)} products")
        else:
            logger.info(f"Updated pricing profile {profile_id}")

        return self._build_profile_view(profile)

    def delete_profile(self, profile_id: int) -> Dict[str, Any]:
        """Delete a profile and all of its line items"""
        profile = self._get_profile_or_raise(profile_id)

        try:
            deleted_items = self.profiles.delete_line_items(profile_id)
            self.profiles.delete_profile(profile)
            self.profiles.commit()
        except Exception:
            self.profiles.rollback()
            raise

        logger.info(f"Deleted pricing profile {profile_id} and {deleted_items} line items")
        return {"success": True, "profile_id": profile_id, "deleted_line_items": deleted_items}

    def preview_prices(
        self,
        product_ids: Sequence[int],
        adjustment_type,
        adjustment_value: float,
        increment_type,
    ) -> List[Dict[str, Any]]:
        """
        Price products without saving anything.

        Uses the best-effort batch calculator: a product that cannot be
        priced keeps its wholesale price, shows a zero adjustment and
        reports the reason in "error". Products without a usable stored
        price are reported the same way instead of being calculated.
        """
        products = self._resolve_products(product_ids)
        priceable = [product for product in products if _has_usable_price(product)]
        results = iter(calculate_batch_adjustments([
            AdjustmentRequest(
                base_price=product.base_price,
                adjustment_type=adjustment_type,
                adjustment_value=adjustment_value,
                increment_type=increment_type,
            )
            for product in priceable
        ]))

        rows = []
        for product in products:
            if _has_usable_price(product):
                result = next(results)
                new_price, adjustment, error = result.new_price, result.adjustment, result.error
            else:
                error = InvalidProductBasePrice(product.id, product.title, product.base_price)
                logger.warning(f"Preview skipped product {product.id}: {error.message}")
                new_price, adjustment = product.base_price, 0

            rows.append({
                "product_id": product.id,
                "title": product.title,
                "sku": product.sku or "",
                "category": product.category or "",
                "wholesale_price": product.base_price,
                "adjustment": adjustment,
                "new_price": new_price,
                "error": error.message if error else None,
            })
        return rows
