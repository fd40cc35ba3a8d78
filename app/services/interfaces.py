"""
Contracts between the pricing profile service and its storage collaborators.
The SQLAlchemy repositories implement these; tests may bind any other store.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence


# ============================================================================
# Data transfer objects
# ============================================================================

@dataclass(frozen=True)
class ProductSnapshot:
    """Product fields needed for pricing and for the pricing table"""
    id: int
    title: str
    base_price: Optional[float]
    sku: Optional[str] = None
    category: Optional[str] = None
    brand: Optional[str] = None
    sub_category: Optional[str] = None
    segment: Optional[str] = None


@dataclass(frozen=True)
class NewLineItem:
    """Calculated price pair waiting to be stored under a profile"""
    product_id: int
    based_on_price: float
    new_price: float


@dataclass(frozen=True)
class LineItemView:
    """Stored line item joined with product display fields"""
    id: int
    product_id: Optional[int]
    based_on_price: float
    new_price: float
    title: Optional[str] = None
    sku: Optional[str] = None
    category: Optional[str] = None


# ============================================================================
# Collaborator interfaces
# ============================================================================

class ProductLookup(ABC):
    """Resolves product ids to priceable product snapshots."""

    @abstractmethod
    def get_products_by_ids(self, product_ids: Sequence[int]) -> List[ProductSnapshot]:
        """Return the products that exist; unknown ids are simply absent."""


class PricingProfileStore(ABC):
    """
    Persistence for pricing profiles and their line items.

    Writes are staged until commit(); rollback() discards everything staged
    since the last commit.
    """

    @abstractmethod
    def create_profile(self, name: str, adjustment_type: str, adjustment_value: float, increment_type: str) -> Any:
        """Stage a new profile and return it with its id assigned."""

    @abstractmethod
    def get_profile(self, profile_id: int) -> Optional[Any]:
        """Return the profile or None."""

    @abstractmethod
    def list_profiles(self) -> List[Any]:
        """Return every profile, most recently created first."""

    @abstractmethod
    def update_profile(self, profile: Any, changes: Dict[str, Any]) -> Any:
        """Apply changes and refresh updated_at, even when changes is empty."""

    @abstractmethod
    def delete_profile(self, profile: Any) -> None:
        """Stage deletion of the profile row."""

    @abstractmethod
    def add_line_items(self, profile_id: int, items: Sequence[NewLineItem]) -> None:
        """Stage line items for a profile."""

    @abstractmethod
    def get_line_items(self, profile_id: int) -> List[LineItemView]:
        """Return a profile's line items joined with product display fields."""

    @abstractmethod
    def delete_line_items(self, profile_id: int) -> int:
        """Stage deletion of all line items of a profile; return how many."""

    @abstractmethod
    def commit(self) -> None:
        """Make staged writes permanent."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard staged writes."""
