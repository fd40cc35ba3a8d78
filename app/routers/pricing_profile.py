"""
API Router for pricing profiles.
Create, read, update and delete profiles, plus price previews.
"""

from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.services.exceptions import PricingServiceError, ProfileNotFound
from app.services.pricing_profile_repository import PricingProfileRepository
from app.services.pricing_profile_service import PricingProfileService
from app.services.product_repository import ProductRepository
from app.schemas.pricing_profile import (
    PricingProfileCreate,
    PricingProfileUpdate,
    PricingProfileResponse,
    PriceCalculationRequest,
    PriceCalculationResponse,
    SuccessResponse,
)

router = APIRouter(prefix="/pricing-profiles", tags=["Pricing Profiles"])


def get_pricing_profile_service(db: Session = Depends(get_db)) -> PricingProfileService:
    return PricingProfileService(ProductRepository(db), PricingProfileRepository(db))


def _raise_http_error(error: Exception):
    """Translate service and database errors into HTTP errors"""
    if isinstance(error, ProfileNotFound):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=error.message)
    if isinstance(error, PricingServiceError):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error.message)
    if isinstance(error, IntegrityError):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Database integrity error: {str(error.orig)}"
        )
    raise error


# ============================================================================
# CREATE ENDPOINTS
# ============================================================================

@router.post("/", response_model=PricingProfileResponse, status_code=status.HTTP_201_CREATED)
def create_pricing_profile(
    profile: PricingProfileCreate,
    service: PricingProfileService = Depends(get_pricing_profile_service),
):
    """
    Create a pricing profile and calculate prices for its products.

    **Required fields:**
    - name: Unique profile name
    - adjustmentType: fixed | dynamic
    - adjustmentValue: Amount, or percentage (max 100) for dynamic
    - incrementType: increase | decrease
    - productIds: Products to price
    """
    try:
        return service.create_profile(
            name=profile.name,
            adjustment_type=profile.adjustment_type,
            adjustment_value=profile.adjustment_value,
            increment_type=profile.increment_type,
            product_ids=profile.product_ids,
        )
    except (PricingServiceError, IntegrityError) as e:
        _raise_http_error(e)


@router.post("/calculate", response_model=PriceCalculationResponse)
def calculate_prices(
    request: PriceCalculationRequest,
    service: PricingProfileService = Depends(get_pricing_profile_service),
):
    """
    Preview prices for products without saving a profile.

    Products that cannot be priced keep their wholesale price and carry an error.
    """
    try:
        items = service.preview_prices(
            product_ids=request.product_ids,
            adjustment_type=request.adjustment_type,
            adjustment_value=request.adjustment_value,
            increment_type=request.increment_type,
        )
    except PricingServiceError as e:
        _raise_http_error(e)

    return PriceCalculationResponse(items=items, total=len(items))


# ============================================================================
# READ ENDPOINTS
# ============================================================================

@router.get("/", response_model=List[PricingProfileResponse])
def get_all_pricing_profiles(service: PricingProfileService = Depends(get_pricing_profile_service)):
    """
    Get all pricing profiles, newest first, each with its pricing table.
    """
    return service.get_all_profiles()


@router.get("/{profile_id}", response_model=PricingProfileResponse)
def get_pricing_profile_by_id(
    profile_id: int,
    service: PricingProfileService = Depends(get_pricing_profile_service),
):
    """
    Get a specific pricing profile by ID.
    """
    try:
        return service.get_profile_by_id(profile_id)
    except PricingServiceError as e:
        _raise_http_error(e)


# ============================================================================
# UPDATE ENDPOINTS
# ============================================================================

@router.put("/{profile_id}", response_model=PricingProfileResponse)
def update_pricing_profile(
    profile_id: int,
    profile_update: PricingProfileUpdate,
    service: PricingProfileService = Depends(get_pricing_profile_service),
):
    """
    Update a pricing profile.

    Only provided fields are updated. Changing adjustmentType, adjustmentValue,
    incrementType or productIds recalculates every product price.
    """
    update_data = profile_update.model_dump(exclude_unset=True)

    try:
        return service.update_profile(profile_id, **update_data)
    except (PricingServiceError, IntegrityError) as e:
        _raise_http_error(e)


# ============================================================================
# DELETE ENDPOINTS
# ============================================================================

@router.delete("/{profile_id}", response_model=SuccessResponse)
def delete_pricing_profile(
    profile_id: int,
    service: PricingProfileService = Depends(get_pricing_profile_service),
):
    """
    Delete a pricing profile and all of its calculated prices.
    """
    try:
        result = service.delete_profile(profile_id)
    except PricingServiceError as e:
        _raise_http_error(e)

    return SuccessResponse(
        message=f"Pricing profile {profile_id} deleted successfully",
        data=result,
    )
