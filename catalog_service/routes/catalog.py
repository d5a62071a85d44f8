"""Catalog validation RPC routes"""

from fastapi import APIRouter, Depends, Request

from shared.catalog.client import RPC_PREFIX
from shared.catalog.models import (
    BulkValidationRequest,
    BulkValidationResult,
    PriceRequest,
    PriceResult,
    ValidationRequest,
    ValidationResult,
)

from ..services.validation import CatalogValidationService

router = APIRouter(prefix=RPC_PREFIX, tags=["Catalog"])


def get_validation_service(request: Request) -> CatalogValidationService:
    """Validation service built at startup"""
    return request.app.state.validation_service


@router.post("/ValidateProduct", response_model=ValidationResult)
async def validate_product(
    request: ValidationRequest,
    service: CatalogValidationService = Depends(get_validation_service),
):
    """Validate that a product exists and has enough stock"""
    return await service.validate_product(request)


@router.post("/GetProductPrice", response_model=PriceResult)
async def get_product_price(
    request: PriceRequest,
    service: CatalogValidationService = Depends(get_validation_service),
):
    """Get the current price of a product"""
    return await service.get_product_price(request)


@router.post("/ValidateCartItems", response_model=BulkValidationResult)
async def validate_cart_items(
    request: BulkValidationRequest,
    service: CatalogValidationService = Depends(get_validation_service),
):
    """
    Validate a list of cart items in request order.

    Fails as a whole on the first invalid argument or backend error.
    """
    return await service.validate_cart_items(request)
