"""Catalog validation protocol messages"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

DEFAULT_CURRENCY = "USD"


class ValidationRequest(BaseModel):
    """Request to validate a single product and quantity"""
    product_id: str = ""
    quantity: int = 0


class ValidationResult(BaseModel):
    """Result of validating a single product"""
    valid: bool
    in_stock: bool
    available_quantity: int = 0
    product_name: str = ""
    unit_price: Decimal = Decimal("0")
    error_message: Optional[str] = None


class PriceRequest(BaseModel):
    """Request for the current price of a product"""
    product_id: str = ""


class PriceResult(BaseModel):
    """Current price of a product"""
    found: bool
    price: Decimal = Decimal("0")
    currency: str = ""
    error_message: Optional[str] = None


class BulkValidationRequest(BaseModel):
    """Request to validate every line of a cart"""
    items: list[ValidationRequest] = Field(default_factory=list)


class BulkValidationResult(BaseModel):
    """Per-item results in request order plus aggregates"""
    results: list[ValidationResult] = Field(default_factory=list)
    all_valid: bool
    total_price: Decimal = Decimal("0")
    currency: str = DEFAULT_CURRENCY
