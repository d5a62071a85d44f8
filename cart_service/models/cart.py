"""Cart models for the session cart service"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class CartItem(BaseModel):
    """Line in a shopping cart"""
    product_id: int
    quantity: int = Field(gt=0)
    unit_price: Decimal
    name: str
    added_at: datetime


class Cart(BaseModel):
    """Shopping cart for one session"""
    session_id: str
    items: list[CartItem] = Field(default_factory=list)
    total: Decimal = Decimal("0")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AddToCartRequest(BaseModel):
    """Request to add item to cart"""
    product_id: int = Field(gt=0)
    quantity: int = Field(gt=0)


class UpdateCartItemRequest(BaseModel):
    """Request to set item quantity; 0 removes the item"""
    quantity: int = Field(ge=0)


class CartSnapshot(BaseModel):
    """Cart as returned over HTTP"""
    session_id: str
    items: list[CartItem]
    total: Decimal
    item_count: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CartResponse(BaseModel):
    """Cart API response for mutations"""
    cart: CartSnapshot
    message: Optional[str] = None


class ClearCartResponse(BaseModel):
    """Cart API response for clear"""
    session_id: str
    message: str
