# Cart Service Models

from .cart import (
    AddToCartRequest,
    Cart,
    CartItem,
    CartResponse,
    CartSnapshot,
    ClearCartResponse,
    UpdateCartItemRequest,
)

__all__ = [
    "AddToCartRequest",
    "Cart",
    "CartItem",
    "CartResponse",
    "CartSnapshot",
    "ClearCartResponse",
    "UpdateCartItemRequest",
]
