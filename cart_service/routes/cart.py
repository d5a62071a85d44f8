"""Cart API routes"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, Query, Request

from shared.catalog.client import CatalogClient
from shared.errors import (
    InsufficientStockError,
    PayloadValidationError,
    ProductNotFoundError,
)

from ..core.config import Settings
from ..database.carts import SessionCartStore
from ..models.cart import (
    AddToCartRequest,
    CartResponse,
    CartSnapshot,
    ClearCartResponse,
    UpdateCartItemRequest,
)
from ..services import cart_ops

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/cart", tags=["Cart"])


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_cart_store(request: Request) -> SessionCartStore:
    """Cart store built at startup"""
    return request.app.state.cart_store


def get_catalog_client(request: Request) -> Optional[CatalogClient]:
    """Catalog client, if a catalog is configured"""
    return getattr(request.app.state, "catalog_client", None)


def get_session_id(
    x_session_id: Optional[str] = Header(None),
    session_id: Optional[str] = Query(None),
    settings: Settings = Depends(get_settings),
) -> str:
    """Session ID from header, then query string, then the default session"""
    return x_session_id or session_id or settings.default_session_id


def parse_product_id(product_id: str) -> int:
    try:
        return int(product_id)
    except ValueError:
        raise PayloadValidationError("Invalid product ID") from None


@router.post("/items", response_model=CartResponse)
async def add_to_cart(
    request: AddToCartRequest,
    session_id: str = Depends(get_session_id),
    store: SessionCartStore = Depends(get_cart_store),
    catalog: Optional[CatalogClient] = Depends(get_catalog_client),
    settings: Settings = Depends(get_settings),
):
    """Add an item to the cart"""
    logger.info(
        f"Adding item to cart: session={session_id}, product_id={request.product_id}, "
        f"quantity={request.quantity}"
    )

    if catalog is not None:
        # Price and name come from the catalog at add time
        result = await catalog.validate_product(request.product_id, request.quantity)
        if not result.valid:
            raise ProductNotFoundError(f"Product {request.product_id} not found")
        if not result.in_stock:
            raise InsufficientStockError(result.error_message or "Insufficient stock")
        unit_price, name = result.unit_price, result.product_name
    else:
        unit_price = settings.placeholder_unit_price
        name = settings.placeholder_product_name

    cart = await store.add_item(session_id, request.product_id, request.quantity, unit_price, name)
    return CartResponse(
        cart=cart_ops.snapshot(cart),
        message=f"Added {request.quantity}x {name} to cart",
    )


@router.get("", response_model=CartSnapshot)
async def get_cart(
    session_id: str = Depends(get_session_id),
    store: SessionCartStore = Depends(get_cart_store),
):
    """Get the current cart, empty if the session has none yet"""
    cart = await store.get(session_id)
    return cart_ops.snapshot(cart)


@router.put("/items/{product_id}", response_model=CartResponse)
async def update_cart_item(
    product_id: str,
    request: UpdateCartItemRequest,
    session_id: str = Depends(get_session_id),
    store: SessionCartStore = Depends(get_cart_store),
):
    """Set item quantity in cart; 0 removes the item"""
    pid = parse_product_id(product_id)
    logger.info(
        f"Updating item quantity: session={session_id}, product_id={pid}, "
        f"quantity={request.quantity}"
    )

    cart = await store.update_quantity(session_id, pid, request.quantity)
    return CartResponse(cart=cart_ops.snapshot(cart), message="Item quantity updated")


@router.delete("/items/{product_id}", response_model=CartResponse)
async def remove_from_cart(
    product_id: str,
    session_id: str = Depends(get_session_id),
    store: SessionCartStore = Depends(get_cart_store),
):
    """Remove an item from the cart"""
    pid = parse_product_id(product_id)
    logger.info(f"Removing item: session={session_id}, product_id={pid}")

    cart = await store.remove_item(session_id, pid)
    return CartResponse(cart=cart_ops.snapshot(cart), message="Item removed from cart")


@router.delete("", response_model=ClearCartResponse)
async def clear_cart(
    session_id: str = Depends(get_session_id),
    store: SessionCartStore = Depends(get_cart_store),
):
    """Clear all items from cart"""
    await store.clear(session_id)
    return ClearCartResponse(session_id=session_id, message="Cart cleared")
