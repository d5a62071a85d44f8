"""
Cart mutation engine.

Pure functions over Cart values. Every function returns a new Cart with its
total recomputed and leaves its input untouched. No I/O happens here.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Iterable, Optional, Union

from shared.errors import ItemNotFoundError

from ..models.cart import Cart, CartItem, CartSnapshot

Price = Union[Decimal, float, int, str]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_decimal(value: Price) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() keeps 29.99 as 29.99 instead of its binary expansion
    return Decimal(str(value))


def calculate_total(items: Iterable[CartItem]) -> Decimal:
    """Sum of unit_price * quantity over all lines"""
    return sum((item.unit_price * item.quantity for item in items), Decimal("0"))


def with_total(cart: Cart) -> Cart:
    """Copy of cart with total recomputed"""
    return cart.model_copy(update={"total": calculate_total(cart.items)})


def item_count(cart: Cart) -> int:
    """Number of distinct lines"""
    return len(cart.items)


def quantity_count(cart: Cart) -> int:
    """Total units across all lines"""
    return sum(item.quantity for item in cart.items)


def snapshot(cart: Cart) -> CartSnapshot:
    """Cart as returned over HTTP"""
    return CartSnapshot(
        session_id=cart.session_id,
        items=cart.items,
        total=cart.total,
        item_count=item_count(cart),
        created_at=cart.created_at,
        updated_at=cart.updated_at,
    )


def empty_cart(session_id: str, now: Optional[datetime] = None) -> Cart:
    now = now or utcnow()
    return Cart(session_id=session_id, items=[], total=Decimal("0"), created_at=now, updated_at=now)


def _replace_items(cart: Cart, items: list[CartItem]) -> Cart:
    return cart.model_copy(update={"items": items, "total": calculate_total(items)})


def _index_of(cart: Cart, product_id: int) -> int:
    for i, item in enumerate(cart.items):
        if item.product_id == product_id:
            return i
    raise ItemNotFoundError(f"Item {product_id} not found in cart")


def add_item(
    cart: Cart,
    product_id: int,
    quantity: int,
    unit_price: Price,
    name: str,
    now: Optional[datetime] = None,
) -> Cart:
    """
    Add quantity of a product to the cart.

    An existing line only has its quantity increased; its price and name
    stay as first recorded. quantity must already be known to be > 0.
    """
    items = [item.model_copy() for item in cart.items]
    existing = next((item for item in items if item.product_id == product_id), None)

    if existing:
        existing.quantity += quantity
    else:
        items.append(
            CartItem(
                product_id=product_id,
                quantity=quantity,
                unit_price=to_decimal(unit_price),
                name=name,
                added_at=now or utcnow(),
            )
        )

    return _replace_items(cart, items)


def set_quantity(cart: Cart, product_id: int, quantity: int) -> Cart:
    """
    Overwrite the quantity of an existing line; 0 removes it.

    Raises:
        ItemNotFoundError: no line for product_id
    """
    index = _index_of(cart, product_id)
    if quantity == 0:
        return remove_item(cart, product_id)

    items = [item.model_copy() for item in cart.items]
    items[index].quantity = quantity
    return _replace_items(cart, items)


def remove_item(cart: Cart, product_id: int) -> Cart:
    """
    Remove the line for product_id.

    Raises:
        ItemNotFoundError: no line for product_id
    """
    index = _index_of(cart, product_id)
    items = cart.items[:index] + cart.items[index + 1:]
    return _replace_items(cart, items)


def clear(cart: Cart) -> Cart:
    """Empty the cart"""
    return _replace_items(cart, [])
