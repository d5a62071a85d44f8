"""
Session cart storage.

One JSON record per session at key ``cart:<session_id>``, written with a
sliding TTL that restarts on every save. Composite operations are
get -> mutate -> save with no isolation between the two round trips, so
concurrent mutations of the same session can lose an update.
"""

import asyncio
import logging
from datetime import datetime, timedelta
from typing import Awaitable, Callable, Optional, TypeVar

from pydantic import ValidationError

from shared.errors import CorruptRecordError, OperationTimeoutError

from ..models.cart import Cart
from ..services import cart_ops
from ..services.cart_ops import Price
from .kv import KeyValueClient

CART_TTL = timedelta(hours=24)

T = TypeVar("T")


class SessionCartStore:
    """Read-modify-write cart storage over a key-value backend"""

    def __init__(
        self,
        kv: KeyValueClient,
        logger: Optional[logging.Logger] = None,
        ttl: timedelta = CART_TTL,
        timeout: Optional[float] = None,
        clock: Callable[[], datetime] = cart_ops.utcnow,
    ):
        """
        Args:
            kv: Backend holding the cart records
            logger: Logger for store events
            ttl: Lifetime of a record after its last save
            timeout: Default deadline in seconds for each operation
            clock: Source of timestamps for created_at/updated_at/added_at
        """
        self.kv = kv
        self.logger = logger or logging.getLogger(__name__)
        self.ttl = ttl
        self.timeout = timeout
        self._clock = clock

    @staticmethod
    def cart_key(session_id: str) -> str:
        return f"cart:{session_id}"

    async def _bounded(
        self,
        operation: Awaitable[T],
        action: str,
        session_id: str,
        timeout: Optional[float],
    ) -> T:
        """Run operation under the caller's deadline, or the store default"""
        deadline = self.timeout if timeout is None else timeout
        try:
            return await asyncio.wait_for(operation, deadline)
        except asyncio.TimeoutError as e:
            self.logger.error(f"Cart {action} timed out after {deadline}s: session={session_id}")
            raise OperationTimeoutError(f"Cart {action} timed out") from e

    # ==================== Record operations ====================

    async def _get(self, session_id: str) -> Cart:
        key = self.cart_key(session_id)
        data = await self.kv.get(key)
        if data is None:
            self.logger.debug(f"No cart for session {session_id}, returning empty cart")
            return cart_ops.empty_cart(session_id, now=self._clock())

        try:
            if isinstance(data, bytes):
                data = data.decode("utf-8")
            cart = Cart.model_validate_json(data)
        except (UnicodeDecodeError, ValidationError) as e:
            self.logger.error(f"Error decoding cart record {key}: {e}")
            raise CorruptRecordError(f"Cart record {key} could not be decoded") from e

        # Stored total is never trusted over the lines
        return cart_ops.with_total(cart)

    async def _save(self, cart: Cart) -> Cart:
        now = self._clock()
        saved = cart_ops.with_total(cart).model_copy(
            update={
                "updated_at": now,
                "created_at": cart.created_at or now,
            }
        )

        await self.kv.set(self.cart_key(saved.session_id), saved.model_dump_json(), self.ttl)

        self.logger.info(
            f"Saved cart: session={saved.session_id}, lines={cart_ops.item_count(saved)}, "
            f"units={cart_ops.quantity_count(saved)}, total={saved.total}"
        )
        return saved

    async def _delete(self, session_id: str) -> None:
        await self.kv.delete(self.cart_key(session_id))
        self.logger.info(f"Deleted cart: session={session_id}")

    async def get(self, session_id: str, timeout: Optional[float] = None) -> Cart:
        """
        Get the cart for a session.

        A session with no record gets a fresh, unsaved empty cart.

        Raises:
            CorruptRecordError: record exists but is not a valid cart
            StoreUnavailableError: backend failure
        """
        return await self._bounded(self._get(session_id), "get", session_id, timeout)

    async def save(self, cart: Cart, timeout: Optional[float] = None) -> Cart:
        """
        Write the cart with a full TTL and return the saved copy.

        The argument is never modified, so a failed write leaves the caller
        holding the pre-save state.
        """
        return await self._bounded(self._save(cart), "save", cart.session_id, timeout)

    async def delete(self, session_id: str, timeout: Optional[float] = None) -> None:
        """Delete the cart record. Deleting an absent record is fine."""
        await self._bounded(self._delete(session_id), "delete", session_id, timeout)

    # ==================== Composite operations ====================

    async def _mutate(self, session_id: str, mutation: Callable[[Cart], Cart]) -> Cart:
        cart = await self._get(session_id)
        return await self._save(mutation(cart))

    async def add_item(
        self,
        session_id: str,
        product_id: int,
        quantity: int,
        unit_price: Price,
        name: str,
        timeout: Optional[float] = None,
    ) -> Cart:
        """Add an item, merging with an existing line for the same product"""
        now = self._clock()
        return await self._bounded(
            self._mutate(
                session_id,
                lambda cart: cart_ops.add_item(cart, product_id, quantity, unit_price, name, now=now),
            ),
            "add_item",
            session_id,
            timeout,
        )

    async def update_quantity(
        self,
        session_id: str,
        product_id: int,
        quantity: int,
        timeout: Optional[float] = None,
    ) -> Cart:
        """
        Set the quantity of an item; 0 removes it.

        Raises:
            ItemNotFoundError: product is not in the cart
        """
        return await self._bounded(
            self._mutate(session_id, lambda cart: cart_ops.set_quantity(cart, product_id, quantity)),
            "update_quantity",
            session_id,
            timeout,
        )

    async def remove_item(
        self,
        session_id: str,
        product_id: int,
        timeout: Optional[float] = None,
    ) -> Cart:
        """
        Remove an item from the cart.

        Raises:
            ItemNotFoundError: product is not in the cart
        """
        return await self._bounded(
            self._mutate(session_id, lambda cart: cart_ops.remove_item(cart, product_id)),
            "remove_item",
            session_id,
            timeout,
        )

    async def clear(self, session_id: str, timeout: Optional[float] = None) -> Cart:
        """Delete the record and return the empty cart that replaces it"""
        await self.delete(session_id, timeout=timeout)
        return cart_ops.empty_cart(session_id, now=self._clock())
