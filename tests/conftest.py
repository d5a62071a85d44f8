from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from cart_service.database.carts import SessionCartStore
from cart_service.database.kv import InMemoryKeyValueClient
from catalog_service.database.products import ProductDatabase
from catalog_service.models.product import Product


class FakeClock:
    """Controllable wall clock and monotonic clock"""

    def __init__(self, start=datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)):
        self.current = start
        self.elapsed = 0.0

    def now(self) -> datetime:
        return self.current

    def monotonic(self) -> float:
        return self.elapsed

    def advance(self, delta: timedelta) -> None:
        self.current += delta
        self.elapsed += delta.total_seconds()


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def kv(clock):
    return InMemoryKeyValueClient(clock=clock.monotonic)


@pytest.fixture()
def store(kv, clock):
    return SessionCartStore(kv, clock=clock.now)


@pytest.fixture()
def products():
    return ProductDatabase(
        products=[
            Product(id=1, name="Widget", price=Decimal("10.00"), stock_quantity=3),
            Product(id=2, name="Gadget", price=Decimal("2.50"), stock_quantity=100),
            Product(id=3, name="Sold Out", price=Decimal("99.00"), stock_quantity=0),
        ]
    )
