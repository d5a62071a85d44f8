"""Product lookup for the catalog service"""

import logging
from decimal import Decimal
from typing import Iterable, Optional, Protocol

from ..models.product import Product


class ProductLookupError(Exception):
    """Product backend failure other than a missing product"""
    pass


class ProductRepository(Protocol):
    """Read side of the product store used by validation"""

    async def get_product(self, product_id: str) -> Optional[Product]:
        ...


# Seed catalog
PRODUCTS: list[Product] = [
    Product(
        id=1,
        name="Sony WH-1000XM5 Wireless Headphones",
        description="Noise cancelling headphones with 30-hour battery life.",
        price=Decimal("349.99"),
        stock_quantity=50,
    ),
    Product(
        id=2,
        name="Apple AirPods Pro (2nd Gen)",
        description="Active Noise Cancellation and Adaptive Transparency.",
        price=Decimal("249.00"),
        stock_quantity=100,
    ),
    Product(
        id=3,
        name="Samsung Galaxy Tab S9",
        description="11-inch Dynamic AMOLED 2X display. S Pen included.",
        price=Decimal("799.99"),
        stock_quantity=30,
    ),
    Product(
        id=4,
        name="Patagonia Better Sweater Jacket",
        description="Fleece jacket made with recycled polyester.",
        price=Decimal("139.00"),
        stock_quantity=75,
    ),
    Product(
        id=5,
        name="Nike Air Max 90",
        description="Max Air cushioning. Leather and textile upper.",
        price=Decimal("130.00"),
        stock_quantity=60,
    ),
    Product(
        id=6,
        name="Dyson V15 Detect Vacuum",
        description="Laser reveals microscopic dust.",
        price=Decimal("749.99"),
        stock_quantity=0,
    ),
    Product(
        id=7,
        name="Atomic Habits by James Clear",
        description="Hardcover.",
        price=Decimal("24.99"),
        stock_quantity=200,
    ),
]


class ProductDatabase:
    """In-memory product catalog keyed by product id"""

    def __init__(
        self,
        products: Optional[Iterable[Product]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.logger = logger or logging.getLogger(__name__)
        self.products: dict[str, Product] = {}
        for product in PRODUCTS if products is None else products:
            self.add_product(product)

    async def get_product(self, product_id: str) -> Optional[Product]:
        """
        Get a product by ID.

        Ids are compared in canonical integer form, so "007" finds product 7.
        Ids that are not ASCII digits never match.
        """
        key = product_id.strip()
        if not (key.isascii() and key.isdigit()):
            self.logger.debug(f"Non-numeric product id {product_id!r}")
            return None
        return self.products.get(str(int(key)))

    def add_product(self, product: Product) -> None:
        """Insert or replace a product"""
        self.products[str(product.id)] = product

    def get_all_products(self) -> list[Product]:
        """Get all products"""
        return list(self.products.values())
