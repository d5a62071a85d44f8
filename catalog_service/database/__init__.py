# Database modules

from .products import ProductDatabase, ProductLookupError, ProductRepository

__all__ = [
    "ProductDatabase",
    "ProductLookupError",
    "ProductRepository",
]
