# Catalog Service Models

from .product import Product

__all__ = ["Product"]
