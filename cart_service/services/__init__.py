# Cart services

from . import cart_ops

__all__ = ["cart_ops"]
