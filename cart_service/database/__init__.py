# Database modules

from .carts import CART_TTL, SessionCartStore
from .kv import InMemoryKeyValueClient, KeyValueClient, RedisKeyValueClient

__all__ = [
    "CART_TTL",
    "SessionCartStore",
    "InMemoryKeyValueClient",
    "KeyValueClient",
    "RedisKeyValueClient",
]
