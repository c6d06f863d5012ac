"""
Key cache package.

The resolver only needs ``get``/``set`` keyed by key identifier. The
embedding application supplies the implementation and owns its eviction
policy; this package ships an in-process dict and a Redis-backed store.
Implementations must be safe for concurrent use.
"""

from .base import KeyCache
from .factory import create_key_cache
from .memory import InMemoryKeyCache
from .redis_cache import RedisKeyCache

__all__ = [
    "create_key_cache",
    "InMemoryKeyCache",
    "KeyCache",
    "RedisKeyCache",
]
