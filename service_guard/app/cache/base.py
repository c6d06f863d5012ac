"""
Key cache capability consumed by the key resolver.
"""

from typing import Any, Optional, Protocol, runtime_checkable


@runtime_checkable
class KeyCache(Protocol):
    """Mapping from key identifier to a cached public key."""

    async def get(self, key: str) -> Optional[Any]:
        """Return the cached value, or ``None`` on a miss."""
        ...

    async def set(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``."""
        ...
