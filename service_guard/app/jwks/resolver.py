"""
Key resolution: cache first, JWKS endpoint on miss.
"""

from shared.logging import get_logger

from ..cache.base import KeyCache
from .client import JWKSClient
from .models import PublicKey


class KeyResolver:
    """Resolve key identifiers to public keys through a key cache.

    Cached entries are trusted as-is; there is no expiry or revalidation.
    A failed fetch is never cached, so the next call fetches again.
    Concurrent misses on the same identifier fetch independently and the
    last write wins.
    """

    def __init__(self, cache: KeyCache, client: JWKSClient):
        self.cache = cache
        self.client = client
        self.logger = get_logger("guard.resolver")

    async def resolve(self, kid: str) -> PublicKey:
        """Return the public key for ``kid``."""
        cached = await self.cache.get(kid)
        if isinstance(cached, PublicKey):
            self.logger.debug("Key cache hit", kid=kid)
            return cached

        if cached is not None:
            self.logger.warning("Ignoring foreign cache entry", kid=kid, type=type(cached).__name__)

        self.logger.debug("Key cache miss", kid=kid)
        public_key = await self.client.fetch_key(kid)

        await self.cache.set(kid, public_key)
        return public_key
