"""
JWKS Guard application package.

Exposes the pieces an embedding Starlette/FastAPI application wires
together: key caches, the JWKS client and resolver, the bearer-token
middleware and the token endpoint client.
"""

from .cache import InMemoryKeyCache, KeyCache, RedisKeyCache, create_key_cache
from .jwks import JWKSClient, KeyResolver, PublicKey
from .middleware import BearerAuthMiddleware, TokenVerifier, install_auth_middleware
from .token import TokenClient, TokenPair

__all__ = [
    "BearerAuthMiddleware",
    "InMemoryKeyCache",
    "JWKSClient",
    "KeyCache",
    "KeyResolver",
    "PublicKey",
    "RedisKeyCache",
    "TokenClient",
    "TokenPair",
    "TokenVerifier",
    "create_key_cache",
    "install_auth_middleware",
]
