"""
JWKS package.

Contains logic for retrieving JSON Web Key Sets, decoding their RSA key
components and resolving key identifiers through a key cache. This is
what the bearer-token middleware calls to obtain verification keys.

Key points:
- One GET per cache miss; no retries inside this package.
- First record whose ``kid`` matches wins; duplicates are not inspected.
- Cached keys are trusted until an external policy evicts them.
"""

from .client import JWKSClient
from .decoder import decode_base64_int, encode_base64_int
from .models import ALGORITHM, PublicKey
from .resolver import KeyResolver

__all__ = [
    "ALGORITHM",
    "JWKSClient",
    "KeyResolver",
    "PublicKey",
    "decode_base64_int",
    "encode_base64_int",
]
