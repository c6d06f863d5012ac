"""
Bearer token extraction and RS256 verification.
"""

from typing import Any, Awaitable, Callable, Dict, Optional

from jose import jwk, jwt
from jose.exceptions import JOSEError

from shared.errors import GuardException, TokenFormatError, VerificationError
from shared.logging import get_logger

from ..jwks.models import ALGORITHM, PublicKey

BEARER_PREFIX = "Bearer "

KeyLookup = Callable[[str], Awaitable[PublicKey]]


def extract_bearer_token(authorization: Optional[str]) -> str:
    """Return the token from an ``Authorization: Bearer <token>`` header value."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise TokenFormatError()
    return authorization[len(BEARER_PREFIX):]


class TokenVerifier:
    """Verify signed tokens against keys obtained from ``key_lookup``."""

    def __init__(self, key_lookup: KeyLookup, audience: str):
        self.key_lookup = key_lookup
        self.audience = audience
        self.logger = get_logger("guard.verifier")

    async def verify(self, token: str) -> Dict[str, Any]:
        """Verify ``token`` and return its claims."""
        try:
            header = jwt.get_unverified_header(token)
        except JOSEError as exc:
            raise VerificationError("Malformed token", details={"error": str(exc)}) from exc

        kid = header.get("kid")
        if not isinstance(kid, str):
            raise VerificationError("Token header missing key id (kid)")

        try:
            public_key = await self.key_lookup(kid)
        except GuardException as exc:
            raise VerificationError(
                "Signing key unavailable",
                details={"kid": kid, "cause": exc.code, **exc.details},
            ) from exc

        try:
            key = jwk.construct(public_key.to_jwk(kid), algorithm=ALGORITHM)
            claims = jwt.decode(
                token,
                key,
                algorithms=[ALGORITHM],
                options={"verify_aud": False},
            )
        except (JOSEError, ValueError) as exc:
            # unusable RSA parameters (e >= n, even e) surface as ValueError
            raise VerificationError("Token signature or claims invalid", details={"kid": kid, "error": str(exc)}) from exc

        aud = claims.get("aud")
        if not isinstance(aud, str) or aud != self.audience:
            raise VerificationError("Audience mismatch", details={"kid": kid, "aud": aud})

        subject = claims.get("sub")
        if not isinstance(subject, str) or not subject:
            raise VerificationError("Token missing subject claim", details={"kid": kid})

        self.logger.debug("Token verified", kid=kid, sub=subject)
        return claims
