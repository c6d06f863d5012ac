"""
Public key model shared by the JWKS client, the resolver and key caches.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .decoder import encode_base64_int

ALGORITHM = "RS256"


@dataclass(frozen=True)
class PublicKey:
    """RSA public key reconstructed from a JWK record."""

    modulus: int
    exponent: int

    def to_jwk(self, kid: Optional[str] = None) -> Dict[str, Any]:
        """Render the key as an RSA JWK usable for signature verification."""
        jwk: Dict[str, Any] = {
            "kty": "RSA",
            "alg": ALGORITHM,
            "use": "sig",
            "n": encode_base64_int(self.modulus),
            "e": encode_base64_int(self.exponent),
        }
        if kid is not None:
            jwk["kid"] = kid
        return jwk

    def to_dict(self) -> Dict[str, Any]:
        # Modulus as hex keeps the JSON free of 600-digit numbers.
        return {"n": format(self.modulus, "x"), "e": self.exponent}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PublicKey":
        return cls(modulus=int(data["n"], 16), exponent=int(data["e"]))
