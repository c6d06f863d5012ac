"""
JWKS client: fetches the key-set document and extracts one RSA public key.
"""

from typing import Any, Callable, Dict, Optional

import httpx

from shared.errors import DecodeError, KeyNotFoundError, ParseError, TransportError
from shared.logging import get_logger

from .decoder import decode_base64_int
from .models import PublicKey

# Exponent must fit a signed 64-bit machine integer.
MAX_EXPONENT_BITS = 63


class JWKSClient:
    """Client for fetching public keys from a remote JWKS endpoint.

    Every call to :meth:`fetch_key` performs exactly one GET against
    ``certs_url``; caching and retry are the caller's concern.
    """

    def __init__(
        self,
        certs_url: str,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        http_timeout: float = 5.0,
        decoder: Callable[[str], int] = decode_base64_int,
    ) -> None:
        self.certs_url = certs_url
        self.http_timeout = http_timeout
        self.decoder = decoder
        self.logger = get_logger("guard.jwks")
        self._client = http_client

    async def fetch_key(self, kid: str) -> PublicKey:
        """Fetch the key-set document and return the key named ``kid``."""
        document = await self._fetch_document()

        keys = document.get("keys")
        if not isinstance(keys, list):
            raise ParseError("JWKS response missing 'keys' array", details={"url": self.certs_url})

        record = self._find_record(keys, kid)
        if record is None:
            self.logger.warning("Key not found", kid=kid, keys_count=len(keys))
            raise KeyNotFoundError(kid)

        modulus = self._decode_component(record, "n", kid)
        exponent = self._decode_component(record, "e", kid)

        if modulus == 0:
            raise DecodeError("RSA modulus must be positive", details={"kid": kid, "field": "n"})
        if exponent.bit_length() > MAX_EXPONENT_BITS:
            raise DecodeError(
                "RSA exponent does not fit a machine integer",
                details={"kid": kid, "field": "e", "bits": exponent.bit_length()},
            )

        self.logger.info("Public key fetched", kid=kid, modulus_bits=modulus.bit_length())
        return PublicKey(modulus=modulus, exponent=exponent)

    async def _fetch_document(self) -> Dict[str, Any]:
        try:
            if self._client is not None:
                response = await self._client.get(self.certs_url)
            else:
                async with httpx.AsyncClient(timeout=self.http_timeout) as client:
                    response = await client.get(self.certs_url)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self.logger.error("JWKS endpoint returned error status", status_code=exc.response.status_code)
            raise TransportError(
                f"JWKS endpoint returned {exc.response.status_code}",
                details={"url": self.certs_url, "status_code": exc.response.status_code},
            ) from exc
        except httpx.HTTPError as exc:
            self.logger.error("Failed to fetch JWKS", error=str(exc))
            raise TransportError(
                "JWKS endpoint unreachable",
                details={"url": self.certs_url, "http_error": str(exc)},
            ) from exc

        try:
            document = response.json()
        except ValueError as exc:
            raise ParseError("JWKS response is not valid JSON", details={"url": self.certs_url}) from exc

        if not isinstance(document, dict):
            raise ParseError("JWKS response is not a JSON object", details={"url": self.certs_url})

        return document

    @staticmethod
    def _find_record(keys: list, kid: str) -> Optional[Dict[str, Any]]:
        # First match in server order wins; duplicates are not inspected.
        for record in keys:
            if isinstance(record, dict) and record.get("kid") == kid:
                return record
        return None

    def _decode_component(self, record: Dict[str, Any], field: str, kid: str) -> int:
        value = record.get(field)
        if not isinstance(value, str):
            raise DecodeError(f"Key component '{field}' missing", details={"kid": kid, "field": field})

        try:
            return self.decoder(value)
        except DecodeError as exc:
            exc.details.update({"kid": kid, "field": field})
            raise
