"""
Base64url <-> big-integer conversion for JWK key components.
"""

import base64
import binascii
import re

from shared.errors import DecodeError

_BASE64URL = re.compile(r"[A-Za-z0-9_-]*")


def decode_base64_int(encoded: str) -> int:
    """Decode unpadded base64url text into a big-endian unsigned integer."""
    if not isinstance(encoded, str):
        raise DecodeError(
            "Key component must be a string",
            details={"type": type(encoded).__name__},
        )

    if not _BASE64URL.fullmatch(encoded):
        raise DecodeError("Illegal base64url data", details={"value": encoded[:64]})

    if len(encoded) % 4 == 1:
        raise DecodeError("Illegal base64url length", details={"length": len(encoded)})

    try:
        raw = base64.urlsafe_b64decode(encoded + "=" * (-len(encoded) % 4))
    except (binascii.Error, ValueError) as exc:
        raise DecodeError("Illegal base64url data", details={"error": str(exc)}) from exc

    return int.from_bytes(raw, "big")


def encode_base64_int(value: int) -> str:
    """Encode an unsigned integer as minimal big-endian, unpadded base64url."""
    if value < 0:
        raise DecodeError("Cannot encode a negative integer", details={"value": value})

    raw = value.to_bytes(max(1, (value.bit_length() + 7) // 8), "big")
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")
