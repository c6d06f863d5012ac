"""
Shared error handling for JWKS Guard.
"""

from typing import Dict, Any, Optional


class GuardException(Exception):
    """Base exception for JWKS Guard components."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_log_fields(self) -> Dict[str, Any]:
        """Render the error as structured logging fields."""
        return {"error_code": self.code, "error": self.message, "details": self.details}


class ConfigurationError(GuardException):
    """Missing or invalid configuration detected at startup."""

    def __init__(self, message: str = "Invalid configuration", details: Optional[Dict[str, Any]] = None):
        super().__init__("CONFIGURATION_ERROR", message, details)


class TransportError(GuardException):
    """Network or IO failure while reaching a remote endpoint."""

    def __init__(self, message: str = "Transport error", details: Optional[Dict[str, Any]] = None):
        super().__init__("TRANSPORT_ERROR", message, details)


class ParseError(GuardException):
    """Response body is not valid JSON or lacks the expected shape."""

    def __init__(self, message: str = "Malformed response", details: Optional[Dict[str, Any]] = None):
        super().__init__("PARSE_ERROR", message, details)


class KeyNotFoundError(GuardException):
    """Requested key identifier is absent from the key-set document."""

    def __init__(self, kid: str, details: Optional[Dict[str, Any]] = None):
        self.kid = kid
        super().__init__("KEY_NOT_FOUND", f"key not found for kid {kid}", {"kid": kid, **(details or {})})


class DecodeError(GuardException):
    """Malformed base64url text or unusable key component."""

    def __init__(self, message: str = "Decode failed", details: Optional[Dict[str, Any]] = None):
        super().__init__("DECODE_ERROR", message, details)


class TokenFormatError(GuardException):
    """Missing or malformed Authorization header."""

    def __init__(self, message: str = "Authorization header format invalid", details: Optional[Dict[str, Any]] = None):
        super().__init__("TOKEN_FORMAT_ERROR", message, details)


class VerificationError(GuardException):
    """Token signature, claims or key resolution failed."""

    def __init__(self, message: str = "Invalid token", details: Optional[Dict[str, Any]] = None):
        super().__init__("VERIFICATION_ERROR", message, details)


class TokenRequestError(GuardException):
    """Token endpoint rejected a grant request."""

    def __init__(self, message: str = "Token request failed", details: Optional[Dict[str, Any]] = None):
        super().__init__("TOKEN_REQUEST_ERROR", message, details)
