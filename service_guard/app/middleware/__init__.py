"""
Bearer-token authentication for Starlette/FastAPI applications.
"""

from .bearer import (
    FORMAT_INVALID_BODY,
    INVALID_TOKEN_BODY,
    REQUEST_ID_HEADER,
    SUBJECT_STATE_KEY,
    BearerAuthMiddleware,
    install_auth_middleware,
)
from .verifier import TokenVerifier, extract_bearer_token

__all__ = [
    "BearerAuthMiddleware",
    "FORMAT_INVALID_BODY",
    "INVALID_TOKEN_BODY",
    "REQUEST_ID_HEADER",
    "SUBJECT_STATE_KEY",
    "TokenVerifier",
    "extract_bearer_token",
    "install_auth_middleware",
]
