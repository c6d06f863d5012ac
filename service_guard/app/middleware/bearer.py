"""
Bearer authentication middleware.
"""

from typing import Optional

import httpx
from starlette.applications import Starlette
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response
from starlette.types import ASGIApp

from shared.config import GuardConfig
from shared.errors import GuardException, TokenFormatError
from shared.logging import clear_context, get_logger, set_request_id, set_user_context

from ..cache.base import KeyCache
from ..cache.factory import create_key_cache
from ..jwks.client import JWKSClient
from ..jwks.resolver import KeyResolver
from .verifier import TokenVerifier, extract_bearer_token

# Well-known request.state attribute holding the verified subject.
SUBJECT_STATE_KEY = "user_id"

FORMAT_INVALID_BODY = "Authorization header format invalid"
INVALID_TOKEN_BODY = "Invalid token"

REQUEST_ID_HEADER = "X-Request-ID"


class BearerAuthMiddleware(BaseHTTPMiddleware):
    """Reject requests without a valid bearer token; forward the rest.

    Every failure becomes a plaintext 401. The stage that failed is only
    logged.
    """

    def __init__(self, app: ASGIApp, verifier: TokenVerifier):
        super().__init__(app)
        self.verifier = verifier
        self.logger = get_logger("guard.middleware")

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = set_request_id(request.headers.get(REQUEST_ID_HEADER))
        try:
            response = await self._authenticate(request, call_next)
        finally:
            clear_context()
        response.headers[REQUEST_ID_HEADER] = request_id
        return response

    async def _authenticate(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        try:
            token = extract_bearer_token(request.headers.get("Authorization"))
        except TokenFormatError as e:
            self.logger.warning("Rejected request", path=request.url.path, **e.to_log_fields())
            return PlainTextResponse(FORMAT_INVALID_BODY, status_code=401)

        try:
            claims = await self.verifier.verify(token)
        except GuardException as e:
            self.logger.warning("Rejected request", path=request.url.path, **e.to_log_fields())
            return PlainTextResponse(INVALID_TOKEN_BODY, status_code=401)

        subject = claims["sub"]
        setattr(request.state, SUBJECT_STATE_KEY, subject)
        request.state.claims = claims
        set_user_context(subject)

        return await call_next(request)


def install_auth_middleware(
    app: Starlette,
    config: GuardConfig,
    cache: Optional[KeyCache] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> KeyResolver:
    """Wire the JWKS client, resolver and verifier onto ``app``.

    Without an explicit ``cache`` one is chosen from ``config`` (Redis when
    ``redis_url`` is set). Returns the resolver so callers can warm or
    inspect it.
    """
    if cache is None:
        cache = create_key_cache(config)
    client = JWKSClient(config.certs_url, http_client=http_client, http_timeout=config.http_timeout)
    resolver = KeyResolver(cache, client)
    verifier = TokenVerifier(resolver.resolve, config.audience)
    app.add_middleware(BearerAuthMiddleware, verifier=verifier)
    return resolver
