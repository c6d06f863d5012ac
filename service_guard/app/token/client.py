"""
Token endpoint client for password and refresh-token grants.
"""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

import httpx

from shared.config import GuardConfig
from shared.errors import ConfigurationError, ParseError, TokenRequestError, TransportError
from shared.logging import get_logger


@dataclass(frozen=True)
class TokenPair:
    """Tokens issued by the token endpoint."""

    access_token: str
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None
    token_type: str = "Bearer"


class TokenClient:
    """Client for an OAuth2 token endpoint (form-encoded POST)."""

    def __init__(
        self,
        token_url: str,
        client_id: str,
        client_secret: Optional[str] = None,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        http_timeout: float = 5.0,
    ):
        self.token_url = token_url
        self.client_id = client_id
        self.client_secret = client_secret
        self.http_timeout = http_timeout
        self.logger = get_logger("guard.token_client")
        self._client = http_client

    @classmethod
    def from_config(cls, config: GuardConfig, http_client: Optional[httpx.AsyncClient] = None) -> "TokenClient":
        """Build a client from ``GUARD_TOKEN_URL`` and the client credentials."""
        missing = [name for name in ("token_url", "client_id") if not getattr(config, name)]
        if missing:
            raise ConfigurationError(
                f"Token client not configured: {', '.join(missing)}",
                details={"fields": missing},
            )
        return cls(
            config.token_url,
            config.client_id,
            config.client_secret,
            http_client=http_client,
            http_timeout=config.http_timeout,
        )

    async def password_grant(self, username: str, password: str) -> TokenPair:
        """Exchange user credentials for a token pair."""
        return await self.fetch_token(
            self._form(grant_type="password", username=username, password=password)
        )

    async def refresh(self, refresh_token: str) -> TokenPair:
        """Exchange a refresh token for a new token pair."""
        return await self.fetch_token(
            self._form(grant_type="refresh_token", refresh_token=refresh_token)
        )

    async def fetch_token(self, form: Mapping[str, str]) -> TokenPair:
        """POST ``form`` to the token endpoint and parse the token pair."""
        try:
            if self._client is not None:
                response = await self._client.post(self.token_url, data=dict(form))
            else:
                async with httpx.AsyncClient(timeout=self.http_timeout) as client:
                    response = await client.post(self.token_url, data=dict(form))
        except httpx.HTTPError as e:
            self.logger.error("Token endpoint HTTP error", error=str(e))
            raise TransportError(
                "Token endpoint unreachable",
                details={"url": self.token_url, "http_error": str(e)}
            ) from e

        body = self._json_body(response)

        if response.status_code != 200:
            message = body.get("error") if isinstance(body, dict) else None
            if not isinstance(message, str) or not message:
                message = f"token endpoint returned {response.status_code}"
            self.logger.warning("Token request rejected", status_code=response.status_code, error=message)
            raise TokenRequestError(message, details={"status_code": response.status_code})

        if not isinstance(body, dict):
            raise ParseError("Token response is not valid JSON", details={"url": self.token_url})

        access_token = body.get("access_token")
        if not isinstance(access_token, str) or not access_token:
            raise ParseError("Token response missing access_token", details={"url": self.token_url})

        expires_in = body.get("expires_in")
        return TokenPair(
            access_token=access_token,
            refresh_token=body.get("refresh_token"),
            expires_in=int(expires_in) if expires_in is not None else None,
            token_type=body.get("token_type", "Bearer"),
        )

    def _form(self, **fields: str) -> Dict[str, str]:
        form = {"client_id": self.client_id, **fields}
        if self.client_secret:
            form["client_secret"] = self.client_secret
        return form

    @staticmethod
    def _json_body(response: httpx.Response) -> Optional[Any]:
        try:
            return response.json()
        except ValueError:
            return None
