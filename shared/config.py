"""
Shared configuration management for JWKS Guard.

Settings are read from the environment (prefix ``GUARD_``) or a ``.env``
file once, at startup, and validated before any middleware is built.
"""

from typing import Optional
from urllib.parse import urlparse

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from shared.errors import ConfigurationError


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_prefix="GUARD_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    env: str = Field(default="local")
    log_level: str = Field(default="info")

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        if value.lower() not in {"debug", "info", "warning", "error", "critical"}:
            raise ValueError(f"unknown log level '{value}'")
        return value.lower()


class GuardConfig(BaseConfig):
    """Settings for the bearer-token middleware and its collaborators."""

    # Security
    certs_url: str
    audience: str
    http_timeout: float = Field(default=5.0, gt=0)

    # Key cache
    redis_url: Optional[str] = None
    cache_key_prefix: str = Field(default="jwks:key:")

    # Token endpoint
    token_url: Optional[str] = None
    client_id: Optional[str] = None
    client_secret: Optional[str] = None

    @field_validator("certs_url", "token_url")
    @classmethod
    def _http_url(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        parsed = urlparse(value)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"'{value}' is not an http(s) URL")
        return value

    @field_validator("audience")
    @classmethod
    def _non_empty(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value


def get_config(**overrides) -> GuardConfig:
    """Load and validate configuration, failing fast on missing fields."""
    try:
        return GuardConfig(**overrides)
    except ValidationError as exc:
        fields = sorted({".".join(str(part) for part in err["loc"]) for err in exc.errors()})
        raise ConfigurationError(
            f"Invalid configuration: {', '.join(fields)}",
            details={"fields": fields, "errors": [err["msg"] for err in exc.errors()]},
        ) from exc
