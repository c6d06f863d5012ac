"""
Unit tests for the resolve_jwks_key script.
"""

import json

import pytest
from unittest.mock import AsyncMock, patch

import resolve_jwks_key
from service_guard.app.jwks.models import PublicKey
from shared.errors import KeyNotFoundError


class TestResolveCli:
    """Test cases for the key lookup CLI."""

    def test_prints_resolved_keys(self, capsys):
        fetch = AsyncMock(return_value=PublicKey(modulus=2048, exponent=65537))
        with patch("resolve_jwks_key.JWKSClient.fetch_key", fetch):
            code = resolve_jwks_key.main(["--certs-url", "http://issuer/certs", "k1", "k1"])

        assert code == 0
        results = json.loads(capsys.readouterr().out)
        assert [r["kid"] for r in results] == ["k1", "k1"]
        assert results[0]["modulus_bits"] == 12
        assert results[0]["jwk"]["e"] == "AQAB"
        # second lookup comes from the cache
        assert fetch.await_count == 1

    def test_failure_exit_code(self, capsys):
        with patch("resolve_jwks_key.JWKSClient.fetch_key", AsyncMock(side_effect=KeyNotFoundError("k9"))):
            code = resolve_jwks_key.main(["--certs-url", "http://issuer/certs", "k9"])

        assert code == 1
        assert "KEY_NOT_FOUND" in capsys.readouterr().err

    def test_requires_certs_url(self, monkeypatch):
        monkeypatch.delenv("GUARD_CERTS_URL", raising=False)

        with pytest.raises(SystemExit):
            resolve_jwks_key.main(["k1"])
