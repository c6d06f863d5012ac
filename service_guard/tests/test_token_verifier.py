"""
Unit tests for bearer extraction and TokenVerifier.
"""

import pytest
from unittest.mock import AsyncMock

from service_guard.app.jwks.models import PublicKey
from service_guard.app.middleware.verifier import TokenVerifier, extract_bearer_token
from shared.errors import KeyNotFoundError, TokenFormatError, TransportError, VerificationError
from shared.test_helpers import create_key_pair, create_signed_token

AUDIENCE = "jwks-guard"


class TestExtractBearerToken:
    """Test cases for extract_bearer_token."""

    def test_valid_header(self):
        assert extract_bearer_token("Bearer abc.def.ghi") == "abc.def.ghi"

    @pytest.mark.parametrize("header", [None, "", "abc.def.ghi", "bearer abc", "Basic dXNlcjpwYXNz", "Bearer"])
    def test_invalid_header(self, header):
        with pytest.raises(TokenFormatError):
            extract_bearer_token(header)

    def test_empty_token_passes_through(self):
        """Only the prefix is checked here; verification rejects the empty token."""
        assert extract_bearer_token("Bearer ") == ""


class TestTokenVerifier:
    """Test cases for TokenVerifier."""

    @pytest.fixture
    def key_pair(self):
        return create_key_pair("k1")

    @pytest.fixture
    def public_key(self, key_pair):
        return PublicKey(modulus=key_pair.modulus, exponent=key_pair.exponent)

    @pytest.fixture
    def key_lookup(self, public_key):
        return AsyncMock(return_value=public_key)

    @pytest.fixture
    def verifier(self, key_lookup):
        return TokenVerifier(key_lookup, AUDIENCE)

    @pytest.mark.asyncio
    async def test_verify_success(self, verifier, key_lookup, key_pair):
        """Valid signature and audience yield the claims."""
        token = create_signed_token(key_pair, sub="user1", aud=AUDIENCE)

        claims = await verifier.verify(token)

        assert claims["sub"] == "user1"
        assert claims["aud"] == AUDIENCE
        key_lookup.assert_awaited_once_with("k1")

    @pytest.mark.asyncio
    async def test_audience_mismatch(self, verifier, key_pair):
        token = create_signed_token(key_pair, aud="someone-else")

        with pytest.raises(VerificationError) as exc_info:
            await verifier.verify(token)

        assert exc_info.value.details["aud"] == "someone-else"

    @pytest.mark.asyncio
    async def test_audience_must_be_a_string(self, verifier, key_pair):
        """A list audience is not accepted even when it contains ours."""
        token = create_signed_token(key_pair, aud=[AUDIENCE])

        with pytest.raises(VerificationError):
            await verifier.verify(token)

    @pytest.mark.asyncio
    async def test_missing_audience(self, verifier, key_pair):
        token = create_signed_token(key_pair, aud=None)

        with pytest.raises(VerificationError):
            await verifier.verify(token)

    @pytest.mark.asyncio
    async def test_wrong_signing_key(self, verifier):
        """A token signed by another key fails signature verification."""
        impostor = create_key_pair("impostor")
        token = create_signed_token(impostor, kid="k1")

        with pytest.raises(VerificationError):
            await verifier.verify(token)

    @pytest.mark.asyncio
    async def test_expired_token(self, verifier, key_pair):
        token = create_signed_token(key_pair, expires_in=-60)

        with pytest.raises(VerificationError):
            await verifier.verify(token)

    @pytest.mark.asyncio
    async def test_missing_subject(self, verifier, key_pair):
        token = create_signed_token(key_pair, sub="")

        with pytest.raises(VerificationError):
            await verifier.verify(token)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("token", ["", "not-a-token", "a.b.c"])
    async def test_malformed_token(self, verifier, key_lookup, token):
        """Garbage never reaches key resolution."""
        with pytest.raises(VerificationError):
            await verifier.verify(token)

        key_lookup.assert_not_called()

    @pytest.mark.asyncio
    async def test_resolver_errors_become_verification_errors(self, key_pair):
        """Resolver failures are wrapped, keeping the original code."""
        verifier = TokenVerifier(AsyncMock(side_effect=KeyNotFoundError("k1")), AUDIENCE)
        token = create_signed_token(key_pair)

        with pytest.raises(VerificationError) as exc_info:
            await verifier.verify(token)

        assert exc_info.value.details["cause"] == "KEY_NOT_FOUND"
        assert isinstance(exc_info.value.__cause__, KeyNotFoundError)

    @pytest.mark.asyncio
    async def test_transport_errors_become_verification_errors(self, key_pair):
        verifier = TokenVerifier(AsyncMock(side_effect=TransportError("down")), AUDIENCE)

        with pytest.raises(VerificationError) as exc_info:
            await verifier.verify(create_signed_token(key_pair))

        assert exc_info.value.details["cause"] == "TRANSPORT_ERROR"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("public_key", [
        PublicKey(modulus=2048, exponent=65537),
        PublicKey(modulus=(1 << 2047) + 1, exponent=2),
        PublicKey(modulus=1, exponent=3),
    ])
    async def test_unusable_rsa_key_becomes_verification_error(self, key_pair, public_key):
        """Keys that decode but cannot form an RSA public key are rejected, not raised raw."""
        verifier = TokenVerifier(AsyncMock(return_value=public_key), AUDIENCE)

        with pytest.raises(VerificationError) as exc_info:
            await verifier.verify(create_signed_token(key_pair))

        assert exc_info.value.details["kid"] == "k1"
