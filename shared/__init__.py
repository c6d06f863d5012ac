"""
Shared utilities for JWKS Guard.

This package aggregates common building blocks consumed by the guard:

- config: Settings via pydantic-settings, validated once at startup
- logging: Structured logging with request/user correlation
- errors: Canonical error types carrying a code and structured details
- test_helpers: RSA key pairs, key-set documents and signed tokens for tests
"""
