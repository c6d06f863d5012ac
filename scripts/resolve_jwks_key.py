#!/usr/bin/env python3
"""
Resolve key identifiers against a JWKS endpoint and print the decoded keys.

Useful when a token is rejected and you need to know whether the issuer
actually publishes its kid, and what the reconstructed key looks like.
"""

import argparse
import asyncio
import json
import os
import sys
from typing import List

from service_guard.app.cache import InMemoryKeyCache
from service_guard.app.jwks import JWKSClient, KeyResolver
from shared.errors import GuardException
from shared.logging import configure_logging


async def resolve(certs_url: str, kids: List[str], http_timeout: float) -> List[dict]:
    """Resolve each kid in order and return a summary per key."""
    resolver = KeyResolver(InMemoryKeyCache(), JWKSClient(certs_url, http_timeout=http_timeout))
    results = []
    for kid in kids:
        public_key = await resolver.resolve(kid)
        results.append({
            "kid": kid,
            "modulus_bits": public_key.modulus.bit_length(),
            "exponent": public_key.exponent,
            "jwk": public_key.to_jwk(kid),
        })
    return results


def _parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Resolve key identifiers against a JWKS endpoint.")
    parser.add_argument("kids", nargs="+", help="Key identifiers to resolve")
    parser.add_argument("--certs-url", default=os.getenv("GUARD_CERTS_URL"), help="JWKS document URL")
    parser.add_argument("--timeout", type=float, default=float(os.getenv("GUARD_HTTP_TIMEOUT", 5.0)), help="HTTP timeout in seconds")
    parser.add_argument("--log-level", default=os.getenv("GUARD_LOG_LEVEL", "warning"), help="Log level")
    args = parser.parse_args(argv)
    if not args.certs_url:
        parser.error("--certs-url or GUARD_CERTS_URL is required")
    return args


def main(argv=None) -> int:
    args = _parse_args(argv)
    configure_logging("guard", args.log_level)
    try:
        results = asyncio.run(resolve(args.certs_url, args.kids, args.timeout))
    except KeyboardInterrupt:
        return 130
    except GuardException as exc:
        print(f"[resolve-key] failed: {exc.code}: {exc.message}", file=sys.stderr)
        return 1

    print(json.dumps(results, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
