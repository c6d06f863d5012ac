"""
Token endpoint client.
"""

from .client import TokenClient, TokenPair

__all__ = ["TokenClient", "TokenPair"]
