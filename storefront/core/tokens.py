"""Tracking token generation and one-way hashing helpers."""

from __future__ import annotations

import hashlib
import secrets

from storefront.core.config import settings

TOKEN_BYTES = 32
DISPLAY_CHARS = 12
FINGERPRINT_CHARS = 12


def hash_token(raw_token: str) -> str:
    """Return the SHA-256 hex digest used to store and look up a token.

    Lone surrogates (valid in JSON escapes, not in UTF-8) are passed through
    so any string a client can send still hashes.
    """

    return hashlib.sha256(raw_token.encode("utf-8", "surrogatepass")).hexdigest()


def fingerprint(token_hash: str) -> str:
    """Shorten a token hash to a prefix that is only fit for audit correlation."""

    return token_hash[:FINGERPRINT_CHARS]


def generate_tracking_token() -> tuple[str, str]:
    """Create a new tracking token and its display tracking number.

    The 64 character hex token is the bearer secret presented back to the
    guest lookup. The display number (``DRX-TRK-`` plus 12 upper-cased hex
    characters) is printed on receipts only and is never accepted as a
    lookup key.
    """

    raw_token = secrets.token_bytes(TOKEN_BYTES).hex()
    tracking_number = f"{settings.tracking_number_prefix}{raw_token[:DISPLAY_CHARS].upper()}"
    return raw_token, tracking_number


def hash_idempotency_key(key: str) -> str:
    return hash_token(key.strip())


__all__ = [
    "fingerprint",
    "generate_tracking_token",
    "hash_idempotency_key",
    "hash_token",
]
