"""Helpers for validating and minting identity provider bearer tokens."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt

from storefront.core.config import settings


class InvalidAccessTokenError(Exception):
    """Raised when a bearer token cannot be decoded or carries no subject."""


def decode_access_token(token: str) -> str:
    """Validate a bearer token and return its subject (the user id).

    Tokens are signed by the external identity provider with the shared
    secret from settings. The audience is only verified when one is
    configured.
    """

    options = {"verify_aud": settings.auth_jwt_audience is not None}
    try:
        payload = jwt.decode(
            token,
            settings.auth_jwt_secret,
            algorithms=[settings.auth_jwt_algorithm],
            audience=settings.auth_jwt_audience,
            options=options,
        )
    except JWTError as exc:
        raise InvalidAccessTokenError("Invalid or expired token.") from exc

    subject = payload.get("sub")
    if not subject:
        raise InvalidAccessTokenError("Token has no subject.")
    return str(subject)


def create_access_token(*, subject: str, expires_delta: timedelta | None = None, extra_claims: dict[str, Any] | None = None) -> str:
    """Create a signed JWT access token.

    Used by operator tooling and tests; production tokens come from the
    identity provider.
    """

    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=30))
    payload: dict[str, Any] = {"sub": str(subject), "exp": expire}
    if settings.auth_jwt_audience is not None:
        payload["aud"] = settings.auth_jwt_audience
    if extra_claims:
        payload.update(extra_claims)
    return jwt.encode(payload, settings.auth_jwt_secret, algorithm=settings.auth_jwt_algorithm)


__all__ = [
    "InvalidAccessTokenError",
    "create_access_token",
    "decode_access_token",
]
