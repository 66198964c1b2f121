"""Authentication dependencies for API routes.

Identity lives with the external provider; these helpers only verify its
bearer tokens and read the subject. Roles are stored locally.
"""

from __future__ import annotations

from typing import Annotated, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.core.security import InvalidAccessTokenError, decode_access_token
from storefront.db.session import get_db
from storefront.models.user_role import ADMIN_ROLE, UserRole


bearer_scheme = HTTPBearer(auto_error=False)


def _credentials_exception(detail: str) -> HTTPException:
    """Return a standardised HTTP 401 exception for auth failures."""

    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def require_user_id(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)],
) -> str:
    """Validate a bearer token and return the caller's user id."""

    if credentials is None:
        raise _credentials_exception("Authentication required")
    try:
        return decode_access_token(credentials.credentials)
    except InvalidAccessTokenError as exc:
        raise _credentials_exception("Invalid or expired token") from exc


def get_optional_user_id(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)],
) -> Optional[str]:
    """
    Return the caller's user id when a valid bearer token is present.
    Missing or invalid tokens fall back to an anonymous (guest) caller.
    """
    if credentials is None:
        return None
    try:
        return decode_access_token(credentials.credentials)
    except InvalidAccessTokenError:
        return None


def require_admin_user_id(
    user_id: Annotated[str, Depends(require_user_id)],
    db: Annotated[Session, Depends(get_db)],
) -> str:
    """Check the caller holds the admin role, otherwise raise 403."""

    statement = select(UserRole.id).where(
        UserRole.user_id == user_id,
        UserRole.role == ADMIN_ROLE,
    )
    if db.execute(statement).first() is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return user_id


__all__ = ["bearer_scheme", "get_optional_user_id", "require_admin_user_id", "require_user_id"]
