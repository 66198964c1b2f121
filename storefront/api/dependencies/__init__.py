"""API dependency exports."""

from storefront.db.session import get_db

from .auth import get_optional_user_id, require_admin_user_id, require_user_id
from .client import get_client_address
from .services import (
    get_checkout_service,
    get_rate_limiter,
    get_tracking_service,
    get_verification_service,
)

__all__ = [
    "get_checkout_service",
    "get_client_address",
    "get_db",
    "get_optional_user_id",
    "get_rate_limiter",
    "get_tracking_service",
    "get_verification_service",
    "require_admin_user_id",
    "require_user_id",
]
