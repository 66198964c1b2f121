"""Service layer helpers for domain operations."""

from .admin_codes import (
    AdminActionError,
    InvalidVerificationCodeError,
    VerificationCodeExistsError,
    VerificationCodeNotFoundError,
    VerificationCodeResetError,
)
from .admin_orders import OrderNotFoundError
from .checkout import CheckoutError, CheckoutService, DuplicateCheckoutError
from .rate_limiter import RateLimiter
from .tracking import (
    GuestOrderView,
    IssuedOrder,
    LookupResult,
    LookupStatus,
    OrderDraft,
    OrderLine,
    TrackingService,
)
from .verification import (
    RedemptionOutcome,
    RedemptionResult,
    VerificationCodeStateError,
    VerificationError,
    VerificationService,
    normalize_code,
)

__all__ = [
    "AdminActionError",
    "CheckoutError",
    "CheckoutService",
    "DuplicateCheckoutError",
    "GuestOrderView",
    "InvalidVerificationCodeError",
    "IssuedOrder",
    "LookupResult",
    "LookupStatus",
    "OrderDraft",
    "OrderLine",
    "OrderNotFoundError",
    "RateLimiter",
    "RedemptionOutcome",
    "RedemptionResult",
    "TrackingService",
    "VerificationCodeExistsError",
    "VerificationCodeNotFoundError",
    "VerificationCodeResetError",
    "VerificationCodeStateError",
    "VerificationError",
    "VerificationService",
    "normalize_code",
]
