"""Per-request construction of services over the request's session."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from storefront.db.session import get_db
from storefront.services.checkout import CheckoutService
from storefront.services.rate_limiter import RateLimiter
from storefront.services.tracking import TrackingService
from storefront.services.verification import VerificationService
from storefront.stores import AttemptStore, CodeStore, OrderStore


def get_rate_limiter(db: Annotated[Session, Depends(get_db)]) -> RateLimiter:
    return RateLimiter(AttemptStore(db))


def get_verification_service(db: Annotated[Session, Depends(get_db)]) -> VerificationService:
    return VerificationService(CodeStore(db))


def get_tracking_service(
    db: Annotated[Session, Depends(get_db)],
    limiter: Annotated[RateLimiter, Depends(get_rate_limiter)],
) -> TrackingService:
    return TrackingService(OrderStore(db), limiter)


def get_checkout_service(
    db: Annotated[Session, Depends(get_db)],
    tracking: Annotated[TrackingService, Depends(get_tracking_service)],
) -> CheckoutService:
    return CheckoutService(OrderStore(db), tracking)


__all__ = [
    "get_checkout_service",
    "get_rate_limiter",
    "get_tracking_service",
    "get_verification_service",
]
