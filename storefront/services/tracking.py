"""Tracking token issuance and anonymous guest order lookup."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from storefront.core.config import settings
from storefront.core.tokens import fingerprint, generate_tracking_token, hash_token
from storefront.models.order import Order, OrderItem, OrderStatus, ShippingMethod
from storefront.services.rate_limiter import RateLimiter
from storefront.stores.attempts import TRACK_ORDER_SCOPE
from storefront.stores.orders import OrderStore

logger = logging.getLogger(__name__)

MIN_TOKEN_LENGTH = 20
MAX_TOKEN_LENGTH = 120


class LookupStatus(str, enum.Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    RATE_LIMITED = "rate_limited"
    INVALID = "invalid"
    MISSING = "missing"


@dataclass(frozen=True)
class GuestOrderView:
    """Everything an anonymous token holder may learn about an order."""

    status: OrderStatus
    shipping_method: ShippingMethod
    created_at: datetime


@dataclass(frozen=True)
class LookupResult:
    status: LookupStatus
    order: Optional[GuestOrderView] = None


@dataclass(frozen=True)
class OrderLine:
    product_name: str
    product_price: Decimal
    quantity: int
    product_id: Optional[str] = None


@dataclass(frozen=True)
class OrderDraft:
    """Validated checkout data ready to become an order row."""

    shipping_full_name: str
    shipping_phone: str
    shipping_method: ShippingMethod
    lines: list[OrderLine]
    shipping_email: Optional[str] = None
    shipping_address: Optional[str] = None
    idempotency_key_hash: Optional[str] = None

    @property
    def total(self) -> Decimal:
        return sum((line.product_price * line.quantity for line in self.lines), Decimal("0"))


@dataclass(frozen=True)
class IssuedOrder:
    order: Order
    tracking_token: str
    tracking_number: str


class TrackingService:
    """Mints tracking tokens for new orders and resolves them for guests."""

    def __init__(
        self,
        orders: OrderStore,
        limiter: RateLimiter,
        window_seconds: int | None = None,
        max_attempts: int | None = None,
    ) -> None:
        self._orders = orders
        self._limiter = limiter
        self._window_seconds = window_seconds or settings.track_order_window_seconds
        self._max_attempts = max_attempts or settings.track_order_max_attempts

    def issue_token(self, draft: OrderDraft, owner_user_id: Optional[str] = None) -> IssuedOrder:
        """Create the order with a fresh tracking token.

        Only the token hash is stored. The plaintext token is handed back
        here and nowhere else.
        """

        raw_token, tracking_number = generate_tracking_token()
        order = Order(
            tracking_number=tracking_number,
            tracking_token_hash=hash_token(raw_token),
            idempotency_key_hash=draft.idempotency_key_hash,
            status=OrderStatus.PENDING,
            shipping_method=draft.shipping_method,
            shipping_full_name=draft.shipping_full_name,
            shipping_phone=draft.shipping_phone,
            shipping_email=draft.shipping_email,
            shipping_address=draft.shipping_address,
            total=draft.total,
            user_id=owner_user_id,
            items=[
                OrderItem(
                    product_id=line.product_id,
                    product_name=line.product_name,
                    product_price=line.product_price,
                    quantity=line.quantity,
                )
                for line in draft.lines
            ],
        )
        order = self._orders.create_order(order)
        logger.info(
            "Order %s created (%s, %d item(s))",
            order.id,
            "guest" if owner_user_id is None else "owned",
            len(draft.lines),
        )
        return IssuedOrder(order=order, tracking_token=raw_token, tracking_number=tracking_number)

    def lookup(self, caller_address: str, raw_token: Any) -> LookupResult:
        """Resolve a plaintext tracking token to a guest-safe order view.

        Every call is recorded against the caller before anything else is
        decided, including calls with a missing or malformed token.
        """

        token = raw_token.strip() if isinstance(raw_token, str) else None
        token_fingerprint = fingerprint(hash_token(token)) if token else None

        allowed = self._limiter.record_and_check(
            TRACK_ORDER_SCOPE,
            caller_address,
            self._window_seconds,
            self._max_attempts,
            token_fingerprint=token_fingerprint,
        )
        if not allowed:
            logger.info("Tracking lookup throttled (fingerprint=%s)", token_fingerprint)
            return LookupResult(LookupStatus.RATE_LIMITED)

        if not token:
            return LookupResult(LookupStatus.MISSING)
        if len(token) < MIN_TOKEN_LENGTH or len(token) > MAX_TOKEN_LENGTH:
            return LookupResult(LookupStatus.INVALID)

        order = self._orders.find_guest_order_by_token_hash(hash_token(token))
        if order is None:
            return LookupResult(LookupStatus.NOT_FOUND)

        return LookupResult(
            LookupStatus.FOUND,
            GuestOrderView(
                status=order.status,
                shipping_method=order.shipping_method,
                created_at=order.created_at,
            ),
        )


__all__ = [
    "GuestOrderView",
    "IssuedOrder",
    "LookupResult",
    "LookupStatus",
    "MAX_TOKEN_LENGTH",
    "MIN_TOKEN_LENGTH",
    "OrderDraft",
    "OrderLine",
    "TrackingService",
]
