"""Order placement at the end of the storefront checkout."""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError

from storefront.core.tokens import hash_idempotency_key
from storefront.schemas.checkout import CheckoutRequest
from storefront.services.tracking import IssuedOrder, OrderDraft, OrderLine, TrackingService
from storefront.stores.orders import OrderStore

logger = logging.getLogger(__name__)


class CheckoutError(Exception):
    """Base class for checkout failures."""


class DuplicateCheckoutError(CheckoutError):
    """Raised when an idempotency key was already used to place an order."""

    def __init__(self, tracking_number: str) -> None:
        super().__init__("Order already submitted.")
        self.tracking_number = tracking_number


def build_order_draft(payload: CheckoutRequest) -> OrderDraft:
    shipping = payload.shipping
    return OrderDraft(
        shipping_full_name=shipping.full_name,
        shipping_phone=shipping.phone,
        shipping_email=str(shipping.email),
        shipping_address=shipping.address,
        shipping_method=shipping.method,
        lines=[
            OrderLine(
                product_id=item.product_id,
                product_name=item.product_name,
                product_price=item.product_price,
                quantity=item.quantity,
            )
            for item in payload.items
        ],
        idempotency_key_hash=(
            hash_idempotency_key(payload.idempotency_key) if payload.idempotency_key else None
        ),
    )


class CheckoutService:
    """Turns a validated checkout submission into an order with a tracking token."""

    def __init__(self, orders: OrderStore, tracking: TrackingService) -> None:
        self._orders = orders
        self._tracking = tracking

    def place_order(self, payload: CheckoutRequest, owner_user_id: Optional[str] = None) -> IssuedOrder:
        """Create the order, refusing a replay of an already used idempotency key.

        A replay only learns the display tracking number of the first order;
        the plaintext token from the first response is not recoverable.
        """

        draft = build_order_draft(payload)
        if draft.idempotency_key_hash is not None:
            existing = self._orders.find_by_idempotency_key_hash(draft.idempotency_key_hash)
            if existing is not None:
                raise DuplicateCheckoutError(existing.tracking_number)

        try:
            return self._tracking.issue_token(draft, owner_user_id=owner_user_id)
        except IntegrityError as exc:
            # A concurrent submission with the same key won the unique index.
            if draft.idempotency_key_hash is None:
                raise
            existing = self._orders.find_by_idempotency_key_hash(draft.idempotency_key_hash)
            if existing is None:
                raise
            logger.info("Concurrent duplicate checkout resolved to order %s", existing.id)
            raise DuplicateCheckoutError(existing.tracking_number) from exc


__all__ = [
    "CheckoutError",
    "CheckoutService",
    "DuplicateCheckoutError",
    "build_order_draft",
]
