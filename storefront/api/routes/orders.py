"""Order views for the authenticated owner."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from storefront.api.dependencies import get_db, require_user_id
from storefront.schemas.orders import OrderListResponse, OrderRead
from storefront.services.admin_orders import (
    OrderNotFoundError,
    get_order_for_user,
    list_orders_for_user,
)

router = APIRouter(prefix="/orders", tags=["orders"])


@router.get("", response_model=OrderListResponse)
def list_my_orders(
    user_id: str = Depends(require_user_id),
    db: Session = Depends(get_db),
) -> OrderListResponse:
    """List the caller's own orders, newest first."""
    orders = list_orders_for_user(db, user_id)
    return OrderListResponse(orders=[OrderRead.model_validate(order) for order in orders])


@router.get("/{order_id}", response_model=OrderRead)
def get_my_order(
    order_id: uuid.UUID,
    user_id: str = Depends(require_user_id),
    db: Session = Depends(get_db),
) -> OrderRead:
    try:
        order = get_order_for_user(db, order_id, user_id)
    except OrderNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Order not found") from exc
    return OrderRead.model_validate(order)


__all__ = ["router"]
