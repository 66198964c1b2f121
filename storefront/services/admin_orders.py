"""Order administration and the authenticated owner views."""

from __future__ import annotations

import uuid

from sqlalchemy.orm import Session

from storefront.models.order import Order, OrderStatus
from storefront.services.admin_audit import add_admin_audit_log
from storefront.services.admin_codes import AdminActionError
from storefront.stores.orders import OrderStore


class OrderNotFoundError(AdminActionError):
    def __init__(self, order_id: uuid.UUID) -> None:
        super().__init__(f"Order {order_id} not found.")
        self.order_id = order_id


def list_orders(db: Session) -> list[Order]:
    return OrderStore(db).list_all()


def update_order_status(
    db: Session,
    admin_user_id: str,
    order_id: uuid.UUID,
    status: OrderStatus,
) -> Order:
    """Set any status; transitions are not sequenced."""

    store = OrderStore(db)
    order = store.get(order_id)
    if order is None:
        raise OrderNotFoundError(order_id)

    previous = order.status
    order.status = status
    add_admin_audit_log(
        db,
        admin_user_id,
        "update_order_status",
        str(order_id),
        f"{previous.value} -> {status.value}",
    )
    store.commit()
    db.refresh(order)
    return order


def list_orders_for_user(db: Session, user_id: str) -> list[Order]:
    return OrderStore(db).list_for_user(user_id)


def get_order_for_user(db: Session, order_id: uuid.UUID, user_id: str) -> Order:
    """Return an order only to its owner; anyone else sees it as missing."""

    order = OrderStore(db).get(order_id)
    if order is None or order.user_id != user_id:
        raise OrderNotFoundError(order_id)
    return order


__all__ = [
    "OrderNotFoundError",
    "get_order_for_user",
    "list_orders",
    "list_orders_for_user",
    "update_order_status",
]
