"""Persistence port for orders and their line items."""

from __future__ import annotations

import uuid
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from storefront.models.order import Order


class OrderStore:
    """Order repository backed by a SQLAlchemy session."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def create_order(self, order: Order) -> Order:
        """Persist an order header together with its items in one transaction.

        Items ride on the ``Order.items`` relationship, so header and lines
        are flushed and committed together; any failure rolls both back.
        """

        try:
            self._db.add(order)
            self._db.flush()
            self._db.commit()
        except Exception:
            self._db.rollback()
            raise
        self._db.refresh(order)
        return order

    def find_guest_order_by_token_hash(self, token_hash: str) -> Optional[Order]:
        """Return the guest order matching the hash; owned orders never match."""

        statement = select(Order).where(
            Order.tracking_token_hash == token_hash,
            Order.user_id.is_(None),
        )
        return self._db.execute(statement).scalar_one_or_none()

    def find_by_idempotency_key_hash(self, key_hash: str) -> Optional[Order]:
        statement = select(Order).where(Order.idempotency_key_hash == key_hash)
        return self._db.execute(statement).scalar_one_or_none()

    def get(self, order_id: uuid.UUID) -> Optional[Order]:
        statement = (
            select(Order)
            .options(selectinload(Order.items))
            .where(Order.id == order_id)
        )
        return self._db.execute(statement).scalar_one_or_none()

    def list_all(self) -> list[Order]:
        statement = (
            select(Order)
            .options(selectinload(Order.items))
            .order_by(Order.created_at.desc())
        )
        return list(self._db.execute(statement).scalars())

    def list_for_user(self, user_id: str) -> list[Order]:
        statement = (
            select(Order)
            .options(selectinload(Order.items))
            .where(Order.user_id == user_id)
            .order_by(Order.created_at.desc())
        )
        return list(self._db.execute(statement).scalars())

    def commit(self) -> None:
        self._db.commit()

    def rollback(self) -> None:
        self._db.rollback()


__all__ = ["OrderStore"]
