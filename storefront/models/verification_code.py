"""Product verification code ORM model."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import expression

from storefront.db.base import Base


class VerificationCode(Base):
    """A one-time authenticity code printed on a physical product.

    ``used`` only ever moves from false to true, and ``used_at`` is set in the
    same statement that flips it.
    """

    __tablename__ = "verification_codes"

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    used: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=expression.false(),
    )
    used_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )


__all__ = ["VerificationCode"]
