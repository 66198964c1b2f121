"""Lookup attempt ledger ORM model."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Index, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from storefront.db.base import Base


class LookupAttempt(Base):
    """One throttled request against the tracking or verification endpoints.

    ``token_fingerprint`` holds at most a short prefix of the token hash and
    is kept only for correlating abuse.
    """

    __tablename__ = "lookup_attempts"
    __table_args__ = (
        Index(
            "ix_lookup_attempts_scope_address_attempted_at",
            "scope",
            "source_address",
            "attempted_at",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )
    scope: Mapped[str] = mapped_column(String(32), nullable=False)
    source_address: Mapped[str] = mapped_column(String(64), nullable=False)
    token_fingerprint: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)
    attempted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )


__all__ = ["LookupAttempt"]
