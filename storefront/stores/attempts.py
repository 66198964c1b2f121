"""Persistence port for the lookup attempt ledger."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from storefront.models.lookup_attempt import LookupAttempt

TRACK_ORDER_SCOPE = "track_order"
VERIFY_CODE_SCOPE = "verify_code"


class AttemptStore:
    """Append-only ledger of throttled lookups."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def record(
        self,
        scope: str,
        source_address: str,
        attempted_at: datetime,
        token_fingerprint: Optional[str] = None,
    ) -> None:
        """Append one attempt and commit it immediately."""

        self._db.add(
            LookupAttempt(
                scope=scope,
                source_address=source_address,
                token_fingerprint=token_fingerprint,
                attempted_at=attempted_at,
            )
        )
        try:
            self._db.commit()
        except Exception:
            self._db.rollback()
            raise

    def count_since(self, scope: str, source_address: str, since: datetime) -> int:
        statement = select(func.count(LookupAttempt.id)).where(
            LookupAttempt.scope == scope,
            LookupAttempt.source_address == source_address,
            LookupAttempt.attempted_at >= since,
        )
        return int(self._db.execute(statement).scalar_one())

    def prune(self, older_than: datetime) -> int:
        """Delete attempts recorded before ``older_than`` and return the count."""

        result = self._db.execute(
            delete(LookupAttempt).where(LookupAttempt.attempted_at < older_than)
        )
        self._db.commit()
        return result.rowcount


__all__ = ["AttemptStore", "TRACK_ORDER_SCOPE", "VERIFY_CODE_SCOPE"]
