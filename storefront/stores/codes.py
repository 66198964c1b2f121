"""Persistence port for verification codes."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from storefront.models.verification_code import VerificationCode


class CodeStore:
    """Reads and conditionally updates verification code rows."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def get(self, code_id: str) -> Optional[VerificationCode]:
        return self._db.get(VerificationCode, code_id, populate_existing=True)

    def mark_used(self, code_id: str, used_at: datetime) -> bool:
        """Flip an unredeemed code to redeemed in a single conditional update.

        Returns ``True`` only for the caller whose statement changed the row.
        Any concurrent caller racing on the same code matches zero rows.
        """

        statement = (
            update(VerificationCode)
            .where(
                VerificationCode.id == code_id,
                VerificationCode.used.is_(False),
            )
            .values(used=True, used_at=used_at)
            .execution_options(synchronize_session=False)
        )
        result = self._db.execute(statement)
        return result.rowcount == 1

    def list_all(self) -> list[VerificationCode]:
        statement = select(VerificationCode).order_by(VerificationCode.id.asc())
        return list(self._db.execute(statement).scalars())

    def add(self, code: VerificationCode) -> None:
        self._db.add(code)
        self._db.flush()

    def delete(self, code_id: str) -> bool:
        result = self._db.execute(
            delete(VerificationCode)
            .where(VerificationCode.id == code_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def commit(self) -> None:
        self._db.commit()

    def rollback(self) -> None:
        self._db.rollback()


__all__ = ["CodeStore"]
