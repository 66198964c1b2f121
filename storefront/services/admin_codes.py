"""Administrative management of verification codes."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.models.verification_code import VerificationCode
from storefront.services.admin_audit import add_admin_audit_log
from storefront.services.verification import VerificationService
from storefront.stores.codes import CodeStore

logger = logging.getLogger(__name__)


class AdminActionError(Exception):
    """Base class for rejected administrative actions."""


class VerificationCodeExistsError(AdminActionError):
    def __init__(self, code_id: str) -> None:
        super().__init__(f"Code {code_id} already exists.")
        self.code_id = code_id


class VerificationCodeNotFoundError(AdminActionError):
    def __init__(self, code_id: str) -> None:
        super().__init__(f"Code {code_id} not found.")
        self.code_id = code_id


class InvalidVerificationCodeError(AdminActionError):
    """Raised when a new code does not match the canonical format."""


class VerificationCodeResetError(AdminActionError):
    """Raised when trying to mark a redeemed code as unused again."""


def list_codes(db: Session) -> list[VerificationCode]:
    return CodeStore(db).list_all()


def create_code(db: Session, admin_user_id: str, code_id: str, used: bool = False) -> VerificationCode:
    """Provision a new code, normalized the same way redemption input is."""

    store = CodeStore(db)
    verifier = VerificationService(store)
    clean_id = verifier.normalize(code_id)
    if not verifier.is_well_formed(clean_id):
        raise InvalidVerificationCodeError(f"Code {clean_id} does not match the expected format.")
    if store.get(clean_id) is not None:
        raise VerificationCodeExistsError(clean_id)

    code = VerificationCode(
        id=clean_id,
        used=used,
        used_at=datetime.now(timezone.utc) if used else None,
    )
    try:
        store.add(code)
        add_admin_audit_log(db, admin_user_id, "create_code", clean_id, f"used={used}")
        store.commit()
    except IntegrityError as exc:
        store.rollback()
        raise VerificationCodeExistsError(clean_id) from exc

    db.refresh(code)
    return code


def set_code_used(db: Session, admin_user_id: str, code_id: str, used: bool) -> VerificationCode:
    """Mark a code redeemed by hand.

    Redemption is one-way, so a request to flip a redeemed code back to
    unused is refused rather than applied.
    """

    store = CodeStore(db)
    code = store.get(code_id)
    if code is None:
        raise VerificationCodeNotFoundError(code_id)

    if not used:
        if code.used:
            raise VerificationCodeResetError(f"Code {code_id} has already been redeemed.")
        return code

    if not code.used:
        if store.mark_used(code_id, datetime.now(timezone.utc)):
            add_admin_audit_log(db, admin_user_id, "mark_code_used", code_id)
            store.commit()
        else:
            # Redeemed by a customer since the read above.
            store.rollback()
        code = store.get(code_id)
    return code


def delete_code(db: Session, admin_user_id: str, code_id: str) -> None:
    store = CodeStore(db)
    if not store.delete(code_id):
        store.rollback()
        raise VerificationCodeNotFoundError(code_id)
    add_admin_audit_log(db, admin_user_id, "delete_code", code_id)
    store.commit()
    logger.info("Verification code %s deleted by admin %s", code_id, admin_user_id)


def seed_codes(db: Session, start: int, count: int) -> list[str]:
    """Create consecutive canonical codes, skipping ids that already exist."""

    store = CodeStore(db)
    verifier = VerificationService(store)
    created: list[str] = []
    for number in range(start, start + count):
        code_id = verifier.normalize(str(number))
        if not verifier.is_well_formed(code_id) or store.get(code_id) is not None:
            continue
        store.add(VerificationCode(id=code_id, used=False))
        created.append(code_id)
    store.commit()
    return created


__all__ = [
    "AdminActionError",
    "InvalidVerificationCodeError",
    "VerificationCodeExistsError",
    "VerificationCodeNotFoundError",
    "VerificationCodeResetError",
    "create_code",
    "delete_code",
    "list_codes",
    "seed_codes",
    "set_code_used",
]
