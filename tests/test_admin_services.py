"""Tests for admin code services."""

from datetime import datetime, timezone

import pytest
from sqlalchemy import update
from sqlalchemy.orm import Session

from storefront.models.admin_audit_log import AdminAuditLog
from storefront.models.verification_code import VerificationCode
from storefront.services.admin_codes import (
    VerificationCodeResetError,
    create_code,
    seed_codes,
    set_code_used,
)
from storefront.stores.codes import CodeStore


def test_set_code_used_audits_manual_redemption(db_session: Session):
    db_session.add(VerificationCode(id="DRX-EGY-030"))
    db_session.commit()

    code = set_code_used(db_session, "admin-1", "DRX-EGY-030", True)

    assert code.used is True
    assert code.used_at is not None
    audit = db_session.query(AdminAuditLog).one()
    assert audit.action_type == "mark_code_used"
    assert audit.target == "DRX-EGY-030"


def test_set_code_used_skips_audit_when_customer_redeemed_first(db_session: Session, monkeypatch):
    db_session.add(VerificationCode(id="DRX-EGY-031"))
    db_session.commit()
    original_mark_used = CodeStore.mark_used

    def _customer_wins(self, code_id, used_at):
        # The customer's redemption lands between the admin's read and update.
        db_session.execute(
            update(VerificationCode)
            .where(VerificationCode.id == code_id)
            .values(used=True, used_at=datetime(2026, 1, 2, tzinfo=timezone.utc))
            .execution_options(synchronize_session=False)
        )
        db_session.commit()
        return original_mark_used(self, code_id, used_at)

    monkeypatch.setattr(CodeStore, "mark_used", _customer_wins)

    code = set_code_used(db_session, "admin-1", "DRX-EGY-031", True)

    assert code.used is True
    assert db_session.query(AdminAuditLog).count() == 0


def test_set_code_used_refuses_reset(db_session: Session):
    create_code(db_session, "admin-1", "DRX-EGY-032", used=True)

    with pytest.raises(VerificationCodeResetError):
        set_code_used(db_session, "admin-1", "DRX-EGY-032", False)


def test_seed_codes_returns_created_ids(db_session: Session):
    assert seed_codes(db_session, 8, 3) == ["DRX-EGY-008", "DRX-EGY-009", "DRX-EGY-010"]
    assert seed_codes(db_session, 8, 3) == []
