"""Service functions for admin audit logging."""

from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Session

from storefront.models.admin_audit_log import AdminAuditLog


def add_admin_audit_log(
    db: Session,
    admin_user_id: str,
    action_type: str,
    target: str,
    details: Optional[str] = None
) -> AdminAuditLog:
    """Stage an audit entry in the caller's transaction.

    The entry is committed together with the mutation it describes.
    """

    audit_log = AdminAuditLog(
        admin_user_id=admin_user_id,
        action_type=action_type,
        target=target,
        details=details,
    )
    db.add(audit_log)
    return audit_log


__all__ = [
    "add_admin_audit_log",
]
