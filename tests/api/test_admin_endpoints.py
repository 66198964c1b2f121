"""Tests for admin API endpoints."""

from __future__ import annotations

import uuid

from sqlalchemy.orm import Session

from storefront.models.admin_audit_log import AdminAuditLog
from storefront.models.order import Order, OrderStatus
from storefront.models.verification_code import VerificationCode


def _audit_actions(db_session: Session) -> list[str]:
    return [row.action_type for row in db_session.query(AdminAuditLog).order_by(AdminAuditLog.created_at).all()]


def test_admin_routes_require_authentication(client) -> None:
    response = client.get("/api/v1/admin/codes")

    assert response.status_code == 401


def test_admin_routes_reject_non_admins(client, auth_headers) -> None:
    response = client.get("/api/v1/admin/codes", headers=auth_headers)

    assert response.status_code == 403
    assert response.json()["detail"] == "Admin access required"


def test_create_and_list_codes(client, db_session: Session, admin_headers) -> None:
    created = client.post("/api/v1/admin/codes", json={"codeId": " drx-egy-001 "}, headers=admin_headers)

    assert created.status_code == 200
    assert created.json() == {"success": True}

    listed = client.get("/api/v1/admin/codes", headers=admin_headers)
    codes = listed.json()["codes"]
    assert [code["id"] for code in codes] == ["DRX-EGY-001"]
    assert codes[0]["used"] is False
    assert codes[0]["usedAt"] is None
    assert _audit_actions(db_session) == ["create_code"]


def test_create_duplicate_code_is_rejected(client, db_session: Session, admin_headers) -> None:
    db_session.add(VerificationCode(id="DRX-EGY-002"))
    db_session.commit()

    response = client.post("/api/v1/admin/codes", json={"codeId": "DRX-EGY-002"}, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["detail"] == "Code already exists"


def test_create_malformed_code_is_rejected(client, admin_headers) -> None:
    response = client.post("/api/v1/admin/codes", json={"codeId": "nope"}, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid code format"


def test_mark_code_used_sets_timestamp(client, db_session: Session, admin_headers) -> None:
    db_session.add(VerificationCode(id="DRX-EGY-003"))
    db_session.commit()

    response = client.put("/api/v1/admin/codes/DRX-EGY-003", json={"used": True}, headers=admin_headers)

    assert response.status_code == 200
    stored = db_session.get(VerificationCode, "DRX-EGY-003", populate_existing=True)
    assert stored.used is True
    assert stored.used_at is not None
    assert _audit_actions(db_session) == ["mark_code_used"]


def test_resetting_redeemed_code_is_refused(client, db_session: Session, admin_headers) -> None:
    client.post("/api/v1/admin/codes", json={"codeId": "DRX-EGY-004", "used": True}, headers=admin_headers)

    response = client.put("/api/v1/admin/codes/DRX-EGY-004", json={"used": False}, headers=admin_headers)

    assert response.status_code == 409
    stored = db_session.get(VerificationCode, "DRX-EGY-004", populate_existing=True)
    assert stored.used is True


def test_update_unknown_code_is_not_found(client, admin_headers) -> None:
    response = client.put("/api/v1/admin/codes/DRX-EGY-404", json={"used": True}, headers=admin_headers)

    assert response.status_code == 404


def test_delete_code(client, db_session: Session, admin_headers) -> None:
    db_session.add(VerificationCode(id="DRX-EGY-005"))
    db_session.commit()

    response = client.delete("/api/v1/admin/codes/DRX-EGY-005", headers=admin_headers)
    missing = client.delete("/api/v1/admin/codes/DRX-EGY-005", headers=admin_headers)

    assert response.status_code == 200
    assert missing.status_code == 404
    assert db_session.query(VerificationCode).count() == 0
    assert _audit_actions(db_session) == ["delete_code"]


def test_list_orders_includes_items(client, checkout_payload, admin_headers) -> None:
    placed = client.post("/api/v1/checkout", json=checkout_payload).json()

    response = client.get("/api/v1/admin/orders", headers=admin_headers)

    assert response.status_code == 200
    orders = response.json()["orders"]
    assert orders[0]["id"] == placed["orderId"]
    assert orders[0]["userId"] is None
    assert {item["productName"] for item in orders[0]["items"]} == {"Whey Protein", "Creatine"}


def test_update_order_status_is_visible_to_guest_lookup(
    client,
    db_session: Session,
    checkout_payload,
    admin_headers,
) -> None:
    placed = client.post("/api/v1/checkout", json=checkout_payload).json()

    response = client.put(
        f"/api/v1/admin/orders/{placed['orderId']}/status",
        json={"status": "Shipped"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    assert db_session.get(Order, uuid.UUID(placed["orderId"]), populate_existing=True).status is OrderStatus.SHIPPED
    audit = db_session.query(AdminAuditLog).one()
    assert audit.action_type == "update_order_status"
    assert audit.details == "Pending -> Shipped"

    tracked = client.post("/api/v1/track-order", json={"trackingToken": placed["trackingToken"]})
    assert tracked.json()["order"]["status"] == "Shipped"


def test_update_order_status_allows_any_transition(client, checkout_payload, admin_headers) -> None:
    placed = client.post("/api/v1/checkout", json=checkout_payload).json()
    url = f"/api/v1/admin/orders/{placed['orderId']}/status"

    assert client.put(url, json={"status": "Delivered"}, headers=admin_headers).status_code == 200
    assert client.put(url, json={"status": "Pending"}, headers=admin_headers).status_code == 200


def test_update_unknown_order_is_not_found(client, admin_headers) -> None:
    response = client.put(
        f"/api/v1/admin/orders/{uuid.uuid4()}/status",
        json={"status": "Shipped"},
        headers=admin_headers,
    )

    assert response.status_code == 404


def test_update_order_status_rejects_unknown_status(client, checkout_payload, admin_headers) -> None:
    placed = client.post("/api/v1/checkout", json=checkout_payload).json()

    response = client.put(
        f"/api/v1/admin/orders/{placed['orderId']}/status",
        json={"status": "Lost"},
        headers=admin_headers,
    )

    assert response.status_code == 422
