"""Tests for the anonymous track-order endpoint."""

from __future__ import annotations

from sqlalchemy.exc import OperationalError

from storefront.models.lookup_attempt import LookupAttempt
from storefront.services.tracking import TrackingService
from storefront.stores.orders import OrderStore

URL = "/api/v1/track-order"


def _place_order(client, payload, headers=None) -> dict:
    response = client.post("/api/v1/checkout", json=payload, headers=headers or {})
    assert response.status_code == 201
    return response.json()


def test_lookup_by_token_returns_minimal_order(client, checkout_payload) -> None:
    placed = _place_order(client, checkout_payload)

    response = client.post(URL, json={"trackingToken": placed["trackingToken"]})

    assert response.status_code == 200
    order = response.json()["order"]
    assert set(order) == {"status", "shippingMethod", "createdAt"}
    assert order["status"] == "Pending"
    assert order["shippingMethod"] == "delivery"


def test_missing_token(client) -> None:
    response = client.post(URL, json={})

    assert response.status_code == 400
    assert response.json() == {"error": "Tracking token is required", "order": None}


def test_non_string_token_is_missing(client) -> None:
    response = client.post(URL, json={"trackingToken": 1234567890123456789012345})

    assert response.status_code == 400
    assert response.json()["error"] == "Tracking token is required"


def test_short_token_is_invalid(client) -> None:
    response = client.post(URL, json={"trackingToken": "abc"})

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid tracking token", "order": None}


def test_unknown_token_is_not_found(client) -> None:
    response = client.post(URL, json={"trackingToken": "0" * 64})

    assert response.status_code == 404
    assert response.json() == {"error": "Order not found", "order": None}


def test_display_number_and_legacy_field_are_not_accepted(client, checkout_payload) -> None:
    placed = _place_order(client, checkout_payload)

    by_number = client.post(URL, json={"trackingToken": placed["trackingNumber"]})
    legacy = client.post(URL, json={"trackingNumber": placed["trackingNumber"]})

    assert by_number.status_code == 404
    assert legacy.status_code == 400


def test_owned_order_is_not_found_for_guests(client, checkout_payload, auth_headers) -> None:
    placed = _place_order(client, checkout_payload, headers=auth_headers)

    response = client.post(URL, json={"trackingToken": placed["trackingToken"]})

    assert response.status_code == 404
    assert response.json()["error"] == "Order not found"


def test_thirty_first_lookup_is_throttled(client) -> None:
    for _ in range(30):
        assert client.post(URL, json={"trackingToken": "f" * 64}).status_code == 404

    response = client.post(URL, json={"trackingToken": "f" * 64})

    assert response.status_code == 429
    assert response.json() == {"error": "Too many attempts", "order": None}


def test_rotating_forwarded_header_does_not_reset_throttling(client) -> None:
    statuses = [
        client.post(
            URL,
            json={"trackingToken": "f" * 64},
            headers={"X-Forwarded-For": f"10.0.0.{i}"},
        ).status_code
        for i in range(31)
    ]

    assert statuses[:30] == [404] * 30
    assert statuses[30] == 429


def test_token_with_lone_surrogate_is_recorded_and_not_found(client, db_session) -> None:
    body = b'{"trackingToken": "' + b"a" * 30 + b'\\ud800"}'

    response = client.post(URL, content=body, headers={"Content-Type": "application/json"})

    assert response.status_code == 404
    assert response.json() == {"error": "Order not found", "order": None}
    attempt = db_session.query(LookupAttempt).one()
    assert attempt.token_fingerprint is not None


def test_persistence_failure_returns_generic_server_error(client, monkeypatch) -> None:
    def _fail(self, token_hash):
        raise OperationalError("SELECT orders", {}, Exception("canceling statement due to statement timeout"))

    monkeypatch.setattr(OrderStore, "find_guest_order_by_token_hash", _fail)

    response = client.post(URL, json={"trackingToken": "f" * 64})

    assert response.status_code == 500
    assert response.json() == {"error": "Server error", "order": None}
    assert "statement timeout" not in response.text


def test_unexpected_failure_returns_generic_server_error(client, monkeypatch) -> None:
    def _fail(self, caller_address, raw_token):
        raise RuntimeError("boom")

    monkeypatch.setattr(TrackingService, "lookup", _fail)

    response = client.post(URL, json={"trackingToken": "f" * 64})

    assert response.status_code == 500
    assert response.json() == {"error": "Server error", "order": None}
