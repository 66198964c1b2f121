"""Shared pytest fixtures for server tests."""

from __future__ import annotations

import asyncio
import os
from collections.abc import Generator
from decimal import Decimal

import httpx
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")

import main  # noqa: E402
from storefront.api.limiter import limiter  # noqa: E402
from storefront.core.security import create_access_token  # noqa: E402
from storefront.db.base import Base  # noqa: E402
from storefront.db.session import get_db  # noqa: E402
from storefront.models.order import ShippingMethod  # noqa: E402
from storefront.models.user_role import ADMIN_ROLE, UserRole  # noqa: E402
from storefront.services.tracking import OrderDraft, OrderLine  # noqa: E402


TEST_DATABASE_URL = "sqlite+pysqlite:///:memory:"

test_engine = create_engine(
    TEST_DATABASE_URL,
    future=True,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(
    bind=test_engine,
    autocommit=False,
    autoflush=False,
    future=True,
)

Base.metadata.create_all(bind=test_engine)


class SyncASGITestClient:
    """Synchronous wrapper around httpx.AsyncClient for ASGI apps."""

    def __init__(self, app) -> None:
        transport = httpx.ASGITransport(app=app)
        self._client = httpx.AsyncClient(transport=transport, base_url="http://testserver")

    def request(self, method: str, url: str, **kwargs) -> httpx.Response:
        return asyncio.run(self._client.request(method, url, **kwargs))

    def get(self, url: str, **kwargs) -> httpx.Response:
        return self.request("GET", url, **kwargs)

    def post(self, url: str, **kwargs) -> httpx.Response:
        return self.request("POST", url, **kwargs)

    def delete(self, url: str, **kwargs) -> httpx.Response:
        return self.request("DELETE", url, **kwargs)

    def put(self, url: str, **kwargs) -> httpx.Response:
        return self.request("PUT", url, **kwargs)

    def options(self, url: str, **kwargs) -> httpx.Response:
        return self.request("OPTIONS", url, **kwargs)

    def __enter__(self) -> "SyncASGITestClient":
        return self

    def __exit__(self, exc_type, exc, traceback) -> None:
        asyncio.run(self._client.aclose())


@pytest.fixture(autouse=True)
def verify_connection_tracker(monkeypatch: pytest.MonkeyPatch) -> Generator[dict[str, int], None, None]:
    """Track how many times the startup connection verifier is called."""

    tracker = {"calls": 0, "migrations": 0}

    def fake_verify_connection() -> None:
        tracker["calls"] += 1

    def fake_run_migrations() -> None:
        tracker["migrations"] += 1

    monkeypatch.setattr(main, "verify_connection", fake_verify_connection)
    monkeypatch.setattr(main, "run_migrations", fake_run_migrations)
    yield tracker


@pytest.fixture(autouse=True)
def reset_request_limiter() -> Generator[None, None, None]:
    """Clear slowapi's in-memory counters between tests."""

    limiter.reset()
    yield
    limiter.reset()


@pytest.fixture()
def db_session() -> Generator[Session, None, None]:
    """Provide a clean database session for each test."""

    Base.metadata.drop_all(bind=test_engine)
    Base.metadata.create_all(bind=test_engine)
    session: Session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(autouse=True)
def override_get_db(db_session: Session) -> Generator[None, None, None]:
    """Override the FastAPI dependency to use the test session."""

    def _get_db() -> Generator[Session, None, None]:
        try:
            yield db_session
        finally:
            pass

    main.app.dependency_overrides[get_db] = _get_db
    yield
    main.app.dependency_overrides.pop(get_db, None)


@pytest.fixture()
def client() -> Generator[SyncASGITestClient, None, None]:
    """Synchronous test client backed by httpx's ASGI transport."""

    with SyncASGITestClient(main.app) as test_client:
        yield test_client


@pytest.fixture()
def auth_headers() -> dict[str, str]:
    """Bearer headers for an ordinary signed-in customer."""

    token = create_access_token(subject="customer-1")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def admin_headers(db_session: Session) -> dict[str, str]:
    """Bearer headers for a user holding the admin role."""

    db_session.add(UserRole(user_id="admin-1", role=ADMIN_ROLE))
    db_session.commit()
    token = create_access_token(subject="admin-1")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def order_draft() -> OrderDraft:
    """A two-line delivery order as the checkout would build it."""

    return OrderDraft(
        shipping_full_name="Amira Hassan",
        shipping_phone="+20 100 123 4567",
        shipping_email="amira@example.com",
        shipping_address="12 Nile Corniche, Cairo",
        shipping_method=ShippingMethod.DELIVERY,
        lines=[
            OrderLine(product_name="Whey Protein", product_price=Decimal("49.99"), quantity=2, product_id="p-1"),
            OrderLine(product_name="Creatine", product_price=Decimal("19.50"), quantity=1),
        ],
    )


@pytest.fixture()
def checkout_payload() -> dict:
    """Valid JSON body for the checkout endpoint."""

    return {
        "shipping": {
            "fullName": "Amira Hassan",
            "phone": "+20 100 123 4567",
            "email": "amira@example.com",
            "address": "12 Nile Corniche, Cairo",
            "method": "delivery",
        },
        "items": [
            {"productId": "p-1", "productName": "Whey Protein", "productPrice": "49.99", "quantity": 2},
            {"productName": "Creatine", "productPrice": "19.50", "quantity": 1},
        ],
    }
