"""Pytest configuration and fixtures."""

from dataclasses import replace
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import select
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

import stockbook.models  # noqa: F401  registers every table on Base.metadata
from stockbook.core.config import settings
from stockbook.core.policy import Identity, UserRole
from stockbook.core.security import create_access_token
from stockbook.db.database import Base, Database
from stockbook.main import create_app
from stockbook.models.inventory import Item
from stockbook.services.users import add_user

TEST_SETTINGS = replace(
    settings,
    secret_key="test-secret-key-that-is-long-enough-for-hs256",
    setup_mode=True,
    expose_error_details=False,
    cors_origins=("*",),
    database_url="sqlite://",
)


@pytest.fixture
def database() -> Generator[Database, None, None]:
    """In-memory SQLite store shared by the app and the test."""
    db = Database(TEST_SETTINGS.database_url, poolclass=StaticPool)
    db.create_all()
    yield db
    Base.metadata.drop_all(bind=db.engine)
    db.dispose()


@pytest.fixture
def db_session(database: Database) -> Generator[Session, None, None]:
    session = database.session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(database: Database) -> Generator[TestClient, None, None]:
    app = create_app(TEST_SETTINGS, database)
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


def _make_user(database: Database, username: str, role: UserRole) -> Identity:
    with database.session() as session:
        user = add_user(session, username, f"{username}-password", role)
    return Identity(id=user.id, username=user.username, role=user.role)


@pytest.fixture
def super_admin(database: Database) -> Identity:
    return _make_user(database, "root", UserRole.SUPER_ADMIN)


@pytest.fixture
def admin(database: Database) -> Identity:
    return _make_user(database, "manager", UserRole.ADMIN)


@pytest.fixture
def viewer(database: Database) -> Identity:
    return _make_user(database, "clerk", UserRole.VIEWER)


def bearer(identity: Identity) -> dict:
    return {"Authorization": f"Bearer {create_access_token(identity, TEST_SETTINGS)}"}


@pytest.fixture
def super_admin_headers(super_admin: Identity) -> dict:
    return bearer(super_admin)


@pytest.fixture
def admin_headers(admin: Identity) -> dict:
    return bearer(admin)


@pytest.fixture
def viewer_headers(viewer: Identity) -> dict:
    return bearer(viewer)


@pytest.fixture
def stock_of(database: Database):
    """Read an item's on-hand quantity straight from the store."""

    def _read(item_id: int) -> int | None:
        with database.session() as session:
            return session.scalar(select(Item.stock_quantity).where(Item.id == item_id))

    return _read


@pytest.fixture
def season(client: TestClient, admin_headers: dict) -> dict:
    response = client.post("/api/seasons", json={"season_name": "Kharif 2024"}, headers=admin_headers)
    assert response.status_code == 201
    return response.json()["data"]


@pytest.fixture
def item(client: TestClient, admin_headers: dict) -> dict:
    response = client.post("/api/items", json={"item_name": "Rice"}, headers=admin_headers)
    assert response.status_code == 201
    return response.json()["data"]


def purchase_body(item_id: int, season_id: int, quantity: int = 100, unit_price: str = "10.00", **overrides) -> dict:
    body = {
        "date": "2024-06-01",
        "item_id": item_id,
        "season_id": season_id,
        "quantity": quantity,
        "unit_price": unit_price,
        "vendor_name": "Green Farms",
    }
    body.update(overrides)
    return body


def sale_body(item_id: int, season_id: int, quantity: int = 30, unit_price: str = "15.00", **overrides) -> dict:
    body = {
        "date": "2024-06-10",
        "item_id": item_id,
        "season_id": season_id,
        "quantity": quantity,
        "unit_price": unit_price,
        "customer_name": "City Mart",
    }
    body.update(overrides)
    return body
