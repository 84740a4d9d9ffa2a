"""Role gate: viewers read, admins write, super admins manage users."""

from sqlalchemy import func, select

from conftest import purchase_body
from stockbook.models.inventory import Item, Purchase


def test_viewer_can_read(client, viewer_headers):
    for path in ("/api/items", "/api/purchases", "/api/sales", "/api/expenses", "/api/seasons", "/api/report"):
        response = client.get(path, headers=viewer_headers)
        assert response.status_code == 200, path
        assert response.json()["success"] is True


def test_viewer_cannot_create_item(client, viewer_headers, db_session):
    response = client.post("/api/items", json={"item_name": "Wheat"}, headers=viewer_headers)
    assert response.status_code == 403
    assert response.json() == {"success": False, "msg": "Access forbidden: Admin role required"}
    assert db_session.scalar(select(func.count(Item.id))) == 0


def test_viewer_cannot_purchase(client, viewer_headers, item, season, stock_of, db_session):
    response = client.post("/api/purchases", json=purchase_body(item["id"], season["id"]), headers=viewer_headers)
    assert response.status_code == 403
    assert stock_of(item["id"]) == 0
    assert db_session.scalar(select(func.count(Purchase.id))) == 0


def test_viewer_cannot_delete(client, viewer_headers, item):
    response = client.delete(f"/api/items/{item['id']}", headers=viewer_headers)
    assert response.status_code == 403


def test_admin_can_write(client, admin_headers):
    response = client.post("/api/items", json={"item_name": "Wheat"}, headers=admin_headers)
    assert response.status_code == 201


def test_super_admin_can_write(client, super_admin_headers):
    response = client.post("/api/seasons", json={"season_name": "Rabi"}, headers=super_admin_headers)
    assert response.status_code == 201


def test_admin_cannot_manage_users(client, admin_headers):
    response = client.get("/api/users", headers=admin_headers)
    assert response.status_code == 403
    assert response.json()["msg"] == "Access forbidden: Super Admin role required"

    response = client.post(
        "/api/users",
        json={"username": "sneaky", "password": "pw", "role": "Admin"},
        headers=admin_headers,
    )
    assert response.status_code == 403


def test_auth_is_checked_before_body(client):
    response = client.post("/api/items", json={})
    assert response.status_code == 401
