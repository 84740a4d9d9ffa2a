"""Tests for the combined report, the dashboard and the season item count."""

from decimal import Decimal

import pytest
from sqlalchemy import select
from sqlalchemy.dialects import postgresql

from conftest import purchase_body, sale_body
from stockbook.services.reports import _combined_transactions


def _expense_body(season_id: int, amount: str = "50.00", **overrides) -> dict:
    body = {
        "date": "2024-06-15",
        "expense_type": "Transport",
        "amount": amount,
        "description": "Truck hire",
        "season_id": season_id,
    }
    body.update(overrides)
    return body


@pytest.fixture
def ledger(client, admin_headers, item, season):
    """Rice in Kharif: 100 @ 10 bought, 30 @ 15 sold, 50 spent. Rabi holds one small purchase."""
    rabi = client.post("/api/seasons", json={"season_name": "Rabi 2024"}, headers=admin_headers).json()["data"]
    wheat = client.post("/api/items", json={"item_name": "Wheat"}, headers=admin_headers).json()["data"]

    client.post("/api/purchases", json=purchase_body(item["id"], season["id"]), headers=admin_headers)
    client.post("/api/sales", json=sale_body(item["id"], season["id"]), headers=admin_headers)
    client.post("/api/expenses", json=_expense_body(season["id"], item_id=item["id"]), headers=admin_headers)
    client.post(
        "/api/purchases",
        json=purchase_body(wheat["id"], rabi["id"], quantity=5, unit_price="20.00", date="2024-11-02"),
        headers=admin_headers,
    )
    return {"kharif": season, "rabi": rabi, "rice": item, "wheat": wheat}


def _report(client, headers, **params) -> dict:
    response = client.get("/api/report", params=params, headers=headers)
    assert response.status_code == 200
    return response.json()["data"]


class TestReport:
    def test_unfiltered_report_merges_everything(self, client, viewer_headers, ledger):
        data = _report(client, viewer_headers)
        assert data["summary"]["transaction_count"] == 4
        assert [row["transaction_type"] for row in data["transactions"]] == ["purchase", "expense", "sale", "purchase"]
        assert len(data["purchases"]) == 2
        assert len(data["sales"]) == 1
        assert len(data["expenses"]) == 1

    def test_season_filter_isolates_rows(self, client, viewer_headers, ledger):
        data = _report(client, viewer_headers, season_id=ledger["kharif"]["id"])
        assert {row["season_id"] for row in data["transactions"]} == {ledger["kharif"]["id"]}

        summary = data["summary"]
        assert Decimal(summary["total_purchases"]) == Decimal("1000")
        assert Decimal(summary["total_sales"]) == Decimal("450")
        assert Decimal(summary["total_expenses"]) == Decimal("50")
        assert Decimal(summary["profit"]) == Decimal("-600")
        assert summary["transaction_count"] == 3

    def test_rows_carry_names_and_totals(self, client, viewer_headers, ledger):
        data = _report(client, viewer_headers, season_id=ledger["kharif"]["id"])
        sale = data["sales"][0]
        assert sale["item_name"] == "Rice"
        assert sale["season_name"] == "Kharif 2024"
        assert sale["party_name"] == "City Mart"
        assert Decimal(sale["total_amount"]) == Decimal("450")

        expense = data["expenses"][0]
        assert expense["quantity"] is None
        assert expense["unit_price"] is None
        assert Decimal(expense["total_amount"]) == Decimal("50")
        assert expense["party_name"] == "Truck hire"

    def test_item_filter(self, client, viewer_headers, ledger):
        data = _report(client, viewer_headers, item_id=ledger["wheat"]["id"])
        assert data["summary"]["transaction_count"] == 1
        assert data["transactions"][0]["item_name"] == "Wheat"

    def test_date_range_is_inclusive(self, client, viewer_headers, ledger):
        data = _report(client, viewer_headers, start_date="2024-06-10", end_date="2024-06-15")
        assert sorted(row["transaction_type"] for row in data["transactions"]) == ["expense", "sale"]

    def test_date_bounds_apply_independently(self, client, viewer_headers, ledger):
        only_start = _report(client, viewer_headers, start_date="2024-07-01")
        assert only_start["summary"]["transaction_count"] == 1

        only_end = _report(client, viewer_headers, end_date="2024-06-01")
        assert only_end["summary"]["transaction_count"] == 1
        assert only_end["filters"]["end_date"] == "2024-06-01"
        assert only_end["filters"]["start_date"] is None

    def test_empty_report(self, client, viewer_headers):
        data = _report(client, viewer_headers)
        assert data["transactions"] == []
        assert Decimal(data["summary"]["profit"]) == Decimal("0")

    def test_invalid_date_is_rejected(self, client, viewer_headers):
        response = client.get("/api/report", params={"start_date": "yesterday"}, headers=viewer_headers)
        assert response.status_code == 400
        assert "start_date" in response.json()["msg"]


class TestDashboard:
    def test_overall_totals(self, client, viewer_headers, ledger):
        response = client.get("/api/dashboard-summary", headers=viewer_headers)
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["season_id"] is None
        assert Decimal(data["total_purchases"]) == Decimal("1100")
        assert Decimal(data["total_sales"]) == Decimal("450")
        assert Decimal(data["total_expenses"]) == Decimal("50")
        assert Decimal(data["profit"]) == Decimal("-700")
        assert data["total_stock_quantity"] == 75

    def test_season_scoped_totals_keep_global_stock(self, client, viewer_headers, ledger):
        response = client.get(
            "/api/dashboard-summary", params={"season_id": ledger["rabi"]["id"]}, headers=viewer_headers
        )
        data = response.json()["data"]
        assert data["season_id"] == ledger["rabi"]["id"]
        assert Decimal(data["total_purchases"]) == Decimal("100")
        assert Decimal(data["total_sales"]) == Decimal("0")
        assert Decimal(data["total_expenses"]) == Decimal("0")
        assert data["total_stock_quantity"] == 75

    def test_empty_store(self, client, viewer_headers):
        data = client.get("/api/dashboard-summary", headers=viewer_headers).json()["data"]
        assert Decimal(data["total_purchases"]) == Decimal("0")
        assert data["total_stock_quantity"] == 0


class TestSeasonItemsCount:
    def test_counts_distinct_items(self, client, admin_headers, viewer_headers, ledger):
        kharif = ledger["kharif"]["id"]
        rice = ledger["rice"]["id"]
        client.post("/api/purchases", json=purchase_body(rice, kharif, quantity=3), headers=admin_headers)

        response = client.get("/api/season-items-count", params={"season_id": kharif}, headers=viewer_headers)
        assert response.status_code == 200
        assert response.json()["data"] == {"season_id": kharif, "total_items": 1}

    def test_season_without_activity(self, client, admin_headers, viewer_headers):
        empty = client.post("/api/seasons", json={"season_name": "Zaid"}, headers=admin_headers).json()["data"]
        response = client.get("/api/season-items-count", params={"season_id": empty["id"]}, headers=viewer_headers)
        assert response.json()["data"]["total_items"] == 0

    def test_season_id_is_required(self, client, viewer_headers):
        response = client.get("/api/season-items-count", headers=viewer_headers)
        assert response.status_code == 400
        assert response.json() == {"success": False, "msg": "season_id is required"}


def test_row_totals_fit_largest_line_amount():
    # int4 quantity times Numeric(12, 2) price needs 22 digits; PostgreSQL enforces the cast precision.
    sql = str(select(_combined_transactions()).compile(dialect=postgresql.dialect()))
    assert "NUMERIC(14, 2)" not in sql
    assert sql.count("AS NUMERIC(22, 2))") == 3
