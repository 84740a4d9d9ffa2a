import datetime as dt
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel

TransactionType = Literal["purchase", "sale", "expense"]


class ReportFilters(BaseModel):
    season_id: int | None = None
    item_id: int | None = None
    start_date: dt.date | None = None
    end_date: dt.date | None = None


class ReportRowOut(BaseModel):
    transaction_type: TransactionType
    id: int
    date: dt.date
    item_id: int | None
    item_name: str | None
    season_id: int
    season_name: str | None
    quantity: int | None
    unit_price: Decimal | None
    total_amount: Decimal
    party_name: str


class ReportSummaryOut(BaseModel):
    total_purchases: Decimal
    total_sales: Decimal
    total_expenses: Decimal
    profit: Decimal
    transaction_count: int


class ReportOut(BaseModel):
    transactions: list[ReportRowOut]
    purchases: list[ReportRowOut]
    sales: list[ReportRowOut]
    expenses: list[ReportRowOut]
    summary: ReportSummaryOut
    filters: ReportFilters


class DashboardSummaryOut(BaseModel):
    season_id: int | None
    total_purchases: Decimal
    total_sales: Decimal
    total_expenses: Decimal
    total_stock_quantity: int
    profit: Decimal


class SeasonItemsCountOut(BaseModel):
    season_id: int
    total_items: int
