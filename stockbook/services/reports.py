"""Read-only aggregation over purchases, sales and expenses."""

from decimal import Decimal

from sqlalchemy import Integer, Numeric, String, cast, func, literal, null, select, union, union_all
from sqlalchemy.orm import Session

from stockbook.core.errors import ValidationError
from stockbook.models.inventory import Expense, Item, Purchase, Sale, Season
from stockbook.schemas.report import (
    DashboardSummaryOut,
    ReportFilters,
    ReportOut,
    ReportRowOut,
    ReportSummaryOut,
    SeasonItemsCountOut,
)

ZERO = Decimal("0")
# Wide enough for int4 quantity times a Numeric(12, 2) price.
AMOUNT = Numeric(22, 2)


def _combined_transactions():
    purchases = (
        select(
            literal("purchase", String).label("transaction_type"),
            Purchase.id.label("id"),
            Purchase.date.label("date"),
            Purchase.item_id.label("item_id"),
            Item.item_name.label("item_name"),
            Purchase.season_id.label("season_id"),
            Season.season_name.label("season_name"),
            Purchase.quantity.label("quantity"),
            Purchase.unit_price.label("unit_price"),
            cast(Purchase.quantity * Purchase.unit_price, AMOUNT).label("total_amount"),
            Purchase.vendor_name.label("party_name"),
        )
        .select_from(Purchase)
        .outerjoin(Item, Purchase.item_id == Item.id)
        .outerjoin(Season, Purchase.season_id == Season.id)
    )
    sales = (
        select(
            literal("sale", String),
            Sale.id,
            Sale.date,
            Sale.item_id,
            Item.item_name,
            Sale.season_id,
            Season.season_name,
            Sale.quantity,
            Sale.unit_price,
            cast(Sale.quantity * Sale.unit_price, AMOUNT),
            Sale.customer_name,
        )
        .select_from(Sale)
        .outerjoin(Item, Sale.item_id == Item.id)
        .outerjoin(Season, Sale.season_id == Season.id)
    )
    expenses = (
        select(
            literal("expense", String),
            Expense.id,
            Expense.date,
            Expense.item_id,
            Item.item_name,
            Expense.season_id,
            Season.season_name,
            cast(null(), Integer),
            cast(null(), Numeric(12, 2)),
            cast(Expense.amount, AMOUNT),
            Expense.description,
        )
        .select_from(Expense)
        .outerjoin(Item, Expense.item_id == Item.id)
        .outerjoin(Season, Expense.season_id == Season.id)
    )
    return union_all(purchases, sales, expenses).subquery("combined_transactions")


def build_report(db: Session, filters: ReportFilters) -> ReportOut:
    combined = _combined_transactions()
    query = select(combined)
    if filters.season_id is not None:
        query = query.where(combined.c.season_id == filters.season_id)
    if filters.item_id is not None:
        query = query.where(combined.c.item_id == filters.item_id)
    if filters.start_date is not None:
        query = query.where(combined.c.date >= filters.start_date)
    if filters.end_date is not None:
        query = query.where(combined.c.date <= filters.end_date)
    query = query.order_by(combined.c.date.desc(), combined.c.id.desc())

    rows = [ReportRowOut.model_validate(dict(row._mapping)) for row in db.execute(query)]

    buckets: dict[str, list[ReportRowOut]] = {"purchase": [], "sale": [], "expense": []}
    totals: dict[str, Decimal] = {"purchase": ZERO, "sale": ZERO, "expense": ZERO}
    for row in rows:
        buckets[row.transaction_type].append(row)
        totals[row.transaction_type] += row.total_amount

    summary = ReportSummaryOut(
        total_purchases=totals["purchase"],
        total_sales=totals["sale"],
        total_expenses=totals["expense"],
        profit=totals["sale"] - (totals["purchase"] + totals["expense"]),
        transaction_count=len(rows),
    )
    return ReportOut(
        transactions=rows,
        purchases=buckets["purchase"],
        sales=buckets["sale"],
        expenses=buckets["expense"],
        summary=summary,
        filters=filters,
    )


def dashboard_summary(db: Session, season_id: int | None = None) -> DashboardSummaryOut:
    purchase_total = select(func.coalesce(func.sum(Purchase.quantity * Purchase.unit_price), 0))
    sale_total = select(func.coalesce(func.sum(Sale.quantity * Sale.unit_price), 0))
    expense_total = select(func.coalesce(func.sum(Expense.amount), 0))
    if season_id is not None:
        purchase_total = purchase_total.where(Purchase.season_id == season_id)
        sale_total = sale_total.where(Sale.season_id == season_id)
        expense_total = expense_total.where(Expense.season_id == season_id)

    total_purchases = Decimal(str(db.scalar(purchase_total) or 0))
    total_sales = Decimal(str(db.scalar(sale_total) or 0))
    total_expenses = Decimal(str(db.scalar(expense_total) or 0))
    # Stock is a point-in-time figure and is never scoped to a season.
    total_stock = int(db.scalar(select(func.coalesce(func.sum(Item.stock_quantity), 0))) or 0)

    return DashboardSummaryOut(
        season_id=season_id,
        total_purchases=total_purchases,
        total_sales=total_sales,
        total_expenses=total_expenses,
        total_stock_quantity=total_stock,
        profit=total_sales - (total_purchases + total_expenses),
    )


def season_items_count(db: Session, season_id: int | None) -> SeasonItemsCountOut:
    if season_id is None:
        raise ValidationError("season_id is required")
    season_items = union(
        select(Purchase.item_id).where(Purchase.season_id == season_id),
        select(Sale.item_id).where(Sale.season_id == season_id),
    ).subquery("season_items")
    total = db.scalar(select(func.count(func.distinct(season_items.c.item_id)))) or 0
    return SeasonItemsCountOut(season_id=season_id, total_items=int(total))
