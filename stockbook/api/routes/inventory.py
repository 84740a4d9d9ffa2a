from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from stockbook.api.deps import require_admin, require_authenticated
from stockbook.core.policy import Identity
from stockbook.db.database import get_db
from stockbook.schemas.common import ApiResponse
from stockbook.schemas.inventory import (
    ExpenseCreate,
    ExpenseOut,
    ItemCreate,
    ItemOut,
    PurchaseCreate,
    PurchaseOut,
    SaleCreate,
    SaleOut,
    SeasonCreate,
    SeasonOut,
)
from stockbook.services import expenses, purchases, sales, seasons, stock_ledger

router = APIRouter(prefix="/api", tags=["Inventory"])


@router.get("/items", response_model=ApiResponse[list[ItemOut]])
def list_items(
    _: Identity = Depends(require_authenticated),
    db: Session = Depends(get_db),
):
    return ApiResponse(data=stock_ledger.list_items(db))


@router.post("/items", response_model=ApiResponse[ItemOut], status_code=status.HTTP_201_CREATED)
def create_item(
    payload: ItemCreate,
    _: Identity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return ApiResponse(data=stock_ledger.create_item(db, payload))


@router.delete("/items/{item_id}", response_model=ApiResponse[ItemOut])
def delete_item(
    item_id: int,
    _: Identity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return ApiResponse(msg="Item deleted successfully", data=stock_ledger.delete_item(db, item_id))


@router.get("/purchases", response_model=ApiResponse[list[PurchaseOut]])
def list_purchases(
    _: Identity = Depends(require_authenticated),
    db: Session = Depends(get_db),
):
    return ApiResponse(data=purchases.list_purchases(db))


@router.post("/purchases", response_model=ApiResponse[PurchaseOut], status_code=status.HTTP_201_CREATED)
def create_purchase(
    payload: PurchaseCreate,
    _: Identity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return ApiResponse(data=purchases.create_purchase(db, payload))


@router.delete("/purchases/{purchase_id}", response_model=ApiResponse[PurchaseOut])
def delete_purchase(
    purchase_id: int,
    _: Identity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return ApiResponse(msg="Purchase deleted successfully", data=purchases.delete_purchase(db, purchase_id))


@router.get("/sales", response_model=ApiResponse[list[SaleOut]])
def list_sales(
    _: Identity = Depends(require_authenticated),
    db: Session = Depends(get_db),
):
    return ApiResponse(data=sales.list_sales(db))


@router.post("/sales", response_model=ApiResponse[SaleOut], status_code=status.HTTP_201_CREATED)
def create_sale(
    payload: SaleCreate,
    _: Identity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return ApiResponse(data=sales.create_sale(db, payload))


@router.delete("/sales/{sale_id}", response_model=ApiResponse[SaleOut])
def delete_sale(
    sale_id: int,
    _: Identity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return ApiResponse(msg="Sale deleted successfully", data=sales.delete_sale(db, sale_id))


@router.get("/expenses", response_model=ApiResponse[list[ExpenseOut]])
def list_expenses(
    _: Identity = Depends(require_authenticated),
    db: Session = Depends(get_db),
):
    return ApiResponse(data=expenses.list_expenses(db))


@router.post("/expenses", response_model=ApiResponse[ExpenseOut], status_code=status.HTTP_201_CREATED)
def create_expense(
    payload: ExpenseCreate,
    _: Identity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return ApiResponse(data=expenses.create_expense(db, payload))


@router.delete("/expenses/{expense_id}", response_model=ApiResponse[ExpenseOut])
def delete_expense(
    expense_id: int,
    _: Identity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return ApiResponse(msg="Expense deleted successfully", data=expenses.delete_expense(db, expense_id))


@router.get("/seasons", response_model=ApiResponse[list[SeasonOut]])
def list_seasons(
    _: Identity = Depends(require_authenticated),
    db: Session = Depends(get_db),
):
    return ApiResponse(data=seasons.list_seasons(db))


@router.post("/seasons", response_model=ApiResponse[SeasonOut], status_code=status.HTTP_201_CREATED)
def create_season(
    payload: SeasonCreate,
    _: Identity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return ApiResponse(data=seasons.create_season(db, payload))


@router.delete("/seasons/{season_id}", response_model=ApiResponse[SeasonOut])
def delete_season(
    season_id: int,
    _: Identity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return ApiResponse(msg="Season deleted successfully", data=seasons.delete_season(db, season_id))
