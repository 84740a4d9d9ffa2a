import logging
from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session

from stockbook.core.errors import NotFound
from stockbook.db.database import atomic
from stockbook.models.inventory import Expense
from stockbook.schemas.inventory import ExpenseCreate, ExpenseOut
from stockbook.services.seasons import get_season
from stockbook.services.stock_ledger import get_item

logger = logging.getLogger(__name__)


def list_expenses(db: Session) -> list[ExpenseOut]:
    expenses = db.scalars(select(Expense).order_by(Expense.date.desc(), Expense.id.desc())).all()
    return [ExpenseOut.model_validate(expense) for expense in expenses]


def create_expense(db: Session, payload: ExpenseCreate) -> ExpenseOut:
    with atomic(db):
        get_season(db, payload.season_id)
        if payload.item_id is not None:
            get_item(db, payload.item_id)
        expense = Expense(
            date=payload.date or date.today(),
            expense_type=payload.expense_type,
            linked_transaction_id=payload.linked_transaction_id,
            item_id=payload.item_id,
            amount=payload.amount,
            description=payload.description,
            season_id=payload.season_id,
        )
        db.add(expense)
        db.flush()
        result = ExpenseOut.model_validate(expense)
    logger.info("expense created id=%s type=%r amount=%s", result.id, result.expense_type, result.amount)
    return result


def delete_expense(db: Session, expense_id: int) -> ExpenseOut:
    with atomic(db):
        expense = db.get(Expense, expense_id)
        if not expense:
            raise NotFound("Expense not found")
        result = ExpenseOut.model_validate(expense)
        db.delete(expense)
    logger.info("expense deleted id=%s", expense_id)
    return result
