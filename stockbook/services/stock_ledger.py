"""Item catalog and the on-hand quantity counter.

``adjust_stock`` is the only writer of ``Item.stock_quantity`` once an item
exists. It must run inside the same transaction as the purchase or sale row
that triggers it; callers are responsible for any sufficiency check.
"""

import logging

from sqlalchemy import exists, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from stockbook.core.errors import DuplicateItem, ItemInUse, ItemNotFound
from stockbook.db.database import atomic
from stockbook.models.inventory import Expense, Item, Purchase, Sale
from stockbook.schemas.inventory import ItemCreate, ItemOut

logger = logging.getLogger(__name__)


def adjust_stock(db: Session, item_id: int, delta: int) -> None:
    result = db.execute(
        update(Item)
        .where(Item.id == item_id)
        .values(stock_quantity=Item.stock_quantity + delta)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        raise ItemNotFound()
    logger.debug("stock adjusted item_id=%s delta=%+d", item_id, delta)


def current_stock(db: Session, item_id: int, *, lock: bool = False) -> int:
    query = select(Item.stock_quantity).where(Item.id == item_id)
    if lock:
        query = query.with_for_update()
    quantity = db.scalar(query)
    if quantity is None:
        raise ItemNotFound()
    return int(quantity)


def get_item(db: Session, item_id: int, *, lock: bool = False) -> Item:
    query = select(Item).where(Item.id == item_id)
    if lock:
        query = query.with_for_update()
    item = db.scalar(query)
    if not item:
        raise ItemNotFound()
    return item


def list_items(db: Session) -> list[ItemOut]:
    items = db.scalars(select(Item).order_by(Item.item_name.asc())).all()
    return [ItemOut.model_validate(item) for item in items]


def create_item(db: Session, payload: ItemCreate) -> ItemOut:
    try:
        with atomic(db):
            existing = db.scalar(select(Item.id).where(func.lower(Item.item_name) == payload.item_name.lower()))
            if existing is not None:
                raise DuplicateItem()
            item = Item(item_name=payload.item_name, stock_quantity=payload.stock_quantity)
            db.add(item)
            db.flush()
            result = ItemOut.model_validate(item)
    except IntegrityError as exc:
        raise DuplicateItem() from exc
    logger.info("item created id=%s name=%r opening_stock=%s", result.id, result.item_name, result.stock_quantity)
    return result


def item_in_use(db: Session, item_id: int) -> bool:
    return bool(
        db.scalar(
            select(
                exists().where(Purchase.item_id == item_id)
                | exists().where(Sale.item_id == item_id)
                | exists().where(Expense.item_id == item_id)
            )
        )
    )


def delete_item(db: Session, item_id: int) -> ItemOut:
    with atomic(db):
        item = get_item(db, item_id, lock=True)
        if item_in_use(db, item_id):
            logger.info("item delete blocked id=%s: referenced by transactions", item_id)
            raise ItemInUse()
        result = ItemOut.model_validate(item)
        db.delete(item)
    logger.info("item deleted id=%s", item_id)
    return result
