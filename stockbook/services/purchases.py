import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from stockbook.core.errors import NotFound
from stockbook.db.database import atomic
from stockbook.models.inventory import Purchase
from stockbook.schemas.inventory import PurchaseCreate, PurchaseOut
from stockbook.services.seasons import get_season
from stockbook.services.stock_ledger import adjust_stock, get_item

logger = logging.getLogger(__name__)


def list_purchases(db: Session) -> list[PurchaseOut]:
    purchases = db.scalars(select(Purchase).order_by(Purchase.date.desc(), Purchase.id.desc())).all()
    return [PurchaseOut.model_validate(purchase) for purchase in purchases]


def create_purchase(db: Session, payload: PurchaseCreate) -> PurchaseOut:
    with atomic(db):
        get_item(db, payload.item_id)
        get_season(db, payload.season_id)
        purchase = Purchase(
            date=payload.date,
            item_id=payload.item_id,
            season_id=payload.season_id,
            quantity=payload.quantity,
            unit_price=payload.unit_price,
            vendor_name=payload.vendor_name,
        )
        db.add(purchase)
        db.flush()
        adjust_stock(db, purchase.item_id, purchase.quantity)
        result = PurchaseOut.model_validate(purchase)
    logger.info("purchase created id=%s item_id=%s quantity=%s", result.id, result.item_id, result.quantity)
    return result


def delete_purchase(db: Session, purchase_id: int) -> PurchaseOut:
    with atomic(db):
        purchase = db.get(Purchase, purchase_id)
        if not purchase:
            raise NotFound("Purchase not found")
        result = PurchaseOut.model_validate(purchase)
        adjust_stock(db, purchase.item_id, -purchase.quantity)
        db.delete(purchase)
    logger.info("purchase deleted id=%s item_id=%s quantity=%s", result.id, result.item_id, result.quantity)
    return result
