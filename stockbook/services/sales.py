import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from stockbook.core.errors import InsufficientStock, NotFound
from stockbook.db.database import atomic
from stockbook.models.inventory import Sale
from stockbook.schemas.inventory import SaleCreate, SaleOut
from stockbook.services.seasons import get_season
from stockbook.services.stock_ledger import adjust_stock, current_stock

logger = logging.getLogger(__name__)


def list_sales(db: Session) -> list[SaleOut]:
    sales = db.scalars(select(Sale).order_by(Sale.date.desc(), Sale.id.desc())).all()
    return [SaleOut.model_validate(sale) for sale in sales]


def create_sale(db: Session, payload: SaleCreate) -> SaleOut:
    with atomic(db):
        # Row lock holds the item until commit so concurrent sales serialize here.
        available = current_stock(db, payload.item_id, lock=True)
        get_season(db, payload.season_id)
        if payload.quantity > available:
            logger.info(
                "sale rejected item_id=%s requested=%s available=%s",
                payload.item_id,
                payload.quantity,
                available,
            )
            raise InsufficientStock(available, payload.quantity)
        sale = Sale(
            date=payload.date,
            item_id=payload.item_id,
            season_id=payload.season_id,
            quantity=payload.quantity,
            unit_price=payload.unit_price,
            customer_name=payload.customer_name,
        )
        db.add(sale)
        db.flush()
        adjust_stock(db, sale.item_id, -sale.quantity)
        result = SaleOut.model_validate(sale)
    logger.info("sale created id=%s item_id=%s quantity=%s", result.id, result.item_id, result.quantity)
    return result


def delete_sale(db: Session, sale_id: int) -> SaleOut:
    with atomic(db):
        sale = db.get(Sale, sale_id)
        if not sale:
            raise NotFound("Sale not found")
        result = SaleOut.model_validate(sale)
        adjust_stock(db, sale.item_id, sale.quantity)
        db.delete(sale)
    logger.info("sale deleted id=%s item_id=%s quantity=%s", result.id, result.item_id, result.quantity)
    return result
