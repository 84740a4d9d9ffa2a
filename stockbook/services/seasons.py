import logging

from sqlalchemy import exists, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from stockbook.core.errors import DuplicateSeason, SeasonInUse, SeasonNotFound
from stockbook.db.database import atomic
from stockbook.models.inventory import Expense, Purchase, Sale, Season
from stockbook.schemas.inventory import SeasonCreate, SeasonOut

logger = logging.getLogger(__name__)


def get_season(db: Session, season_id: int, *, lock: bool = False) -> Season:
    query = select(Season).where(Season.id == season_id)
    if lock:
        query = query.with_for_update()
    season = db.scalar(query)
    if not season:
        raise SeasonNotFound()
    return season


def list_seasons(db: Session) -> list[SeasonOut]:
    seasons = db.scalars(select(Season).order_by(Season.id.desc())).all()
    return [SeasonOut.model_validate(season) for season in seasons]


def create_season(db: Session, payload: SeasonCreate) -> SeasonOut:
    try:
        with atomic(db):
            existing = db.scalar(
                select(Season.id).where(func.lower(Season.season_name) == payload.season_name.lower())
            )
            if existing is not None:
                raise DuplicateSeason()
            season = Season(season_name=payload.season_name)
            db.add(season)
            db.flush()
            result = SeasonOut.model_validate(season)
    except IntegrityError as exc:
        raise DuplicateSeason() from exc
    logger.info("season created id=%s name=%r", result.id, result.season_name)
    return result


def season_in_use(db: Session, season_id: int) -> bool:
    return bool(
        db.scalar(
            select(
                exists().where(Purchase.season_id == season_id)
                | exists().where(Sale.season_id == season_id)
                | exists().where(Expense.season_id == season_id)
            )
        )
    )


def delete_season(db: Session, season_id: int) -> SeasonOut:
    with atomic(db):
        season = get_season(db, season_id, lock=True)
        if season_in_use(db, season_id):
            logger.info("season delete blocked id=%s: referenced by transactions", season_id)
            raise SeasonInUse()
        result = SeasonOut.model_validate(season)
        db.delete(season)
    logger.info("season deleted id=%s", season_id)
    return result
