from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from stockbook.api.deps import require_authenticated
from stockbook.core.policy import Identity
from stockbook.db.database import get_db
from stockbook.schemas.common import ApiResponse
from stockbook.schemas.report import DashboardSummaryOut, ReportFilters, ReportOut, SeasonItemsCountOut
from stockbook.services import reports

router = APIRouter(prefix="/api", tags=["Reports"])


@router.get("/dashboard-summary", response_model=ApiResponse[DashboardSummaryOut])
def dashboard_summary(
    season_id: int | None = Query(default=None),
    _: Identity = Depends(require_authenticated),
    db: Session = Depends(get_db),
):
    return ApiResponse(data=reports.dashboard_summary(db, season_id))


@router.get("/report", response_model=ApiResponse[ReportOut])
def transaction_report(
    season_id: int | None = Query(default=None),
    item_id: int | None = Query(default=None),
    start_date: date | None = Query(default=None),
    end_date: date | None = Query(default=None),
    _: Identity = Depends(require_authenticated),
    db: Session = Depends(get_db),
):
    filters = ReportFilters(season_id=season_id, item_id=item_id, start_date=start_date, end_date=end_date)
    return ApiResponse(data=reports.build_report(db, filters))


@router.get("/season-items-count", response_model=ApiResponse[SeasonItemsCountOut])
def season_items_count(
    season_id: int | None = Query(default=None),
    _: Identity = Depends(require_authenticated),
    db: Session = Depends(get_db),
):
    return ApiResponse(data=reports.season_items_count(db, season_id))
