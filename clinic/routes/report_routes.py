from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import Optional

from ..database import get_db
from ..schemas import ReportOverview, DashboardStats
from ..services import ReportService

router = APIRouter()

@router.get("/dashboard/stats", response_model=DashboardStats)
def dashboard_stats(db: Session = Depends(get_db)):
    return ReportService.dashboard_stats(db)

@router.get("/reports", response_model=ReportOverview)
def monthly_reports(month: Optional[str] = None, db: Session = Depends(get_db)):
    return ReportService.report_overview(db, month)
