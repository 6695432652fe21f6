"""
Operational Reports Router
"""

from typing import List

from fastapi import APIRouter, Depends, Query

from app.common.permissions import Actor
from app.common.schemas import ApiResponse, ok
from app.dependencies.dbDependecies import db_dependency
from app.modules.auth.dependencies import get_actor
from ..services.performance import PerformanceReportService
from ..schemas import DailyPerformanceItem, PopularServiceItem, ReportPeriod


router = APIRouter(prefix="/reports", tags=["Reports"])


@router.get("/popular-services", response_model=ApiResponse[List[PopularServiceItem]])
async def get_popular_services(
    db: db_dependency,
    period: ReportPeriod = Query(ReportPeriod.MONTH),
    actor: Actor = Depends(get_actor),
):
    """Top 10 de títulos de trabajos en el periodo."""
    return ok(PerformanceReportService(db).get_popular_services(period.value))


@router.get("/daily-performance", response_model=ApiResponse[List[DailyPerformanceItem]])
async def get_daily_performance(
    db: db_dependency,
    days: int = Query(14, ge=1, le=90),
    actor: Actor = Depends(get_actor),
):
    return ok(PerformanceReportService(db).get_daily_performance(days))
