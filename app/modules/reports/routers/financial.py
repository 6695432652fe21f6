"""
Financial Reports Router

FastAPI router for revenue report endpoints.
"""

from typing import List

from fastapi import APIRouter, Depends, Query

from app.common.permissions import Actor
from app.common.schemas import ApiResponse, ok
from app.dependencies.dbDependecies import db_dependency
from app.modules.auth.dependencies import get_actor
from ..services.financial import FinancialReportService
from ..schemas import FinancialOverviewResponse, PaymentMethodItem, ReportPeriod, RevenueTrendItem


router = APIRouter(prefix="/reports", tags=["Reports"])


@router.get("/financial-overview", response_model=ApiResponse[FinancialOverviewResponse])
async def get_financial_overview(
    db: db_dependency,
    period: ReportPeriod = Query(ReportPeriod.MONTH, description="today | week | month | year"),
    actor: Actor = Depends(get_actor),
):
    """Ingresos de facturas pagadas en el periodo, por canal de pago."""
    return ok(FinancialReportService(db).get_financial_overview(period.value))


@router.get("/revenue-trend", response_model=ApiResponse[List[RevenueTrendItem]])
async def get_revenue_trend(
    db: db_dependency,
    months: int = Query(6, ge=1, le=36, description="Number of months back"),
    actor: Actor = Depends(get_actor),
):
    return ok(FinancialReportService(db).get_revenue_trend(months))


@router.get("/payment-methods", response_model=ApiResponse[List[PaymentMethodItem]])
async def get_payment_methods(
    db: db_dependency,
    period: ReportPeriod = Query(ReportPeriod.MONTH),
    actor: Actor = Depends(get_actor),
):
    """Participación porcentual de cada método de pago."""
    return ok(FinancialReportService(db).get_payment_methods(period.value))
