from fastapi import APIRouter, Depends

from app.common.permissions import Actor
from app.common.schemas import ApiResponse, ok
from app.dependencies.dbDependecies import db_dependency
from app.modules.auth.dependencies import get_actor
from app.modules.dashboard.service import DashboardService
from app.modules.reports.schemas import DashboardSummary

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/summary", response_model=ApiResponse[DashboardSummary])
async def get_dashboard_summary(db: db_dependency, actor: Actor = Depends(get_actor)):
    """Indicadores del día para el tablero principal"""
    return ok(DashboardService(db).get_summary())
