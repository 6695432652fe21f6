"""
Pydantic schemas for Reports module

Response models for all report endpoints (camelCase on the wire).
"""

from enum import Enum
from typing import List

from app.common.schemas import CamelModel


class ReportPeriod(str, Enum):
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


class FinancialOverviewResponse(CamelModel):
    """Revenue of paid invoices in the period"""
    total_revenue: float
    card_payments: float
    cash_payments: float
    online_payments: float
    other_payments: float
    net_profit: float
    profit_margin: float
    period: str


class RevenueTrendItem(CamelModel):
    month: str
    revenue: float
    profit: float
    count: int


class PaymentMethodItem(CamelModel):
    name: str
    value: int
    amount: float
    count: int
    color: str


class PopularServiceItem(CamelModel):
    service: str
    count: int
    revenue: float


class DailyPerformanceItem(CamelModel):
    day: str
    date: str
    jobs: int
    revenue: float


class JobsByStatus(CamelModel):
    pending: int = 0
    in_progress: int = 0
    completed: int = 0
    delivered: int = 0


class DashboardSummary(CamelModel):
    today_jobs: int
    jobs_by_status: JobsByStatus
    total_customers: int
    today_revenue: float


__all__ = [
    "ReportPeriod",
    "FinancialOverviewResponse",
    "RevenueTrendItem",
    "PaymentMethodItem",
    "PopularServiceItem",
    "DailyPerformanceItem",
    "JobsByStatus",
    "DashboardSummary",
]
