"""
Operational Reports Service

Servicios más solicitados y desempeño diario.
"""

from datetime import timedelta
from typing import Dict, List

from sqlalchemy import desc, func

from app.common.dates import business_day_bounds
from app.modules.jobs.models import Job
from .base import BaseReportService, DAY_NAMES


class PerformanceReportService(BaseReportService):
    """Service for job and daily performance reports"""

    def get_popular_services(self, period: str = "month", limit: int = 10) -> List[Dict]:
        """Títulos de órdenes de trabajo más frecuentes en el periodo"""
        start, end = self._date_range(period)
        count = func.count(Job.id).label("count")
        query = self.db.query(Job.title, count, func.coalesce(func.sum(Job.amount), 0)).filter(Job.is_active)
        query = self._apply_date_filter(query, Job.created_at, start, end)
        rows = query.group_by(Job.title).order_by(desc(count)).limit(limit).all()

        return [
            {"service": title or "Unknown Service", "count": total, "revenue": self._money(revenue)}
            for title, total, revenue in rows
        ]

    def get_daily_performance(self, days: int = 14) -> List[Dict]:
        """
        Ingresos y trabajos facturados por día de negocio, del más antiguo a hoy.
        Un trabajo cuenta cuando una factura pagada lo referencia.
        """
        today = self.now.date()
        first_day = today - timedelta(days=days - 1)
        start, _ = business_day_bounds(first_day)

        revenue: Dict = {}
        jobs: Dict = {}
        for invoice in self._paid_invoices_since(start):
            day = self._business_date(invoice.date)
            revenue[day] = revenue.get(day, 0.0) + self._money(invoice.amount)
            if invoice.job_id:
                jobs[day] = jobs.get(day, 0) + 1

        data = []
        for offset in range(days - 1, -1, -1):
            day = today - timedelta(days=offset)
            data.append({
                "day": DAY_NAMES[day.weekday()],
                "date": day.isoformat(),
                "jobs": jobs.get(day, 0),
                "revenue": revenue.get(day, 0.0),
            })
        return data
