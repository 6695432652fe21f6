"""
Resumen del tablero principal
"""
from sqlalchemy import func

from app.common.dates import business_day_bounds
from app.modules.customers.models import Customer
from app.modules.invoices.models import Invoice
from app.modules.jobs.models import Job, JobStatus
from app.modules.reports.services.base import BaseReportService


class DashboardService(BaseReportService):

    def get_summary(self) -> dict:
        """
        Trabajos creados hoy, trabajos por estado, clientes activos e
        ingresos del día de negocio actual.
        """
        start, end = business_day_bounds(self.now.date())

        today_jobs = self._get_base_job_query().filter(Job.created_at >= start, Job.created_at < end).count()

        counts = dict(
            self.db.query(Job.status, func.count(Job.id)).filter(Job.is_active).group_by(Job.status).all()
        )
        jobs_by_status = {status.name.lower(): counts.get(status.value, 0) for status in JobStatus}

        total_customers = self.db.query(Customer).filter(Customer.is_active).count()

        today_revenue = self._get_paid_invoice_query().filter(
            Invoice.date >= start, Invoice.date < end
        ).with_entities(func.coalesce(func.sum(Invoice.amount), 0)).scalar()

        return {
            "today_jobs": today_jobs,
            "jobs_by_status": jobs_by_status,
            "total_customers": total_customers,
            "today_revenue": self._money(today_revenue),
        }
