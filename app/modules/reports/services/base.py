"""
Base service class for Reports module

Provides the session handle, reporting-period resolution and the base
queries shared by all report services. Revenue is always counted from
active invoices in status Paid.
"""

from datetime import date, datetime
from typing import List, Optional, Tuple

from sqlalchemy import and_
from sqlalchemy.orm import Session

from app.common.dates import business_now, period_start, to_business_date
from app.modules.invoices.models import Invoice, InvoiceStatus
from app.modules.jobs.models import Job

MONTH_NAMES = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]
DAY_NAMES = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


class BaseReportService:
    """Base service class for all report services"""

    def __init__(self, db: Session, now: Optional[datetime] = None):
        self.db = db
        self.now = business_now(now)

    def _date_range(self, period: str) -> Tuple[datetime, datetime]:
        """[start, now] of a reporting period"""
        return period_start(period, self.now), self.now

    def _get_paid_invoice_query(self):
        """Get base query for revenue-bearing invoices"""
        return self.db.query(Invoice).filter(
            Invoice.status == InvoiceStatus.PAID.value,
            Invoice.is_active,
        )

    def _get_base_job_query(self):
        return self.db.query(Job).filter(Job.is_active)

    def _apply_date_filter(self, query, date_field, start: datetime, end: datetime):
        """Apply date range filter to a query"""
        return query.filter(and_(date_field >= start, date_field <= end))

    def _paid_invoices_since(self, start: datetime) -> List[Invoice]:
        return self._get_paid_invoice_query().filter(Invoice.date >= start).all()

    @staticmethod
    def _business_date(value: datetime) -> date:
        return to_business_date(value)

    @staticmethod
    def _money(value) -> float:
        return float(value or 0)
