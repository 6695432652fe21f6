"""
Financial Reports Service

Ingresos por periodo, por método de pago y tendencia mensual.
"""

from collections import OrderedDict
from typing import Dict, List

from sqlalchemy import func

from app.common.dates import business_day_bounds, month_start
from app.modules.invoices.models import Invoice, InvoiceStatus, PaymentMethod
from .base import BaseReportService, MONTH_NAMES

PAYMENT_COLORS = {
    PaymentMethod.CASH.value: "#b91c1c",
    PaymentMethod.CARD.value: "#c53032",
    PaymentMethod.ONLINE_TRANSFER.value: "#f87171",
    PaymentMethod.CHEQUE.value: "#dc2626",
    PaymentMethod.OTHER.value: "#991b1b",
}


class FinancialReportService(BaseReportService):
    """Service for financial reports"""

    def _revenue_by_method(self, period: str) -> List[tuple]:
        start, end = self._date_range(period)
        query = self.db.query(
            Invoice.payment_method,
            func.coalesce(func.sum(Invoice.amount), 0),
            func.count(Invoice.id),
        ).filter(
            Invoice.status == InvoiceStatus.PAID.value,
            Invoice.is_active,
        )
        query = self._apply_date_filter(query, Invoice.date, start, end)
        return query.group_by(Invoice.payment_method).all()

    def get_financial_overview(self, period: str = "month") -> Dict:
        """
        Totales de facturas pagadas en el periodo, desglosados por canal.
        Sin registro de gastos, la utilidad neta es igual al ingreso.
        """
        by_method: Dict[str, float] = {}
        for method, total, _ in self._revenue_by_method(period):
            key = method or PaymentMethod.OTHER.value
            by_method[key] = by_method.get(key, 0) + self._money(total)

        total_revenue = sum(by_method.values())
        return {
            "total_revenue": total_revenue,
            "card_payments": by_method.get(PaymentMethod.CARD.value, 0),
            "cash_payments": by_method.get(PaymentMethod.CASH.value, 0),
            "online_payments": by_method.get(PaymentMethod.ONLINE_TRANSFER.value, 0),
            "other_payments": by_method.get(PaymentMethod.OTHER.value, 0),
            "net_profit": total_revenue,
            "profit_margin": 100.0 if total_revenue > 0 else 0.0,
            "period": period,
        }

    def get_payment_methods(self, period: str = "month") -> List[Dict]:
        rows = self._revenue_by_method(period)
        total = sum(self._money(amount) for _, amount, _ in rows)

        data = []
        for method, amount, count in rows:
            name = method or PaymentMethod.OTHER.value
            amount = self._money(amount)
            data.append({
                "name": name,
                "value": round(amount / total * 100) if total > 0 else 0,
                "amount": amount,
                "count": count,
                "color": PAYMENT_COLORS.get(name, PAYMENT_COLORS[PaymentMethod.OTHER.value]),
            })
        return data

    def get_revenue_trend(self, months: int = 6) -> List[Dict]:
        """
        Ingresos por mes (en la zona del negocio), del más antiguo al actual.
        La utilidad se estima con un margen fijo del 50%.
        """
        first_day = month_start(self.now.date(), months)
        start, _ = business_day_bounds(first_day)

        buckets: "OrderedDict[tuple, Dict]" = OrderedDict()
        invoices = sorted(self._paid_invoices_since(start), key=lambda inv: self._business_date(inv.date))
        for invoice in invoices:
            day = self._business_date(invoice.date)
            bucket = buckets.setdefault((day.year, day.month), {"revenue": 0.0, "count": 0})
            bucket["revenue"] += self._money(invoice.amount)
            bucket["count"] += 1

        return [
            {
                "month": MONTH_NAMES[month - 1],
                "revenue": bucket["revenue"],
                "profit": bucket["revenue"] * 0.5,
                "count": bucket["count"],
            }
            for (year, month), bucket in buckets.items()
        ]
