"""
Tests para reportes financieros y de desempeño
"""
from datetime import datetime, timezone

import pytest

from app.modules.invoices.models import Invoice
from app.modules.jobs.models import Job
from app.modules.reports.services import FinancialReportService, PerformanceReportService

NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def add_invoice(db_session, sample_customer):
    counter = {"n": 0}

    def _add_invoice(amount, when, status="Paid", method="Cash", job=None):
        counter["n"] += 1
        invoice = Invoice(
            customer_id=sample_customer.id,
            job_id=job.id if job else None,
            invoice_number=f"INV-{counter['n']:06d}",
            date=when,
            items=[{"description": "Service", "quantity": 1, "price": amount}],
            subtotal=amount,
            amount=amount,
            status=status,
            payment_method=method,
        )
        db_session.add(invoice)
        db_session.commit()
        return invoice
    return _add_invoice


@pytest.fixture
def add_job(db_session, sample_customer):
    def _add_job(title, when, amount=0):
        job = Job(
            customer_id=sample_customer.id,
            vehicle={"make": "Toyota", "model": "Corolla"},
            title=title,
            amount=amount,
            created_at=when,
        )
        db_session.add(job)
        db_session.commit()
        return job
    return _add_job


class TestFinancialReports:

    def test_overview_counts_paid_invoices_only(self, db_session, add_invoice):
        add_invoice(1000, datetime(2024, 6, 2, tzinfo=timezone.utc), method="Cash")
        add_invoice(3000, datetime(2024, 6, 3, tzinfo=timezone.utc), method="Card/POS")
        add_invoice(9999, datetime(2024, 6, 4, tzinfo=timezone.utc), status="Pending")
        add_invoice(500, datetime(2024, 5, 20, tzinfo=timezone.utc))

        overview = FinancialReportService(db_session, now=NOW).get_financial_overview("month")
        assert overview["total_revenue"] == 4000
        assert overview["cash_payments"] == 1000
        assert overview["card_payments"] == 3000
        assert overview["net_profit"] == 4000
        assert overview["profit_margin"] == 100.0

    def test_overview_empty_period(self, db_session):
        overview = FinancialReportService(db_session, now=NOW).get_financial_overview("today")
        assert overview["total_revenue"] == 0
        assert overview["profit_margin"] == 0.0

    def test_payment_method_shares(self, db_session, add_invoice):
        add_invoice(1000, datetime(2024, 6, 2, tzinfo=timezone.utc), method="Cash")
        add_invoice(3000, datetime(2024, 6, 3, tzinfo=timezone.utc), method="Online Transfer")

        methods = {m["name"]: m for m in FinancialReportService(db_session, now=NOW).get_payment_methods("month")}
        assert methods["Cash"]["value"] == 25
        assert methods["Online Transfer"]["value"] == 75
        assert methods["Online Transfer"]["count"] == 1

    def test_revenue_trend_buckets_by_business_month(self, db_session, add_invoice):
        add_invoice(1000, datetime(2024, 5, 10, tzinfo=timezone.utc))
        add_invoice(3000, datetime(2024, 6, 1, 6, 0, tzinfo=timezone.utc))
        # 20:00 UTC on May 31 is already June 1 in the workshop's timezone
        add_invoice(500, datetime(2024, 5, 31, 20, 0, tzinfo=timezone.utc))

        trend = FinancialReportService(db_session, now=NOW).get_revenue_trend(6)
        assert trend == [
            {"month": "May", "revenue": 1000.0, "profit": 500.0, "count": 1},
            {"month": "Jun", "revenue": 3500.0, "profit": 1750.0, "count": 2},
        ]


class TestPerformanceReports:

    def test_popular_services(self, db_session, add_job):
        for _ in range(3):
            add_job("Oil Change", datetime(2024, 6, 5, tzinfo=timezone.utc), amount=2000)
        add_job("Tuning", datetime(2024, 6, 6, tzinfo=timezone.utc), amount=5000)
        add_job("Tuning", datetime(2023, 1, 1, tzinfo=timezone.utc))

        popular = PerformanceReportService(db_session, now=NOW).get_popular_services("month")
        assert popular[0] == {"service": "Oil Change", "count": 3, "revenue": 6000.0}
        assert popular[1]["count"] == 1

    def test_daily_performance(self, db_session, add_invoice, add_job):
        job = add_job("Brake Service", datetime(2024, 6, 14, tzinfo=timezone.utc))
        add_invoice(2500, datetime(2024, 6, 14, 8, 0, tzinfo=timezone.utc), job=job)
        add_invoice(700, datetime(2024, 6, 15, 8, 0, tzinfo=timezone.utc))

        daily = PerformanceReportService(db_session, now=NOW).get_daily_performance(3)
        assert [d["date"] for d in daily] == ["2024-06-13", "2024-06-14", "2024-06-15"]
        assert daily[1] == {"day": "Fri", "date": "2024-06-14", "jobs": 1, "revenue": 2500.0}
        assert daily[2]["jobs"] == 0
        assert daily[2]["revenue"] == 700.0


class TestReportRoutes:

    def test_routes_require_auth(self, client):
        assert client.get("/api/reports/financial-overview").status_code == 401

    def test_invalid_period(self, client, admin_headers):
        response = client.get("/api/reports/financial-overview", params={"period": "decade"}, headers=admin_headers)
        assert response.status_code == 400

    def test_daily_performance_route(self, client, admin_headers):
        response = client.get("/api/reports/daily-performance", params={"days": 7}, headers=admin_headers)
        assert response.status_code == 200
        assert len(response.json()["data"]) == 7
