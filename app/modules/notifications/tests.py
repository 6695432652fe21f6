"""
Tests para recordatorios de servicio y envíos por email / WhatsApp
"""
from datetime import date, timedelta
from types import SimpleNamespace
from uuid import uuid4

import pytest

from app.common.dates import business_today
from app.modules.customers.models import Customer
from app.modules.notifications.models import Notification
from app.modules.notifications.service import (
    days_until, priority_for, service_type_for, whatsapp_reminder_text
)
from app.core.celery import celery_app
from app.modules.notifications.tasks import WorkerHandles, send_service_reminders_task, sweep_reminders


def _pair(vehicle):
    return {"customerId": str(vehicle.customer_id), "vehicleId": str(vehicle.id)}


@pytest.fixture
def overdue_vehicle(make_vehicle, sample_customer):
    return make_vehicle(sample_customer, plate_no="OLD-999", next_service=business_today() - timedelta(days=5))


class TestReminderRules:

    def test_priority_thresholds(self):
        assert priority_for(-2) == "high"
        assert priority_for(3) == "high"
        assert priority_for(7) == "medium"
        assert priority_for(8) == "low"

    def test_days_until(self):
        assert days_until(date(2024, 3, 10), today=date(2024, 3, 7)) == 3
        assert days_until(date(2024, 3, 1), today=date(2024, 3, 7)) == -6

    def test_service_type(self):
        today = date(2024, 6, 1)
        assert service_type_for(SimpleNamespace(oil_type="5W-30", last_service=None), today)[0] == "Oil Change"
        stale = SimpleNamespace(oil_type=None, last_service=date(2024, 1, 1))
        assert service_type_for(stale, today) == ("Oil Change", "droplet")
        recent = SimpleNamespace(oil_type=None, last_service=date(2024, 5, 1))
        assert service_type_for(recent, today) == ("General Service", "wrench")

    def test_whatsapp_text_mentions_overdue_days(self):
        customer = SimpleNamespace(name="Ahmed Khan")
        vehicle = SimpleNamespace(make="Toyota", model="Corolla", plate_no="ABC-123", next_service=date(2024, 3, 1))
        text = whatsapp_reminder_text("Momentum AutoWorks", customer, vehicle, -4)
        assert "overdue for service by *4 days*" in text
        assert "Hello Ahmed Khan" in text


class TestReminderViews:

    def test_list_orders_overdue_first(self, client, technician_headers, sample_vehicle, overdue_vehicle):
        data = client.get("/api/notifications", headers=technician_headers).json()["data"]
        assert [r["vehicle"]["plateNo"] for r in data] == ["OLD-999", "ABC-123"]
        assert data[0]["status"] == "overdue"
        assert data[0]["type"] == "service_overdue"
        assert data[1]["priority"] == "high"
        assert data[1]["daysUntil"] == 3
        assert data[1]["sent"] is False

    def test_vehicles_without_next_service_are_ignored(self, client, technician_headers, make_vehicle, sample_customer):
        make_vehicle(sample_customer, plate_no="NO-DATE")
        assert client.get("/api/notifications", headers=technician_headers).json()["data"] == []

    def test_stats(self, client, technician_headers, sample_vehicle, overdue_vehicle, make_vehicle, sample_customer):
        make_vehicle(sample_customer, plate_no="LATER-1", next_service=business_today() + timedelta(days=30))
        client.post("/api/notifications/send-email", json=_pair(sample_vehicle), headers=technician_headers)

        stats = client.get("/api/notifications/stats", headers=technician_headers).json()["data"]
        assert stats == {"pendingReminders": 2, "sentToday": 1, "overdueAlerts": 1, "scheduled": 2}

    def test_service_reminders(self, client, technician_headers, sample_vehicle, overdue_vehicle):
        data = client.get("/api/notifications/service-reminders", headers=technician_headers).json()["data"]
        assert data[0]["status"] == "Overdue"
        assert data[0]["vehicle"]["plate"] == "OLD-999"
        assert data[1]["priority"] == "High"
        assert data[1]["serviceType"] == "General Service"


class TestSending:

    def test_send_email(self, client, technician_headers, sample_vehicle, email_service):
        response = client.post("/api/notifications/send-email", json=_pair(sample_vehicle), headers=technician_headers)
        body = response.json()
        assert response.status_code == 200
        assert body["success"] is True
        assert body["data"]["emailSent"] is True
        assert body["data"]["status"] == "sent"
        assert email_service.sent[-1]["to"] == ["ahmed@example.com"]

    def test_sending_twice_keeps_one_record(self, client, technician_headers, sample_vehicle, db_session):
        client.post("/api/notifications/send-email", json=_pair(sample_vehicle), headers=technician_headers)
        client.post("/api/notifications/send-whatsapp", json=_pair(sample_vehicle), headers=technician_headers)
        records = db_session.query(Notification).all()
        assert len(records) == 1
        assert records[0].email_sent and records[0].whatsapp_sent

    def test_email_failure_is_recorded(self, client, technician_headers, sample_vehicle, email_service):
        email_service.fail = True
        response = client.post("/api/notifications/send-email", json=_pair(sample_vehicle), headers=technician_headers)
        body = response.json()
        assert response.status_code == 200
        assert body["success"] is False
        assert body["message"] == "Failed to send email"
        assert body["data"]["status"] == "failed"
        assert body["data"]["error"] == "SMTP server unavailable"

    def test_whatsapp_uses_international_number(self, client, technician_headers, sample_vehicle, twilio_client):
        response = client.post(
            "/api/notifications/send-whatsapp", json=_pair(sample_vehicle), headers=technician_headers
        )
        assert response.json()["success"] is True
        sent = twilio_client.messages.created[-1]
        assert sent["to"] == "whatsapp:+923001234567"
        assert "due for service in *3 days*" in sent["body"]

    def test_missing_email(self, client, technician_headers, sample_vehicle, db_session):
        customer = sample_vehicle.customer
        customer.email = None
        db_session.commit()
        response = client.post("/api/notifications/send-email", json=_pair(sample_vehicle), headers=technician_headers)
        assert response.status_code == 400
        assert response.json()["message"] == "Customer does not have an email address"

    def test_vehicle_of_another_customer_is_rejected(
        self, client, technician_headers, sample_vehicle, db_session, email_service
    ):
        other = Customer(name="Sara Malik", phone="03337654321", email="sara@example.com")
        db_session.add(other)
        db_session.commit()
        payload = {"customerId": str(other.id), "vehicleId": str(sample_vehicle.id)}

        response = client.post("/api/notifications/send-email", json=payload, headers=technician_headers)
        assert response.status_code == 400
        assert response.json()["message"] == "Vehicle does not belong to this customer"
        assert email_service.sent == []
        assert db_session.query(Notification).count() == 0

    def test_delivery_runs_off_the_event_loop(
        self, client, technician_headers, sample_vehicle, email_service, twilio_client
    ):
        client.post("/api/notifications/send-email", json=_pair(sample_vehicle), headers=technician_headers)
        client.post("/api/notifications/send-whatsapp", json=_pair(sample_vehicle), headers=technician_headers)
        assert email_service.sent[-1]["in_event_loop"] is False
        assert twilio_client.messages.created[-1]["in_event_loop"] is False

    def test_list_marks_delivered_reminders(self, client, technician_headers, sample_vehicle):
        client.post("/api/notifications/send-whatsapp", json=_pair(sample_vehicle), headers=technician_headers)
        reminder = client.get("/api/notifications", headers=technician_headers).json()["data"][0]
        assert reminder["sent"] is True
        assert reminder["status"] == "sent"
        assert reminder["whatsappSent"] is True
        assert reminder["emailSent"] is False

    def test_unknown_pair(self, client, technician_headers, sample_vehicle):
        payload = {"customerId": str(uuid4()), "vehicleId": str(sample_vehicle.id)}
        response = client.post("/api/notifications/send-email", json=payload, headers=technician_headers)
        assert response.status_code == 404

    def test_history(self, client, technician_headers, sample_vehicle, overdue_vehicle):
        client.post("/api/notifications/send-email", json=_pair(sample_vehicle), headers=technician_headers)
        client.post("/api/notifications/send-email", json=_pair(overdue_vehicle), headers=technician_headers)

        response = client.get(
            "/api/notifications/history", params={"vehicle": str(overdue_vehicle.id)}, headers=technician_headers
        )
        data = response.json()["data"]
        assert len(data) == 1
        assert data[0]["type"] == "service_overdue"
        assert data[0]["vehicle"]["plateNo"] == "OLD-999"


class TestBulk:

    def test_bulk_both_channels(self, client, technician_headers, sample_vehicle, overdue_vehicle):
        response = client.post(
            "/api/notifications/send-bulk", json={"type": "all", "method": "both"}, headers=technician_headers
        )
        data = response.json()["data"]
        assert data["total"] == 2
        assert data["emailSent"] == 2
        assert data["whatsappSent"] == 2
        assert data["failed"] == 0
        assert response.json()["message"] == "Bulk notifications sent. Email: 2, WhatsApp: 2, Failed: 0"

    def test_bulk_overdue_only_with_failures(self, client, technician_headers, sample_vehicle, overdue_vehicle, twilio_client):
        twilio_client.messages.fail = True
        data = client.post(
            "/api/notifications/send-bulk", json={"type": "overdue", "method": "whatsapp"}, headers=technician_headers
        ).json()["data"]
        assert data["total"] == 1
        assert data["failed"] == 1
        assert data["errors"][0]["channel"] == "whatsapp"

    def test_bulk_skips_missing_contact(self, client, technician_headers, make_vehicle, db_session, sample_customer):
        sample_customer.email = None
        db_session.commit()
        make_vehicle(sample_customer, next_service=business_today() + timedelta(days=1))
        data = client.post(
            "/api/notifications/send-bulk", json={"type": "due_soon", "method": "email"}, headers=technician_headers
        ).json()["data"]
        assert data["skipped"] == 1
        assert data["emailSent"] == 0

    def test_sweep_covers_overdue_and_due_soon(
        self, db_session, email_service, whatsapp_service, sample_vehicle, overdue_vehicle
    ):
        results = sweep_reminders(db_session, email_service, whatsapp_service, "email")
        assert results["overdue"]["email_sent"] == 1
        assert results["due_soon"]["email_sent"] == 1
        assert len(email_service.sent) == 2


class TestReminderTask:

    @pytest.fixture
    def worker_handles(self, monkeypatch, database, email_service, whatsapp_service):
        handles = WorkerHandles(database=database, email_service=email_service, whatsapp_service=whatsapp_service)
        monkeypatch.setattr(celery_app, "worker_handles", handles, raising=False)
        return handles

    def test_task_uses_worker_handles(self, worker_handles, sample_vehicle, overdue_vehicle, email_service):
        result = send_service_reminders_task.apply(kwargs={"method": "email"}).get()
        assert result["status"] == "success"
        assert result["results"]["overdue"]["email_sent"] == 1
        assert len(email_service.sent) == 2

    def test_failed_deliveries_are_reported_not_resent(
        self, worker_handles, sample_vehicle, overdue_vehicle, email_service, db_session
    ):
        email_service.fail = True
        result = send_service_reminders_task.apply(kwargs={"method": "email"}).get()

        assert result["status"] == "success"
        assert result["results"]["overdue"]["failed"] == 1
        assert result["results"]["due_soon"]["failed"] == 1
        assert email_service.attempts == 2
        statuses = {record.status for record in db_session.query(Notification).all()}
        assert statuses == {"failed"}
