"""
Tests para el módulo de Clientes

- CRUD con teléfono único
- Búsqueda por nombre o teléfono
- Borrado definitivo (Admin) frente a soft delete (resto de roles)
"""
from uuid import uuid4

from app.common.mixins import LifecycleState
from app.modules.customers.models import Customer
from app.modules.notifications.models import Notification
from app.modules.vehicles.models import Vehicle


CUSTOMER = {"name": "Sara Ahmed", "phone": "0321 5554444", "email": "sara@example.com"}


class TestCustomerCrud:

    def test_create_and_get(self, client, technician_headers):
        response = client.post("/api/customers", json=CUSTOMER, headers=technician_headers)
        assert response.status_code == 201
        created = response.json()["data"]
        assert created["name"] == "Sara Ahmed"
        assert created["isActive"] is True

        response = client.get(f"/api/customers/{created['id']}", headers=technician_headers)
        assert response.json()["data"]["phone"] == "03215554444"

    def test_duplicate_phone_rejected(self, client, technician_headers, db_session):
        """Un teléfono repetido devuelve 400 y no crea un segundo registro"""
        client.post("/api/customers", json=CUSTOMER, headers=technician_headers)
        response = client.post(
            "/api/customers", json={**CUSTOMER, "name": "Other"}, headers=technician_headers
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Customer with this phone number already exists"
        assert db_session.query(Customer).count() == 1

    def test_duplicate_phone_on_update(self, client, technician_headers, sample_customer):
        other = client.post("/api/customers", json=CUSTOMER, headers=technician_headers).json()["data"]
        response = client.put(
            f"/api/customers/{other['id']}", json={"phone": sample_customer.phone}, headers=technician_headers
        )
        assert response.status_code == 400

    def test_missing_name(self, client, technician_headers):
        response = client.post("/api/customers", json={"phone": "03001112222"}, headers=technician_headers)
        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_partial_update(self, client, technician_headers, sample_customer):
        response = client.put(
            f"/api/customers/{sample_customer.id}", json={"address": "DHA Phase 6"}, headers=technician_headers
        )
        data = response.json()["data"]
        assert data["address"] == "DHA Phase 6"
        assert data["name"] == sample_customer.name

    def test_not_found_and_malformed_id(self, client, technician_headers):
        assert client.get(f"/api/customers/{uuid4()}", headers=technician_headers).status_code == 404
        assert client.get("/api/customers/not-a-uuid", headers=technician_headers).status_code == 400

    def test_search(self, client, technician_headers, sample_customer):
        client.post("/api/customers", json=CUSTOMER, headers=technician_headers)
        response = client.get("/api/customers", params={"search": "ahmed k"}, headers=technician_headers)
        body = response.json()
        assert body["count"] == 1
        assert body["data"][0]["id"] == str(sample_customer.id)

        response = client.get("/api/customers", params={"search": "0321"}, headers=technician_headers)
        assert response.json()["data"][0]["name"] == "Sara Ahmed"

    def test_search_wildcards_are_literal(self, client, technician_headers, sample_customer):
        for term in ("%", "_", "\\"):
            response = client.get("/api/customers", params={"search": term}, headers=technician_headers)
            assert response.json()["count"] == 0

        client.post(
            "/api/customers",
            json={"name": "100% Motors", "phone": "03110000000"},
            headers=technician_headers,
        )
        response = client.get("/api/customers", params={"search": "%"}, headers=technician_headers)
        assert [c["name"] for c in response.json()["data"]] == ["100% Motors"]


class TestCustomerDelete:

    def test_admin_hard_deletes_with_vehicles(self, client, admin_headers, sample_vehicle, db_session):
        customer_id = sample_vehicle.customer_id
        response = client.delete(f"/api/customers/{customer_id}", headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["message"] == "Customer and vehicles permanently deleted"

        db_session.expire_all()
        assert db_session.query(Customer).filter(Customer.id == customer_id).first() is None
        assert db_session.query(Vehicle).count() == 0

    def test_technician_soft_deletes(self, client, technician_headers, sample_customer, db_session):
        response = client.delete(f"/api/customers/{sample_customer.id}", headers=technician_headers)
        assert response.status_code == 200

        db_session.expire_all()
        customer = db_session.get(Customer, sample_customer.id)
        assert customer.lifecycle == LifecycleState.DELETED
        assert client.get("/api/customers", headers=technician_headers).json()["count"] == 0
        assert client.get(f"/api/customers/{sample_customer.id}", headers=technician_headers).status_code == 404

    def test_hard_delete_blocked_by_jobs(self, client, admin_headers, sample_customer):
        client.post(
            "/api/jobs",
            json={
                "customer": str(sample_customer.id),
                "vehicle": {"make": "Honda", "model": "Civic"},
                "title": "Oil Change",
            },
            headers=admin_headers,
        )
        response = client.delete(f"/api/customers/{sample_customer.id}", headers=admin_headers)
        assert response.status_code == 400

    def test_hard_delete_removes_reminder_records(self, client, admin_headers, sample_vehicle, db_session):
        payload = {"customerId": str(sample_vehicle.customer_id), "vehicleId": str(sample_vehicle.id)}
        client.post("/api/notifications/send-email", json=payload, headers=admin_headers)
        assert db_session.query(Notification).count() == 1

        response = client.delete(f"/api/customers/{sample_vehicle.customer_id}", headers=admin_headers)
        assert response.status_code == 200
        db_session.expire_all()
        assert db_session.query(Notification).count() == 0
