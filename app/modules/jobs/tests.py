"""
Tests para el módulo de Órdenes de trabajo
"""
from uuid import uuid4


def _job_payload(customer_id, **extra):
    payload = {
        "customer": str(customer_id),
        "vehicle": {"make": "Toyota", "model": "Corolla", "year": 2019, "plateNo": "ABC-123"},
        "title": "Brake Service",
        "technician": "Bilal",
        "amount": 3000,
    }
    payload.update(extra)
    return payload


class TestJobs:

    def test_create_defaults(self, client, technician_headers, sample_customer):
        response = client.post("/api/jobs", json=_job_payload(sample_customer.id), headers=technician_headers)
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["status"] == "PENDING"
        assert data["vehicle"]["plateNo"] == "ABC-123"
        assert data["customer"]["id"] == str(sample_customer.id)

    def test_vehicle_make_and_model_required(self, client, technician_headers, sample_customer):
        payload = _job_payload(sample_customer.id, vehicle={"year": 2019})
        response = client.post("/api/jobs", json=payload, headers=technician_headers)
        assert response.status_code == 400

    def test_unknown_customer(self, client, technician_headers):
        response = client.post("/api/jobs", json=_job_payload(uuid4()), headers=technician_headers)
        assert response.status_code == 404

    def test_invalid_status(self, client, technician_headers, sample_customer):
        payload = _job_payload(sample_customer.id, status="DONE")
        assert client.post("/api/jobs", json=payload, headers=technician_headers).status_code == 400

    def test_update_merges_vehicle(self, client, technician_headers, sample_customer):
        job = client.post("/api/jobs", json=_job_payload(sample_customer.id), headers=technician_headers).json()["data"]
        response = client.put(
            f"/api/jobs/{job['id']}",
            json={"status": "IN_PROGRESS", "vehicle": {"plateNo": "XYZ-999"}},
            headers=technician_headers,
        )
        data = response.json()["data"]
        assert data["status"] == "IN_PROGRESS"
        assert data["vehicle"]["plateNo"] == "XYZ-999"
        assert data["vehicle"]["make"] == "Toyota"

    def test_filter_by_status(self, client, technician_headers, sample_customer):
        client.post("/api/jobs", json=_job_payload(sample_customer.id), headers=technician_headers)
        client.post(
            "/api/jobs", json=_job_payload(sample_customer.id, status="COMPLETED"), headers=technician_headers
        )
        response = client.get("/api/jobs", params={"status": "COMPLETED"}, headers=technician_headers)
        assert response.json()["count"] == 1

    def test_soft_delete(self, client, technician_headers, sample_customer):
        job = client.post("/api/jobs", json=_job_payload(sample_customer.id), headers=technician_headers).json()["data"]
        assert client.delete(f"/api/jobs/{job['id']}", headers=technician_headers).status_code == 200
        assert client.get(f"/api/jobs/{job['id']}", headers=technician_headers).status_code == 404
        assert client.get("/api/jobs", headers=technician_headers).json()["count"] == 0
