"""
Tests para el historial de servicios
"""
from uuid import uuid4


def _record(vehicle, **extra):
    return {
        "vehicle": str(vehicle.id),
        "customer": str(vehicle.customer_id),
        "description": "Oil change and filter",
        "cost": 2300,
        **extra,
    }


class TestServiceHistory:

    def test_create_and_embed_refs(self, client, technician_headers, sample_vehicle):
        response = client.post(
            "/api/service-history", json=_record(sample_vehicle, mileage=42000), headers=technician_headers
        )
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["vehicle"]["plateNo"] == "ABC-123"
        assert data["customer"]["name"] == "Ahmed Khan"
        assert data["mileage"] == 42000

    def test_vehicle_must_exist(self, client, technician_headers, sample_vehicle):
        payload = {**_record(sample_vehicle), "vehicle": str(uuid4())}
        response = client.post("/api/service-history", json=payload, headers=technician_headers)
        assert response.status_code == 404

    def test_cost_required(self, client, technician_headers, sample_vehicle):
        payload = _record(sample_vehicle)
        payload.pop("cost")
        assert client.post("/api/service-history", json=payload, headers=technician_headers).status_code == 400

    def test_sorted_newest_first_and_filtered(self, client, technician_headers, sample_vehicle, make_vehicle):
        other = make_vehicle(sample_vehicle.customer, plate_no="OTHER-1")
        client.post(
            "/api/service-history",
            json=_record(sample_vehicle, serviceDate="2024-01-10T10:00:00Z", description="Old"),
            headers=technician_headers,
        )
        client.post(
            "/api/service-history",
            json=_record(sample_vehicle, serviceDate="2024-06-10T10:00:00Z", description="New"),
            headers=technician_headers,
        )
        client.post("/api/service-history", json=_record(other), headers=technician_headers)

        response = client.get(
            "/api/service-history", params={"vehicle": str(sample_vehicle.id)}, headers=technician_headers
        )
        assert [r["description"] for r in response.json()["data"]] == ["New", "Old"]

    def test_update_and_delete(self, client, technician_headers, sample_vehicle):
        record = client.post(
            "/api/service-history", json=_record(sample_vehicle), headers=technician_headers
        ).json()["data"]
        response = client.put(
            f"/api/service-history/{record['id']}", json={"cost": 2500}, headers=technician_headers
        )
        assert response.json()["data"]["cost"] == 2500

        client.delete(f"/api/service-history/{record['id']}", headers=technician_headers)
        assert client.get(f"/api/service-history/{record['id']}", headers=technician_headers).status_code == 404
