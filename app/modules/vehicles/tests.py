"""
Tests para el módulo de Vehículos
"""
from uuid import uuid4


def _vehicle_payload(customer_id, plate="LEA-1234", **extra):
    return {"customer": str(customer_id), "make": "Suzuki", "model": "Cultus", "year": 2020, "plateNo": plate, **extra}


class TestVehicleCrud:

    def test_create_requires_existing_customer(self, client, technician_headers):
        response = client.post("/api/vehicles", json=_vehicle_payload(uuid4()), headers=technician_headers)
        assert response.status_code == 404
        assert response.json()["message"] == "Customer not found"

    def test_create_embeds_customer(self, client, technician_headers, sample_customer):
        response = client.post(
            "/api/vehicles",
            json=_vehicle_payload(sample_customer.id, nextService="2030-01-15", oilType="5W-30"),
            headers=technician_headers,
        )
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["customer"]["name"] == "Ahmed Khan"
        assert data["nextService"] == "2030-01-15"
        assert data["status"] == "Active"
        assert data["mileage"] == 0

    def test_plate_unique_case_insensitive(self, client, technician_headers, sample_customer):
        client.post("/api/vehicles", json=_vehicle_payload(sample_customer.id), headers=technician_headers)
        response = client.post(
            "/api/vehicles", json=_vehicle_payload(sample_customer.id, plate="lea-1234"), headers=technician_headers
        )
        assert response.status_code == 400

    def test_plate_free_after_delete(self, client, technician_headers, sample_customer):
        created = client.post(
            "/api/vehicles", json=_vehicle_payload(sample_customer.id), headers=technician_headers
        ).json()["data"]
        client.delete(f"/api/vehicles/{created['id']}", headers=technician_headers)
        response = client.post(
            "/api/vehicles", json=_vehicle_payload(sample_customer.id), headers=technician_headers
        )
        assert response.status_code == 201

    def test_year_out_of_range(self, client, technician_headers, sample_customer):
        response = client.post(
            "/api/vehicles", json=_vehicle_payload(sample_customer.id, year=1800), headers=technician_headers
        )
        assert response.status_code == 400

    def test_filter_and_search(self, client, technician_headers, sample_customer, make_vehicle):
        make_vehicle(sample_customer, plate_no="KHI-9", make="Honda", model="City")
        make_vehicle(sample_customer, plate_no="ISB-7", make="Kia", model="Sportage")

        response = client.get("/api/vehicles", params={"search": "spor"}, headers=technician_headers)
        assert [v["plateNo"] for v in response.json()["data"]] == ["ISB-7"]

        response = client.get(
            "/api/vehicles", params={"customer": str(sample_customer.id)}, headers=technician_headers
        )
        assert response.json()["count"] == 2

    def test_update_mileage(self, client, technician_headers, sample_vehicle):
        response = client.put(
            f"/api/vehicles/{sample_vehicle.id}", json={"mileage": 45000}, headers=technician_headers
        )
        assert response.json()["data"]["mileage"] == 45000
        assert response.json()["data"]["make"] == "Toyota"

    def test_deactivate_hides_from_list(self, client, technician_headers, sample_vehicle):
        client.put(f"/api/vehicles/{sample_vehicle.id}", json={"isActive": False}, headers=technician_headers)
        assert client.get("/api/vehicles", headers=technician_headers).json()["count"] == 0
        # Un vehículo desactivado sigue siendo consultable por ID
        response = client.get(f"/api/vehicles/{sample_vehicle.id}", headers=technician_headers)
        assert response.json()["data"]["isActive"] is False
