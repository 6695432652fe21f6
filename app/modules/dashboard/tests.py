"""
Tests del resumen del tablero
"""


class TestDashboardSummary:

    def test_empty_summary(self, client, admin_headers):
        data = client.get("/api/dashboard/summary", headers=admin_headers).json()["data"]
        assert data["todayJobs"] == 0
        assert data["todayRevenue"] == 0
        assert data["jobsByStatus"] == {"pending": 0, "inProgress": 0, "completed": 0, "delivered": 0}

    def test_workshop_day_flow(self, client, technician_headers):
        customer = client.post(
            "/api/customers",
            json={"name": "Sara Malik", "phone": "0333-7654321", "email": "sara@example.com"},
            headers=technician_headers,
        ).json()["data"]
        vehicle = client.post(
            "/api/vehicles",
            json={"customer": customer["id"], "make": "Honda", "model": "Civic", "year": 2021, "plateNo": "LEA-777"},
            headers=technician_headers,
        ).json()["data"]
        job = client.post(
            "/api/jobs",
            json={
                "customer": customer["id"],
                "vehicle": {"make": "Honda", "model": "Civic", "plateNo": vehicle["plateNo"]},
                "title": "Brake Service",
                "amount": 4000,
            },
            headers=technician_headers,
        ).json()["data"]
        client.put(f"/api/jobs/{job['id']}", json={"status": "COMPLETED"}, headers=technician_headers)

        invoice = client.post(
            "/api/invoices",
            json={
                "customer": customer["id"],
                "job": job["id"],
                "vehicle": {"make": "Honda", "model": "Civic", "plateNo": "LEA-777"},
                "items": [{"description": "Brake pads", "quantity": 1, "price": 4000}],
                "status": "Paid",
                "paymentMethod": "Cash",
            },
            headers=technician_headers,
        )
        assert invoice.status_code == 201

        data = client.get("/api/dashboard/summary", headers=technician_headers).json()["data"]
        assert data["todayJobs"] == 1
        assert data["jobsByStatus"]["completed"] == 1
        assert data["totalCustomers"] == 1
        assert data["todayRevenue"] == 4000
