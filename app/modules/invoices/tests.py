"""
Tests para el módulo de Facturación

- Cálculo de subtotal y total desde los ítems
- Numeración secuencial
- Recalculo al modificar ítems
"""
from app.modules.invoices.service import calculate_amount, calculate_subtotal


ITEMS = [
    {"description": "Engine oil 4L", "quantity": 1, "price": 4500},
    {"description": "Oil filter", "quantity": 2, "price": 800},
]


def _invoice_payload(customer_id, **extra):
    return {
        "customer": str(customer_id),
        "vehicle": {"make": "Toyota", "model": "Corolla", "plateNo": "ABC-123"},
        "items": ITEMS,
        "tax": 500,
        "discount": 100,
        **extra,
    }


class TestTotals:

    def test_subtotal(self):
        assert calculate_subtotal(ITEMS) == 6100

    def test_amount(self):
        assert calculate_amount(6100, 500, 100) == 6500


class TestInvoices:

    def test_create_computes_totals(self, client, technician_headers, sample_customer):
        response = client.post("/api/invoices", json=_invoice_payload(sample_customer.id), headers=technician_headers)
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["invoiceNumber"] == "INV-000001"
        assert data["subtotal"] == 6100
        assert data["amount"] == 6500
        assert data["status"] == "Pending"

    def test_numbers_are_sequential(self, client, technician_headers, sample_customer):
        client.post("/api/invoices", json=_invoice_payload(sample_customer.id), headers=technician_headers)
        response = client.post("/api/invoices", json=_invoice_payload(sample_customer.id), headers=technician_headers)
        assert response.json()["data"]["invoiceNumber"] == "INV-000002"

    def test_explicit_amount_wins(self, client, technician_headers, sample_customer):
        payload = _invoice_payload(sample_customer.id, amount=6000)
        response = client.post("/api/invoices", json=payload, headers=technician_headers)
        assert response.json()["data"]["amount"] == 6000

    def test_items_required(self, client, technician_headers, sample_customer):
        payload = _invoice_payload(sample_customer.id, items=[])
        assert client.post("/api/invoices", json=payload, headers=technician_headers).status_code == 400

    def test_payment_method_must_be_known(self, client, technician_headers, sample_customer):
        payload = _invoice_payload(sample_customer.id, paymentMethod="Bitcoin")
        assert client.post("/api/invoices", json=payload, headers=technician_headers).status_code == 400

    def test_items_change_recomputes(self, client, technician_headers, sample_customer):
        invoice = client.post(
            "/api/invoices", json=_invoice_payload(sample_customer.id), headers=technician_headers
        ).json()["data"]
        response = client.put(
            f"/api/invoices/{invoice['id']}",
            json={"items": [{"description": "Tuning", "quantity": 1, "price": 2500}], "status": "Paid"},
            headers=technician_headers,
        )
        data = response.json()["data"]
        assert data["subtotal"] == 2500
        assert data["amount"] == 2900
        assert data["status"] == "Paid"

    def test_search_by_plate_and_filter_status(self, client, technician_headers, sample_customer):
        client.post("/api/invoices", json=_invoice_payload(sample_customer.id), headers=technician_headers)
        client.post(
            "/api/invoices",
            json=_invoice_payload(sample_customer.id, status="Paid", vehicle={"plateNo": "KHI-77"}),
            headers=technician_headers,
        )
        response = client.get("/api/invoices", params={"search": "khi"}, headers=technician_headers)
        assert response.json()["count"] == 1
        response = client.get("/api/invoices", params={"status": "Paid"}, headers=technician_headers)
        assert response.json()["data"][0]["vehicle"]["plateNo"] == "KHI-77"

    def test_linked_job(self, client, technician_headers, sample_customer):
        job = client.post(
            "/api/jobs",
            json={"customer": str(sample_customer.id), "vehicle": {"make": "Honda", "model": "City"}, "title": "Tuning"},
            headers=technician_headers,
        ).json()["data"]
        response = client.post(
            "/api/invoices", json=_invoice_payload(sample_customer.id, job=job["id"]), headers=technician_headers
        )
        assert response.json()["data"]["job"]["title"] == "Tuning"
