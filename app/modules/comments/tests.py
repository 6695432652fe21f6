"""
Tests para comentarios de órdenes de trabajo
"""
from uuid import uuid4

import pytest


@pytest.fixture
def job_id(client, technician_headers, sample_customer):
    response = client.post(
        "/api/jobs",
        json={"customer": str(sample_customer.id), "vehicle": {"make": "Kia", "model": "Picanto"}, "title": "AC Service"},
        headers=technician_headers,
    )
    return response.json()["data"]["id"]


class TestComments:

    def test_author_defaults_from_user(self, client, technician_headers, job_id):
        response = client.post("/api/comments", json={"job": job_id, "text": "Compressor replaced"}, headers=technician_headers)
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["author"] == "Bilal Hassan"
        assert data["authorInitials"] == "BH"
        assert data["role"] == "Technician"

    def test_blank_text_rejected(self, client, technician_headers, job_id):
        response = client.post("/api/comments", json={"job": job_id, "text": "   "}, headers=technician_headers)
        assert response.status_code == 400
        assert response.json()["message"].endswith("Comment text is required")

    def test_list_oldest_first(self, client, technician_headers, job_id):
        for text in ("first", "second"):
            client.post("/api/comments", json={"job": job_id, "text": text}, headers=technician_headers)
        response = client.get(f"/api/comments/job/{job_id}", headers=technician_headers)
        assert [c["text"] for c in response.json()["data"]] == ["first", "second"]

    def test_unknown_job(self, client, technician_headers):
        assert client.get(f"/api/comments/job/{uuid4()}", headers=technician_headers).status_code == 404
        response = client.post("/api/comments", json={"job": str(uuid4()), "text": "hi"}, headers=technician_headers)
        assert response.status_code == 404

    def test_attachments_and_delete(self, client, technician_headers, job_id):
        comment = client.post(
            "/api/comments",
            json={"job": job_id, "text": "Photo", "attachments": [{"name": "before.jpg", "type": "image"}]},
            headers=technician_headers,
        ).json()["data"]
        assert comment["attachments"][0]["type"] == "image"

        assert client.delete(f"/api/comments/{comment['id']}", headers=technician_headers).status_code == 200
        assert client.get(f"/api/comments/job/{job_id}", headers=technician_headers).json()["count"] == 0
