"""
Tests de la aplicación: salud, raíz y cabeceras comunes
"""


class TestApp:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "OK"
        assert body["database"] == "connected"

    def test_health_reports_database_down(self, client, database, monkeypatch):
        monkeypatch.setattr(database, "ping", lambda: False)
        response = client.get("/health")
        assert response.status_code == 503
        assert response.json()["status"] == "ERROR"

    def test_security_headers(self, client):
        response = client.get("/")
        assert response.headers["X-Frame-Options"] == "DENY"
        assert response.json()["message"] == "Momentum POS API is running"

    def test_unknown_route(self, client):
        response = client.get("/api/nothing-here")
        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Route /api/nothing-here not found"}
