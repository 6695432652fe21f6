"""
Tests para las preferencias del usuario
"""


class TestSettings:

    def test_defaults_created_on_first_read(self, client, technician_headers):
        response = client.get("/api/settings", headers=technician_headers)
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["workshop"]["businessName"] == "Momentum AutoWorks"
        assert data["tax"] == {"cash": 18, "card": 18, "online": 18}
        assert data["notifications"]["serviceDueDays"] == 7

    def test_update_merges_within_section(self, client, technician_headers):
        response = client.put(
            "/api/settings",
            json={"workshop": {"phone": "+92 321 0000000"}, "tax": {"card": 16}},
            headers=technician_headers,
        )
        assert response.json()["message"] == "Settings updated successfully"
        data = response.json()["data"]
        assert data["workshop"]["phone"] == "+92 321 0000000"
        assert data["workshop"]["businessName"] == "Momentum AutoWorks"
        assert data["tax"]["card"] == 16
        assert data["tax"]["cash"] == 18

    def test_invalid_section_value(self, client, technician_headers):
        response = client.put("/api/settings", json={"tax": {"cash": 150}}, headers=technician_headers)
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid tax settings"

    def test_settings_are_per_user(self, client, technician_headers, admin_headers):
        client.put("/api/settings", json={"advanced": {"marketplaceMode": True}}, headers=technician_headers)
        data = client.get("/api/settings", headers=admin_headers).json()["data"]
        assert data["advanced"]["marketplaceMode"] is False

    def test_connect_email_provider(self, client, technician_headers):
        response = client.post(
            "/api/settings/email/connect",
            json={"provider": "google", "credentials": {"token": "abc"}},
            headers=technician_headers,
        )
        assert response.json()["message"] == "GOOGLE email connected successfully"
        email = response.json()["data"]["email"]
        assert email["googleConfigured"] is True
        assert email["smtpConfigured"] is False


class TestPasswordChange:

    def _payload(self, current, new="newsecret1", confirm=None):
        return {"currentPassword": current, "newPassword": new, "confirmPassword": confirm or new}

    def test_mismatch(self, client, technician_headers, user_password):
        payload = self._payload(user_password, confirm="different1")
        response = client.put("/api/settings/password", json=payload, headers=technician_headers)
        assert response.status_code == 400
        assert "do not match" in response.json()["message"]

    def test_wrong_current_password(self, client, technician_headers):
        response = client.put("/api/settings/password", json=self._payload("wrong-one"), headers=technician_headers)
        assert response.status_code == 400
        assert response.json()["message"] == "Current password is incorrect"

    def test_success_allows_login_with_new_password(self, client, technician_headers, technician_user, user_password):
        response = client.put("/api/settings/password", json=self._payload(user_password), headers=technician_headers)
        assert response.status_code == 200

        login = client.post("/api/auth/login", json={"email": technician_user.email, "password": "newsecret1"})
        assert login.status_code == 200
