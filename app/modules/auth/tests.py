"""
Tests para el módulo de Autenticación

- Registro (primer usuario Admin), verificación por OTP y login
- Rotación de refresh tokens
- Restablecimiento de contraseña
"""

from app.modules.auth.models import RefreshToken, User


def _signup(client, email="owner@momentumauto.com", role=None):
    payload = {"name": "Owner", "email": email, "password": "secret123"}
    if role:
        payload["role"] = role
    return client.post("/api/auth/signup", json=payload)


class TestSignup:

    def test_first_user_becomes_admin(self, client, email_service):
        """El primer usuario registrado queda como Admin y recibe un OTP"""
        response = _signup(client)
        assert response.status_code == 201
        body = response.json()
        assert body["isFirstUser"] is True
        assert body["user"]["role"] == "Admin"
        assert body["user"]["status"] == "pending"
        assert email_service.last_otp() is not None

    def test_otp_email_is_sent_off_the_event_loop(self, client, email_service):
        _signup(client)
        client.post("/api/auth/forgot-password", json={"email": "owner@momentumauto.com"})
        assert len(email_service.sent) == 2
        assert not any(message["in_event_loop"] for message in email_service.sent)

    def test_later_users_cannot_self_assign_admin(self, client):
        _signup(client)
        response = _signup(client, email="second@momentumauto.com", role="Admin")
        assert response.status_code == 201
        assert response.json()["user"]["role"] == "Technician"

    def test_later_user_may_pick_cashier(self, client):
        _signup(client)
        response = _signup(client, email="cash@momentumauto.com", role="Cashier")
        assert response.json()["user"]["role"] == "Cashier"

    def test_duplicate_email(self, client):
        _signup(client)
        response = _signup(client)
        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_email_failure_removes_user(self, client, email_service, db_session):
        """Si el correo falla, el usuario no queda registrado"""
        email_service.fail = True
        response = _signup(client)
        assert response.status_code == 500
        assert db_session.query(User).count() == 0

    def test_short_password_rejected(self, client):
        response = client.post(
            "/api/auth/signup", json={"name": "A", "email": "a@momentumauto.com", "password": "123"}
        )
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "password"


class TestVerificationAndLogin:

    def test_unverified_login_is_forbidden(self, client):
        user_id = _signup(client).json()["user"]["id"]
        response = client.post("/api/auth/login", json={"email": "owner@momentumauto.com", "password": "secret123"})
        assert response.status_code == 403
        body = response.json()
        assert body["requiresVerification"] is True
        assert body["userId"] == user_id

    def test_verify_then_login(self, client, email_service):
        user_id = _signup(client).json()["user"]["id"]
        otp = email_service.last_otp()

        response = client.post("/api/auth/verify-email", json={"userId": user_id, "otp": otp})
        assert response.status_code == 200
        assert response.json()["data"]["isEmailVerified"] is True

        response = client.post("/api/auth/login", json={"email": "owner@momentumauto.com", "password": "secret123"})
        assert response.status_code == 200
        body = response.json()
        assert body["accessToken"] and body["refreshToken"]

        me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {body['accessToken']}"})
        assert me.json()["data"]["email"] == "owner@momentumauto.com"

    def test_wrong_otp(self, client):
        user_id = _signup(client).json()["user"]["id"]
        response = client.post("/api/auth/verify-email", json={"userId": user_id, "otp": "000000"})
        assert response.status_code == 400

    def test_bad_credentials(self, client, admin_user):
        response = client.post("/api/auth/login", json={"email": admin_user.email, "password": "wrong-pass"})
        assert response.status_code == 401
        assert response.json()["error"] == "Invalid credentials"

    def test_deactivated_user(self, client, admin_user, db_session, user_password):
        admin_user.is_active = False
        db_session.commit()
        response = client.post("/api/auth/login", json={"email": admin_user.email, "password": user_password})
        assert response.status_code == 403


class TestTokens:

    def test_missing_token(self, client):
        response = client.get("/api/customers")
        assert response.status_code == 401
        assert response.json()["error"] == "Not authorized, no token"

    def test_refresh_rotates_token(self, client, admin_user, user_password):
        login = client.post("/api/auth/login", json={"email": admin_user.email, "password": user_password}).json()

        response = client.post("/api/auth/refresh", json={"refreshToken": login["refreshToken"]})
        assert response.status_code == 200
        assert response.json()["refreshToken"] != login["refreshToken"]

        # El token anterior queda revocado
        again = client.post("/api/auth/refresh", json={"refreshToken": login["refreshToken"]})
        assert again.status_code == 401

    def test_access_token_is_not_a_refresh_token(self, client, admin_user, headers_for):
        token = headers_for(admin_user)["Authorization"].split(" ")[1]
        response = client.post("/api/auth/refresh", json={"refreshToken": token})
        assert response.status_code == 401


class TestPasswordReset:

    def test_reset_password_flow(self, client, admin_user, email_service, db_session, user_password):
        client.post("/api/auth/login", json={"email": admin_user.email, "password": user_password})

        response = client.post("/api/auth/forgot-password", json={"email": admin_user.email})
        assert response.status_code == 200
        otp = email_service.last_otp()

        response = client.post(
            "/api/auth/reset-password",
            json={"userId": str(admin_user.id), "otp": otp, "newPassword": "brand-new-pass"},
        )
        assert response.status_code == 200
        assert db_session.query(RefreshToken).filter(RefreshToken.user_id == admin_user.id).count() == 0

        response = client.post("/api/auth/login", json={"email": admin_user.email, "password": "brand-new-pass"})
        assert response.status_code == 200

    def test_unknown_email(self, client):
        response = client.post("/api/auth/forgot-password", json={"email": "nobody@momentumauto.com"})
        assert response.status_code == 404


class TestDeleteMe:

    def test_delete_me(self, client, technician_user, technician_headers):
        response = client.delete("/api/auth/delete-me", headers=technician_headers)
        assert response.status_code == 200
        response = client.get("/api/auth/me", headers=technician_headers)
        assert response.status_code == 401
