"""Tests for registration, login and the role gate."""

from sqlalchemy import select

from trainermatch.models import Trainer, User, UserRole, Vendor


def register(client, **body):
    payload = {"email": "new@example.com", "password": "s3cret-pass", "role": "VENDOR_ADMIN"}
    payload.update(body)
    return client.post("/api/auth/register", json=payload)


class TestRegister:

    def test_vendor_admin_gets_new_vendor_and_welcome_email(self, client, db, queue):
        response = register(client, vendorName="Skyline Learning")

        assert response.status_code == 201
        user = db.scalar(select(User).where(User.email == "new@example.com"))
        assert user.role == UserRole.VENDOR_ADMIN
        assert db.get(Vendor, user.vendor_id).name == "Skyline Learning"

        emails = queue.of_type("email")
        assert len(emails) == 1
        assert emails[0]["recipient"] == "new@example.com"
        assert emails[0]["subject"] == "Welcome to TrainerMatch!"

    def test_vendor_name_defaults_from_email(self, client, db):
        register(client, email="jane@example.com")

        user = db.scalar(select(User).where(User.email == "jane@example.com"))
        assert db.get(Vendor, user.vendor_id).name == "jane's Organization"

    def test_trainer_gets_profile(self, client, db):
        response = register(client, email="tom@example.com", role="TRAINER",
                            fullName="Tom Trainer", skills=["python", "sql"])

        assert response.status_code == 201
        trainer = db.scalar(select(Trainer).where(Trainer.email == "tom@example.com"))
        assert trainer.name == "Tom Trainer"
        assert trainer.skills == ["python", "sql"]
        assert trainer.user.email == "tom@example.com"

    def test_vendor_user_needs_existing_vendor(self, client, vendor):
        assert register(client, role="VENDOR_USER").status_code == 400
        assert register(client, role="VENDOR_USER", vendorId="missing").status_code == 400
        assert register(client, role="VENDOR_USER", vendorId=vendor.id).status_code == 201

    def test_super_admin_cannot_self_register(self, client):
        assert register(client, role="SUPER_ADMIN").status_code == 403

    def test_duplicate_email(self, client):
        register(client)
        response = register(client)

        assert response.status_code == 400
        assert response.json()["detail"] == "Email already registered"

    def test_short_password_rejected(self, client):
        assert register(client, password="short").status_code == 422


class TestLogin:

    def test_login_and_me(self, client):
        register(client, email="login@example.com", role="TRAINER", fullName="Lou")

        response = client.post("/api/auth/login",
                               json={"email": "login@example.com", "password": "s3cret-pass"})
        assert response.status_code == 200
        body = response.json()
        assert body["token_type"] == "bearer"
        assert body["role"] == "TRAINER"

        me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {body['access_token']}"})
        assert me.status_code == 200
        assert me.json()["email"] == "login@example.com"
        assert me.json()["trainerId"] is not None

    def test_wrong_password(self, client):
        register(client, email="login@example.com")
        response = client.post("/api/auth/login",
                               json={"email": "login@example.com", "password": "not-the-one"})

        assert response.status_code == 401

    def test_unknown_user(self, client):
        response = client.post("/api/auth/login",
                               json={"email": "ghost@example.com", "password": "whatever1"})
        assert response.status_code == 401


class TestRoleGate:

    def test_missing_token(self, client):
        assert client.get("/api/auth/me").status_code == 401

    def test_invalid_token(self, client):
        response = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401

    def test_deactivated_user(self, client, db, vendor_admin, auth):
        vendor_admin.is_active = False
        db.commit()

        assert client.get("/api/auth/me", headers=auth(vendor_admin)).status_code == 403

    def test_wrong_role_is_forbidden(self, client, trainer_user, auth):
        user, _ = trainer_user
        response = client.get("/api/vendors", headers=auth(user))

        assert response.status_code == 403
        assert "SUPER_ADMIN" in response.json()["detail"]

    def test_allowed_role(self, client, super_admin, vendor, auth):
        response = client.get("/api/vendors", headers=auth(super_admin))

        assert response.status_code == 200
        assert [v["name"] for v in response.json()] == ["Acme Training"]
