"""Tests for the auth blueprint (/auth/*)."""

from sitehost.extensions import db
from sitehost.models.audit import AuditEvent
from sitehost.models.user import User


class TestRegister:
    def test_register_logs_in(self, client):
        resp = client.post("/auth/register", json={
            "email": "New@Example.com",
            "password": "longenough",
            "full_name": "New Owner",
        })
        assert resp.status_code == 201
        assert resp.get_json()["user"]["email"] == "new@example.com"

        me = client.get("/auth/me")
        assert me.status_code == 200
        assert me.get_json()["user"]["full_name"] == "New Owner"

    def test_register_writes_audit_event(self, client, app):
        client.post("/auth/register", json={"email": "a@b.test", "password": "longenough"})
        with app.app_context():
            assert AuditEvent.query.filter_by(action="user.registered").count() == 1

    def test_short_password(self, client):
        resp = client.post("/auth/register", json={"email": "a@b.test", "password": "short"})
        assert resp.status_code == 400
        assert "at least 8" in resp.get_json()["error"]

    def test_missing_email(self, client):
        resp = client.post("/auth/register", json={"password": "longenough"})
        assert resp.status_code == 400

    def test_duplicate_email(self, client, seed_data):
        resp = client.post("/auth/register", json={
            "email": seed_data["owner_email"], "password": "longenough",
        })
        assert resp.status_code == 409


class TestLogin:
    def test_login_success(self, client, seed_data, login):
        login(client, seed_data["owner_email"])
        assert client.get("/auth/me").get_json()["user"]["id"] == seed_data["owner_id"]

    def test_login_wrong_password(self, client, seed_data):
        resp = client.post("/auth/login", json={
            "email": seed_data["owner_email"], "password": "wrong-password",
        })
        assert resp.status_code == 401

    def test_login_unknown_email(self, client, seed_data):
        resp = client.post("/auth/login", json={"email": "ghost@x.test", "password": "whatever1"})
        assert resp.status_code == 401

    def test_login_inactive_user(self, client, seed_data, app):
        with app.app_context():
            user = db.session.get(User, seed_data["owner_id"])
            user.is_active = False
            db.session.commit()

        resp = client.post("/auth/login", json={
            "email": seed_data["owner_email"], "password": "ownerpass123",
        })
        assert resp.status_code == 403

    def test_logout(self, client, seed_data, login):
        login(client, seed_data["owner_email"])
        assert client.post("/auth/logout").status_code == 200
        assert client.get("/auth/me").status_code == 401

    def test_me_requires_login(self, client):
        assert client.get("/auth/me").status_code == 401


class TestJsonOnly:
    """Session-changing auth routes refuse HTML form posts."""

    def test_form_login_is_rejected(self, client, seed_data):
        resp = client.post("/auth/login", data={
            "email": seed_data["owner_email"], "password": "ownerpass123",
        })
        assert resp.status_code == 415
        assert client.get("/auth/me").status_code == 401

    def test_form_register_is_rejected(self, client, app):
        resp = client.post("/auth/register", data={
            "email": "form@x.test", "password": "longenough",
        })
        assert resp.status_code == 415
        with app.app_context():
            assert User.query.filter_by(email="form@x.test").first() is None

    def test_non_text_credentials(self, client, seed_data):
        resp = client.post("/auth/login", json={"email": 123, "password": ["x"]})
        assert resp.status_code == 401

    def test_register_non_text_email(self, client):
        resp = client.post("/auth/register", json={"email": 5, "password": "longenough"})
        assert resp.status_code == 400
