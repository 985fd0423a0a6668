import logging
from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from gearguard.core.config import SESSION_COOKIE_NAME
from gearguard.core.db import SessionLocal, utcnow
from gearguard.main import app
from gearguard.models import AppUser, UserSession
from gearguard.services import email_service

from .conftest import DEFAULT_PASSWORD, login


@pytest.fixture
def sent_resets(monkeypatch):
    """Gönderilen reset e-postalarını yakalar: [(email, token), ...]"""
    sent = []
    monkeypatch.setattr(
        "gearguard.services.auth_service.send_password_reset_email",
        lambda email, token: sent.append((email, token)),
    )
    return sent


def _register(client, username="jdoe", email="jdoe@x.com", password="secret123"):
    return client.post("/auth/register", json={
        "username": username, "email": email, "password": password, "full_name": "John Doe",
    })


# ---- register / login ----
def test_register_logs_in_as_employee(client):
    r = _register(client)
    assert r.status_code == 201, r.text
    assert r.json()["access_token"]
    assert SESSION_COOKIE_NAME in r.cookies

    me = client.get("/auth/me")
    assert me.status_code == 200
    assert me.json()["Username"] == "jdoe"
    assert me.json()["Email"] == "jdoe@x.com"
    assert me.json()["Role"] == "employee"


@pytest.mark.parametrize("username,email,field", [
    ("jdoe", "other@x.com", "Username"),
    ("other", "JDOE@x.com", "Email"),
])
def test_register_duplicate_names_the_field(client, username, email, field):
    assert _register(client).status_code == 201
    r = _register(client, username=username, email=email)
    assert r.status_code == 400
    assert r.json()["meta"]["field"] == field


def test_register_validates_input(client):
    r = client.post("/auth/register", json={
        "username": "jd", "email": "not-an-email", "password": "123", "full_name": "J",
    })
    assert r.status_code == 422


@pytest.mark.parametrize("username,password", [
    ("alice", "wrong-password"),
    ("nobody", DEFAULT_PASSWORD),
])
def test_login_failure_is_generic(client, make_user, username, password):
    make_user("alice")
    r = client.post("/auth/login", data={"username": username, "password": password})
    assert r.status_code == 401
    assert r.json()["error"] == "Invalid username or password"


def test_inactive_user_cannot_log_in(client, make_user):
    make_user("sleepy", is_active=False)
    r = client.post("/auth/login", data={"username": "sleepy", "password": DEFAULT_PASSWORD})
    assert r.status_code == 401


def test_bearer_header_is_accepted(client, make_user):
    make_user("alice")
    token = login(client, "alice")
    with TestClient(app) as other:
        r = other.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 200
    assert r.json()["Username"] == "alice"


def test_logout_deletes_session(client, make_user):
    make_user("alice")
    token = login(client, "alice")

    r = client.post("/auth/logout")
    assert r.status_code == 200
    assert client.get("/auth/me").status_code == 401

    # çıkılan oturumun token'ı artık geçersiz
    with TestClient(app) as other:
        assert other.get("/auth/me", headers={"Authorization": f"Bearer {token}"}).status_code == 401
    with SessionLocal() as s:
        assert s.query(UserSession).count() == 0


def test_expired_session_is_rejected(client, make_user):
    make_user("alice")
    login(client, "alice")
    with SessionLocal() as s:
        s.query(UserSession).update({UserSession.ExpiresAt: utcnow() - timedelta(minutes=1)})
        s.commit()
    assert client.get("/auth/me").status_code == 401


# ---- forgot / reset ----
def test_forgot_password_does_not_reveal_accounts(client, make_user, sent_resets):
    make_user("alice")
    known = client.post("/auth/forgot-password", json={"email": "alice@x.com"})
    unknown = client.post("/auth/forgot-password", json={"email": "ghost@x.com"})

    assert known.status_code == unknown.status_code == 200
    assert known.json() == unknown.json()
    assert [e for e, _ in sent_resets] == ["alice@x.com"]


def test_reset_token_is_64_hex_chars_valid_for_an_hour(client, make_user, sent_resets):
    make_user("alice")
    before = utcnow()
    client.post("/auth/forgot-password", json={"email": "alice@x.com"})
    _, token = sent_resets[0]

    assert len(token) == 64
    int(token, 16)
    with SessionLocal() as s:
        user = s.query(AppUser).filter_by(Username="alice").one()
        assert user.ResetToken == token
        assert before + timedelta(minutes=59) < user.ResetTokenExpiry <= utcnow() + timedelta(minutes=60)


def test_reset_password_flow(client, make_user, sent_resets):
    make_user("alice")
    login(client, "alice")
    client.post("/auth/forgot-password", json={"email": "alice@x.com"})
    _, token = sent_resets[0]

    r = client.post("/auth/reset-password", json={"token": token, "password": "brand-new-pw"})
    assert r.status_code == 200, r.text

    # mevcut oturumlar kapanır
    assert client.get("/auth/me").status_code == 401
    # yeni şifre çalışır, eski çalışmaz
    assert client.post("/auth/login", data={"username": "alice", "password": DEFAULT_PASSWORD}).status_code == 401
    login(client, "alice", "brand-new-pw")

    # tek kullanımlık
    again = client.post("/auth/reset-password", json={"token": token, "password": "another-pw"})
    assert again.status_code == 400
    assert again.json()["error"] == "Invalid or expired reset token"
    with SessionLocal() as s:
        user = s.query(AppUser).filter_by(Username="alice").one()
        assert user.ResetToken is None
        assert user.ResetTokenExpiry is None


def test_expired_reset_token_is_rejected(client, make_user, sent_resets):
    make_user("alice")
    client.post("/auth/forgot-password", json={"email": "alice@x.com"})
    _, token = sent_resets[0]
    with SessionLocal() as s:
        s.query(AppUser).update({AppUser.ResetTokenExpiry: utcnow() - timedelta(seconds=1)})
        s.commit()

    r = client.post("/auth/reset-password", json={"token": token, "password": "brand-new-pw"})
    assert r.status_code == 400
    assert r.json()["error"] == "Invalid or expired reset token"


def test_unknown_reset_token_is_rejected(client):
    r = client.post("/auth/reset-password", json={"token": "f" * 64, "password": "brand-new-pw"})
    assert r.status_code == 400


# ---- roller ----
def test_only_admin_creates_users(client_for, make_user):
    make_user("alice")
    c = client_for("alice")
    r = c.post("/users", json={
        "username": "bob", "email": "bob@x.com", "password": "secret123", "full_name": "Bob",
    })
    assert r.status_code == 403
    assert r.json()["error"] == "You are not allowed to perform this action"


# ---- e-posta ----
def test_reset_link_is_logged_without_smtp(monkeypatch, caplog):
    monkeypatch.setattr(email_service.config, "SMTP_HOST", None)
    with caplog.at_level(logging.INFO, logger="gearguard.services.email_service"):
        email_service.send_password_reset_email("alice@x.com", "abc123")
    assert email_service.reset_url("abc123") in caplog.text
    assert email_service.reset_url("abc123").endswith("/reset-password/abc123")
