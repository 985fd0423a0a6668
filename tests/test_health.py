import pytest


def test_health_ok(client):
    r = client.get("/health")

    assert r.status_code == 200
    assert "charset=utf-8" in r.headers.get("content-type", "").lower()
    data = r.json()
    assert data["ok"] is True
    assert data["data"]["service"]


def test_db_ping(client):
    r = client.get("/db-ping")
    assert r.status_code == 200
    assert r.json()["data"] == {"db": "ok", "select1": 1}


@pytest.mark.parametrize("path", [
    "/users", "/departments", "/categories", "/teams", "/equipment",
    "/requests", "/work-centers", "/logs", "/reports/dashboard", "/auth/me",
])
def test_protected_endpoints_require_session(client, path):
    r = client.get(path)
    assert r.status_code == 401
    body = r.json()
    assert body["ok"] is False
    assert body["error"] == "Authentication required"


def test_garbage_bearer_token_is_rejected(client):
    r = client.get("/equipment", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401


def test_validation_error_envelope(admin_client):
    r = admin_client.post("/departments", json={})
    assert r.status_code == 422
    body = r.json()
    assert body["ok"] is False
    assert body["error"] == "Validation error"
    assert body["meta"]["errors"]
