from unittest.mock import patch

from sqlalchemy.exc import OperationalError

from woodys.api.main import app
from woodys.utils.rate_limit import RequestRateLimiter


def test_home_and_build_info(client, monkeypatch):
    assert client.get("/").json()["service_name"] == "woodys-service"

    monkeypatch.setenv("BUILD_SHA", "abc123")
    monkeypatch.setenv("VERSION", "1.2.3")
    info = client.get("/build-info").json()
    assert info["build_sha"] == "abc123"
    assert info["version"] == "1.2.3"
    assert info["service_name"] == "woodys-service"


def test_health_ok(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["database"] == "ok"


def test_health_reports_unreachable_database(client):
    with patch("sqlalchemy.orm.Session.execute", side_effect=OperationalError("SELECT 1", {}, Exception("down"))):
        r = client.get("/health")
    assert r.status_code == 503
    assert r.json()["status"] == "unhealthy"


def test_rate_limit_returns_429(client):
    app.state.rate_limiter = RequestRateLimiter(2, 60)
    try:
        assert client.get("/", headers={"X-Firebase-UID": "busy"}).status_code == 200
        assert client.get("/", headers={"X-Firebase-UID": "busy"}).status_code == 200
        r = client.get("/", headers={"X-Firebase-UID": "busy"})
        assert r.status_code == 429
        assert int(r.headers["Retry-After"]) >= 1
        assert r.json()["error"] == "rate_limited"
        # other callers are unaffected
        assert client.get("/", headers={"X-Firebase-UID": "calm"}).status_code == 200
    finally:
        app.state.rate_limiter = None


def test_dev_mode_user_header(client, signup, monkeypatch):
    user, _ = signup("carver")
    payload = {"title": "Dev bench"}

    # ignored outside dev mode
    monkeypatch.delenv("DEV_MODE", raising=False)
    assert client.post("/projects", json=payload, headers={"X-User-Id": str(user["id"])}).status_code == 401

    monkeypatch.setenv("DEV_MODE", "true")
    monkeypatch.setenv("APP_BASE_URL", "http://localhost:8000")
    r = client.post("/projects", json=payload, headers={"X-User-Id": str(user["id"])})
    assert r.status_code == 201
    assert r.json()["owner_id"] == user["id"]
    assert client.post("/projects", json=payload, headers={"X-User-Id": "abc"}).status_code == 400
