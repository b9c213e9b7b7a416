import identity_api.db as db
import identity_api.redis_client as rc
from identity_api.config import settings

def up() -> bool:
    return True

def down() -> bool:
    return False

def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}

def test_ready_when_db_and_redis_answer(client, monkeypatch):
    monkeypatch.setattr(settings, "rate_limit_enabled", True)
    monkeypatch.setattr(db, "db_ping", up)
    monkeypatch.setattr(rc, "redis_ping", up)

    r = client.get("/ready")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "checks": {"db": True, "redis": True}}

def test_unready_when_redis_down(client, monkeypatch):
    monkeypatch.setattr(settings, "rate_limit_enabled", True)
    monkeypatch.setattr(db, "db_ping", up)
    monkeypatch.setattr(rc, "redis_ping", down)

    r = client.get("/ready")
    assert r.status_code == 503
    body = r.json()
    assert body["status"] == "unready"
    assert body["checks"] == {"db": True, "redis": False}

def test_db_error_is_reported_by_class(client, monkeypatch):
    def broken() -> bool:
        raise ConnectionError("password authentication failed for user app")

    monkeypatch.setattr(db, "db_ping", broken)

    r = client.get("/ready")
    assert r.status_code == 503
    body = r.json()
    assert body["checks"] == {"db": False}
    assert body["errors"] == {"db": "ConnectionError"}
    assert "password" not in r.text

def test_redis_not_required_without_rate_limiting(client, monkeypatch):
    monkeypatch.setattr(db, "db_ping", up)
    monkeypatch.setattr(rc, "redis_ping", down)

    r = client.get("/ready")
    assert r.status_code == 200
    assert r.json()["checks"] == {"db": True}
