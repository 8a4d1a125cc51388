"""Health Routes — liveness and readiness checks."""

import mini_notes.infrastructure.database as db_module


async def test_liveness(client):
    res = await client.get("/health")
    assert res.status_code == 200
    assert res.json() == {
        "status": "ok", "service": "mini-notes-api", "version": "1.0.0",
    }


async def test_readiness_with_database(client):
    res = await client.get("/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"]["database"] == "healthy"


async def test_readiness_without_database(client, monkeypatch):
    monkeypatch.setattr(db_module, "db_manager", None)
    res = await client.get("/health/ready")
    assert res.status_code == 503
    assert res.json()["reason"] == "database_unavailable"


async def test_readiness_when_driver_raises(client, monkeypatch):
    def broken_factory():
        raise RuntimeError("driver exploded")

    monkeypatch.setattr(db_module.db_manager, "_session_factory", broken_factory)
    res = await client.get("/health/ready")
    assert res.status_code == 503
