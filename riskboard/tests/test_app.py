"""Application factory, lifespan and middleware tests."""

from fastapi.testclient import TestClient

from riskboard.config import Settings
from riskboard.main import create_app


def _settings(tmp_path, **overrides) -> Settings:
    values = {
        "DATABASE_URL": f"sqlite+aiosqlite:///{tmp_path / 'risks.db'}",
        "RATE_LIMIT_ENABLED": False,
        "CORS_ORIGINS": "http://localhost:5173",
    }
    values.update(overrides)
    return Settings(**values)


def test_startup_seeds_defaults_once(tmp_path):
    app_settings = _settings(tmp_path)

    with TestClient(create_app(app_settings)) as client:
        assert client.get("/stats").json()["total_risks"] == 8

    with TestClient(create_app(app_settings)) as client:
        stats = client.get("/stats").json()
        assert stats["total_risks"] == 8
        assert stats["max_score"] == 25


def test_seeding_can_be_disabled(tmp_path):
    with TestClient(create_app(_settings(tmp_path, SEED_DEFAULT_RISKS=False))) as client:
        assert client.get("/risks").json() == []


def test_full_flow_through_lifespan(tmp_path):
    with TestClient(create_app(_settings(tmp_path, SEED_DEFAULT_RISKS=False))) as client:
        created = client.post(
            "/assess-risk",
            json={"asset": "HR System", "threat": "Insider Data Leak", "likelihood": 4, "impact": 5},
        )
        assert created.status_code == 201
        risk_id = created.json()["id"]

        fetched = client.get(f"/risks/{risk_id}").json()
        assert fetched["level"] == "Critical"

        assert client.delete(f"/risks/{risk_id}").status_code == 200
        assert client.get(f"/risks/{risk_id}").status_code == 404


def test_health_and_readiness(tmp_path):
    with TestClient(create_app(_settings(tmp_path))) as client:
        health = client.get("/health")
        assert health.status_code == 200
        assert health.json()["status"] == "ok"
        assert health.json()["database_ready"] is True

        ready = client.get("/health/ready")
        assert ready.status_code == 200
        assert ready.json()["checks"]["database"] is True


def test_readiness_without_database_is_503(tmp_path):
    # No context manager: the lifespan never opens the database.
    client = TestClient(create_app(_settings(tmp_path)))
    assert client.get("/health/ready").status_code == 503
    assert client.get("/health").json()["database_ready"] is False


def test_request_id_and_security_headers(tmp_path):
    with TestClient(create_app(_settings(tmp_path))) as client:
        resp = client.get("/health", headers={"X-Request-ID": "req-123"})
        assert resp.headers["X-Request-ID"] == "req-123"
        assert resp.headers["X-Content-Type-Options"] == "nosniff"
        assert resp.headers["X-Frame-Options"] == "DENY"
        assert "Strict-Transport-Security" not in resp.headers

        generated = client.get("/")
        assert generated.headers["X-Request-ID"]
        assert generated.json()["service"] == "riskboard"


def test_production_adds_hsts(tmp_path):
    with TestClient(create_app(_settings(tmp_path, APP_ENV="production"))) as client:
        resp = client.get("/health")
        assert resp.headers["Strict-Transport-Security"].startswith("max-age=")


def test_rate_limit_applies_when_enabled(tmp_path):
    app_settings = _settings(tmp_path, RATE_LIMIT_ENABLED=True, RATE_LIMIT_DEFAULT="2/minute")
    with TestClient(create_app(app_settings)) as client:
        codes = [client.get("/stats").status_code for _ in range(3)]
    assert codes == [200, 200, 429]
