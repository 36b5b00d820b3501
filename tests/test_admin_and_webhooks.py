"""Admin metrics/reset, static file hits, the Polka webhook and health."""

import uuid

from tests.conftest import bearer, register

POLKA_KEY = "f271c81ff7084ee5b99a5091b42d486e"


def polka(key=POLKA_KEY):
    return {"Authorization": f"ApiKey {key}"}


# ═══════════════════════════════════════════════════════════
# Health / static files / metrics
# ═══════════════════════════════════════════════════════════


def test_health(client):
    r = client.get("/api/healthz")
    assert r.status_code == 200
    assert r.get_json()["status"] == "ok"


def test_app_serves_index(client):
    r = client.get("/app/")
    assert r.status_code == 200
    assert b"Welcome to Chirpy" in r.data


def test_metrics_count_app_hits(client):
    client.get("/app/")
    client.get("/app/")
    client.get("/app/missing.png")
    r = client.get("/admin/metrics")
    assert r.status_code == 200
    assert r.content_type.startswith("text/html")
    assert b"Chirpy has been visited 3 times!" in r.data


def test_metrics_are_per_app(app, client):
    from api import create_app

    client.get("/app/")
    other = create_app("testing")
    try:
        r = other.test_client().get("/admin/metrics")
        assert b"visited 0 times" in r.data
    finally:
        other.extensions["chirpy"].storage.drop_all()


# ═══════════════════════════════════════════════════════════
# Reset
# ═══════════════════════════════════════════════════════════


def test_reset_clears_hits_and_users(client, user_session):
    _, token, _ = user_session
    client.post("/api/chirps", json={"body": "bye"}, headers=bearer(token))
    client.get("/app/")

    r = client.post("/admin/reset")
    assert r.status_code == 200
    assert r.get_json()["users_deleted"] == 1
    assert b"visited 0 times" in client.get("/admin/metrics").data
    assert client.get("/api/chirps").get_json()["meta"]["total"] == 0


def test_reset_forbidden_with_default_environment(monkeypatch):
    from api import create_app
    from api.config import BaseConfig, DevelopmentConfig, get_config

    # What BaseConfig reads when PLATFORM is unset
    monkeypatch.setattr(BaseConfig, "PLATFORM", "prod")
    monkeypatch.delenv("APP_ENV", raising=False)
    assert get_config(None) is DevelopmentConfig
    assert "PLATFORM" not in vars(DevelopmentConfig)

    app = create_app(None, {"DATABASE_URL": "sqlite://"})
    try:
        r = app.test_client().post("/admin/reset")
        assert r.status_code == 403
    finally:
        app.extensions["chirpy"].storage.drop_all()


def test_reset_forbidden_outside_dev(app, client):
    app.config["PLATFORM"] = "prod"
    r = client.post("/admin/reset")
    assert r.status_code == 403


# ═══════════════════════════════════════════════════════════
# Polka webhook
# ═══════════════════════════════════════════════════════════


def test_webhook_upgrades_user(client, storage):
    user, _ = register(client)
    r = client.post(
        "/api/polka/webhooks",
        json={"event": "user.upgraded", "data": {"user_id": user["id"]}},
        headers=polka(),
    )
    assert r.status_code == 204

    from models.user import User
    assert storage.get(User, user["id"]).is_chirpy_red is True


def test_webhook_ignores_other_events(client):
    r = client.post(
        "/api/polka/webhooks",
        json={"event": "user.payment_failed", "data": {"user_id": str(uuid.uuid4())}},
        headers=polka(),
    )
    assert r.status_code == 204


def test_webhook_unknown_user(client):
    r = client.post(
        "/api/polka/webhooks",
        json={"event": "user.upgraded", "data": {"user_id": str(uuid.uuid4())}},
        headers=polka(),
    )
    assert r.status_code == 404


def test_webhook_wrong_key(client):
    r = client.post(
        "/api/polka/webhooks",
        json={"event": "user.upgraded", "data": {"user_id": str(uuid.uuid4())}},
        headers=polka("wrong"),
    )
    assert r.status_code == 401


def test_webhook_requires_apikey_scheme(client):
    r = client.post(
        "/api/polka/webhooks",
        json={"event": "user.upgraded", "data": {"user_id": str(uuid.uuid4())}},
        headers=bearer(POLKA_KEY),
    )
    assert r.status_code == 401


def test_webhook_disabled_without_configured_key(app, client):
    app.config["POLKA_KEY"] = ""
    r = client.post("/api/polka/webhooks", json={"event": "user.upgraded"}, headers=polka(""))
    assert r.status_code == 401


def test_webhook_non_uuid_user_is_not_found(client):
    r = client.post(
        "/api/polka/webhooks",
        json={"event": "user.upgraded", "data": {"user_id": "nope"}},
        headers=polka(),
    )
    assert r.status_code == 404
