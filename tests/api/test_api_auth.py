from __future__ import annotations

import pytest


def test_login_returns_identity(client):
    resp = client.post("/api/login", json={"id": "T001", "password": "password123"})

    assert resp.status_code == 200
    assert resp.get_json() == {"id": "T001", "name": "Mr. Chan", "role": "teacher", "department": "Mathematics"}


@pytest.mark.parametrize(
    "body",
    [
        {},
        {"id": "T001"},
        {"password": "password123"},
        {"id": "", "password": ""},
        {"id": "   ", "password": "password123"},
    ],
)
def test_login_missing_fields(client, body):
    resp = client.post("/api/login", json=body)
    assert resp.status_code == 400
    assert resp.get_json() == {"message": "ID and password are required"}


def test_login_non_json_body(client):
    resp = client.post("/api/login", data="id=T001", content_type="text/plain")
    assert resp.status_code == 400


def test_login_failures_are_indistinguishable(client):
    unknown = client.post("/api/login", json={"id": "X999", "password": "password123"})
    wrong = client.post("/api/login", json={"id": "T001", "password": "nope"})

    assert unknown.status_code == wrong.status_code == 401
    assert unknown.get_json() == wrong.get_json() == {"message": "Invalid credentials"}


def test_me_requires_session(client):
    resp = client.get("/api/me")
    assert resp.status_code == 401
    assert resp.get_json() == {"message": "Authentication required"}


def test_me_omits_password(client, login):
    login("S001")
    body = client.get("/api/me").get_json()

    assert body["id"] == "S001"
    assert body["isActive"] is True
    assert "password" not in body
    assert "password_hash" not in body


def test_me_after_user_deleted(client, login, app):
    login("S002")
    app.extensions["campus_attendance"].users_repo.delete_by_id("S002")

    assert client.get("/api/me").status_code == 404


def test_logout_clears_session(client, login):
    login("H001")
    assert client.post("/api/logout").get_json() == {"message": "Logged out successfully"}
    assert client.get("/api/me").status_code == 401


def test_unknown_route_is_json(client):
    resp = client.get("/api/nope")
    assert resp.status_code == 404
    assert "message" in resp.get_json()


def test_unexpected_errors_are_generic(client, login, app, monkeypatch):
    login("H001")

    def boom(**kwargs):
        raise RuntimeError("store exploded: secret detail")

    monkeypatch.setattr(app.extensions["campus_attendance"].dashboard_service, "get_stats", boom)
    resp = client.get("/api/dashboard-stats")

    assert resp.status_code == 500
    assert resp.get_json() == {"message": "Internal server error"}
