from __future__ import annotations

NEW_USER = {
    "id": "S010",
    "name": "Mr. Sok",
    "email": "mr.sok@university.edu",
    "password": "secret1",
    "role": "staff",
    "department": "Library",
}


def test_admin_lists_users_without_passwords(client, login):
    login("A001")
    users = client.get("/api/users").get_json()

    assert len(users) == 13
    assert all("password" not in u and "password_hash" not in u for u in users)


def test_non_admin_gets_forbidden(client, login):
    login("H001")
    for resp in (
        client.get("/api/users"),
        client.post("/api/users", json=NEW_USER),
        client.put("/api/users/T001", json={"name": "x"}),
        client.delete("/api/users/T001"),
    ):
        assert resp.status_code == 403
        assert resp.get_json() == {"message": "Insufficient permissions"}


def test_create_update_delete_roundtrip(client, login):
    login("A001")

    created = client.post("/api/users", json=NEW_USER)
    assert created.status_code == 201
    assert created.get_json()["isActive"] is True
    assert "password" not in created.get_json()

    updated = client.put("/api/users/S010", json={"department": "Finance"})
    assert updated.status_code == 200
    assert updated.get_json()["department"] == "Finance"

    deleted = client.delete("/api/users/S010")
    assert deleted.status_code == 200
    assert deleted.get_json() == {"message": "User deleted successfully"}

    assert client.put("/api/users/S010", json={"name": "x"}).status_code == 404
    assert client.delete("/api/users/S010").status_code == 404


def test_create_invalid_shape(client, login):
    login("A001")
    resp = client.post("/api/users", json={**NEW_USER, "role": "dean"})
    assert resp.status_code == 400


def test_created_user_can_log_in(client, login):
    login("A001")
    client.post("/api/users", json=NEW_USER)
    client.post("/api/logout")

    resp = client.post("/api/login", json={"id": "S010", "password": "secret1"})
    assert resp.status_code == 200
    assert resp.get_json()["role"] == "staff"


def test_overlong_fields_are_bad_requests(client, login):
    login("A001")
    resp = client.post("/api/users", json={**NEW_USER, "id": "X" * 40, "name": "N" * 300})

    assert resp.status_code == 400
    assert client.put("/api/users/T001", json={"department": "D" * 121}).status_code == 400
