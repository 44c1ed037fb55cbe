from __future__ import annotations

LEAVE = {"leaveType": "sick", "fromDate": "2024-12-02", "toDate": "2024-12-03", "reason": "Flu"}


def test_leave_request_owner_comes_from_session(client, login):
    login("S002")
    resp = client.post("/api/leave-requests", json={**LEAVE, "userId": "H001"})

    assert resp.status_code == 201
    body = resp.get_json()
    assert body["userId"] == "S002"
    assert body["status"] == "pending"
    assert body["approvedBy"] is None


def test_reversed_dates_rejected(client, login):
    login("S002")
    resp = client.post("/api/leave-requests", json={**LEAVE, "fromDate": "2024-12-05"})
    assert resp.status_code == 400


def test_listing_is_scoped_by_role(client, login):
    login("T001")
    client.post("/api/leave-requests", json=LEAVE)
    mine = client.get("/api/leave-requests").get_json()
    assert [r["userId"] for r in mine] == ["T001"]
    assert "user" not in mine[0]

    client.post("/api/logout")
    login("A001")
    queue = client.get("/api/leave-requests").get_json()
    assert queue[0]["userId"] == "T003"
    assert sorted(r["userId"] for r in queue) == ["S004", "T001", "T003"]
    assert queue[0]["user"]["role"] == "teacher"


def test_head_responds_once(client, login):
    login("H001")
    resp = client.post("/api/leave-requests/1/respond", json={"status": "approved"})

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["status"] == "approved"
    assert body["approvedBy"] == "H001"
    assert body["respondedAt"] is not None
    assert [r["id"] for r in client.get("/api/leave-requests").get_json()] == [2]

    again = client.post("/api/leave-requests/1/respond", json={"status": "rejected"})
    assert again.status_code == 409


def test_respond_errors(client, login):
    login("H001")
    assert client.post("/api/leave-requests/1/respond", json={"status": "ok"}).status_code == 400
    assert client.post("/api/leave-requests/99/respond", json={"status": "approved"}).status_code == 404


def test_admin_cannot_respond(client, login):
    login("A001")
    assert client.post("/api/leave-requests/1/respond", json={"status": "approved"}).status_code == 403
