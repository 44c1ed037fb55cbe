from __future__ import annotations


def test_dashboard_stats(client, login):
    login("H001")
    stats = client.get("/api/dashboard-stats").get_json()

    assert stats == {"presentToday": 3, "absentToday": 0, "pendingLeaves": 2, "attendanceRate": 23, "totalUsers": 13}

    client.post("/api/logout")
    login("T001")
    assert client.get("/api/dashboard-stats").status_code == 403
