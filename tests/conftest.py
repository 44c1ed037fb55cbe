from __future__ import annotations

import os

os.environ.setdefault("APP_ENV", "testing")

from datetime import datetime

import pytest

from src.campus_attendance.campus_attendance.container import build_container
from src.campus_attendance.campus_attendance.core.enums import Role
from src.campus_attendance.campus_attendance.database.bootstrap import seed_demo_data
from src.campus_attendance.campus_attendance.main import create_app
from src.campus_attendance.campus_attendance.users.model import Caller

TEST_HASH_METHOD = "pbkdf2:sha256:1000"


@pytest.fixture
def fixed_now():
    # A Monday, so the demo schedules apply.
    return datetime(2024, 11, 25, 9, 30, 0)


@pytest.fixture
def container(fixed_now):
    c = build_container(backend="memory", password_hash_method=TEST_HASH_METHOD)
    seed_demo_data(c, now=fixed_now)
    return c


@pytest.fixture
def empty_container():
    return build_container(backend="memory", password_hash_method=TEST_HASH_METHOD)


@pytest.fixture
def head():
    return Caller(user_id="H001", role=Role.HEAD)


@pytest.fixture
def admin():
    return Caller(user_id="A001", role=Role.ADMIN)


@pytest.fixture
def mazer():
    return Caller(user_id="M001", role=Role.MAZER)


@pytest.fixture
def assistant():
    return Caller(user_id="AS001", role=Role.ASSISTANT)


@pytest.fixture
def teacher():
    return Caller(user_id="T001", role=Role.TEACHER)


@pytest.fixture
def staff():
    return Caller(user_id="S001", role=Role.STAFF)


@pytest.fixture
def app():
    return create_app(
        {
            "TESTING": True,
            "SECRET_KEY": "test-secret",
            "STORE_BACKEND": "memory",
            "AUTO_INIT_DB": False,
            "AUTO_SEED_DB": True,
            "PASSWORD_HASH_METHOD": TEST_HASH_METHOD,
            "LOG_LEVEL": "WARNING",
        }
    )


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    def _login(user_id: str, password: str = "password123"):
        resp = client.post("/api/login", json={"id": user_id, "password": password})
        assert resp.status_code == 200, resp.get_json()
        return resp

    return _login
