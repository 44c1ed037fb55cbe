from __future__ import annotations

from datetime import date

import pytest

from src.campus_attendance.campus_attendance.attendance.service import normalize_limit
from src.campus_attendance.campus_attendance.core.enums import AttendanceStatus
from src.campus_attendance.campus_attendance.core.exceptions import AuthorizationError, NotFoundError, ValidationError


def test_remarking_same_day_is_last_write_wins(container, mazer, fixed_now):
    svc = container.attendance_service
    first = svc.mark_attendance(
        caller=mazer, user_id="T001", work_date="2024-11-25", status="present", time_in="07:45", now=fixed_now
    )
    second = svc.mark_attendance(caller=mazer, user_id="T001", work_date="2024-11-25", status="absent", now=fixed_now)

    rec = svc.get_record("T001", date(2024, 11, 25))
    assert rec.status == AttendanceStatus.ABSENT
    assert rec.time_in is None
    assert second.attendance_id == first.attendance_id
    assert len([r for r in container.attendance_repo.list_for_date(date(2024, 11, 25)) if r.user_id == "T001"]) == 1


def test_present_defaults_time_in_to_now(container, mazer, fixed_now):
    rec = container.attendance_service.mark_attendance(
        caller=mazer, user_id="T002", work_date="2024-11-25", status="present", now=fixed_now
    )

    assert rec.time_in == "09:30"
    assert rec.marked_by == "M001"
    assert rec.marked_at == fixed_now


@pytest.mark.parametrize("status", ["absent", "on_leave"])
def test_non_present_status_clears_clock_times(container, assistant, fixed_now, status):
    rec = container.attendance_service.mark_attendance(
        caller=assistant,
        user_id="S002",
        work_date="2024-11-25",
        status=status,
        time_in="08:00",
        time_out="17:00",
        now=fixed_now,
    )

    assert rec.status == AttendanceStatus(status)
    assert rec.time_in is None
    assert rec.time_out is None
    assert container.attendance_service.get_record("S002", date(2024, 11, 25)).time_out is None


def test_mazer_cannot_mark_staff(container, mazer):
    with pytest.raises(AuthorizationError):
        container.attendance_service.mark_attendance(caller=mazer, user_id="S001", work_date="2024-11-25", status="present")


def test_assistant_cannot_mark_teachers(container, assistant):
    with pytest.raises(AuthorizationError):
        container.attendance_service.mark_attendance(
            caller=assistant, user_id="T001", work_date="2024-11-25", status="present"
        )


@pytest.mark.parametrize("role_fixture", ["head", "admin", "teacher", "staff"])
def test_only_supervisors_mark(container, request, role_fixture):
    caller = request.getfixturevalue(role_fixture)
    with pytest.raises(AuthorizationError):
        container.attendance_service.mark_attendance(caller=caller, user_id="T001", work_date="2024-11-25", status="present")


def test_marking_unknown_user(container, mazer):
    with pytest.raises(NotFoundError):
        container.attendance_service.mark_attendance(caller=mazer, user_id="T999", work_date="2024-11-25", status="present")


@pytest.mark.parametrize(
    "fields",
    [
        {"work_date": "25/11/2024"},
        {"status": "late"},
        {"user_id": ""},
        {"time_in": "7h45"},
        {"time_out": "25:00"},
        {"time_in": "10:00", "time_out": "09:00"},
    ],
)
def test_invalid_marks_rejected(container, mazer, fields):
    data = dict(user_id="T001", work_date="2024-11-25", status="present")
    data.update(fields)
    with pytest.raises(ValidationError):
        container.attendance_service.mark_attendance(caller=mazer, **data)


def test_day_listing_joins_user_identity(container, head, fixed_now):
    entries = container.attendance_service.get_attendance_for_day(caller=head, work_date="2024-11-25")

    assert {e.record.user_id for e in entries} == {"T001", "S001", "S003"}
    payload = entries[0].to_dict()
    assert payload["user"] == {"id": payload["userId"], "name": entries[0].user.name, "role": entries[0].user.role.value}


def test_day_listing_tolerates_deleted_user(container, admin):
    container.users_repo.delete_by_id("S003")
    entries = container.attendance_service.get_attendance_for_day(caller=admin, work_date="2024-11-25")

    orphan = [e for e in entries if e.record.user_id == "S003"][0]
    assert orphan.to_dict()["user"] is None


def test_day_listing_restricted_to_oversight(container, mazer):
    with pytest.raises(AuthorizationError):
        container.attendance_service.get_attendance_for_day(caller=mazer, work_date="2024-11-25")


def test_history_most_recent_first_and_limited(container, mazer, teacher, fixed_now):
    for day in ("2024-11-20", "2024-11-22", "2024-11-21", "2024-11-19"):
        container.attendance_service.mark_attendance(caller=mazer, user_id="T001", work_date=day, status="present", now=fixed_now)

    history = container.attendance_service.get_history(caller=teacher, user_id="T001", limit=3)

    assert [r.work_date.isoformat() for r in history] == ["2024-11-25", "2024-11-22", "2024-11-21"]


def test_history_cross_user_access(container, teacher, head):
    with pytest.raises(AuthorizationError):
        container.attendance_service.get_history(caller=teacher, user_id="S001")

    assert len(container.attendance_service.get_history(caller=head, user_id="S001")) == 1


@pytest.mark.parametrize("raw,expected", [(None, 10), ("abc", 10), ("0", 10), (-3, 10), ("5", 5), (500, 100)])
def test_normalize_limit(raw, expected):
    assert normalize_limit(raw) == expected
