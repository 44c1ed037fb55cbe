from __future__ import annotations

from datetime import timedelta

import pytest

from src.campus_attendance.campus_attendance.core.enums import LeaveStatus, LeaveType
from src.campus_attendance.campus_attendance.core.exceptions import (
    AuthorizationError,
    InvalidStateTransitionError,
    NotFoundError,
    ValidationError,
)


def _request(container, caller, now, **overrides):
    data = dict(leave_type="personal", from_date="2024-12-10", to_date="2024-12-11", reason="Moving house")
    data.update(overrides)
    return container.leave_service.create_leave_request(caller=caller, now=now, **data)


def test_created_request_is_pending_and_owned_by_caller(container, teacher, fixed_now):
    req = _request(container, teacher, fixed_now)

    assert req.user_id == "T001"
    assert req.status == LeaveStatus.PENDING
    assert req.leave_type == LeaveType.PERSONAL
    assert req.approved_by is None
    assert req.responded_at is None
    assert req.created_at == fixed_now


def test_single_day_leave_allowed(container, staff, fixed_now):
    req = _request(container, staff, fixed_now, from_date="2024-12-10", to_date="2024-12-10")
    assert req.from_date == req.to_date


@pytest.mark.parametrize(
    "fields",
    [
        {"from_date": "2024-12-12", "to_date": "2024-12-11"},
        {"leave_type": "holiday"},
        {"from_date": "12/10/2024"},
        {"reason": "   "},
        {"reason": "r" * 2001},
    ],
)
def test_invalid_requests_rejected(container, teacher, fixed_now, fields):
    with pytest.raises(ValidationError):
        _request(container, teacher, fixed_now, **fields)


def test_oversight_sees_pending_queue_oldest_first(container, head, admin, teacher, staff, fixed_now):
    _request(container, staff, fixed_now + timedelta(minutes=5))
    _request(container, teacher, fixed_now + timedelta(minutes=1))

    for caller in (head, admin):
        queue = container.leave_service.list_leave_requests(caller=caller)
        created = [e.request.created_at for e in queue]
        assert created == sorted(created)
        assert [e.request.user_id for e in queue] == ["T003", "S004", "T001", "S001"]
        assert queue[0].to_dict()["user"]["name"] == "Ms. Sarah Johnson"


def test_others_see_own_requests_newest_first(container, head, teacher, fixed_now):
    older = _request(container, teacher, fixed_now)
    newer = _request(container, teacher, fixed_now + timedelta(hours=1))
    container.leave_service.respond(caller=head, request_id=older.request_id, status="rejected", now=fixed_now)

    mine = container.leave_service.list_leave_requests(caller=teacher)

    assert [r.request_id for r in mine] == [newer.request_id, older.request_id]
    assert mine[1].status == LeaveStatus.REJECTED


def test_approve_sets_responder_and_leaves_queue(container, head, fixed_now):
    responded_at = fixed_now + timedelta(hours=2)
    req = container.leave_service.respond(caller=head, request_id=1, status="approved", now=responded_at)

    assert req.status == LeaveStatus.APPROVED
    assert req.approved_by == "H001"
    assert req.responded_at == responded_at
    assert 1 not in [e.request.request_id for e in container.leave_service.list_leave_requests(caller=head)]


def test_respond_unknown_request(container, head):
    with pytest.raises(NotFoundError):
        container.leave_service.respond(caller=head, request_id=999, status="approved")


@pytest.mark.parametrize("status", ["pending", "maybe", None])
def test_respond_with_bad_status(container, head, status):
    with pytest.raises(ValidationError):
        container.leave_service.respond(caller=head, request_id=1, status=status)


def test_decided_request_cannot_be_reopened(container, head):
    container.leave_service.respond(caller=head, request_id=2, status="rejected")

    with pytest.raises(InvalidStateTransitionError):
        container.leave_service.respond(caller=head, request_id=2, status="approved")
    assert container.leaves_repo.get(2).status == LeaveStatus.REJECTED


@pytest.mark.parametrize("role_fixture", ["admin", "mazer", "assistant", "teacher", "staff"])
def test_only_head_responds(container, request, role_fixture):
    with pytest.raises(AuthorizationError):
        container.leave_service.respond(caller=request.getfixturevalue(role_fixture), request_id=1, status="approved")
