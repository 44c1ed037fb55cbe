from __future__ import annotations

import logging
from datetime import datetime
from typing import Sequence, Union

from ..common.datetime_utils import now_local, require_iso_date
from ..common.validators import require_choice, require_max_length, require_non_empty
from ..core.constants import MAX_REASON_LENGTH
from ..core.enums import LeaveStatus, LeaveType, Role
from ..core.exceptions import InvalidStateTransitionError, NotFoundError, ValidationError
from ..users.access import OVERSIGHT_ROLES, require_role
from ..users.model import Caller
from ..users.repository import UserRepository
from .model import LeaveRequest, LeaveRequestEntry
from .repository import LeaveRequestRepository

logger = logging.getLogger(__name__)

RESPONSE_STATUSES = frozenset({LeaveStatus.APPROVED, LeaveStatus.REJECTED})


class LeaveService:
    """Leave request lifecycle: pending -> approved | rejected, decided once by a head."""

    def __init__(self, leaves: LeaveRequestRepository, users: UserRepository):
        self._leaves = leaves
        self._users = users

    def create_leave_request(
        self,
        *,
        caller: Caller,
        leave_type: str,
        from_date,
        to_date,
        reason: str,
        now: datetime | None = None,
    ) -> LeaveRequest:
        # The requester is always the session user, never a client-supplied id.
        leave_type = require_choice(leave_type, LeaveType, "leaveType")
        start = require_iso_date(from_date, "fromDate")
        end = require_iso_date(to_date, "toDate")
        if start > end:
            raise ValidationError("fromDate cannot be after toDate")
        reason = require_max_length(require_non_empty(reason, "reason"), "reason", MAX_REASON_LENGTH)

        req = self._leaves.create(
            user_id=caller.user_id,
            leave_type=leave_type,
            from_date=start,
            to_date=end,
            reason=reason,
            created_at=now or now_local(),
        )
        logger.info("leave request #%s created by %s (%s)", req.request_id, caller.user_id, leave_type.value)
        return req

    def list_leave_requests(self, *, caller: Caller) -> Sequence[Union[LeaveRequestEntry, LeaveRequest]]:
        """Review queue for head/admin; own history for everyone else."""

        if caller.role in OVERSIGHT_ROLES:
            return [
                LeaveRequestEntry(request=req, user=self._users.get_by_id(req.user_id))
                for req in self._leaves.list_pending()
            ]
        return self._leaves.list_for_user(caller.user_id)

    def respond(
        self,
        *,
        caller: Caller,
        request_id: int,
        status,
        now: datetime | None = None,
    ) -> LeaveRequest:
        require_role(caller, {Role.HEAD})

        try:
            new_status = LeaveStatus(status)
        except ValueError:
            new_status = None
        if new_status not in RESPONSE_STATUSES:
            raise ValidationError("Invalid status")

        req = self._leaves.get(int(request_id))
        if not req:
            raise NotFoundError("Leave request not found")
        if req.status.is_terminal:
            raise InvalidStateTransitionError(f"Leave request is already {req.status.value}")

        decided = self._leaves.decide(
            request_id=req.request_id,
            status=new_status,
            approved_by=caller.user_id,
            responded_at=now or now_local(),
        )
        if not decided:
            # Lost a race with another responder.
            raise InvalidStateTransitionError("Leave request was already decided")

        logger.info("leave request #%s %s by %s", decided.request_id, decided.status.value, caller.user_id)
        return decided
