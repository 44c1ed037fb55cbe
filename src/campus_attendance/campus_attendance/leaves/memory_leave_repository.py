from __future__ import annotations

import threading
from dataclasses import replace
from datetime import date, datetime
from typing import Dict, Optional, Sequence

from ..core.enums import LeaveStatus, LeaveType
from .model import LeaveRequest
from .repository import LeaveRequestRepository


class InMemoryLeaveRequestRepository(LeaveRequestRepository):
    def __init__(self):
        self._lock = threading.RLock()
        self._requests: Dict[int, LeaveRequest] = {}
        self._next_id = 1

    def create(
        self,
        *,
        user_id: str,
        leave_type: LeaveType,
        from_date: date,
        to_date: date,
        reason: str,
        created_at: datetime,
    ) -> LeaveRequest:
        with self._lock:
            req = LeaveRequest(
                request_id=self._next_id,
                user_id=user_id,
                leave_type=leave_type,
                from_date=from_date,
                to_date=to_date,
                reason=reason,
                status=LeaveStatus.PENDING,
                created_at=created_at,
            )
            self._next_id += 1
            self._requests[req.request_id] = req
            return req

    def get(self, request_id: int) -> Optional[LeaveRequest]:
        with self._lock:
            return self._requests.get(int(request_id))

    def list_pending(self) -> Sequence[LeaveRequest]:
        with self._lock:
            items = [r for r in self._requests.values() if r.status == LeaveStatus.PENDING]
        items.sort(key=lambda r: (r.created_at, r.request_id))
        return items

    def list_for_user(self, user_id: str) -> Sequence[LeaveRequest]:
        with self._lock:
            items = [r for r in self._requests.values() if r.user_id == user_id]
        items.sort(key=lambda r: (r.created_at, r.request_id), reverse=True)
        return items

    def count_pending(self) -> int:
        with self._lock:
            return sum(1 for r in self._requests.values() if r.status == LeaveStatus.PENDING)

    def decide(
        self,
        *,
        request_id: int,
        status: LeaveStatus,
        approved_by: str,
        responded_at: datetime,
    ) -> Optional[LeaveRequest]:
        with self._lock:
            req = self._requests.get(int(request_id))
            if not req or req.status != LeaveStatus.PENDING:
                return None
            decided = replace(req, status=status, approved_by=approved_by, responded_at=responded_at)
            self._requests[decided.request_id] = decided
            return decided
