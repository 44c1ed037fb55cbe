from __future__ import annotations

import threading
from datetime import date, datetime

from src.campus_attendance.campus_attendance.attendance.memory_attendance_repository import InMemoryAttendanceRepository
from src.campus_attendance.campus_attendance.core.enums import AttendanceStatus, LeaveType
from src.campus_attendance.campus_attendance.leaves.memory_leave_repository import InMemoryLeaveRequestRepository


def _run_in_threads(target, count: int) -> None:
    barrier = threading.Barrier(count)

    def worker(i: int) -> None:
        barrier.wait()
        target(i)

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(count)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()


def test_concurrent_marks_for_same_slot_leave_one_record():
    repo = InMemoryAttendanceRepository()
    day = date(2024, 11, 25)

    def mark(i: int) -> None:
        for _ in range(50):
            repo.upsert(
                user_id="T001",
                work_date=day,
                status=AttendanceStatus.PRESENT if i % 2 else AttendanceStatus.ABSENT,
                time_in="08:00" if i % 2 else None,
                time_out=None,
                marked_by="M001",
                marked_at=datetime(2024, 11, 25, 8, 0),
            )

    _run_in_threads(mark, 8)

    records = repo.list_for_date(day)
    assert len(records) == 1
    assert records[0].attendance_id == 1


def test_concurrent_creates_get_unique_ids():
    repo = InMemoryLeaveRequestRepository()
    ids: list[int] = []
    ids_lock = threading.Lock()

    def create(i: int) -> None:
        for _ in range(25):
            req = repo.create(
                user_id=f"S00{i}",
                leave_type=LeaveType.PERSONAL,
                from_date=date(2024, 12, 1),
                to_date=date(2024, 12, 2),
                reason="x",
                created_at=datetime(2024, 11, 25, 8, 0),
            )
            with ids_lock:
                ids.append(req.request_id)

    _run_in_threads(create, 8)

    assert len(ids) == 200
    assert len(set(ids)) == 200
    assert repo.count_pending() == 200
