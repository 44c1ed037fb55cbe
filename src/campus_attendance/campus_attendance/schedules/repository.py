from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Schedule


class ScheduleRepository(Protocol):
    def list_for_day(self, day_of_week: str) -> Sequence[Schedule]:
        """day_of_week is expected lower-case ("monday")."""

        raise NotImplementedError

    def list_for_user(self, user_id: str) -> Sequence[Schedule]:
        raise NotImplementedError

    def create(
        self,
        *,
        user_id: str,
        day_of_week: str,
        start_time: str,
        end_time: str,
        subject: Optional[str] = None,
        work_type: Optional[str] = None,
    ) -> Schedule:
        raise NotImplementedError
