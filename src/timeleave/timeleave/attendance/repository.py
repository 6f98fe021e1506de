from __future__ import annotations

from datetime import date, time
from typing import Protocol, Sequence

from ..employees.model import IdentitySnapshot
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_recent_for_employee(self, employee_id: int, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> AttendanceRecord | None:
        raise NotImplementedError

    def create_if_absent(
        self,
        *,
        employee_id: int,
        identity: IdentitySnapshot,
        work_date: date,
        month: str,
        check_in: time,
        late: str,
    ) -> int | None:
        """Atomically insert the day's record.

        Returns the new id, or None when a record for (employee_id, work_date)
        already exists.
        """

        raise NotImplementedError

    def set_overtime(self, *, attendance_id: int, overtime: str | None) -> None:
        raise NotImplementedError

    def record_checkout(self, *, attendance_id: int, check_out: time, duration_minutes: int) -> bool:
        """Set check-out once. Returns False if it was already set."""

        raise NotImplementedError
