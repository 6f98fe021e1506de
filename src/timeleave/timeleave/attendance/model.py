from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one calendar day.

    Identity fields are a snapshot taken at check-in, not a live reference.
    """

    attendance_id: int
    employee_id: int
    employee_name: str
    department_name: str
    designation_name: str
    work_date: date
    month: str
    check_in: time
    late: str
    check_out: time | None = None
    overtime: str | None = None
    duration_minutes: int | None = None

    @property
    def checked_out(self) -> bool:
        return self.check_out is not None


@dataclass(frozen=True)
class CheckInReceipt:
    attendance_id: int
    work_date: date
    check_in: time
    late: str


@dataclass(frozen=True)
class CheckOutReceipt:
    attendance_id: int
    check_out: time
    overtime: str | None
    duration_minutes: int
