from __future__ import annotations

import logging
from datetime import datetime, time
from typing import Sequence

from ..common.clock import Clock, SystemClock
from ..common.datetime_utils import month_name
from ..common.time_window import at_work_end, at_work_start, elapsed_since, minutes_between
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import RejectionKind
from ..core.result import Outcome
from ..employees.model import EmployeeProfile
from .model import AttendanceRecord, CheckInReceipt, CheckOutReceipt
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceEngine:
    """Daily check-in/check-out state machine for one employee.

    A day's record moves NoRecord -> CheckedIn -> CheckedOut and never back.
    Every decision re-reads the store; nothing is cached between calls.
    """

    def __init__(self, attendance: AttendanceRepository, *, clock: Clock | None = None):
        self._attendance = attendance
        self._clock = clock or SystemClock()

    def _now(self, now: datetime | None) -> datetime:
        return now or self._clock.now()

    @staticmethod
    def _wall_time(now: datetime) -> time:
        # Stored and rendered to the second; rules compare the full instant.
        return now.time().replace(microsecond=0)

    def check_in(
        self,
        employee_id: int,
        profile: EmployeeProfile,
        *,
        now: datetime | None = None,
    ) -> Outcome[CheckInReceipt]:
        now = self._now(now)
        today = now.date()
        work_start = at_work_start(today)

        if now > at_work_end(today):
            return self._reject(employee_id, RejectionKind.OUTSIDE_HOURS, "You cannot check-in after 5 PM.", at=self._wall_time(now))
        if now < work_start:
            return self._reject(employee_id, RejectionKind.OUTSIDE_HOURS, "You can check-in from 9 AM.", at=self._wall_time(now))

        if self._attendance.get_for_employee_and_date(employee_id, today):
            return self._reject(employee_id, RejectionKind.ALREADY_EXISTS, "Attendance already given.", work_date=today)

        # Magnitude of the gap from 09:00:00, whatever its sign.
        late = elapsed_since(work_start, now)
        check_in = self._wall_time(now)
        attendance_id = self._attendance.create_if_absent(
            employee_id=employee_id,
            identity=profile.snapshot(),
            work_date=today,
            month=month_name(today),
            check_in=check_in,
            late=late,
        )
        if attendance_id is None:
            return self._reject(employee_id, RejectionKind.ALREADY_EXISTS, "Attendance already given.", work_date=today)

        logger.info("Employee %s checked in at %s (late %s)", employee_id, check_in, late)
        return Outcome.success(
            CheckInReceipt(attendance_id=attendance_id, work_date=today, check_in=check_in, late=late)
        )

    def check_out(self, employee_id: int, *, now: datetime | None = None) -> Outcome[CheckOutReceipt]:
        now = self._now(now)

        record = self._attendance.get_for_employee_and_date(employee_id, now.date())
        if not record:
            return self._reject(employee_id, RejectionKind.NO_CHECK_IN, "No check-in found for today.")

        regular_end = at_work_end(record.work_date)
        overtime = elapsed_since(regular_end, now) if now > regular_end else None

        # Overtime is rewritten before the double check-out test, so a rejected
        # second check-out still refreshes it. Kept as the established behavior.
        self._attendance.set_overtime(attendance_id=record.attendance_id, overtime=overtime)

        if record.checked_out:
            return self._reject(
                employee_id,
                RejectionKind.ALREADY_CHECKED_OUT,
                "You have already checked out for today.",
                check_out=record.check_out,
                overtime=overtime,
            )

        checked_in_at = datetime.combine(record.work_date, record.check_in)
        duration = minutes_between(now, checked_in_at)
        check_out = self._wall_time(now)
        if not self._attendance.record_checkout(
            attendance_id=record.attendance_id,
            check_out=check_out,
            duration_minutes=duration,
        ):
            return self._reject(
                employee_id,
                RejectionKind.ALREADY_CHECKED_OUT,
                "You have already checked out for today.",
                overtime=overtime,
            )

        logger.info("Employee %s checked out at %s (%d min, overtime %s)", employee_id, check_out, duration, overtime)
        return Outcome.success(
            CheckOutReceipt(
                attendance_id=record.attendance_id,
                check_out=check_out,
                overtime=overtime,
                duration_minutes=duration,
            )
        )

    def today_record(self, employee_id: int, *, now: datetime | None = None) -> AttendanceRecord | None:
        return self._attendance.get_for_employee_and_date(employee_id, self._now(now).date())

    def history(self, employee_id: int, *, limit: int = DEFAULT_HISTORY_LIMIT) -> Sequence[AttendanceRecord]:
        return self._attendance.get_recent_for_employee(employee_id, int(limit))

    @staticmethod
    def _reject(employee_id: int, kind: RejectionKind, message: str, **context) -> Outcome:
        logger.info("Attendance rejected for employee %s: %s", employee_id, kind.value)
        return Outcome.rejected(kind, message, **context)
