from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, time

import pytest

from src.timeleave.timeleave.attendance.model import AttendanceRecord
from src.timeleave.timeleave.attendance.service import AttendanceEngine
from src.timeleave.timeleave.common.clock import FixedClock
from src.timeleave.timeleave.core.enums import RejectionKind
from src.timeleave.timeleave.employees.model import EmployeeProfile

DAY = date(2026, 3, 9)


def at(hour: int, minute: int = 0, second: int = 0, day: date = DAY) -> datetime:
    return datetime.combine(day, time(hour, minute, second))


class InMemoryAttendance:
    def __init__(self):
        self._by_employee_date: dict[tuple[int, date], AttendanceRecord] = {}
        self._id = 0
        self.overtime_writes: list[str | None] = []

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> AttendanceRecord | None:
        return self._by_employee_date.get((employee_id, work_date))

    def get_recent_for_employee(self, employee_id: int, limit: int):
        items = [r for r in self._by_employee_date.values() if r.employee_id == employee_id]
        items.sort(key=lambda r: r.work_date, reverse=True)
        return items[:limit]

    def create_if_absent(self, *, employee_id, identity, work_date, month, check_in, late) -> int | None:
        if (employee_id, work_date) in self._by_employee_date:
            return None
        self._id += 1
        self._by_employee_date[(employee_id, work_date)] = AttendanceRecord(
            attendance_id=self._id,
            employee_id=employee_id,
            employee_name=identity.employee_name,
            department_name=identity.department_name,
            designation_name=identity.designation_name,
            work_date=work_date,
            month=month,
            check_in=check_in,
            late=late,
        )
        return self._id

    def _replace(self, attendance_id: int, **changes) -> AttendanceRecord | None:
        for key, rec in self._by_employee_date.items():
            if rec.attendance_id == attendance_id:
                self._by_employee_date[key] = replace(rec, **changes)
                return rec
        return None

    def set_overtime(self, *, attendance_id: int, overtime: str | None) -> None:
        self.overtime_writes.append(overtime)
        self._replace(attendance_id, overtime=overtime)

    def record_checkout(self, *, attendance_id: int, check_out: time, duration_minutes: int) -> bool:
        current = [r for r in self._by_employee_date.values() if r.attendance_id == attendance_id]
        if not current or current[0].check_out is not None:
            return False
        self._replace(attendance_id, check_out=check_out, duration_minutes=duration_minutes)
        return True

    def count(self) -> int:
        return len(self._by_employee_date)


PROFILE = EmployeeProfile(employee_id=7, name="Alex Morgan", department_name="Engineering", designation_name="Developer")


def make_engine(now: datetime = at(9)):
    repo = InMemoryAttendance()
    clock = FixedClock(now)
    return AttendanceEngine(repo, clock=clock), repo, clock


@pytest.mark.parametrize("now", [at(8, 59, 59), at(6), at(17, 0, 1), at(22, 30)])
def test_check_in_outside_window_is_rejected_without_record(now):
    engine, repo, _ = make_engine(now)

    outcome = engine.check_in(7, PROFILE)

    assert not outcome.ok
    assert outcome.rejection.kind == RejectionKind.OUTSIDE_HOURS
    assert repo.count() == 0


def test_check_in_half_a_second_after_five_is_rejected():
    engine, repo, _ = make_engine(datetime(2026, 3, 9, 17, 0, 0, 500000))

    outcome = engine.check_in(7, PROFILE)

    assert outcome.rejection.kind == RejectionKind.OUTSIDE_HOURS
    assert outcome.rejection.context["at"] == time(17)
    assert repo.count() == 0


def test_check_in_within_the_first_second_is_stored_to_the_second():
    engine, repo, _ = make_engine(datetime(2026, 3, 9, 9, 0, 0, 500000))

    outcome = engine.check_in(7, PROFILE)

    assert outcome.value.late == "00:00:00"
    assert outcome.value.check_in == time(9)
    assert repo.get_for_employee_and_date(7, DAY).check_in == time(9)


def test_after_five_message_differs_from_before_nine():
    engine, _, clock = make_engine(at(17, 30))
    late_msg = engine.check_in(7, PROFILE).rejection.message
    clock.set(at(8, 30))
    early_msg = engine.check_in(7, PROFILE).rejection.message

    assert "after 5 PM" in late_msg
    assert "from 9 AM" in early_msg


@pytest.mark.parametrize("now", [at(9), at(12, 15), at(17)])
def test_first_check_in_inside_window_succeeds(now):
    engine, repo, _ = make_engine(now)

    outcome = engine.check_in(7, PROFILE)

    assert outcome.ok
    assert repo.get_for_employee_and_date(7, DAY) is not None


def test_second_check_in_same_day_is_already_exists():
    engine, repo, clock = make_engine(at(9, 10))
    assert engine.check_in(7, PROFILE).ok

    clock.set(at(11))
    outcome = engine.check_in(7, PROFILE)

    assert outcome.rejection.kind == RejectionKind.ALREADY_EXISTS
    assert repo.count() == 1


def test_check_in_at_half_past_nine_is_thirty_minutes_late():
    engine, repo, _ = make_engine(at(9, 30))

    outcome = engine.check_in(7, PROFILE)

    assert outcome.value.late == "00:30:00"
    rec = repo.get_for_employee_and_date(7, DAY)
    assert rec.late == "00:30:00"
    assert rec.check_in == time(9, 30)
    assert rec.check_out is None


def test_check_in_snapshots_identity_and_month():
    engine, repo, _ = make_engine(at(10))
    profile = EmployeeProfile(employee_id=8, name="Sam Rivera")

    engine.check_in(8, profile)

    rec = repo.get_for_employee_and_date(8, DAY)
    assert rec.employee_name == "Sam Rivera"
    assert rec.department_name == "Not specified"
    assert rec.designation_name == "Not specified"
    assert rec.month == "March"


def test_employees_are_independent():
    engine, repo, _ = make_engine(at(9, 5))
    assert engine.check_in(7, PROFILE).ok
    assert engine.check_in(8, EmployeeProfile(employee_id=8, name="Sam")).ok
    assert repo.count() == 2


def test_check_out_without_check_in_is_rejected():
    engine, repo, _ = make_engine(at(16))

    outcome = engine.check_out(7)

    assert outcome.rejection.kind == RejectionKind.NO_CHECK_IN
    assert repo.overtime_writes == []


def test_check_out_after_five_records_overtime_and_duration():
    engine, repo, clock = make_engine(at(9))
    engine.check_in(7, PROFILE)

    clock.set(at(18))
    outcome = engine.check_out(7)

    assert outcome.ok
    assert outcome.value.overtime == "01:00:00"
    assert outcome.value.duration_minutes == 540
    rec = repo.get_for_employee_and_date(7, DAY)
    assert rec.overtime == "01:00:00"
    assert rec.duration_minutes == 540
    assert rec.check_out == time(18)


def test_check_out_half_a_second_after_five_counts_as_overtime():
    engine, repo, clock = make_engine(at(9))
    engine.check_in(7, PROFILE)

    clock.set(datetime(2026, 3, 9, 17, 0, 0, 500000))
    outcome = engine.check_out(7)

    assert outcome.value.overtime == "00:00:00"
    assert outcome.value.check_out == time(17)
    assert outcome.value.duration_minutes == 480
    rec = repo.get_for_employee_and_date(7, DAY)
    assert rec.overtime == "00:00:00"
    assert rec.check_out == time(17)
    assert repo.overtime_writes == ["00:00:00"]


def test_check_out_before_five_clears_overtime():
    engine, repo, clock = make_engine(at(9, 15))
    engine.check_in(7, PROFILE)

    clock.set(at(16))
    outcome = engine.check_out(7)

    assert outcome.ok
    assert outcome.value.overtime is None
    assert outcome.value.duration_minutes == 405
    assert repo.get_for_employee_and_date(7, DAY).overtime is None
    assert repo.overtime_writes == [None]


def test_second_check_out_is_rejected_but_overtime_is_recomputed():
    engine, repo, clock = make_engine(at(9))
    engine.check_in(7, PROFILE)
    clock.set(at(16))
    assert engine.check_out(7).ok

    clock.set(at(18, 30))
    outcome = engine.check_out(7)

    assert outcome.rejection.kind == RejectionKind.ALREADY_CHECKED_OUT
    assert outcome.rejection.context["overtime"] == "01:30:00"
    rec = repo.get_for_employee_and_date(7, DAY)
    assert rec.check_out == time(16)
    assert rec.duration_minutes == 420
    assert rec.overtime == "01:30:00"


def test_repeated_rejection_is_stable():
    engine, repo, _ = make_engine(at(7))

    first = engine.check_in(7, PROFILE)
    second = engine.check_in(7, PROFILE)

    assert first.rejection == second.rejection
    assert repo.count() == 0


def test_read_path_returns_today_and_history():
    engine, repo, clock = make_engine(at(9))
    engine.check_in(7, PROFILE)
    clock.set(at(9, day=date(2026, 3, 10)))
    engine.check_in(7, PROFILE)

    assert engine.today_record(7).work_date == date(2026, 3, 10)
    assert [r.work_date for r in engine.history(7, limit=1)] == [date(2026, 3, 10)]
    assert len(engine.history(7)) == 2


class RacingAttendance(InMemoryAttendance):
    """Another request inserts or checks out between our read and our write."""

    def get_for_employee_and_date(self, employee_id, work_date):
        rec = super().get_for_employee_and_date(employee_id, work_date)
        return replace(rec, check_out=None) if rec else None

    def create_if_absent(self, **kwargs):
        super().create_if_absent(**kwargs)
        return None


def test_check_in_losing_the_insert_race_reports_already_exists():
    repo = RacingAttendance()
    engine = AttendanceEngine(repo, clock=FixedClock(at(9, 5)))

    outcome = engine.check_in(7, PROFILE)

    assert outcome.rejection.kind == RejectionKind.ALREADY_EXISTS
    assert repo.count() == 1


def test_check_out_losing_the_update_race_reports_already_checked_out():
    repo = InMemoryAttendance()
    engine = AttendanceEngine(repo, clock=FixedClock(at(9)))
    engine.check_in(7, PROFILE)
    repo.record_checkout(attendance_id=1, check_out=time(12), duration_minutes=180)

    racing = RacingAttendance()
    racing._by_employee_date = repo._by_employee_date
    outcome = AttendanceEngine(racing, clock=FixedClock(at(13))).check_out(7)

    assert outcome.rejection.kind == RejectionKind.ALREADY_CHECKED_OUT
    assert repo.get_for_employee_and_date(7, DAY).check_out == time(12)
