from datetime import date, time

import pytest
from mysql.connector.errors import IntegrityError

from src.timeleave.timeleave.attendance.mysql_attendance_repository import MySQLAttendanceRepository
from src.timeleave.timeleave.core.exceptions import StoreError
from src.timeleave.timeleave.employees.model import IdentitySnapshot

DAY = date(2026, 3, 9)
SNAPSHOT = IdentitySnapshot(employee_name="Alex Morgan", department_name="Engineering", designation_name="Developer")


class ScriptedCursor:
    def __init__(self, conn):
        self._conn = conn
        self.rowcount = conn.rowcount
        self.lastrowid = conn.lastrowid

    def execute(self, sql, params=None):
        self._conn.executed.append((" ".join(sql.split()), params))
        if self._conn.fail_with is not None:
            raise self._conn.fail_with

    def fetchone(self):
        return self._conn.rows[0] if self._conn.rows else None

    def fetchall(self):
        return list(self._conn.rows)

    def close(self):
        pass


class ScriptedConnection:
    def __init__(self, *, rowcount=0, lastrowid=None, fail_with=None, rows=()):
        self.rowcount = rowcount
        self.lastrowid = lastrowid
        self.fail_with = fail_with
        self.rows = list(rows)
        self.executed = []
        self.calls = []

    def cursor(self, dictionary=False):
        return ScriptedCursor(self)

    def commit(self):
        self.calls.append("commit")

    def rollback(self):
        self.calls.append("rollback")

    def close(self):
        self.calls.append("close")


class ScriptedFactory:
    def __init__(self, conn):
        self.conn = conn

    def connect(self, **kwargs):
        return self.conn


def make_repo(**script):
    conn = ScriptedConnection(**script)
    return MySQLAttendanceRepository(ScriptedFactory(conn)), conn


def create(repo):
    return repo.create_if_absent(
        employee_id=7,
        identity=SNAPSHOT,
        work_date=DAY,
        month="March",
        check_in=time(9, 30),
        late="00:30:00",
    )


def test_create_returns_new_id():
    repo, conn = make_repo(lastrowid=42)

    assert create(repo) == 42
    assert conn.calls == ["commit", "close"]
    sql, params = conn.executed[0]
    assert sql.startswith("INSERT INTO attendance_records(")
    assert params == (7, "Alex Morgan", "Engineering", "Developer", DAY, "March", time(9, 30), "00:30:00")


def test_duplicate_key_means_not_created():
    repo, conn = make_repo(fail_with=IntegrityError(msg="Duplicate entry '7-2026-03-09'", errno=1062))

    assert create(repo) is None
    assert conn.calls == ["commit", "close"]


def test_other_integrity_errors_are_store_errors():
    repo, conn = make_repo(fail_with=IntegrityError(msg="Cannot add or update a child row", errno=1452))

    with pytest.raises(StoreError, match="child row"):
        create(repo)

    assert conn.calls == ["rollback", "close"]


@pytest.mark.parametrize("rowcount, expected", [(1, True), (0, False)])
def test_record_checkout_reports_whether_it_won(rowcount, expected):
    repo, conn = make_repo(rowcount=rowcount)

    assert repo.record_checkout(attendance_id=3, check_out=time(17), duration_minutes=480) is expected
    sql, params = conn.executed[0]
    assert "check_out IS NULL" in sql
    assert params == (time(17), 480, 3)


def test_set_overtime_writes_null_when_cleared():
    repo, conn = make_repo(rowcount=1)

    assert repo.set_overtime(attendance_id=3, overtime=None) is None
    assert conn.executed[0][1] == (None, 3)


def test_read_normalizes_time_columns():
    row = {
        "attendance_id": 3,
        "employee_id": 7,
        "employee_name": "Alex Morgan",
        "department_name": "Engineering",
        "designation_name": "Developer",
        "work_date": DAY,
        "month": "March",
        "check_in": "09:30:00",
        "check_out": None,
        "late": "00:30:00",
        "overtime": None,
        "duration_minutes": None,
    }
    repo, _ = make_repo(rows=[row])

    rec = repo.get_for_employee_and_date(7, DAY)

    assert rec.check_in == time(9, 30)
    assert not rec.checked_out
