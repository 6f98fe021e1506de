from __future__ import annotations

import logging
from datetime import date, time
from typing import Any, Dict, Sequence

from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from ..employees.model import IdentitySnapshot
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

_COLUMNS = """
    attendance_id, employee_id, employee_name, department_name, designation_name,
    work_date, month, check_in, check_out, late, overtime, duration_minutes
"""


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        employee_id=int(r["employee_id"]),
        employee_name=r["employee_name"],
        department_name=r["department_name"],
        designation_name=r["designation_name"],
        work_date=r["work_date"],
        month=r["month"],
        check_in=normalize_mysql_time(r["check_in"]),
        check_out=normalize_mysql_time(r.get("check_out")),
        late=r["late"],
        overtime=r.get("overtime"),
        duration_minutes=r.get("duration_minutes"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_recent_for_employee(self, employee_id: int, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE employee_id=%s
                ORDER BY work_date DESC
                LIMIT %s
                """,
                (int(employee_id), int(limit)),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> AttendanceRecord | None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE employee_id=%s AND work_date=%s
                """,
                (int(employee_id), work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

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
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    """
                    INSERT INTO attendance_records(
                        employee_id, employee_name, department_name, designation_name,
                        work_date, month, check_in, late
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        int(employee_id),
                        identity.employee_name,
                        identity.department_name,
                        identity.designation_name,
                        work_date,
                        month,
                        check_in,
                        late,
                    ),
                )
            except IntegrityError as e:
                if e.errno != errorcode.ER_DUP_ENTRY:
                    raise
                logger.info("Attendance for employee %s on %s already exists", employee_id, work_date)
                return None
            return int(cur.lastrowid)

    def set_overtime(self, *, attendance_id: int, overtime: str | None) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE attendance_records SET overtime=%s WHERE attendance_id=%s",
                (overtime, int(attendance_id)),
            )

    def record_checkout(self, *, attendance_id: int, check_out: time, duration_minutes: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_out=%s, duration_minutes=%s
                WHERE attendance_id=%s AND check_out IS NULL
                """,
                (check_out, int(duration_minutes), int(attendance_id)),
            )
            return cur.rowcount == 1
