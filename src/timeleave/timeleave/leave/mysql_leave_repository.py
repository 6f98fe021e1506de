from __future__ import annotations

from contextlib import contextmanager
from datetime import date
from typing import Iterator, Sequence

from ..core.enums import LeaveStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from ..employees.model import IdentitySnapshot
from .model import LeaveRecord, LeaveType
from .repository import LeaveLedger, LeaveRepository


class MySQLLeaveLedger(LeaveLedger):
    """Ledger bound to the cursor of an open SERIALIZABLE transaction."""

    def __init__(self, cur, employee_id: int):
        self._cur = cur
        self._employee_id = int(employee_id)

    def count(self) -> int:
        self._cur.execute("SELECT COUNT(*) AS n FROM leave_records WHERE employee_id=%s", (self._employee_id,))
        return int(fetchone(self._cur)["n"])

    def sum_approved_days(self, leave_type_id: int) -> int:
        self._cur.execute(
            """
            SELECT COALESCE(SUM(total_days), 0) AS days
            FROM leave_records
            WHERE employee_id=%s AND leave_type_id=%s AND status=%s
            """,
            (self._employee_id, int(leave_type_id), LeaveStatus.APPROVED.value),
        )
        return int(fetchone(self._cur)["days"])

    def first_decided_status(self) -> LeaveStatus | None:
        self._cur.execute(
            """
            SELECT status
            FROM leave_records
            WHERE employee_id=%s AND status<>%s
            ORDER BY created_at ASC, leave_id ASC
            LIMIT 1
            """,
            (self._employee_id, LeaveStatus.PENDING.value),
        )
        r = fetchone(self._cur)
        return LeaveStatus(r["status"]) if r else None

    def latest_approved_to_date(self) -> date | None:
        self._cur.execute(
            """
            SELECT MAX(to_date) AS to_date
            FROM leave_records
            WHERE employee_id=%s AND status=%s
            """,
            (self._employee_id, LeaveStatus.APPROVED.value),
        )
        r = fetchone(self._cur)
        return r["to_date"] if r else None

    def create(
        self,
        *,
        identity: IdentitySnapshot,
        from_date: date,
        to_date: date,
        total_days: int,
        leave_type_id: int,
        description: str,
    ) -> int:
        self._cur.execute(
            """
            INSERT INTO leave_records(
                employee_id, employee_name, department_name, designation_name,
                from_date, to_date, total_days, leave_type_id, description, status
            )
            VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
            """,
            (
                self._employee_id,
                identity.employee_name,
                identity.department_name,
                identity.designation_name,
                from_date,
                to_date,
                int(total_days),
                int(leave_type_id),
                description,
                LeaveStatus.PENDING.value,
            ),
        )
        return int(self._cur.lastrowid)


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_leave_type(self, leave_type_id: int) -> LeaveType | None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT leave_type_id, name, allowed_days FROM leave_types WHERE leave_type_id=%s",
                (int(leave_type_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return LeaveType(leave_type_id=int(r["leave_type_id"]), name=r["name"], allowed_days=int(r["allowed_days"]))

    def list_leave_types(self) -> Sequence[LeaveType]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT leave_type_id, name, allowed_days FROM leave_types ORDER BY name")
            return [
                LeaveType(leave_type_id=int(r["leave_type_id"]), name=r["name"], allowed_days=int(r["allowed_days"]))
                for r in fetchall(cur)
            ]

    def list_for_employee(self, employee_id: int, limit: int) -> Sequence[LeaveRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT leave_id, employee_id, employee_name, department_name, designation_name,
                       from_date, to_date, total_days, leave_type_id, description, status, created_at
                FROM leave_records
                WHERE employee_id=%s
                ORDER BY created_at DESC
                LIMIT %s
                """,
                (int(employee_id), int(limit)),
            )
            return [
                LeaveRecord(
                    leave_id=int(r["leave_id"]),
                    employee_id=int(r["employee_id"]),
                    employee_name=r["employee_name"],
                    department_name=r["department_name"],
                    designation_name=r["designation_name"],
                    from_date=r["from_date"],
                    to_date=r["to_date"],
                    total_days=int(r["total_days"]),
                    leave_type_id=int(r["leave_type_id"]),
                    description=r["description"],
                    status=LeaveStatus(r["status"]),
                    created_at=r["created_at"],
                )
                for r in fetchall(cur)
            ]

    @contextmanager
    def ledger(self, employee_id: int) -> Iterator[LeaveLedger]:
        with db_cursor(self._conn_factory, isolation_level="SERIALIZABLE") as (_, cur):
            # Next-key locks on the employee's rows block a concurrent submission
            # until this transaction ends.
            cur.execute("SELECT leave_id FROM leave_records WHERE employee_id=%s FOR UPDATE", (int(employee_id),))
            fetchall(cur)
            yield MySQLLeaveLedger(cur, employee_id)
