from __future__ import annotations


from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import EmployeeProfile
from .repository import IdentityProvider


class MySQLIdentityProvider(IdentityProvider):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_profile(self, employee_id: int) -> EmployeeProfile | None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT e.employee_id, e.name, d.department_name, g.designation_name
                FROM employees e
                LEFT JOIN departments d ON d.department_id = e.department_id
                LEFT JOIN designations g ON g.designation_id = e.designation_id
                WHERE e.employee_id=%s
                """,
                (int(employee_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return EmployeeProfile(
                employee_id=int(r["employee_id"]),
                name=r["name"],
                department_name=r.get("department_name"),
                designation_name=r.get("designation_name"),
            )
