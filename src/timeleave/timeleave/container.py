from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceEngine
from .common.clock import Clock, SystemClock
from .core.constants import DEFAULT_HISTORY_LIMIT
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_identity_provider import MySQLIdentityProvider
from .employees.repository import IdentityProvider
from .leave.mysql_leave_repository import MySQLLeaveRepository
from .leave.repository import LeaveRepository
from .leave.service import LeaveEngine


@dataclass(frozen=True)
class Container:
    clock: Clock

    identity_provider: IdentityProvider
    attendance_repo: AttendanceRepository
    leave_repo: LeaveRepository

    attendance_engine: AttendanceEngine
    leave_engine: LeaveEngine

    history_limit: int = DEFAULT_HISTORY_LIMIT


def assemble(
    *,
    identity_provider: IdentityProvider,
    attendance_repo: AttendanceRepository,
    leave_repo: LeaveRepository,
    clock: Clock | None = None,
    history_limit: int = DEFAULT_HISTORY_LIMIT,
) -> Container:
    clock = clock or SystemClock()
    return Container(
        clock=clock,
        identity_provider=identity_provider,
        attendance_repo=attendance_repo,
        leave_repo=leave_repo,
        attendance_engine=AttendanceEngine(attendance_repo, clock=clock),
        leave_engine=LeaveEngine(leave_repo, clock=clock),
        history_limit=int(history_limit),
    )


def build_container(*, db_config: dict, clock: Clock | None = None, history_limit: int = DEFAULT_HISTORY_LIMIT) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return assemble(
        identity_provider=MySQLIdentityProvider(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        leave_repo=MySQLLeaveRepository(conn),
        clock=clock,
        history_limit=history_limit,
    )
