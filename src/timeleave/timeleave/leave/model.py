from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from ..core.enums import LeaveStatus


@dataclass(frozen=True)
class LeaveType:
    """Reference data: a kind of leave and its total quota in days."""

    leave_type_id: int
    name: str
    allowed_days: int


@dataclass(frozen=True)
class LeaveRecord:
    leave_id: int
    employee_id: int
    employee_name: str
    department_name: str
    designation_name: str
    from_date: date
    to_date: date
    total_days: int
    leave_type_id: int
    description: str
    status: LeaveStatus
    created_at: datetime


@dataclass(frozen=True)
class LeaveReceipt:
    leave_id: int
    from_date: date
    to_date: date
    total_days: int
    leave_type_id: int
    status: LeaveStatus = LeaveStatus.PENDING
