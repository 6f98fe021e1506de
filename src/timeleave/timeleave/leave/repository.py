from __future__ import annotations

from datetime import date
from typing import ContextManager, Protocol, Sequence

from ..core.enums import LeaveStatus
from ..employees.model import IdentitySnapshot
from .model import LeaveRecord, LeaveType


class LeaveLedger(Protocol):
    """One employee's leave history inside a serializable read-then-write scope."""

    def count(self) -> int:
        raise NotImplementedError

    def sum_approved_days(self, leave_type_id: int) -> int:
        raise NotImplementedError

    def first_decided_status(self) -> LeaveStatus | None:
        """Status of the earliest-created request that is no longer pending.

        Stores that know states beyond pending/approved/rejected may return
        their own value; anything but approved or rejected blocks new requests.
        """

        raise NotImplementedError

    def latest_approved_to_date(self) -> date | None:
        raise NotImplementedError

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
        raise NotImplementedError


class LeaveRepository(Protocol):
    def get_leave_type(self, leave_type_id: int) -> LeaveType | None:
        raise NotImplementedError

    def list_leave_types(self) -> Sequence[LeaveType]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: int, limit: int) -> Sequence[LeaveRecord]:
        raise NotImplementedError

    def ledger(self, employee_id: int) -> ContextManager[LeaveLedger]:
        """Open the employee's ledger; commit on normal exit, roll back on error."""

        raise NotImplementedError
