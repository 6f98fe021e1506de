from __future__ import annotations

import logging
from datetime import date
from typing import Sequence

from ..common.clock import Clock, SystemClock
from ..core.constants import DEFAULT_LEAVE_LIST_LIMIT
from ..core.enums import LeaveStatus, RejectionKind
from ..core.result import Outcome
from ..employees.model import EmployeeProfile
from .model import LeaveReceipt, LeaveRecord, LeaveType
from .repository import LeaveLedger, LeaveRepository

logger = logging.getLogger(__name__)


def inclusive_days(from_date: date, to_date: date) -> int:
    return (to_date - from_date).days + 1


class LeaveEngine:
    """Admission of leave requests.

    Rules run in a fixed order and the first failure wins. Date and quota
    checks come before the history gates; quota, gates and the insert share
    one ledger scope so two submissions cannot both spend the same days.
    """

    def __init__(self, leaves: LeaveRepository, *, clock: Clock | None = None):
        self._leaves = leaves
        self._clock = clock or SystemClock()

    def submit_leave(
        self,
        employee_id: int,
        profile: EmployeeProfile,
        *,
        from_date: date,
        to_date: date,
        leave_type_id: int,
        description: str,
        today: date | None = None,
    ) -> Outcome[LeaveReceipt]:
        today = today or self._clock.now().date()

        if to_date < from_date:
            return self._reject(
                employee_id,
                RejectionKind.INVALID_DATE_RANGE,
                "Leave end date must be on or after the start date.",
                from_date=from_date,
                to_date=to_date,
            )
        if from_date <= today:
            return self._reject(
                employee_id,
                RejectionKind.NOT_FUTURE_DATED,
                "Leave start date should be a future date.",
                from_date=from_date,
                today=today,
            )

        total_days = inclusive_days(from_date, to_date)

        leave_type = self._leaves.get_leave_type(leave_type_id)
        if leave_type is None:
            return self._reject(
                employee_id,
                RejectionKind.UNKNOWN_LEAVE_TYPE,
                "Unknown leave type.",
                leave_type_id=leave_type_id,
            )

        with self._leaves.ledger(employee_id) as ledger:
            consumed = ledger.sum_approved_days(leave_type.leave_type_id)
            if consumed + total_days > leave_type.allowed_days:
                return self._reject(
                    employee_id,
                    RejectionKind.QUOTA_EXCEEDED,
                    "Exceeds available leave days for this type.",
                    consumed=consumed,
                    requested=total_days,
                    allowed=leave_type.allowed_days,
                )

            gate = self._first_leave_gate(employee_id, ledger)
            if gate is not None:
                return gate

            previous_end = ledger.latest_approved_to_date()
            if previous_end is not None and previous_end > today:
                return self._reject(
                    employee_id,
                    RejectionKind.PREVIOUS_LEAVE_ONGOING,
                    "You cannot take leave until your previous leave date is over.",
                    previous_to_date=previous_end,
                )

            leave_id = ledger.create(
                identity=profile.snapshot(),
                from_date=from_date,
                to_date=to_date,
                total_days=total_days,
                leave_type_id=leave_type.leave_type_id,
                description=description,
            )

        logger.info(
            "Leave %s submitted by employee %s: %s..%s (%d days, type %s)",
            leave_id,
            employee_id,
            from_date,
            to_date,
            total_days,
            leave_type.leave_type_id,
        )
        return Outcome.success(
            LeaveReceipt(
                leave_id=leave_id,
                from_date=from_date,
                to_date=to_date,
                total_days=total_days,
                leave_type_id=leave_type.leave_type_id,
            )
        )

    def _first_leave_gate(self, employee_id: int, ledger: LeaveLedger) -> Outcome | None:
        if ledger.count() == 0:
            return None

        status = ledger.first_decided_status()
        if status is None:
            return self._reject(
                employee_id,
                RejectionKind.FIRST_LEAVE_PENDING,
                "You cannot take leave until your first leave is approved by the admin.",
            )
        # A rejected first leave lets the employee apply again.
        if status == LeaveStatus.REJECTED:
            return None
        # Stores with extra workflow states (e.g. "cancelled") land here.
        if status != LeaveStatus.APPROVED:
            return self._reject(
                employee_id,
                RejectionKind.FIRST_LEAVE_NOT_APPROVED,
                "You cannot take leave until your first leave is approved by the admin.",
                status=getattr(status, "value", status),
            )
        return None

    def list_leaves(self, employee_id: int, *, limit: int = DEFAULT_LEAVE_LIST_LIMIT) -> Sequence[LeaveRecord]:
        return self._leaves.list_for_employee(employee_id, int(limit))

    def list_leave_types(self) -> Sequence[LeaveType]:
        return self._leaves.list_leave_types()

    @staticmethod
    def _reject(employee_id: int, kind: RejectionKind, message: str, **context) -> Outcome:
        logger.info("Leave rejected for employee %s: %s", employee_id, kind.value)
        return Outcome.rejected(kind, message, **context)
