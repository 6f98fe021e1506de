from __future__ import annotations

from enum import Enum


class LeaveStatus(str, Enum):
    """Approval state of a leave request, as stored in the database."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class RejectionKind(str, Enum):
    """Closed set of business-rule rejections returned by the engines."""

    OUTSIDE_HOURS = "OUTSIDE_HOURS"
    ALREADY_EXISTS = "ALREADY_EXISTS"
    NO_CHECK_IN = "NO_CHECK_IN"
    ALREADY_CHECKED_OUT = "ALREADY_CHECKED_OUT"
    INVALID_DATE_RANGE = "INVALID_DATE_RANGE"
    NOT_FUTURE_DATED = "NOT_FUTURE_DATED"
    UNKNOWN_LEAVE_TYPE = "UNKNOWN_LEAVE_TYPE"
    QUOTA_EXCEEDED = "QUOTA_EXCEEDED"
    FIRST_LEAVE_PENDING = "FIRST_LEAVE_PENDING"
    FIRST_LEAVE_NOT_APPROVED = "FIRST_LEAVE_NOT_APPROVED"
    PREVIOUS_LEAVE_ONGOING = "PREVIOUS_LEAVE_ONGOING"
