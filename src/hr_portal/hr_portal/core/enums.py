from __future__ import annotations

from enum import Enum, IntEnum


class PunchState(str, Enum):
    """Punch direction as reported by the attendance device."""

    CHECK_IN = "Check In"
    CHECK_OUT = "Check Out"


class DayStatus(str, Enum):
    PRESENT = "Present"
    ABSENT = "Absent"
    HOLIDAY = "Holiday"
    FUTURE = "Future"


class ApprovalStage(IntEnum):
    """Per-stage flag stored on leave applications (0/1/2 columns)."""

    PENDING = 0
    APPROVED = 1
    REJECTED = 2


class RemoteWorkStatus(str, Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class ApplicationType(str, Enum):
    LEAVE = "leave"
    REMOTE = "remote"


class ApproverRole(str, Enum):
    MANAGER = "manager"
    HR = "hr"


class ApprovalAction(str, Enum):
    APPROVE = "approve"
    REJECT = "reject"
