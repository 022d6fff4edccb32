from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for access control."""

    ADMIN = "ADMIN"
    EMPLOYEE = "EMPLOYEE"


class AttendanceStatus(str, Enum):
    """Per-day presence status stored for an employee."""

    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    HALF_DAY = "HALF_DAY"
    LEAVE = "LEAVE"


class LeaveStatus(str, Enum):
    """Leave lifecycle: PENDING, then APPROVED or REJECTED."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class LeaveType(str, Enum):
    SICK = "SICK"
    CASUAL = "CASUAL"
    ANNUAL = "ANNUAL"
    UNPAID = "UNPAID"


class DeleteOutcome(str, Enum):
    """Per-id result of a bulk delete."""

    DELETED = "DELETED"
    NOT_FOUND = "NOT_FOUND"
