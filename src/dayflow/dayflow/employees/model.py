from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from ..attendance.model import AttendanceRecord
from ..leaves.model import LeaveRecord
from ..profiles.model import Profile
from ..users.model import User


@dataclass(frozen=True)
class Employee:
    """A user with its profile and how many attendance/leave rows it owns."""

    user: User
    profile: Optional[Profile]
    attendance_count: int = 0
    leave_count: int = 0


@dataclass(frozen=True)
class EmployeeDetail:
    user: User
    profile: Optional[Profile]
    attendance: List[AttendanceRecord] = field(default_factory=list)
    leaves: List[LeaveRecord] = field(default_factory=list)


@dataclass(frozen=True)
class EmployeeDashboard:
    profile: Optional[Profile]
    attendance: List[AttendanceRecord] = field(default_factory=list)
    leaves: List[LeaveRecord] = field(default_factory=list)


@dataclass(frozen=True)
class ActivityItem:
    type: str
    date: date
    message: str
