from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AdminDashboard:
    day: date
    total_employees: int = 0
    attendance_today: Dict[AttendanceStatus, int] = field(default_factory=dict)
    pending_leaves: int = 0
