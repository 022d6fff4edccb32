from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Union

from ..core.constants import MS_PER_DAY
from ..core.enums import LeaveStatus, LeaveType
from ..users.model import UserSummary

DateLike = Union[date, datetime]


def _as_datetime(value: DateLike) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime(value.year, value.month, value.day)


def leave_duration_days(start: DateLike, end: DateLike) -> int:
    """Inclusive day count: ``ceil((end - start) / 1 day) + 1``.

    A same-day leave is 1 day; a partial day difference counts as a whole day.
    """

    delta_ms = (_as_datetime(end) - _as_datetime(start)).total_seconds() * 1000
    return math.ceil(delta_ms / MS_PER_DAY) + 1


@dataclass(frozen=True)
class LeaveRecord:
    id: str
    user_id: str
    leave_type: LeaveType
    start_date: date
    end_date: date
    reason: str
    status: LeaveStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    user: Optional[UserSummary] = None

    __json_extra__ = ("duration_days",)

    @property
    def duration_days(self) -> int:
        return leave_duration_days(self.start_date, self.end_date)


@dataclass(frozen=True)
class LeaveStats:
    year: int
    total: int = 0
    pending: int = 0
    approved: int = 0
    rejected: int = 0
    total_days: int = 0
