from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.constants import DEFAULT_PAGE_LIMIT, DEFAULT_PAGE_OFFSET
from ..core.enums import AttendanceStatus
from ..users.model import UserSummary


@dataclass(frozen=True)
class AttendanceRecord:
    """One presence status per user per day."""

    id: str
    user_id: str
    date: date
    status: AttendanceStatus
    user: Optional[UserSummary] = None


@dataclass(frozen=True)
class AttendanceFilter:
    status: Optional[AttendanceStatus] = None
    search: Optional[str] = None
    user_id: Optional[str] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    limit: int = DEFAULT_PAGE_LIMIT
    offset: int = DEFAULT_PAGE_OFFSET
