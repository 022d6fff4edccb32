from __future__ import annotations

from datetime import date
from typing import Dict, List, Optional, Protocol, Sequence

from ..common.bulk import BulkDeleteReport
from ..common.pagination import Page
from ..core.enums import AttendanceStatus
from .model import AttendanceFilter, AttendanceRecord


class AttendanceRepository(Protocol):
    def create(self, *, user_id: str, date: date, status: AttendanceStatus) -> AttendanceRecord:
        raise NotImplementedError

    def mark(self, *, user_id: str, date: date, status: AttendanceStatus) -> AttendanceRecord:
        """Insert or overwrite the status for (user_id, date)."""

        raise NotImplementedError

    def update(
        self,
        attendance_id: str,
        *,
        status: Optional[AttendanceStatus] = None,
        date: Optional[date] = None,
        user_id: Optional[str] = None,
    ) -> AttendanceRecord:
        raise NotImplementedError

    def delete(self, attendance_id: str) -> str:
        raise NotImplementedError

    def bulk_delete(self, attendance_ids: Sequence[str]) -> BulkDeleteReport:
        raise NotImplementedError

    def filter(self, flt: AttendanceFilter) -> Page[AttendanceRecord]:
        raise NotImplementedError

    def list_for_user(
        self,
        user_id: str,
        *,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        limit: Optional[int] = None,
    ) -> List[AttendanceRecord]:
        raise NotImplementedError

    def list_all(self, *, date_from: Optional[date] = None, date_to: Optional[date] = None) -> List[AttendanceRecord]:
        """Admin view: every record (optionally within a date range) with its owner, newest first."""

        raise NotImplementedError

    def count_by_status(self, on: date) -> Dict[AttendanceStatus, int]:
        raise NotImplementedError
