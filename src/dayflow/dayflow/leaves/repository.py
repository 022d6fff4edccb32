from __future__ import annotations

from datetime import date
from typing import Any, List, Mapping, Optional, Protocol, Sequence

from ..common.bulk import BulkDeleteReport
from ..core.enums import LeaveStatus, LeaveType
from .model import LeaveRecord


class LeaveRepository(Protocol):
    def get_by_id(self, leave_id: str) -> Optional[LeaveRecord]:
        raise NotImplementedError

    def create(
        self,
        *,
        user_id: str,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        reason: str,
    ) -> LeaveRecord:
        """Insert a new leave; it always starts PENDING."""

        raise NotImplementedError

    def update(self, leave_id: str, changes: Mapping[str, Any]) -> LeaveRecord:
        raise NotImplementedError

    def delete(self, leave_id: str) -> str:
        raise NotImplementedError

    def bulk_delete(self, leave_ids: Sequence[str]) -> BulkDeleteReport:
        raise NotImplementedError

    def list_for_user(self, user_id: str, *, limit: Optional[int] = None) -> List[LeaveRecord]:
        raise NotImplementedError

    def list_all(self, *, status: Optional[LeaveStatus] = None) -> List[LeaveRecord]:
        raise NotImplementedError

    def list_starting_between(self, user_id: str, start: date, end: date) -> List[LeaveRecord]:
        raise NotImplementedError

    def count(self, *, status: Optional[LeaveStatus] = None) -> int:
        raise NotImplementedError
