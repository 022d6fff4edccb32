from __future__ import annotations

from typing import Any, List, Mapping, Optional, Protocol, Sequence

from ..common.bulk import BulkDeleteReport
from ..common.pagination import Page
from ..core.enums import Role
from .model import Employee, EmployeeDashboard, EmployeeDetail


class EmployeeRepository(Protocol):
    def create(self, user: Mapping[str, Any], profile: Optional[Mapping[str, Any]] = None) -> Employee:
        raise NotImplementedError

    def update(self, user_id: str, user: Mapping[str, Any], profile: Optional[Mapping[str, Any]] = None) -> Employee:
        raise NotImplementedError

    def delete(self, user_id: str) -> str:
        """Remove attendance, leaves, profile and the user in one transaction."""

        raise NotImplementedError

    def bulk_delete(self, user_ids: Sequence[str]) -> BulkDeleteReport:
        raise NotImplementedError

    def get(self, user_id: str) -> Optional[Employee]:
        raise NotImplementedError

    def list_all(self, *, role: Optional[Role] = None) -> List[Employee]:
        raise NotImplementedError

    def filter(
        self,
        *,
        search: Optional[str] = None,
        role: Optional[Role] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> Page[Employee]:
        raise NotImplementedError

    def detail(self, user_id: str, *, recent: int = 10) -> Optional[EmployeeDetail]:
        raise NotImplementedError

    def dashboard(self, user_id: str, *, recent: int = 5) -> Optional[EmployeeDashboard]:
        raise NotImplementedError
