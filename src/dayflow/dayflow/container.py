from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Mapping, Optional

from .admin.actions import AdminActions
from .admin.service import AdminService
from .attendance.actions import AttendanceActions
from .attendance.sql_attendance_repository import SQLAttendanceRepository
from .auth.actions import AuthActions
from .auth.provider import CredentialAuthProvider
from .auth.session import SessionManager
from .auth.sql_account_repository import SQLAccountRepository
from .common.revalidate import StaleViewRegistry
from .core.constants import DEFAULT_SESSION_DAYS, DEFAULT_SESSION_REFRESH_HOURS
from .database.connection import DBConfig, DatabaseConnection
from .employees.actions import EmployeeActions
from .employees.service import EmployeeService
from .employees.sql_employee_repository import SQLEmployeeRepository
from .leaves.actions import LeaveActions
from .leaves.service import LeaveService
from .leaves.sql_leave_repository import SQLLeaveRepository
from .profiles.actions import ProfileActions
from .profiles.sql_profile_repository import SQLProfileRepository
from .users.actions import UserActions
from .users.sql_user_repository import SQLUserRepository


@dataclass(frozen=True)
class Container:
    db: DatabaseConnection
    revalidator: StaleViewRegistry

    users_repo: SQLUserRepository
    accounts_repo: SQLAccountRepository
    profiles_repo: SQLProfileRepository
    attendance_repo: SQLAttendanceRepository
    leaves_repo: SQLLeaveRepository
    employees_repo: SQLEmployeeRepository

    sessions: SessionManager
    auth_provider: CredentialAuthProvider
    leave_service: LeaveService
    employee_service: EmployeeService
    admin_service: AdminService

    auth_actions: AuthActions
    user_actions: UserActions
    profile_actions: ProfileActions
    attendance_actions: AttendanceActions
    leave_actions: LeaveActions
    employee_actions: EmployeeActions
    admin_actions: AdminActions


def build_container(
    *,
    db_config: Optional[Mapping[str, Any]] = None,
    database_url: Optional[str] = None,
    db: Optional[DatabaseConnection] = None,
    session_days: int = DEFAULT_SESSION_DAYS,
    session_refresh_hours: int = DEFAULT_SESSION_REFRESH_HOURS,
) -> Container:
    if db is None:
        if database_url:
            db = DatabaseConnection.from_url(database_url)
        else:
            db = DatabaseConnection.get_instance(DBConfig.from_dict(db_config or {}))

    revalidator = StaleViewRegistry()

    users_repo = SQLUserRepository(db)
    accounts_repo = SQLAccountRepository(db)
    profiles_repo = SQLProfileRepository(db)
    attendance_repo = SQLAttendanceRepository(db)
    leaves_repo = SQLLeaveRepository(db)
    employees_repo = SQLEmployeeRepository(db)

    sessions = SessionManager(
        profiles_repo,
        ttl=timedelta(days=session_days),
        refresh_after=timedelta(hours=session_refresh_hours),
    )
    auth_provider = CredentialAuthProvider(users_repo, accounts_repo, sessions)
    leave_service = LeaveService(leaves_repo)
    employee_service = EmployeeService(employees_repo)
    admin_service = AdminService(employees_repo, attendance_repo, leaves_repo)

    return Container(
        db=db,
        revalidator=revalidator,
        users_repo=users_repo,
        accounts_repo=accounts_repo,
        profiles_repo=profiles_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        employees_repo=employees_repo,
        sessions=sessions,
        auth_provider=auth_provider,
        leave_service=leave_service,
        employee_service=employee_service,
        admin_service=admin_service,
        auth_actions=AuthActions(auth_provider, users_repo, profiles_repo, employees_repo),
        user_actions=UserActions(users_repo, revalidator),
        profile_actions=ProfileActions(profiles_repo, auth_provider, revalidator),
        attendance_actions=AttendanceActions(attendance_repo, revalidator),
        leave_actions=LeaveActions(leaves_repo, leave_service, revalidator),
        employee_actions=EmployeeActions(employees_repo, employee_service, revalidator),
        admin_actions=AdminActions(admin_service, revalidator),
    )
