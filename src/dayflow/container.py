from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .auth.tokens import TokenService
from .company.mysql_company_repository import MySQLCompanyRepository
from .company.repository import CompanyRepository
from .company.service import CompanyService
from .database.connection import DatabaseConnection, db_config_from_dict
from .leave.mysql_leave_repository import MySQLLeaveRepository
from .leave.repository import LeaveRepository
from .leave.service import LeaveService
from .payroll.mysql_payroll_repository import MySQLPayrollRepository
from .payroll.repository import PayrollRepository
from .payroll.service import PayrollService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, EmployeeService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    company_repo: CompanyRepository
    attendance_repo: AttendanceRepository
    leave_repo: LeaveRepository
    payroll_repo: PayrollRepository

    token_service: TokenService
    auth_service: AuthService
    company_service: CompanyService
    employee_service: EmployeeService
    attendance_service: AttendanceService
    leave_service: LeaveService
    payroll_service: PayrollService


def assemble_container(
    *,
    users_repo: UserRepository,
    company_repo: CompanyRepository,
    attendance_repo: AttendanceRepository,
    leave_repo: LeaveRepository,
    payroll_repo: PayrollRepository,
    token_service: TokenService,
) -> Container:
    """Wire services on top of the given repositories (MySQL or in-memory)."""
    return Container(
        users_repo=users_repo,
        company_repo=company_repo,
        attendance_repo=attendance_repo,
        leave_repo=leave_repo,
        payroll_repo=payroll_repo,
        token_service=token_service,
        auth_service=AuthService(users_repo, token_service),
        company_service=CompanyService(company_repo),
        employee_service=EmployeeService(users_repo, company_repo),
        attendance_service=AttendanceService(attendance_repo),
        leave_service=LeaveService(leave_repo),
        payroll_service=PayrollService(payroll_repo, users_repo),
    )


def build_container(*, db_config: dict, jwt_secret: str, jwt_expires_hours: int) -> Container:
    conn = DatabaseConnection.get_instance(db_config_from_dict(db_config))

    return assemble_container(
        users_repo=MySQLUserRepository(conn),
        company_repo=MySQLCompanyRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        leave_repo=MySQLLeaveRepository(conn),
        payroll_repo=MySQLPayrollRepository(conn),
        token_service=TokenService(jwt_secret, expires_in=timedelta(hours=int(jwt_expires_hours))),
    )