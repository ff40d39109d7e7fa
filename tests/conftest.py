from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal
from types import SimpleNamespace
from typing import Any, Mapping, Optional

import pytest

from dayflow.attendance.model import AttendanceRecord
from dayflow.auth.tokens import TokenService
from dayflow.company.model import Company
from dayflow.container import assemble_container
from dayflow.core.enums import LeaveStatus, LeaveType, Role
from dayflow.core.exceptions import ConflictError
from dayflow.leave.model import LeaveRequest
from dayflow.main import create_app
from dayflow.payroll.model import PayrollEntry
from dayflow.users.login_id import next_login_id
from dayflow.users.model import Employee, EmployeeProfile, NewEmployee, User

TEST_JWT_SECRET = "test-jwt-secret-0123456789abcdef0123456789"
FIXED_NOW = datetime(2026, 3, 2, 9, 0, 0)


class InMemoryUsers:
    def __init__(self):
        self._users: dict[int, User] = {}
        self._profiles: dict[int, EmployeeProfile] = {}
        self._id = 0

    def insert(self, new: NewEmployee, *, login_id: Optional[str] = None) -> User:
        if self.get_by_email(new.email):
            raise ConflictError("Email already exists", "DUPLICATE_EMAIL")
        self._id += 1
        user = User(
            user_id=self._id,
            email=new.email,
            password_hash=new.password_hash,
            role=new.role,
            login_id=login_id,
            password_change_required=new.password_change_required,
            created_at=FIXED_NOW,
        )
        self._users[user.user_id] = user
        self._profiles[user.user_id] = EmployeeProfile(
            user_id=user.user_id,
            first_name=new.first_name,
            last_name=new.last_name,
            phone=new.phone,
            department=new.department,
            position=new.position,
            hire_date=new.hire_date,
        )
        return user

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._users.get(int(user_id))

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self._users.values() if u.email == email), None)

    def get_by_login_id(self, login_id: str) -> Optional[User]:
        return next((u for u in self._users.values() if u.login_id == login_id), None)

    def update_password(self, user_id: int, *, password_hash: str, password_change_required: bool) -> bool:
        user = self._users.get(int(user_id))
        if not user:
            return False
        self._users[user.user_id] = replace(
            user, password_hash=password_hash, password_change_required=password_change_required
        )
        return True

    def create_employee(self, new: NewEmployee, *, login_id_prefix: Optional[str]) -> Employee:
        login_id = None
        if login_id_prefix:
            taken = sorted(u.login_id for u in self._users.values() if (u.login_id or "").startswith(login_id_prefix))
            login_id = next_login_id(login_id_prefix, taken[-1] if taken else None)
        user = self.insert(new, login_id=login_id)
        return self.get_employee(user.user_id)

    def get_employee(self, user_id: int) -> Optional[Employee]:
        user = self._users.get(int(user_id))
        if not user:
            return None
        return Employee(user=user, profile=self._profiles.get(user.user_id))

    def list_employees(self):
        rows = [self.get_employee(u.user_id) for u in self._users.values() if u.role == Role.EMPLOYEE]
        return sorted(rows, key=lambda e: (e.profile.first_name, e.profile.last_name))

    def update_employee(self, user_id: int, *, email: Optional[str], profile_fields: Mapping[str, Any]):
        user = self._users.get(int(user_id))
        if not user:
            return None
        if email is not None and email != user.email:
            if self.get_by_email(email):
                raise ConflictError("Email already exists", "DUPLICATE_EMAIL")
            self._users[user.user_id] = replace(user, email=email)
        if profile_fields:
            self._profiles[user.user_id] = replace(self._profiles[user.user_id], **profile_fields)
        return self.get_employee(user.user_id)

    def delete_by_id(self, user_id: int) -> bool:
        self._profiles.pop(int(user_id), None)
        return self._users.pop(int(user_id), None) is not None


class InMemoryCompany:
    def __init__(self, users: InMemoryUsers):
        self._users = users
        self.company: Optional[Company] = None

    def count(self) -> int:
        return 1 if self.company else 0

    def get(self) -> Optional[Company]:
        return self.company

    def create_with_admin(self, *, name, code, logo_url, admin: NewEmployee):
        if self.company:
            raise ConflictError("Company already exists", "COMPANY_EXISTS")
        user = self._users.insert(admin)
        self.company = Company(company_id=1, name=name, code=code, logo_url=logo_url, created_at=FIXED_NOW)
        return self.company, user


class InMemoryAttendance:
    def __init__(self):
        self._records: dict[int, AttendanceRecord] = {}
        self._id = 0

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        return next(
            (r for r in self._records.values() if r.user_id == user_id and r.work_date == work_date),
            None,
        )

    def create_checkin(self, *, user_id: int, work_date: date, check_in: datetime) -> AttendanceRecord:
        if self.get_for_user_and_date(user_id, work_date):
            raise ConflictError("Already checked in today", "DUPLICATE_CHECKIN")
        self._id += 1
        rec = AttendanceRecord(attendance_id=self._id, user_id=user_id, work_date=work_date, check_in=check_in)
        self._records[rec.attendance_id] = rec
        return rec

    def update_checkout(self, *, attendance_id: int, check_out: datetime) -> Optional[AttendanceRecord]:
        rec = self._records.get(attendance_id)
        if not rec or rec.check_out is not None:
            return None
        self._records[attendance_id] = replace(rec, check_out=check_out)
        return self._records[attendance_id]

    def list_for_user(self, user_id, *, start_date=None, end_date=None, newest_first=False, with_user=False):
        rows = [
            r
            for r in self._records.values()
            if r.user_id == user_id
            and (start_date is None or r.work_date >= start_date)
            and (end_date is None or r.work_date <= end_date)
        ]
        rows.sort(key=lambda r: r.work_date, reverse=newest_first)
        return rows


class InMemoryLeave:
    def __init__(self):
        self._requests: dict[int, LeaveRequest] = {}
        self._id = 0

    def create(self, *, user_id: int, leave_type: LeaveType, start_date: date, end_date: date, reason):
        self._id += 1
        req = LeaveRequest(
            request_id=self._id,
            user_id=user_id,
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            status=LeaveStatus.PENDING,
            reason=reason,
            created_at=FIXED_NOW,
        )
        self._requests[req.request_id] = req
        return req

    def get(self, request_id: int) -> Optional[LeaveRequest]:
        return self._requests.get(int(request_id))

    def list_requests(self, *, status=None, user_id=None, oldest_first=False):
        rows = [
            r
            for r in self._requests.values()
            if (status is None or r.status == status) and (user_id is None or r.user_id == user_id)
        ]
        rows.sort(key=lambda r: r.request_id, reverse=not oldest_first)
        return rows

    def decide(self, *, request_id: int, status: LeaveStatus, admin_comments):
        req = self._requests.get(int(request_id))
        if not req or req.status != LeaveStatus.PENDING:
            return None
        self._requests[req.request_id] = replace(req, status=status, admin_comments=admin_comments)
        return self._requests[req.request_id]


class InMemoryPayroll:
    def __init__(self):
        self._entries: dict[int, PayrollEntry] = {}
        self._id = 0

    def _period_taken(self, user_id, month, year, *, exclude=None) -> bool:
        return any(
            e.user_id == user_id and e.month == month and e.year == year and e.payroll_id != exclude
            for e in self._entries.values()
        )

    def create(self, *, user_id, month, year, base_salary: Decimal, deductions: Decimal, net_salary: Decimal):
        if self._period_taken(user_id, month, year):
            raise ConflictError("Payroll entry already exists for this user and period", "DUPLICATE_PAYROLL")
        self._id += 1
        entry = PayrollEntry(
            payroll_id=self._id,
            user_id=user_id,
            month=month,
            year=year,
            base_salary=base_salary,
            deductions=deductions,
            net_salary=net_salary,
            created_at=FIXED_NOW,
        )
        self._entries[entry.payroll_id] = entry
        return entry

    def get(self, payroll_id: int) -> Optional[PayrollEntry]:
        return self._entries.get(int(payroll_id))

    def list_entries(self, *, user_id=None, with_user=True):
        rows = [e for e in self._entries.values() if user_id is None or e.user_id == user_id]
        return sorted(rows, key=lambda e: (e.year, e.month), reverse=True)

    def update(self, payroll_id: int, fields: Mapping[str, Any]):
        entry = self._entries.get(int(payroll_id))
        if not entry:
            return None
        updated = replace(entry, **fields)
        if self._period_taken(updated.user_id, updated.month, updated.year, exclude=entry.payroll_id):
            raise ConflictError("Payroll entry already exists for this user and period", "DUPLICATE_PAYROLL")
        self._entries[entry.payroll_id] = updated
        return updated

    def delete(self, payroll_id: int) -> bool:
        return self._entries.pop(int(payroll_id), None) is not None


@pytest.fixture()
def repos():
    users = InMemoryUsers()
    return SimpleNamespace(
        users=users,
        company=InMemoryCompany(users),
        attendance=InMemoryAttendance(),
        leave=InMemoryLeave(),
        payroll=InMemoryPayroll(),
    )


@pytest.fixture()
def token_service():
    return TokenService(TEST_JWT_SECRET)


@pytest.fixture()
def container(repos, token_service):
    return assemble_container(
        users_repo=repos.users,
        company_repo=repos.company,
        attendance_repo=repos.attendance,
        leave_repo=repos.leave,
        payroll_repo=repos.payroll,
        token_service=token_service,
    )


@pytest.fixture()
def app(container):
    return create_app("dayflow.settings.testing", container=container)


@pytest.fixture()
def client(app):
    return app.test_client()


ADMIN_EMAIL = "jane@acme.com"
ADMIN_PASSWORD = "s3cretpass"


@pytest.fixture()
def company_setup(client):
    resp = client.post(
        "/api/company/setup",
        json={
            "company_name": "Acme",
            "company_code": "acme",
            "admin_name": "Jane Doe",
            "admin_email": ADMIN_EMAIL,
            "admin_password": ADMIN_PASSWORD,
        },
    )
    assert resp.status_code == 201
    return resp.get_json()


def _login(client, identifier: str, password: str) -> dict:
    resp = client.post("/api/auth/login", json={"identifier": identifier, "password": password})
    assert resp.status_code == 200, resp.get_json()
    return {"Authorization": f"Bearer {resp.get_json()['token']}"}


@pytest.fixture()
def admin_headers(client, company_setup):
    return _login(client, ADMIN_EMAIL, ADMIN_PASSWORD)


@pytest.fixture()
def employee(client, admin_headers):
    """An employee created by the admin, with its own auth headers."""
    resp = client.post(
        "/api/employees",
        json={"email": "john@acme.com", "first_name": "John", "last_name": "Smith", "password": "employee-pass"},
        headers=admin_headers,
    )
    assert resp.status_code == 201
    body = resp.get_json()
    return SimpleNamespace(id=body["id"], login_id=body["login_id"], headers=_login(client, "john@acme.com", "employee-pass"))


@pytest.fixture()
def login_as(client):
    def _do(identifier: str, password: str) -> dict:
        return _login(client, identifier, password)

    return _do


class ScriptedCursor:
    """Cursor that records SQL, fails on a matching statement and serves canned rows."""

    def __init__(self, *, fail_on=None, error=None, fail_times=None, rows=None):
        self._fail_on = fail_on
        self._error = error
        self._fail_times = fail_times
        self._rows = rows or {}
        self._last_sql = ""
        self.failures = 0
        self.executed: list[tuple[str, Any]] = []
        self.lastrowid = 0
        self.closed = 0

    def execute(self, sql, params=None):
        sql = " ".join(sql.split())
        self._last_sql = sql
        self.executed.append((sql, params))
        if self._fail_on and self._fail_on in sql:
            if self._fail_times is None or self.failures < self._fail_times:
                self.failures += 1
                raise self._error
        if sql.startswith("INSERT"):
            self.lastrowid += 1

    def fetchone(self):
        return next((row for key, row in self._rows.items() if key in self._last_sql), None)

    def fetchall(self):
        return []

    def close(self):
        self.closed += 1


class ScriptedConnection:
    def __init__(self, cursor: ScriptedCursor):
        self._cursor = cursor
        self.commits = 0
        self.rollbacks = 0
        self.closes = 0

    def cursor(self, dictionary=True):
        return self._cursor

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1

    def close(self):
        self.closes += 1


class ScriptedConnFactory:
    def __init__(self, conn: ScriptedConnection):
        self._conn = conn

    def connect(self):
        return self._conn


@pytest.fixture()
def scripted_db():
    """Build ``(conn_factory, connection, cursor)`` for driving a MySQL repository."""

    def _make(**script):
        cursor = ScriptedCursor(**script)
        conn = ScriptedConnection(cursor)
        return ScriptedConnFactory(conn), conn, cursor

    return _make
