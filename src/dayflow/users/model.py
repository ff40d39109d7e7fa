from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import iso
from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: a credential record.

    Note: Plain data object, no DB access here.
    """

    user_id: int
    email: str
    password_hash: str
    role: Role
    login_id: Optional[str] = None
    password_change_required: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_public_dict(self) -> dict:
        return {
            "id": self.user_id,
            "email": self.email,
            "role": self.role.value,
            "login_id": self.login_id,
            "password_change_required": self.password_change_required,
        }


@dataclass(frozen=True)
class EmployeeProfile:
    """1:1 extension of a User. Never exists without its user row."""

    user_id: int
    first_name: str
    last_name: str
    phone: Optional[str] = None
    department: Optional[str] = None
    position: Optional[str] = None
    hire_date: Optional[date] = None


@dataclass(frozen=True)
class Employee:
    """Read-model joining a user with its profile."""

    user: User
    profile: Optional[EmployeeProfile]

    def to_dict(self) -> dict:
        p = self.profile
        return {
            "id": self.user.user_id,
            "email": self.user.email,
            "login_id": self.user.login_id,
            "role": self.user.role.value,
            "created_at": iso(self.user.created_at),
            "first_name": p.first_name if p else None,
            "last_name": p.last_name if p else None,
            "phone": p.phone if p else None,
            "department": p.department if p else None,
            "position": p.position if p else None,
            "hire_date": iso(p.hire_date) if p else None,
        }


@dataclass(frozen=True)
class NewEmployee:
    """Everything needed to insert a user and its profile in one transaction."""

    email: str
    password_hash: str
    role: Role
    password_change_required: bool
    first_name: str
    last_name: str
    phone: Optional[str] = None
    department: Optional[str] = None
    position: Optional[str] = None
    hire_date: Optional[date] = None
