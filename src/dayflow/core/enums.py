from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for route authorization."""

    ADMIN = "ADMIN"
    EMPLOYEE = "EMPLOYEE"

    @classmethod
    def parse(cls, value: "str | Role") -> "Role":
        """Normalize a role coming from a token, a DB row or a request body.

        Raises ValueError for anything outside the closed set.
        """
        if isinstance(value, cls):
            return value
        return cls(str(value).strip().upper())


class LeaveType(str, Enum):
    PAID = "PAID"
    SICK = "SICK"
    UNPAID = "UNPAID"


class LeaveStatus(str, Enum):
    """Leave approval workflow state. Only PENDING can be decided."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
