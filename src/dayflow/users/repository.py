from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import Employee, NewEmployee, User


class UserRepository(Protocol):
    """Credential store interface.

    Note (DIP): services depend on this protocol, not on a concrete DB.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_login_id(self, login_id: str) -> Optional[User]:
        raise NotImplementedError

    def update_password(self, user_id: int, *, password_hash: str, password_change_required: bool) -> bool:
        raise NotImplementedError

    def create_employee(self, new: NewEmployee, *, login_id_prefix: Optional[str]) -> Employee:
        """Insert user + profile atomically.

        When ``login_id_prefix`` is given the next serial for that prefix is
        allocated inside the same transaction. Raises ConflictError
        DUPLICATE_EMAIL on an email collision.
        """
        raise NotImplementedError

    def get_employee(self, user_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def list_employees(self) -> Sequence[Employee]:
        raise NotImplementedError

    def update_employee(
        self,
        user_id: int,
        *,
        email: Optional[str],
        profile_fields: Mapping[str, Any],
    ) -> Optional[Employee]:
        """Update email and profile fields in one transaction; None if missing."""
        raise NotImplementedError

    def delete_by_id(self, user_id: int) -> bool:
        raise NotImplementedError
