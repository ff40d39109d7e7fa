from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Mapping, Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..auth.gates import Identity
from ..auth.tokens import TokenService
from ..common.datetime_utils import parse_optional_date
from ..common.validators import is_blank, require_fields, require_min_length, validate_email
from ..company.repository import CompanyRepository
from ..core.constants import PASSWORD_MIN_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from .login_id import generate_password, login_id_prefix
from .model import Employee, NewEmployee, User
from .repository import UserRepository

logger = logging.getLogger(__name__)


def password_matches(password_hash: str, password: str) -> bool:
    try:
        return check_password_hash(password_hash, password)
    except ValueError:
        # e.g. placeholder or corrupted hash values
        return False


@dataclass(frozen=True)
class LoginResult:
    token: str
    user: User


class AuthService:
    """Use case: authenticate (login) and self-service password change."""

    def __init__(self, users: UserRepository, tokens: TokenService):
        self._users = users
        self._tokens = tokens

    def _find(self, identifier: str) -> Optional[User]:
        identifier = identifier.strip()
        if "@" in identifier:
            return self._users.get_by_email(identifier.lower())
        return self._users.get_by_login_id(identifier.upper())

    def login(self, identifier: str, password: str) -> LoginResult:
        if is_blank(identifier) or is_blank(password):
            raise ValidationError("Email or login ID and password are required", "MISSING_CREDENTIALS")

        user = self._find(identifier)
        if not user:
            logger.warning("Login failed: unknown identifier")
            raise AuthenticationError("Invalid email or password", "INVALID_CREDENTIALS")

        if not password_matches(user.password_hash, password):
            logger.warning("Login failed: wrong password for user %s", user.user_id)
            raise AuthenticationError("Invalid email or password", "INVALID_CREDENTIALS")

        return LoginResult(token=self._tokens.issue(user), user=user)

    def change_password(self, *, user_id: int, current_password: str, new_password: str) -> None:
        if is_blank(current_password) or is_blank(new_password):
            raise ValidationError(
                "Current password and new password are required",
                "MISSING_REQUIRED_FIELDS",
                details={"required": ["current_password", "new_password"]},
            )
        require_min_length(new_password, "Password", PASSWORD_MIN_LENGTH)

        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found", "USER_NOT_FOUND")

        if not password_matches(user.password_hash, current_password):
            raise AuthenticationError("Current password is incorrect", "INVALID_CREDENTIALS")

        if not self._users.update_password(
            user.user_id,
            password_hash=generate_password_hash(new_password),
            password_change_required=False,
        ):
            raise NotFoundError("User not found", "USER_NOT_FOUND")
        logger.info("Password changed for user %s", user.user_id)


@dataclass(frozen=True)
class CreatedEmployee:
    employee: Employee
    temporary_password: Optional[str] = None


SELF_EDITABLE_FIELDS = ("first_name", "last_name", "phone", "department")
ADMIN_ONLY_FIELDS = ("position", "hire_date")


class EmployeeService:
    """Use case: employee records (admin CRUD, self read/update)."""

    def __init__(
        self,
        users: UserRepository,
        companies: CompanyRepository,
        *,
        password_hasher: Callable[[str], str] = generate_password_hash,
        today: Callable[[], date] = date.today,
    ):
        self._users = users
        self._companies = companies
        self._hash_password = password_hasher
        self._today = today

    @staticmethod
    def _ensure_self_or_admin(identity: Identity, user_id: int) -> None:
        if not identity.is_admin and identity.user_id != int(user_id):
            raise AuthorizationError("You can only access your own data", "ACCESS_DENIED")

    def list_for(self, identity: Identity) -> list[Employee]:
        if identity.is_admin:
            return list(self._users.list_employees())
        own = self._users.get_employee(identity.user_id)
        return [own] if own else []

    def get(self, identity: Identity, user_id: int) -> Employee:
        self._ensure_self_or_admin(identity, user_id)
        employee = self._users.get_employee(int(user_id))
        if not employee:
            raise NotFoundError("User not found", "USER_NOT_FOUND")
        return employee

    def create(self, payload: Mapping[str, Any]) -> CreatedEmployee:
        require_fields(
            payload,
            ("email", "first_name", "last_name"),
            "Email, first name, and last name are required",
        )
        email = validate_email(payload["email"])
        first_name = str(payload["first_name"]).strip()
        last_name = str(payload["last_name"]).strip()

        company = self._companies.get()
        if not company:
            raise ValidationError("Company has not been set up yet", "COMPANY_NOT_SETUP")

        temporary_password = None
        password = payload.get("password")
        if is_blank(password):
            temporary_password = password = generate_password()

        new = NewEmployee(
            email=email,
            password_hash=self._hash_password(str(password)),
            role=Role.EMPLOYEE,
            password_change_required=temporary_password is not None,
            first_name=first_name,
            last_name=last_name,
            phone=_optional_str(payload.get("phone")),
            department=_optional_str(payload.get("department")),
            position=_optional_str(payload.get("position")),
            hire_date=parse_optional_date(payload.get("hire_date"), field_name="hire_date"),
        )
        prefix = login_id_prefix(company.code, first_name, last_name, self._today().year)
        employee = self._users.create_employee(new, login_id_prefix=prefix)
        logger.info("Employee %s created with login id %s", employee.user.user_id, employee.user.login_id)
        return CreatedEmployee(employee=employee, temporary_password=temporary_password)

    def update(self, identity: Identity, user_id: int, payload: Mapping[str, Any]) -> Employee:
        self._ensure_self_or_admin(identity, user_id)

        allowed = SELF_EDITABLE_FIELDS + (ADMIN_ONLY_FIELDS if identity.is_admin else ())
        profile_fields: dict[str, Any] = {}
        for field in allowed:
            if field not in payload:
                continue
            value = payload[field]
            if field == "hire_date":
                value = parse_optional_date(value, field_name="hire_date")
            elif field in ("first_name", "last_name"):
                value = _optional_str(value)
                if value is None:
                    raise ValidationError(f"{field} cannot be empty", "MISSING_REQUIRED_FIELDS")
            else:
                value = _optional_str(value)
            profile_fields[field] = value

        email = None
        if identity.is_admin and not is_blank(payload.get("email")):
            email = validate_email(payload["email"])

        employee = self._users.update_employee(int(user_id), email=email, profile_fields=profile_fields)
        if not employee:
            raise NotFoundError("User not found", "USER_NOT_FOUND")
        return employee

    def delete(self, user_id: int) -> int:
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("User not found", "USER_NOT_FOUND")
        if user.role == Role.ADMIN:
            raise ValidationError("Admin accounts cannot be deleted", "CANNOT_DELETE_ADMIN")
        if not self._users.delete_by_id(user.user_id):
            raise NotFoundError("User not found", "USER_NOT_FOUND")
        return user.user_id


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None
