from __future__ import annotations

import logging
from typing import Callable, Optional

from werkzeug.security import generate_password_hash

from ..common.validators import is_blank
from ..core.enums import Role
from ..core.exceptions import NotFoundError, ValidationError
from ..users.model import NewEmployee, User
from .model import Company
from .repository import CompanyRepository

logger = logging.getLogger(__name__)


def split_full_name(full_name: str) -> tuple[str, str]:
    """First token is the first name, the rest is the last name.

    A single-token name yields the same value for both parts.
    """
    parts = full_name.split()
    first_name = parts[0]
    last_name = " ".join(parts[1:]) or parts[0]
    return first_name, last_name


class CompanyService:
    """Use case: one-time company bootstrap and company lookups."""

    def __init__(
        self,
        companies: CompanyRepository,
        *,
        password_hasher: Callable[[str], str] = generate_password_hash,
    ):
        self._companies = companies
        self._hash_password = password_hasher

    def exists(self) -> bool:
        return self._companies.count() > 0

    def get(self) -> Company:
        company = self._companies.get()
        if not company:
            raise NotFoundError("Company not found", "COMPANY_NOT_FOUND")
        return company

    def setup(
        self,
        *,
        company_name: str,
        company_code: str,
        admin_name: str,
        admin_email: str,
        admin_password: str,
        company_logo: Optional[str] = None,
    ) -> tuple[Company, User]:
        required = (company_name, company_code, admin_name, admin_email, admin_password)
        if any(not isinstance(v, str) or is_blank(v) for v in required):
            raise ValidationError(
                "All fields are required",
                "MISSING_REQUIRED_FIELDS",
                details={
                    "required": ["company_name", "company_code", "admin_name", "admin_email", "admin_password"],
                },
            )

        first_name, last_name = split_full_name(admin_name)
        admin = NewEmployee(
            email=admin_email.strip().lower(),
            password_hash=self._hash_password(admin_password),
            role=Role.ADMIN,
            password_change_required=False,
            first_name=first_name,
            last_name=last_name,
        )

        company, user = self._companies.create_with_admin(
            name=company_name.strip(),
            code=company_code.strip().upper(),
            logo_url=str(company_logo or "").strip() or None,
            admin=admin,
        )
        logger.info("Company %s set up with admin user %s", company.code, user.user_id)
        return company, user
