from __future__ import annotations

from typing import Optional, Protocol

from ..users.model import NewEmployee, User
from .model import Company


class CompanyRepository(Protocol):
    def count(self) -> int:
        raise NotImplementedError

    def get(self) -> Optional[Company]:
        raise NotImplementedError

    def create_with_admin(
        self,
        *,
        name: str,
        code: str,
        logo_url: Optional[str],
        admin: NewEmployee,
    ) -> tuple[Company, User]:
        """Insert company, admin user and admin profile as one all-or-nothing unit.

        Raises ConflictError COMPANY_EXISTS when a company row is already present.
        """
        raise NotImplementedError
