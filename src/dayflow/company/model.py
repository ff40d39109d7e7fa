from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import iso


@dataclass(frozen=True)
class Company:
    """The single tenant a deployment serves."""

    company_id: int
    name: str
    code: str
    logo_url: Optional[str] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.company_id,
            "name": self.name,
            "code": self.code,
            "logo_url": self.logo_url,
            "created_at": iso(self.created_at),
        }
