"""Login-id and temporary password generation.

Login-id format: ``<COMPANYCODE><FirstInitial><LastInitial><YEAR><SERIAL>``,
e.g. ``ACMEJD20260001``.
"""
from __future__ import annotations

import secrets
import string
from typing import Optional

from ..core.constants import GENERATED_PASSWORD_LENGTH, LOGIN_ID_SERIAL_WIDTH

PASSWORD_ALPHABET = string.ascii_letters + string.digits + "!@#$%^&*"


def login_id_prefix(company_code: str, first_name: str, last_name: str, year: int) -> str:
    first_initial = first_name.strip()[:1].upper()
    last_initial = last_name.strip()[:1].upper()
    return f"{company_code.strip().upper()}{first_initial}{last_initial}{int(year)}"


def next_login_id(prefix: str, last_login_id: Optional[str]) -> str:
    serial = 1
    if last_login_id:
        tail = last_login_id[-LOGIN_ID_SERIAL_WIDTH:]
        if tail.isdigit():
            serial = int(tail) + 1
    return f"{prefix}{serial:0{LOGIN_ID_SERIAL_WIDTH}d}"


def generate_password(length: int = GENERATED_PASSWORD_LENGTH) -> str:
    return "".join(secrets.choice(PASSWORD_ALPHABET) for _ in range(length))
