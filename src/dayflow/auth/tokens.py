"""Bearer token issuance and verification (HS256 JWT).

Tokens are stateless: a token is valid when its signature checks out and its
``exp`` claim is in the future. There is no server-side session table.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from ..core.constants import DEFAULT_TOKEN_HOURS
from ..core.enums import Role
from ..users.model import User

JWT_ALGORITHM = "HS256"


class TokenError(Exception):
    """Base class for token verification failures."""


class TokenExpiredError(TokenError):
    """Signature is valid but the token is past its expiry."""


class InvalidTokenError(TokenError):
    """Signature invalid, token malformed, or claims unusable."""


@dataclass(frozen=True)
class TokenClaims:
    user_id: int
    email: str
    role: Role
    login_id: Optional[str] = None
    expires_at: Optional[datetime] = None


class TokenService:
    def __init__(self, secret: str, *, expires_in: timedelta = timedelta(hours=DEFAULT_TOKEN_HOURS)):
        if not secret:
            raise ValueError("Token secret must not be empty")
        self._secret = secret
        self._expires_in = expires_in

    def issue(self, user: User, *, now: Optional[datetime] = None) -> str:
        now = now or datetime.now(timezone.utc)
        payload = {
            "id": user.user_id,
            "email": user.email,
            "role": user.role.value,
            "login_id": user.login_id,
            "iat": int(now.timestamp()),
            "exp": int((now + self._expires_in).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=JWT_ALGORITHM)

    def verify(self, token: str) -> TokenClaims:
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[JWT_ALGORITHM],
                options={"require": ["exp", "iat"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise TokenExpiredError("Token expired") from exc
        except jwt.InvalidTokenError as exc:
            raise InvalidTokenError("Invalid token") from exc

        user_id = payload.get("id")
        email = payload.get("email")
        if isinstance(user_id, bool) or not isinstance(user_id, int) or not email:
            raise InvalidTokenError("Invalid token")
        try:
            role = Role.parse(payload.get("role"))
        except ValueError as exc:
            raise InvalidTokenError("Invalid token") from exc

        return TokenClaims(
            user_id=user_id,
            email=email,
            role=role,
            login_id=payload.get("login_id"),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )
