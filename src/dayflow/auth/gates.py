"""Request gates: the auth gate verifies the bearer token, the role gate checks
the verified identity against an allow-list.

Both are plain functions (testable without Flask) wrapped by view decorators.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import wraps
from typing import Iterable, Optional

from flask import current_app, g, has_request_context, request

from ..core.constants import GENERIC_ERROR_MESSAGE
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, InternalError
from .tokens import InvalidTokenError, TokenExpiredError, TokenService

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


@dataclass(frozen=True)
class Identity:
    """Verified caller attached to the request context."""

    user_id: int
    email: str
    role: Role
    login_id: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def to_dict(self) -> dict:
        return {"id": self.user_id, "email": self.email, "role": self.role.value}


def extract_bearer(header: Optional[str]) -> str:
    if not header or not header.startswith(BEARER_PREFIX):
        raise AuthenticationError("Authentication required", "MISSING_TOKEN")
    token = header[len(BEARER_PREFIX):].strip()
    if not token:
        raise AuthenticationError("Authentication required", "MISSING_TOKEN")
    return token


def authenticate_header(header: Optional[str], tokens: TokenService) -> Identity:
    token = extract_bearer(header)
    try:
        claims = tokens.verify(token)
    except TokenExpiredError:
        raise AuthenticationError("Session expired, please login again", "TOKEN_EXPIRED")
    except InvalidTokenError:
        logger.warning("Rejected bearer token from %s", request.remote_addr if has_request_context() else "-")
        raise AuthenticationError("Invalid token", "INVALID_TOKEN")
    except Exception:
        logger.exception("Unexpected failure while verifying bearer token")
        raise InternalError(GENERIC_ERROR_MESSAGE)

    return Identity(user_id=claims.user_id, email=claims.email, role=claims.role, login_id=claims.login_id)


def check_role(identity: Optional[Identity], allowed: Iterable[Role]) -> None:
    if identity is None:
        raise AuthenticationError("Authentication required", "MISSING_AUTH")
    if identity.role not in set(allowed):
        raise AuthorizationError("Access denied", "INSUFFICIENT_PERMISSIONS")


def current_identity() -> Optional[Identity]:
    return g.get("identity")


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        tokens = current_app.extensions["dayflow"].token_service
        g.identity = authenticate_header(request.headers.get("Authorization"), tokens)
        return view(*args, **kwargs)

    return wrapper


def roles_required(*roles: Role):
    """Role gate. Must sit below ``login_required``."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            check_role(current_identity(), roles)
            return view(*args, **kwargs)

        return wrapper

    return decorator


admin_required = roles_required(Role.ADMIN)
