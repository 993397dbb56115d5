"""
Middleware chain for server actions.

Each stage is a FastAPI dependency that resolves the caller's session from the
request headers and hands the route an explicit per-request ``AuthContext``.
Routes declare the stage they need::

    ctx: AuthContext = Depends(auth_middleware)
    ctx: AuthContext = Depends(admin_middleware)
"""
import logging
from dataclasses import dataclass
from typing import Optional
from fastapi import Depends, Request
from sqlmodel import Session

from siteadmin.core.config import settings
from siteadmin.core.errors import Forbidden, Unauthenticated
from siteadmin.db.session import get_session
from siteadmin.models.user import User, Role
from siteadmin.models.auth_session import UserSession
from siteadmin.services.auth import AuthService

logger = logging.getLogger(__name__)


@dataclass
class AuthContext:
    user: Optional[User] = None
    session: Optional[UserSession] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None


def get_request_token(request: Request) -> Optional[str]:
    auth = request.headers.get("Authorization")
    if auth and auth.startswith("Bearer "):
        return auth.split(" ", 1)[1]
    return request.cookies.get(settings.SESSION_COOKIE_NAME)


def parse_role(value: Optional[str]) -> Optional[Role]:
    try:
        return Role(value)
    except ValueError:
        return None


def role_satisfies(granted: Optional[Role], required: Role) -> bool:
    if required is Role.ADMIN:
        return granted is Role.ADMIN
    if required is Role.USER:
        return granted is Role.USER
    raise ValueError(f"Unhandled role: {required!r}")


def _lookup(request: Request, session: Session) -> AuthContext:
    found = AuthService(session).get_session(get_request_token(request))
    if not found:
        return AuthContext()
    user, user_session = found
    return AuthContext(user=user, session=user_session)


def optional_auth_middleware(request: Request, session: Session = Depends(get_session)) -> AuthContext:
    """Never fails; user and session are None for anonymous callers."""
    return _lookup(request, session)


def auth_middleware(request: Request, session: Session = Depends(get_session)) -> AuthContext:
    ctx = _lookup(request, session)
    if not ctx.is_authenticated:
        raise Unauthenticated(return_path=request.url.path)
    return ctx


def role_middleware(required: Role):
    """
    Dependency factory: authenticate, then require an exact role.
    Usage: Depends(role_middleware(Role.ADMIN))
    """
    def role_checker(request: Request, ctx: AuthContext = Depends(auth_middleware)) -> AuthContext:
        if not role_satisfies(parse_role(ctx.user.role), required):
            logger.warning(
                "User %s attempted to access %s without the required role: %s",
                ctx.user.id, request.url.path, required.value,
            )
            raise Forbidden()
        return ctx
    return role_checker


admin_middleware = role_middleware(Role.ADMIN)
