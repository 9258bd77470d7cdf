"""
Session cookie authentication dependencies.

Resolves the caller's principal from the user or admin session cookie.
The two cookies have distinct names, and each is only ever handed to its
own resolver.
"""

from typing import Optional
from fastapi import Depends, HTTPException, Request, status

from modules.auth.interfaces import IAuthService
from modules.auth.models import AdminPrincipal, UserPrincipal
from shared.config import get_settings

from ..dependencies import get_auth_service


class AuthError(HTTPException):
    """Authentication error with consistent format."""
    def __init__(self, detail: str = "unauthorized"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
        )


def get_client_ip(request: Request) -> str:
    """
    Best-effort client IP for rate limiting.

    Uses the first X-Forwarded-For entry, then X-Real-IP, then "unknown".
    """
    forwarded = request.headers.get("x-forwarded-for", "")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    real_ip = request.headers.get("x-real-ip", "").strip()
    return real_ip or "unknown"


async def get_optional_user(
    request: Request,
    auth: IAuthService = Depends(get_auth_service),
) -> Optional[UserPrincipal]:
    """
    Dependency that optionally extracts the user if authenticated.

    Invalid, tampered and missing cookies all resolve to None.
    """
    token = request.cookies.get(get_settings().user_session_cookie)
    return auth.resolve_user(token)


async def get_current_user(
    user: Optional[UserPrincipal] = Depends(get_optional_user),
) -> UserPrincipal:
    """
    Dependency that requires a user session.

    Usage:
        @router.get("/protected")
        async def protected_route(user: UserPrincipal = Depends(get_current_user)):
            return {"user_id": user.user_id}
    """
    if user is None:
        raise AuthError()
    return user


async def get_optional_admin(
    request: Request,
    auth: IAuthService = Depends(get_auth_service),
) -> Optional[AdminPrincipal]:
    """Dependency that optionally extracts the admin if authenticated."""
    token = request.cookies.get(get_settings().admin_session_cookie)
    return auth.resolve_admin(token)


async def get_current_admin(
    admin: Optional[AdminPrincipal] = Depends(get_optional_admin),
) -> AdminPrincipal:
    """Dependency that requires an admin session."""
    if admin is None:
        raise AuthError()
    return admin

