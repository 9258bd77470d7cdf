"""
Authentication API endpoints.

Admin login/logout/me and the user session probe/logout. User sign-in
itself (password check against the user table) lives outside this service
and obtains its cookie value from IAuthService.issue_user_session().
"""

from typing import Optional

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from api.dependencies import get_auth_service
from api.middleware.auth import get_client_ip, get_optional_admin, get_optional_user
from shared.config import get_settings

from .exceptions import (
    InvalidCredentialsError,
    LoginRateLimitedError,
    MissingCredentialsError,
)
from .interfaces import IAuthService
from .models import (
    AdminLoginRequest,
    AdminPrincipal,
    AdminSessionResponse,
    UserPrincipal,
    UserSessionResponse,
)

admin_router = APIRouter()
user_router = APIRouter()


def _expire_cookie(response: Response, name: str) -> None:
    settings = get_settings()
    response.set_cookie(
        name,
        "",
        max_age=0,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.secure_cookies,
    )


@admin_router.post("/login")
async def admin_login(
    body: AdminLoginRequest,
    request: Request,
    auth: IAuthService = Depends(get_auth_service),
):
    """
    Sign in as the portal administrator.

    Attempts are limited per client IP and email. A limited attempt gets a
    429 with a Retry-After header, whatever the password.
    """
    try:
        result = auth.admin_login(body.email, body.password, get_client_ip(request))
    except MissingCredentialsError as e:
        return JSONResponse({"ok": False, "error": e.message}, status_code=400)
    except LoginRateLimitedError as e:
        return JSONResponse(
            {"ok": False, "error": e.message, "retry_after_seconds": e.retry_after_seconds},
            status_code=429,
            headers={"Retry-After": str(e.retry_after_seconds)},
        )
    except InvalidCredentialsError as e:
        return JSONResponse({"ok": False, "error": e.message}, status_code=401)

    settings = get_settings()
    response = JSONResponse(
        {"ok": True, "session": {"email": result.principal.email, "role": "admin"}}
    )
    response.set_cookie(
        settings.admin_session_cookie,
        result.token,
        max_age=settings.admin_session_max_age,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.secure_cookies,
    )
    return response


@admin_router.post("/logout")
async def admin_logout() -> JSONResponse:
    """Expire the admin session cookie."""
    response = JSONResponse({"ok": True})
    _expire_cookie(response, get_settings().admin_session_cookie)
    return response


@admin_router.get("/me", response_model=AdminSessionResponse)
async def admin_me(
    admin: Optional[AdminPrincipal] = Depends(get_optional_admin),
) -> AdminSessionResponse:
    """Report whether the caller holds a valid admin session."""
    if admin is None:
        return AdminSessionResponse(authenticated=False)
    return AdminSessionResponse(
        authenticated=True,
        session={"email": admin.email, "role": "admin", "isAdmin": True},
    )


@user_router.get("/me", response_model=UserSessionResponse)
async def user_me(
    user: Optional[UserPrincipal] = Depends(get_optional_user),
) -> UserSessionResponse:
    """Return the caller's user session, or null when not signed in."""
    return UserSessionResponse(session=user)


@user_router.post("/logout")
async def user_logout() -> JSONResponse:
    """Expire the user session cookie."""
    response = JSONResponse({"ok": True})
    _expire_cookie(response, get_settings().user_session_cookie)
    return response
