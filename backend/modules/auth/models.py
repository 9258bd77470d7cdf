"""
Authentication module data models.

Session payloads are a closed set of two shapes: user sessions and admin
sessions. Each is validated against its own required fields when a token
is decoded, and each maps to its own principal type.
"""

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from shared.models import Role


class TokenFailureReason(str, Enum):
    """Why a session token failed verification."""

    MALFORMED = "malformed"
    TAMPERED = "tampered"


class TokenFailure(BaseModel):
    """
    Verification failure returned (not raised) by the token codec.

    Both reasons are treated as "not logged in" by callers. The reason
    exists for logging only and must never reach an HTTP response.
    """

    reason: TokenFailureReason

    model_config = ConfigDict(frozen=True)


class UserSessionPayload(BaseModel):
    """Signed payload carried by the user session cookie."""

    user_id: str = Field(..., alias="userId", min_length=1)
    role: Role
    email: Optional[str] = None

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    def to_claims(self) -> dict:
        """Wire representation (camelCase keys) used for signing."""
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)


class AdminSessionPayload(BaseModel):
    """
    Signed payload carried by the admin session cookie.

    Both `role == "admin"` and `isAdmin is True` are required. The resolver
    checks the two markers independently.
    """

    email: str = Field(..., min_length=1)
    role: str = Field(..., strict=True)
    is_admin: bool = Field(..., alias="isAdmin", strict=True)

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    def to_claims(self) -> dict:
        """Wire representation (camelCase keys) used for signing."""
        return self.model_dump(by_alias=True, mode="json")


SessionPayload = Union[UserSessionPayload, AdminSessionPayload]


class UserPrincipal(BaseModel):
    """
    An authenticated artist or gallery user.

    Recomputed from the session token on every request. Never admin-capable.
    """

    user_id: str = Field(..., description="User ID")
    role: Role = Field(..., description="artist or gallery")
    email: Optional[str] = Field(None, description="User's email address")

    model_config = ConfigDict(frozen=True)


class AdminPrincipal(BaseModel):
    """The single configured portal administrator."""

    email: str = Field(..., description="Admin email address")

    model_config = ConfigDict(frozen=True)


class AdminLoginRequest(BaseModel):
    """Request body for POST /api/admin/login."""

    email: str = ""
    password: str = ""


class AdminLoginResult(BaseModel):
    """A successful admin login: the principal and its signed session token."""

    principal: AdminPrincipal
    token: str


class AdminSessionResponse(BaseModel):
    """Response from GET /api/admin/me."""

    authenticated: bool
    session: Optional[dict] = None


class UserSessionResponse(BaseModel):
    """Response from GET /api/auth/me."""

    session: Optional[UserPrincipal] = None
