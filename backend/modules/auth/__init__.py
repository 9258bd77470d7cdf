"""
Authentication module.

Handles signed session tokens, principal resolution and admin sign-in.

Public API:
- IAuthService: Interface for auth operations
- TokenCodec: HMAC-SHA256 session token signer/verifier
- PrincipalResolver: Token -> UserPrincipal / AdminPrincipal
- CredentialVerifier: Single-admin credential check
- Auth exceptions: InvalidCredentialsError, LoginRateLimitedError, etc.
"""

from .interfaces import IAuthService, ITokenCodec, ICredentialVerifier
from .models import (
    AdminPrincipal,
    AdminSessionPayload,
    TokenFailure,
    TokenFailureReason,
    UserPrincipal,
    UserSessionPayload,
)
from .tokens import TokenCodec
from .resolver import PrincipalResolver
from .credentials import CredentialVerifier
from .exceptions import (
    InvalidCredentialsError,
    LoginRateLimitedError,
    MissingCredentialsError,
)

__all__ = [
    # Interfaces
    "IAuthService",
    "ITokenCodec",
    "ICredentialVerifier",
    # Components
    "TokenCodec",
    "PrincipalResolver",
    "CredentialVerifier",
    # Models
    "AdminPrincipal",
    "AdminSessionPayload",
    "TokenFailure",
    "TokenFailureReason",
    "UserPrincipal",
    "UserSessionPayload",
    # Exceptions
    "InvalidCredentialsError",
    "LoginRateLimitedError",
    "MissingCredentialsError",
]
