"""
Authentication module interfaces.

Other modules should depend on these protocols, not the concrete
implementations. This enables testing with fakes and swapping the token
scheme without touching call sites.
"""

from typing import Any, Mapping, Optional, Protocol, Union, runtime_checkable

from shared.models import Role

from .models import (
    AdminLoginResult,
    AdminPrincipal,
    TokenFailure,
    UserPrincipal,
)


@runtime_checkable
class ITokenCodec(Protocol):
    """Signs and verifies opaque session payloads."""

    def sign(self, payload: Mapping[str, Any]) -> str:
        """Encode and sign a payload into a token string."""
        ...

    def verify(self, token: str) -> Union[dict[str, Any], TokenFailure]:
        """
        Verify a token and return its decoded payload.

        Returns:
            The payload dict, or a TokenFailure. Never raises for bad input.
        """
        ...


@runtime_checkable
class ICredentialVerifier(Protocol):
    """Checks login credentials."""

    def verify(self, email: str, password: str) -> bool:
        ...


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for authentication operations.

    This protocol defines the contract that the auth module exposes
    to the API layer and other modules.
    """

    def resolve_user(self, token: Optional[str]) -> Optional[UserPrincipal]:
        """
        Resolve a user session token into a principal.

        Returns:
            UserPrincipal, or None when the token is absent, invalid,
            tampered, or lacks required user fields
        """
        ...

    def resolve_admin(self, token: Optional[str]) -> Optional[AdminPrincipal]:
        """
        Resolve an admin session token into a principal.

        Returns:
            AdminPrincipal, or None unless both admin markers are present
        """
        ...

    def admin_login(self, email: str, password: str, client_ip: str) -> AdminLoginResult:
        """
        Rate-limit, verify and sign in the admin.

        Raises:
            MissingCredentialsError: If email or password is empty
            LoginRateLimitedError: If the IP/email pair exhausted its window
            InvalidCredentialsError: If the credentials do not match
        """
        ...

    def issue_user_session(
        self,
        user_id: str,
        role: Role,
        email: Optional[str] = None,
    ) -> str:
        """Sign a user session token for a user authenticated elsewhere."""
        ...
