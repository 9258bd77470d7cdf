"""
Authentication service implementation.

Composes the token codec, principal resolver, credential verifier and the
login rate limiter into the operations the API layer needs.
"""

import logging
from typing import Optional

from shared.config import Settings, get_settings, resolve_session_secret
from shared.models import ADMIN_ROLE, Role
from shared.rate_limiter import RateLimiter, rate_limit_key

from .credentials import CredentialVerifier, normalize_email
from .exceptions import (
    InvalidCredentialsError,
    LoginRateLimitedError,
    MissingCredentialsError,
)
from .interfaces import IAuthService, ICredentialVerifier, ITokenCodec
from .models import (
    AdminLoginResult,
    AdminPrincipal,
    AdminSessionPayload,
    UserPrincipal,
    UserSessionPayload,
)
from .resolver import PrincipalResolver
from .tokens import TokenCodec

logger = logging.getLogger(__name__)

ADMIN_LOGIN_ACTION = "admin-login"


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Session state is entirely client-held: tokens are signed, never stored,
    and logout is the client discarding its cookie.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        rate_limiter: Optional[RateLimiter] = None,
        codec: Optional[ITokenCodec] = None,
        verifier: Optional[ICredentialVerifier] = None,
    ):
        self._settings = settings or get_settings()
        self._rate_limiter = rate_limiter if rate_limiter is not None else RateLimiter()
        self._codec = (
            codec if codec is not None
            else TokenCodec(resolve_session_secret(self._settings))
        )
        self._verifier = (
            verifier if verifier is not None
            else CredentialVerifier.from_settings(self._settings)
        )
        self._resolver = PrincipalResolver(self._codec)

    @property
    def rate_limiter(self) -> RateLimiter:
        return self._rate_limiter

    def resolve_user(self, token: Optional[str]) -> Optional[UserPrincipal]:
        return self._resolver.resolve_user(token)

    def resolve_admin(self, token: Optional[str]) -> Optional[AdminPrincipal]:
        return self._resolver.resolve_admin(token)

    def admin_login(self, email: str, password: str, client_ip: str) -> AdminLoginResult:
        """
        Sign in the admin.

        The rate limiter is consulted before the credentials are checked, so
        once a key is exhausted even a correct password is rejected until the
        window rolls over. A successful login clears the key's bucket.
        """
        email = (email or "").strip()
        password = (password or "").strip()
        if not email or not password:
            raise MissingCredentialsError()

        key = rate_limit_key(ADMIN_LOGIN_ACTION, client_ip, email)
        decision = self._rate_limiter.consume(
            key,
            self._settings.login_rate_limit_max,
            self._settings.login_rate_limit_window_seconds,
        )
        if not decision.allowed:
            retry_after = decision.retry_after_seconds(self._rate_limiter.now())
            logger.warning(
                f"Admin login rate limited for {client_ip}; retry after {retry_after}s"
            )
            raise LoginRateLimitedError(retry_after)

        if not self._verifier.verify(email, password):
            logger.warning(f"Failed admin login from {client_ip}")
            raise InvalidCredentialsError()

        self._rate_limiter.clear(key)
        logger.info(f"Admin signed in from {client_ip}")

        principal = AdminPrincipal(email=normalize_email(email))
        return AdminLoginResult(principal=principal, token=self.issue_admin_session(principal.email))

    def issue_admin_session(self, email: str) -> str:
        """Sign an admin session token carrying both admin markers."""
        payload = AdminSessionPayload(email=email, role=ADMIN_ROLE, is_admin=True)
        return self._codec.sign(payload.to_claims())

    def issue_user_session(
        self,
        user_id: str,
        role: Role,
        email: Optional[str] = None,
    ) -> str:
        """Sign a user session token for a user authenticated elsewhere."""
        payload = UserSessionPayload(user_id=user_id, role=Role(role), email=email)
        return self._codec.sign(payload.to_claims())
