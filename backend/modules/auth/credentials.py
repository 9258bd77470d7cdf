"""
Admin credential verification.

The portal has exactly one administrator, configured through ADMIN_EMAIL and
ADMIN_PASSWORD. The password is compared in plaintext (constant time) and is
not hashed at rest.
"""

import hmac
import logging
from typing import Optional

from shared.config import (
    DEFAULT_ADMIN_EMAIL,
    DEV_ADMIN_PASSWORD,
    LEGACY_ADMIN_EMAIL,
    Settings,
)

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class CredentialVerifier:
    """Checks email/password against the single configured admin account."""

    def __init__(
        self,
        admin_email: str,
        admin_password: Optional[str],
        accept_legacy_email: bool = False,
    ):
        """
        Args:
            admin_email: The admin address (compared case-insensitively)
            admin_password: The admin password, or None when unconfigured
            accept_legacy_email: Also accept the legacy admin address
        """
        self._emails = {normalize_email(admin_email)}
        if accept_legacy_email:
            self._emails.add(LEGACY_ADMIN_EMAIL)
        self._password = admin_password

    @classmethod
    def from_settings(cls, settings: Settings) -> "CredentialVerifier":
        """
        Build a verifier from settings.

        Outside production the development password is used when
        ADMIN_PASSWORD is unset. In production an unset password leaves the
        verifier rejecting every login.
        """
        configured_password = (settings.admin_password or "").strip()
        if configured_password:
            password: Optional[str] = settings.admin_password
        elif settings.is_production:
            password = None
        else:
            password = DEV_ADMIN_PASSWORD

        email_configured = bool((settings.admin_email or "").strip())
        return cls(
            admin_email=settings.admin_email if email_configured else DEFAULT_ADMIN_EMAIL,
            admin_password=password,
            accept_legacy_email=not email_configured,
        )

    def verify(self, email: str, password: str) -> bool:
        """Return True iff email and password match the admin account."""
        if self._password is None:
            logger.error("ADMIN_PASSWORD is required in production")
            return False

        email_ok = normalize_email(email) in self._emails
        password_ok = hmac.compare_digest(
            password.encode("utf-8"),
            self._password.encode("utf-8"),
        )
        return email_ok and password_ok
