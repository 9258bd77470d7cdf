"""
Authentication module exceptions.

These exceptions are raised by the auth service and caught by route
handlers to return appropriate HTTP responses. Token verification failures
are not exceptions; see models.TokenFailure.
"""

from shared.exceptions import (
    AuthenticationError,
    RateLimitError,
    ValidationError,
)


class InvalidCredentialsError(AuthenticationError):
    """Raised when admin email/password do not match the configured account."""

    def __init__(self, message: str = "Invalid admin credentials"):
        super().__init__(message, code="INVALID_CREDENTIALS")


class MissingCredentialsError(ValidationError):
    """Raised when email or password is empty."""

    def __init__(self, message: str = "Email and password required"):
        super().__init__(message, code="MISSING_CREDENTIALS")


class LoginRateLimitedError(RateLimitError):
    """Raised when too many login attempts were made for an IP/email pair."""

    def __init__(self, retry_after_seconds: int):
        super().__init__(
            "too many attempts",
            retry_after_seconds=retry_after_seconds,
            code="RATE_LIMITED",
        )
