"""
Shared infrastructure for the ROB portal backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- exceptions: Base exception classes
- models: Shared enums (user roles)
- rate_limiter: Fixed-window attempt limiting

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings, resolve_session_secret
from .exceptions import (
    PortalError,
    NotFoundError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    RateLimitError,
    ConfigurationError,
)
from .models import Role, ADMIN_ROLE
from .rate_limiter import RateLimiter, RateLimitDecision, rate_limit_key

__all__ = [
    "Settings",
    "get_settings",
    "resolve_session_secret",
    "PortalError",
    "NotFoundError",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "ConflictError",
    "RateLimitError",
    "ConfigurationError",
    "Role",
    "ADMIN_ROLE",
    "RateLimiter",
    "RateLimitDecision",
    "rate_limit_key",
]
