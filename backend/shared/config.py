"""
Centralized configuration for the ROB portal backend.

All settings are loaded from environment variables with sensible defaults.
Security-sensitive settings (session secret, admin credentials) have
development-only fallbacks that are refused in production.
"""

import logging
from functools import lru_cache
from typing import Optional

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Fixed signing secret for local development and tests only.
DEV_SESSION_SECRET = "rob-art-fair-platform-default-secret-change-in-production"

DEFAULT_ADMIN_EMAIL = "admin@rob-roleofbridge.com"
LEGACY_ADMIN_EMAIL = "admin@rob.art"
DEV_ADMIN_PASSWORD = "rob-admin-dev"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "ROB Portal API"
    app_version: str = "0.1.0"
    environment: str = "development"
    debug: bool = False
    log_level: str = "info"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Session signing
    session_secret: str = ""

    # Admin credentials (single admin account)
    admin_email: Optional[str] = None
    admin_password: Optional[str] = None

    # Session cookies
    user_session_cookie: str = "afp_session"
    admin_session_cookie: str = "afp_admin_session"
    user_session_max_age: int = 60 * 60 * 24 * 7  # seconds
    admin_session_max_age: int = 60 * 60 * 24 * 3  # seconds
    cookie_secure: Optional[bool] = None

    # Login rate limiting
    login_rate_limit_max: int = 8
    login_rate_limit_window_seconds: int = 10 * 60
    rate_limit_reap_interval_seconds: int = 60
    rate_limit_reap_grace_seconds: int = 10 * 60

    @model_validator(mode="after")
    def _check_cookie_names(self) -> "Settings":
        if self.user_session_cookie == self.admin_session_cookie:
            raise ValueError("user and admin session cookies must have distinct names")
        return self

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() == "production"

    @property
    def secure_cookies(self) -> bool:
        """Whether session cookies carry the Secure flag."""
        if self.cookie_secure is not None:
            return self.cookie_secure
        return self.is_production


def resolve_session_secret(settings: Settings) -> str:
    """
    Return the secret used to sign session tokens.

    Outside production an unset secret falls back to DEV_SESSION_SECRET.
    In production an unset secret is a startup failure.

    Raises:
        ConfigurationError: If running in production without SESSION_SECRET
    """
    secret = settings.session_secret.strip()
    if secret:
        return secret
    if settings.is_production:
        raise ConfigurationError(
            "SESSION_SECRET is required in production",
            details={"setting": "SESSION_SECRET"},
        )
    logger.warning("SESSION_SECRET not set; using the development signing secret")
    return DEV_SESSION_SECRET


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
