"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

Process-wide state (rate-limit buckets, chat rooms) lives in the container,
so tests get a clean slate from reset_container().
"""

from typing import TYPE_CHECKING

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.interfaces import IAuthService
    from modules.chat.interfaces import IChatRegistry, IChatStore
    from shared.rate_limiter import RateLimiter


class ServiceContainer:
    """
    Container for all service instances.

    Services are created lazily on first access and cached as singletons
    within the container. Use reset() to clear them for testing.
    """

    def __init__(self) -> None:
        self._rate_limiter: "RateLimiter | None" = None
        self._auth_service: "IAuthService | None" = None
        self._chat_store: "IChatStore | None" = None
        self._chat_registry: "IChatRegistry | None" = None

    @property
    def rate_limiter(self) -> "RateLimiter":
        """Get the shared login rate limiter."""
        if self._rate_limiter is None:
            from shared.rate_limiter import RateLimiter
            self._rate_limiter = RateLimiter()
        return self._rate_limiter

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            self._auth_service = AuthService(rate_limiter=self.rate_limiter)
        return self._auth_service

    @property
    def chat_store(self) -> "IChatStore":
        """Get the chat store instance."""
        if self._chat_store is None:
            from modules.chat.store import InMemoryChatStore
            self._chat_store = InMemoryChatStore()
        return self._chat_store

    @property
    def chat(self) -> "IChatRegistry":
        """Get the chat registry instance."""
        if self._chat_registry is None:
            from modules.chat.service import ChatRegistry
            self._chat_registry = ChatRegistry(store=self.chat_store)
        return self._chat_registry

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._rate_limiter = None
        self._auth_service = None
        self._chat_store = None
        self._chat_registry = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    The next call to get_container() creates a fresh container with new
    service instances. Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth


def get_chat_registry() -> "IChatRegistry":
    """FastAPI dependency for chat registry."""
    return get_container().chat


def get_rate_limiter() -> "RateLimiter":
    """FastAPI dependency for the login rate limiter."""
    return get_container().rate_limiter
