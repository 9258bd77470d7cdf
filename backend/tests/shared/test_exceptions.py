"""Tests for shared/exceptions.py."""

from shared.exceptions import (
    PortalError,
    NotFoundError,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    RateLimitError,
    ConfigurationError,
)


class TestPortalError:
    def test_defaults_code_to_class_name(self):
        """Code should default to the exception class name."""
        error = PortalError("Something went wrong")
        assert error.code == "PortalError"
        assert error.details == {}

    def test_to_dict(self):
        """Should convert to dict for API responses."""
        error = PortalError("Test error", code="TEST", details={"key": "value"})
        result = error.to_dict()
        assert result == {
            "error": "TEST",
            "message": "Test error",
            "details": {"key": "value"},
        }

    def test_subclasses(self):
        """All module bases should inherit from PortalError."""
        for cls in (
            NotFoundError,
            AuthenticationError,
            AuthorizationError,
            ConflictError,
            ConfigurationError,
        ):
            assert issubclass(cls, PortalError)


class TestRateLimitError:
    def test_carries_retry_after(self):
        """Retry-after should be an attribute and part of the details."""
        error = RateLimitError("slow down", retry_after_seconds=42)
        assert error.retry_after_seconds == 42
        assert error.to_dict()["details"]["retry_after_seconds"] == 42
