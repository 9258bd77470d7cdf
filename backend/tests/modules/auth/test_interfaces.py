import pytest

from modules.auth.credentials import CredentialVerifier
from modules.auth.interfaces import IAuthService, ICredentialVerifier, ITokenCodec
from modules.auth.service import AuthService
from modules.auth.tokens import TokenCodec
from tests.conftest import TEST_SESSION_SECRET


class TestAuthInterfaces:
    def test_service_implements_interface(self):
        """AuthService should satisfy IAuthService at runtime."""
        assert isinstance(AuthService(codec=TokenCodec(TEST_SESSION_SECRET)), IAuthService)

    def test_codec_implements_interface(self):
        assert isinstance(TokenCodec(TEST_SESSION_SECRET), ITokenCodec)

    def test_verifier_implements_interface(self):
        assert isinstance(CredentialVerifier("admin@example.com", "pw"), ICredentialVerifier)

    @pytest.mark.parametrize("method", [
        "resolve_user", "resolve_admin", "admin_login", "issue_user_session",
    ])
    def test_auth_service_has_interface_methods(self, method):
        """AuthService should have all IAuthService methods."""
        assert hasattr(IAuthService, method)
        assert callable(getattr(AuthService, method))
