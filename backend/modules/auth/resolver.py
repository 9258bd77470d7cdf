"""
Principal resolution.

Turns raw session tokens into typed principals. User and admin tokens are
resolved by separate methods against separate required-field sets, so a
user token can never produce an AdminPrincipal and an admin token can never
produce a UserPrincipal.

No method here raises for a missing or bad session; absence of a session is
an ordinary None.
"""

import logging
from typing import Any, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from shared.models import ADMIN_ROLE

from .interfaces import ITokenCodec
from .models import (
    AdminPrincipal,
    AdminSessionPayload,
    SessionPayload,
    TokenFailure,
    TokenFailureReason,
    UserPrincipal,
    UserSessionPayload,
)

logger = logging.getLogger(__name__)


class PrincipalResolver:
    """Resolves user and admin principals from signed session tokens."""

    def __init__(self, codec: ITokenCodec):
        self._codec = codec

    def _decode(self, token: Optional[str], family: str) -> Optional[dict[str, Any]]:
        if not token:
            return None

        result: Union[dict[str, Any], TokenFailure] = self._codec.verify(token)
        if isinstance(result, TokenFailure):
            if result.reason is TokenFailureReason.TAMPERED:
                logger.warning(f"Rejected {family} session token with invalid signature")
            else:
                logger.debug(f"Rejected malformed {family} session token")
            return None
        return result

    def _parse(
        self,
        claims: dict[str, Any],
        model: type[SessionPayload],
        family: str,
    ) -> Optional[SessionPayload]:
        try:
            return model.model_validate(claims)
        except PydanticValidationError:
            logger.debug(f"{family.capitalize()} session token is missing required fields")
            return None

    def resolve_user(self, token: Optional[str]) -> Optional[UserPrincipal]:
        """
        Resolve a user session token.

        Requires `userId` and an artist/gallery `role` in the payload.
        """
        claims = self._decode(token, "user")
        if claims is None:
            return None

        payload = self._parse(claims, UserSessionPayload, "user")
        if payload is None:
            return None

        return UserPrincipal(user_id=payload.user_id, role=payload.role, email=payload.email)

    def resolve_admin(self, token: Optional[str]) -> Optional[AdminPrincipal]:
        """
        Resolve an admin session token.

        Requires both `role == "admin"` and `isAdmin is True`. A payload
        satisfying only one marker is rejected.
        """
        claims = self._decode(token, "admin")
        if claims is None:
            return None

        payload = self._parse(claims, AdminSessionPayload, "admin")
        if payload is None:
            return None

        if payload.role != ADMIN_ROLE:
            return None
        if payload.is_admin is not True:
            return None

        return AdminPrincipal(email=payload.email)
