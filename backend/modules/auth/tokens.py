"""
Signed session tokens.

Token format:

    base64url(JSON payload) + "." + hex(HMAC-SHA256(encoded payload, secret))

The base64url alphabet never produces ".", so the last "." always
separates payload from tag. JSON is emitted with sorted keys and compact
separators so signing the same payload twice yields the same token.
"""

import base64
import binascii
import hashlib
import hmac
import json
from typing import Any, Mapping, Union

from .models import TokenFailure, TokenFailureReason

SEPARATOR = "."

_MALFORMED = TokenFailure(reason=TokenFailureReason.MALFORMED)
_TAMPERED = TokenFailure(reason=TokenFailureReason.TAMPERED)


def b64url_encode(data: bytes) -> str:
    """URL-safe Base64 without '=' padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def b64url_decode(data: str) -> bytes:
    """Decode URL-safe, no-padding Base64 back to bytes."""
    pad_len = (-len(data)) % 4
    return base64.urlsafe_b64decode(data + "=" * pad_len)


class TokenCodec:
    """
    HMAC-SHA256 signer/verifier for session payloads.

    Pure: no I/O and no shared mutable state, safe to call from any thread.
    """

    def __init__(self, secret: str):
        if not secret:
            raise ValueError("TokenCodec requires a non-empty secret")
        self._key = secret.encode("utf-8")

    def _tag(self, encoded_payload: str) -> str:
        return hmac.new(self._key, encoded_payload.encode("ascii"), hashlib.sha256).hexdigest()

    def sign(self, payload: Mapping[str, Any]) -> str:
        """
        Sign a payload of JSON-serializable primitives.

        Raises:
            TypeError: If the payload is not JSON-serializable
        """
        raw = json.dumps(dict(payload), sort_keys=True, separators=(",", ":"))
        encoded = b64url_encode(raw.encode("utf-8"))
        return f"{encoded}{SEPARATOR}{self._tag(encoded)}"

    def verify(self, token: str) -> Union[dict[str, Any], TokenFailure]:
        """
        Verify a token and decode its payload.

        The tag is checked before the payload is decoded, and compared in
        constant time.

        Returns:
            The decoded payload dict, or TokenFailure(MALFORMED | TAMPERED)
        """
        if not isinstance(token, str):
            return _MALFORMED

        sep = token.rfind(SEPARATOR)
        if sep < 1:
            return _MALFORMED

        encoded, tag = token[:sep], token[sep + 1:]
        if not encoded.isascii():
            return _MALFORMED

        expected = self._tag(encoded)
        if not hmac.compare_digest(tag.encode("utf-8", "replace"), expected.encode("ascii")):
            return _TAMPERED

        try:
            payload = json.loads(b64url_decode(encoded).decode("utf-8"))
        except (binascii.Error, UnicodeDecodeError, ValueError):
            return _MALFORMED

        if not isinstance(payload, dict):
            return _MALFORMED
        return payload
