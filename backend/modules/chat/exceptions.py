"""
Chat module exceptions.
"""

from typing import Optional

from shared.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
)


class RoomNotFoundError(NotFoundError):
    """Raised when a room is not found."""

    def __init__(self, room_id: str):
        super().__init__(
            f"Room not found: {room_id}",
            code="ROOM_NOT_FOUND",
            details={"room_id": room_id},
        )


class RoomPartyConflictError(ConflictError):
    """
    Raised when a room already exists for (listing, artist) with a different
    gallery than the one requested.
    """

    def __init__(
        self,
        room_id: str,
        listing_id: Optional[str],
        existing_gallery_id: str,
        requested_gallery_id: str,
    ):
        super().__init__(
            f"Room {room_id} for this listing belongs to a different gallery",
            code="ROOM_PARTY_CONFLICT",
            details={
                "room_id": room_id,
                "listing_id": listing_id,
                "existing_gallery_id": existing_gallery_id,
                "requested_gallery_id": requested_gallery_id,
            },
        )


class NotARoomPartyError(AuthorizationError):
    """Raised when a message sender is neither of the room's parties."""

    def __init__(self, room_id: str, sender_id: str):
        super().__init__(
            f"Sender is not a party of room: {room_id}",
            code="NOT_A_ROOM_PARTY",
            details={"room_id": room_id, "sender_id": sender_id},
        )
