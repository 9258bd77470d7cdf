"""
Chat module interfaces.

IChatStore is the storage capability: the in-process implementation backs
tests and single-instance deployments, and a durable store can replace it
without touching the registry. IChatRegistry is what the API layer uses.
"""

from typing import Optional, Protocol, Union, runtime_checkable

from shared.models import Role

from .models import ChatRoom, Message, RoomSummary


@runtime_checkable
class IChatStore(Protocol):
    """
    Storage for rooms and their messages.

    Implementations must make get_or_create_room atomic per
    (listing_id, artist_id) and must serialize appends within a room.
    """

    def get_or_create_room(
        self,
        listing_id: Optional[str],
        artist_id: str,
        gallery_id: str,
    ) -> tuple[ChatRoom, bool]:
        """
        Return the room for (listing_id, artist_id), creating it if needed.

        Returns:
            (room, created)

        Raises:
            RoomPartyConflictError: If the existing room has a different gallery
        """
        ...

    def get_room(self, room_id: str) -> Optional[ChatRoom]:
        ...

    def list_rooms(self) -> list[ChatRoom]:
        ...

    def append_message(
        self,
        room_id: str,
        sender_id: str,
        sender_role: Role,
        text: str,
    ) -> Message:
        """
        Append a message to a room.

        Raises:
            RoomNotFoundError: If the room does not exist
        """
        ...

    def list_messages(self, room_id: str) -> list[Message]:
        """Messages in append order. Empty for an unknown room."""
        ...


@runtime_checkable
class IChatRegistry(Protocol):
    """
    Interface for chat room operations.

    The registry does not authenticate callers. Every caller must resolve
    the principal and check can_access() before reading or appending.
    """

    async def create_room(
        self,
        listing_id: Optional[str],
        artist_id: str,
        gallery_id: str,
    ) -> str:
        """
        Create the room for (listing_id, artist_id) or return the existing one.

        Returns:
            Room ID

        Raises:
            RoomPartyConflictError: If the existing room has a different gallery
        """
        ...

    async def get_room(self, room_id: str) -> Optional[ChatRoom]:
        ...

    async def can_access(
        self,
        room_id: str,
        caller_id: str,
        caller_role: Union[Role, str],
    ) -> bool:
        """
        True iff the room exists and the caller occupies the slot for its role.

        An ID that matches the other slot is rejected.
        """
        ...

    async def list_rooms_for(self, identity: str, role: Union[Role, str]) -> list[ChatRoom]:
        """Rooms where identity occupies the slot for role, newest activity first."""
        ...

    async def list_room_summaries_for(
        self,
        identity: str,
        role: Union[Role, str],
    ) -> list[RoomSummary]:
        """Like list_rooms_for, with a preview of each room's latest message."""
        ...

    async def get_messages(self, room_id: str) -> list[Message]:
        """Messages in append order."""
        ...

    async def send_message(
        self,
        room_id: str,
        sender_id: str,
        sender_role: Role,
        text: str,
    ) -> Message:
        """
        Append a message.

        Raises:
            RoomNotFoundError: If the room does not exist
            NotARoomPartyError: If sender_id is neither party of the room
        """
        ...
