"""
Chat registry implementation.

Owns room creation, access checks and message append/read on top of an
injected IChatStore.
"""

import logging
from typing import Optional, Union

from shared.models import Role

from .exceptions import NotARoomPartyError, RoomNotFoundError
from .interfaces import IChatRegistry, IChatStore
from .models import ChatRoom, Message, RoomSummary
from .store import InMemoryChatStore

logger = logging.getLogger(__name__)


def _as_role(role: Union[Role, str]) -> Optional[Role]:
    try:
        return Role(role)
    except ValueError:
        return None


class ChatRegistry(IChatRegistry):
    """
    Chat registry backed by an IChatStore.

    Authorization is not derived here: callers resolve the principal,
    call can_access(), and only then read or send.
    """

    def __init__(self, store: Optional[IChatStore] = None):
        self._store = store if store is not None else InMemoryChatStore()

    async def create_room(
        self,
        listing_id: Optional[str],
        artist_id: str,
        gallery_id: str,
    ) -> str:
        """Create or return the room for (listing_id, artist_id)."""
        room, created = self._store.get_or_create_room(listing_id, artist_id, gallery_id)
        if created:
            logger.info(f"Created chat room {room.id} for listing {listing_id}")
        return room.id

    async def get_room(self, room_id: str) -> Optional[ChatRoom]:
        return self._store.get_room(room_id)

    async def can_access(
        self,
        room_id: str,
        caller_id: str,
        caller_role: Union[Role, str],
    ) -> bool:
        role = _as_role(caller_role)
        if role is None or not caller_id:
            return False

        room = self._store.get_room(room_id)
        if room is None:
            return False
        return room.party_for(role) == caller_id

    async def list_rooms_for(self, identity: str, role: Union[Role, str]) -> list[ChatRoom]:
        parsed = _as_role(role)
        if parsed is None:
            return []

        rooms = [room for room in self._store.list_rooms() if room.party_for(parsed) == identity]
        rooms.sort(key=lambda room: room.updated_at, reverse=True)
        return rooms

    async def list_room_summaries_for(
        self,
        identity: str,
        role: Union[Role, str],
    ) -> list[RoomSummary]:
        summaries = []
        for room in await self.list_rooms_for(identity, role):
            messages = self._store.list_messages(room.id)
            last = messages[-1] if messages else None
            summaries.append(RoomSummary(
                id=room.id,
                listing_id=room.listing_id,
                artist_id=room.artist_id,
                gallery_id=room.gallery_id,
                updated_at=room.updated_at,
                last_message_text=last.text if last else None,
                last_message_at=last.created_at if last else None,
            ))
        return summaries

    async def get_messages(self, room_id: str) -> list[Message]:
        return self._store.list_messages(room_id)

    async def send_message(
        self,
        room_id: str,
        sender_id: str,
        sender_role: Role,
        text: str,
    ) -> Message:
        room = self._store.get_room(room_id)
        if room is None:
            raise RoomNotFoundError(room_id)
        if sender_id not in (room.artist_id, room.gallery_id):
            raise NotARoomPartyError(room_id, sender_id)

        return self._store.append_message(room_id, sender_id, Role(sender_role), text)
