"""
In-process chat store.

Rooms are indexed by ID and by (listing_id, artist_id). The index lock
makes get-or-create a single critical section; each room has its own lock
so appends to one room never block another.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from threading import Lock
from typing import Callable, Optional

from shared.models import Role

from .exceptions import RoomPartyConflictError, RoomNotFoundError
from .interfaces import IChatStore
from .models import ChatRoom, Message


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


@dataclass
class _RoomState:
    room: ChatRoom
    messages: list[Message] = field(default_factory=list)
    lock: Lock = field(default_factory=Lock)


class InMemoryChatStore(IChatStore):
    """Thread-safe in-memory implementation of IChatStore."""

    def __init__(
        self,
        clock: Callable[[], datetime] = _utcnow,
        id_factory: Callable[[], str] = _new_id,
    ):
        self._clock = clock
        self._new_id = id_factory
        self._index_lock = Lock()
        self._rooms: dict[str, _RoomState] = {}
        self._by_pair: dict[tuple[Optional[str], str], str] = {}

    def get_or_create_room(
        self,
        listing_id: Optional[str],
        artist_id: str,
        gallery_id: str,
    ) -> tuple[ChatRoom, bool]:
        with self._index_lock:
            existing_id = self._by_pair.get((listing_id, artist_id))
            if existing_id is not None:
                room = self._rooms[existing_id].room
                if room.gallery_id != gallery_id:
                    raise RoomPartyConflictError(
                        room.id, listing_id, room.gallery_id, gallery_id
                    )
                return room, False

            now = self._clock()
            room = ChatRoom(
                id=self._new_id(),
                listing_id=listing_id,
                artist_id=artist_id,
                gallery_id=gallery_id,
                created_at=now,
                updated_at=now,
            )
            self._rooms[room.id] = _RoomState(room=room)
            self._by_pair[(listing_id, artist_id)] = room.id
            return room, True

    def _state(self, room_id: str) -> Optional[_RoomState]:
        with self._index_lock:
            return self._rooms.get(room_id)

    def get_room(self, room_id: str) -> Optional[ChatRoom]:
        state = self._state(room_id)
        if state is None:
            return None
        with state.lock:
            return state.room

    def list_rooms(self) -> list[ChatRoom]:
        with self._index_lock:
            states = list(self._rooms.values())
        rooms = []
        for state in states:
            with state.lock:
                rooms.append(state.room)
        return rooms

    def append_message(
        self,
        room_id: str,
        sender_id: str,
        sender_role: Role,
        text: str,
    ) -> Message:
        state = self._state(room_id)
        if state is None:
            raise RoomNotFoundError(room_id)

        with state.lock:
            created_at = self._clock()
            if state.messages and created_at < state.messages[-1].created_at:
                created_at = state.messages[-1].created_at

            message = Message(
                id=self._new_id(),
                room_id=room_id,
                sender_id=sender_id,
                sender_role=sender_role,
                text=text,
                sequence=len(state.messages) + 1,
                created_at=created_at,
            )
            state.messages.append(message)
            state.room = state.room.model_copy(update={"updated_at": created_at})
            return message

    def list_messages(self, room_id: str) -> list[Message]:
        state = self._state(room_id)
        if state is None:
            return []
        with state.lock:
            return list(state.messages)
