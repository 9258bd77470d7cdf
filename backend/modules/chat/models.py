"""
Chat module data models.

A room is a two-party conversation between one artist and one gallery
about one listing (an open call). Rooms and messages are returned as
immutable snapshots.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from shared.models import Role

MAX_MESSAGE_LENGTH = 5000


class ChatRoom(BaseModel):
    """
    A chat room between an artist (party A) and a gallery (party B).

    At most one room exists per (listing_id, artist_id). The gallery is
    fixed when the room is created.
    """

    id: str = Field(..., description="Room ID")
    listing_id: Optional[str] = Field(None, description="Open call the conversation concerns")
    artist_id: str = Field(..., description="Artist party")
    gallery_id: str = Field(..., description="Gallery party")
    created_at: datetime = Field(..., description="Room creation time")
    updated_at: datetime = Field(..., description="Time of the last message, or creation")

    model_config = ConfigDict(frozen=True)

    def party_for(self, role: Role) -> str:
        """The identity occupying the slot for role."""
        return self.artist_id if role == Role.ARTIST else self.gallery_id


class Message(BaseModel):
    """A message appended to a room. Never edited or removed."""

    id: str = Field(..., description="Message ID")
    room_id: str = Field(..., description="Owning room")
    sender_id: str = Field(..., description="One of the room's two parties")
    sender_role: Role = Field(..., description="Sender's role")
    text: str = Field(..., description="Message body")
    sequence: int = Field(..., ge=1, description="1-based position in the room")
    created_at: datetime = Field(..., description="Non-decreasing within a room")

    model_config = ConfigDict(frozen=True)


class RoomSummary(BaseModel):
    """Room list entry with a preview of the latest message."""

    id: str
    listing_id: Optional[str] = None
    artist_id: str
    gallery_id: str
    updated_at: datetime
    last_message_text: Optional[str] = None
    last_message_at: Optional[datetime] = None


class RoomListResponse(BaseModel):
    """Response from GET /api/chat."""

    rooms: list[RoomSummary]


class RoomDetailResponse(BaseModel):
    """Response from GET /api/chat/{room_id}."""

    room: ChatRoom
    messages: list[Message]


class RoomCreatedResponse(BaseModel):
    """Response from room creation endpoints."""

    room_id: str


class CreateRoomRequest(BaseModel):
    """An artist opening a conversation with a gallery about a listing."""

    listing_id: str = Field(..., min_length=1)
    gallery_id: str = Field(..., min_length=1)


class InviteRequest(BaseModel):
    """A gallery inviting an artist to talk about a listing."""

    listing_id: str = Field(..., min_length=1)
    artist_id: str = Field(..., min_length=1)
    text: str = Field(..., min_length=1, max_length=MAX_MESSAGE_LENGTH)

    @field_validator("text", mode="before")
    @classmethod
    def strip_text(cls, value):
        return value.strip() if isinstance(value, str) else value


class SendMessageRequest(BaseModel):
    """Request to append a message to a room."""

    text: str = Field(..., min_length=1, max_length=MAX_MESSAGE_LENGTH)

    @field_validator("text", mode="before")
    @classmethod
    def strip_text(cls, value):
        return value.strip() if isinstance(value, str) else value
