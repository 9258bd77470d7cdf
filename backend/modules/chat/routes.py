"""
Chat API endpoints.

Every handler follows the same order: resolve the caller from the session
cookie (401), load the room (404), check can_access (403), then read or
append.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_chat_registry
from api.middleware.auth import get_current_user
from modules.auth.models import UserPrincipal
from shared.models import Role

from .exceptions import NotARoomPartyError, RoomNotFoundError, RoomPartyConflictError
from .interfaces import IChatRegistry
from .models import (
    ChatRoom,
    CreateRoomRequest,
    InviteRequest,
    Message,
    RoomCreatedResponse,
    RoomDetailResponse,
    RoomListResponse,
    SendMessageRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()


async def _authorized_room(
    room_id: str,
    user: UserPrincipal,
    chat: IChatRegistry,
) -> ChatRoom:
    room = await chat.get_room(room_id)
    if room is None:
        raise HTTPException(status_code=404, detail="room not found")
    if not await chat.can_access(room_id, user.user_id, user.role):
        raise HTTPException(status_code=403, detail="forbidden")
    return room


def _conflict(e: RoomPartyConflictError) -> HTTPException:
    logger.warning(f"Chat room party conflict: {e.details}")
    return HTTPException(status_code=409, detail="room exists with a different gallery")


@router.get("", response_model=RoomListResponse)
async def list_rooms(
    user: UserPrincipal = Depends(get_current_user),
    chat: IChatRegistry = Depends(get_chat_registry),
) -> RoomListResponse:
    """List the caller's rooms, most recent activity first."""
    rooms = await chat.list_room_summaries_for(user.user_id, user.role)
    return RoomListResponse(rooms=rooms)


@router.post("", response_model=RoomCreatedResponse)
async def create_room(
    request: CreateRoomRequest,
    user: UserPrincipal = Depends(get_current_user),
    chat: IChatRegistry = Depends(get_chat_registry),
) -> RoomCreatedResponse:
    """
    Open (or reopen) a conversation with a gallery about a listing.

    Only artists can start a chat. Repeating the call returns the same room.
    """
    if user.role != Role.ARTIST:
        raise HTTPException(status_code=403, detail="only artists can create chats")

    try:
        room_id = await chat.create_room(request.listing_id, user.user_id, request.gallery_id)
    except RoomPartyConflictError as e:
        raise _conflict(e)
    return RoomCreatedResponse(room_id=room_id)


@router.post("/invite", response_model=RoomCreatedResponse)
async def invite_artist(
    request: InviteRequest,
    user: UserPrincipal = Depends(get_current_user),
    chat: IChatRegistry = Depends(get_chat_registry),
) -> RoomCreatedResponse:
    """
    Invite an artist to talk about a listing and post the opening message.

    Only galleries can invite. Inviting into a room held by another gallery
    is answered like any other forbidden room.
    """
    if user.role != Role.GALLERY:
        raise HTTPException(status_code=403, detail="only galleries can invite")

    try:
        room_id = await chat.create_room(request.listing_id, request.artist_id, user.user_id)
    except RoomPartyConflictError as e:
        logger.warning(f"Chat invite into another gallery's room: {e.details}")
        raise HTTPException(status_code=403, detail="forbidden")

    await _authorized_room(room_id, user, chat)
    await chat.send_message(room_id, user.user_id, user.role, request.text)
    return RoomCreatedResponse(room_id=room_id)


@router.get("/{room_id}", response_model=RoomDetailResponse)
async def get_room(
    room_id: str,
    user: UserPrincipal = Depends(get_current_user),
    chat: IChatRegistry = Depends(get_chat_registry),
) -> RoomDetailResponse:
    """Get a room and its messages in order."""
    room = await _authorized_room(room_id, user, chat)
    messages = await chat.get_messages(room_id)
    return RoomDetailResponse(room=room, messages=messages)


@router.post("/{room_id}/messages", response_model=Message, status_code=201)
async def send_message(
    room_id: str,
    request: SendMessageRequest,
    user: UserPrincipal = Depends(get_current_user),
    chat: IChatRegistry = Depends(get_chat_registry),
) -> Message:
    """Append a message to a room as the caller."""
    await _authorized_room(room_id, user, chat)
    try:
        return await chat.send_message(room_id, user.user_id, user.role, request.text)
    except RoomNotFoundError:
        raise HTTPException(status_code=404, detail="room not found")
    except NotARoomPartyError:
        raise HTTPException(status_code=403, detail="forbidden")
