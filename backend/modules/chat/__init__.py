"""
Chat module.

Two-party chat rooms between an artist and a gallery, scoped to a listing.

Public API:
- IChatRegistry: Interface for room and message operations
- IChatStore: Storage capability behind the registry
- ChatRoom, Message: Immutable snapshots
- Chat exceptions: RoomNotFoundError, RoomPartyConflictError, NotARoomPartyError
"""

from .interfaces import IChatRegistry, IChatStore
from .models import ChatRoom, Message, RoomSummary
from .exceptions import (
    NotARoomPartyError,
    RoomNotFoundError,
    RoomPartyConflictError,
)

__all__ = [
    # Interfaces
    "IChatRegistry",
    "IChatStore",
    # Models
    "ChatRoom",
    "Message",
    "RoomSummary",
    # Exceptions
    "NotARoomPartyError",
    "RoomNotFoundError",
    "RoomPartyConflictError",
]
