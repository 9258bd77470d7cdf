"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from enum import Enum


class Role(str, Enum):
    """Role of a regular (non-admin) portal user."""

    ARTIST = "artist"
    GALLERY = "gallery"


ADMIN_ROLE = "admin"
