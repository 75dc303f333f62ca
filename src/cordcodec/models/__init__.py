"""Pydantic entity modeling for cordcodec.

This module provides the Entity base class, field helpers and the snowflake
identifier types, and the open integer enumeration used for API enums.
"""

from __future__ import annotations

from .base import Entity
from .enums import OpenIntEnum
from .fields import OmitEmpty
from .snowflake import (
    AppID,
    AttachmentID,
    ChannelID,
    EmojiID,
    GuildID,
    InteractionID,
    MessageID,
    RoleID,
    Snowflake,
    StickerID,
    StickerPackID,
    UserID,
    WebhookID,
)

__all__ = [
    "Entity",
    "OmitEmpty",
    "OpenIntEnum",
    "Snowflake",
    "AppID",
    "AttachmentID",
    "ChannelID",
    "EmojiID",
    "GuildID",
    "InteractionID",
    "MessageID",
    "RoleID",
    "StickerID",
    "StickerPackID",
    "UserID",
    "WebhookID",
]
