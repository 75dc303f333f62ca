"""Discord API entities.

Each entity declares its fields in wire order, with the API's JSON keys and
omission rules, so that decoding and encoding through cordcodec matches the
payloads Discord sends and accepts.
"""

from __future__ import annotations

from .embed import Embed, EmbedAuthor, EmbedField, EmbedFooter, EmbedImage, EmbedThumbnail
from .emoji import Emoji
from .image import CDN_URL, ImageType
from .message import (
    Attachment,
    ChannelMention,
    InteractionType,
    Message,
    MessageActivity,
    MessageActivityType,
    MessageApplication,
    MessageFlags,
    MessageInteraction,
    MessageReference,
    MessageType,
    Reaction,
    Sticker,
    StickerFormatType,
    StickerItem,
    StickerType,
)
from .user import GuildUser, Member, User, UserFlags, UserNitro

__all__ = [
    "CDN_URL",
    "ImageType",
    "User",
    "UserFlags",
    "UserNitro",
    "Member",
    "GuildUser",
    "Emoji",
    "Embed",
    "EmbedAuthor",
    "EmbedField",
    "EmbedFooter",
    "EmbedImage",
    "EmbedThumbnail",
    "Message",
    "MessageType",
    "MessageFlags",
    "MessageActivity",
    "MessageActivityType",
    "MessageApplication",
    "MessageReference",
    "MessageInteraction",
    "InteractionType",
    "Attachment",
    "Reaction",
    "ChannelMention",
    "Sticker",
    "StickerItem",
    "StickerType",
    "StickerFormatType",
]
