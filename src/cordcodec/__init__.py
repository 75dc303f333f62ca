"""cordcodec: Streaming JSON codec for Discord API entities

A Python library that decodes and encodes Discord API payloads directly
between JSON bytes and typed entities, without building an intermediate
dict tree. Entities are plain Pydantic models; a per-entity schema drives a
shared lexer, an explicit decode state machine and an ordered encoder.

Key Features:
- Pydantic-based entity modeling
- Streaming decode with typed per-field handlers
- Case-insensitive key fallback, unknown keys skipped
- Snowflake identifiers accepted quoted or bare, always written quoted
- Per-field omit-if-empty encoding policy
- Generated per-entity encoders for hot types

Quick Start:
    >>> from cordcodec import Entity, OmitEmpty, UserID, encode, decode
    >>>
    >>> class Author(Entity):
    ...     id: UserID = UserID(0)
    ...     username: str = ""
    ...     bot: bool = OmitEmpty(False)
    >>>
    >>> author = decode(Author, b'{"id":"80351110224678912","username":"Nelly"}')
    >>> encode(author)
    b'{ "id":"80351110224678912","username":"Nelly"}'
"""

from __future__ import annotations

from .codec import decode, encode, specialize
from .exceptions import (
    CordcodecError,
    DecodeError,
    EncodeError,
    LexerError,
    MalformedScalarError,
    SchemaError,
    StructuralTokenError,
    TypeMismatchError,
)
from .models import (
    AppID,
    AttachmentID,
    ChannelID,
    EmojiID,
    Entity,
    GuildID,
    InteractionID,
    MessageID,
    OmitEmpty,
    OpenIntEnum,
    RoleID,
    Snowflake,
    StickerID,
    StickerPackID,
    UserID,
    WebhookID,
)

__version__ = "0.1.0"

__all__ = [
    # Core API
    "Entity",
    "encode",
    "decode",
    "specialize",
    # Field helpers
    "OmitEmpty",
    "OpenIntEnum",
    # Identifiers
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
    # Exceptions
    "CordcodecError",
    "SchemaError",
    "EncodeError",
    "DecodeError",
    "StructuralTokenError",
    "TypeMismatchError",
    "MalformedScalarError",
    "LexerError",
    # Version
    "__version__",
]
