"""Snowflake identifiers.

Discord identifiers are unsigned 64-bit integers sent as JSON strings. The
``Snowflake`` type owns its own JSON conversion, which the codec invokes for
every identifier field instead of inlining the parse per field.
"""

from __future__ import annotations

import datetime
from typing import Any

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from ..codec.scalars import UINT64_MAX, parse_uint64, strip_quotes

DISCORD_EPOCH = datetime.datetime(2015, 1, 1, tzinfo=datetime.timezone.utc)

_ZERO_FORMS = frozenset({b"", b"0", b"null"})


class Snowflake(int):
    """Unsigned 64-bit Discord identifier.

    A zero snowflake is the "unset" value: it encodes as ``null`` and is
    omitted by fields with the omit-if-empty policy.

    Example:
        >>> Snowflake.from_json(b'"41771983429993937"')
        Snowflake(41771983429993937)
        >>> Snowflake(41771983429993937).to_json()
        b'"41771983429993937"'
    """

    __slots__ = ()

    @classmethod
    def from_json(cls, raw: bytes) -> Snowflake:
        """Parse a quoted or bare JSON identifier.

        Raises:
            ValueError: If the value is not an unsigned 64-bit decimal
        """
        if strip_quotes(bytes(raw)) in _ZERO_FORMS:
            return cls(0)
        return cls(parse_uint64(raw))

    def to_json(self) -> bytes:
        """Encode as a quoted decimal string, or ``null`` when unset."""
        if not self.is_valid():
            return b"null"
        return b'"%d"' % self

    def is_valid(self) -> bool:
        """Whether the snowflake is set."""
        return self != 0

    @property
    def created_at(self) -> datetime.datetime:
        """Creation time encoded in the snowflake."""
        return DISCORD_EPOCH + datetime.timedelta(milliseconds=int(self) >> 22)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({int(self)})"

    def __str__(self) -> str:
        return int.__repr__(self)

    @classmethod
    def _validate(cls, value: Any) -> Snowflake:
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            raise ValueError("snowflake cannot be a bool")
        if isinstance(value, int):
            if not 0 <= value <= UINT64_MAX:
                raise ValueError(f"snowflake {value} out of range")
            return cls(value)
        if isinstance(value, str):
            return cls.from_json(value.encode("ascii", "replace"))
        if isinstance(value, bytes):
            return cls.from_json(value)
        raise ValueError(f"cannot convert {type(value).__name__} to {cls.__name__}")

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: GetCoreSchemaHandler) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(str, when_used="json"),
        )


class AppID(Snowflake):
    __slots__ = ()


class AttachmentID(Snowflake):
    __slots__ = ()


class ChannelID(Snowflake):
    __slots__ = ()


class EmojiID(Snowflake):
    __slots__ = ()


class GuildID(Snowflake):
    __slots__ = ()


class InteractionID(Snowflake):
    __slots__ = ()


class MessageID(Snowflake):
    __slots__ = ()


class RoleID(Snowflake):
    __slots__ = ()


class StickerID(Snowflake):
    __slots__ = ()


class StickerPackID(Snowflake):
    __slots__ = ()


class UserID(Snowflake):
    __slots__ = ()


class WebhookID(Snowflake):
    __slots__ = ()
