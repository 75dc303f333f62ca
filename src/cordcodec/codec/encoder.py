"""Canonical JSON encoder for entities.

This module provides the encode() function that converts an entity instance
to JSON bytes. Fields are written in declaration order; fields declared with
the omit-if-empty policy are left out when empty. Unknown fields are never
written since only schema fields exist on the model.
"""

from __future__ import annotations

import datetime
import math
from typing import Any, Callable, Dict, Optional

from pydantic import BaseModel

from ..exceptions import EncodeError
from ..models.snowflake import Snowflake
from .buffer import Buffer, quote
from .scalars import format_datetime
from .schema import EntitySchema, FieldKind, FieldSchema

EntityEncoder = Callable[[Buffer, Any], None]

_OBJECT_OPEN = b"{ "
_OBJECT_CLOSE = ord("}")
_ARRAY_OPEN = ord("[")
_ARRAY_CLOSE = ord("]")
_COMMA = ord(",")
_NULL = b"null"

# Generated encoders, filled by the specialize module
_SPECIALIZED: Dict[type, EntityEncoder] = {}


def encode(entity: Optional[BaseModel]) -> bytes:
    """Encode an entity to canonical JSON bytes.

    Args:
        entity: Entity instance to encode, or None

    Returns:
        JSON object bytes (``b"null"`` for None)

    Raises:
        SchemaError: If the entity's schema is invalid
        EncodeError: If a field value cannot be encoded

    Examples:
        ```python
        from cordcodec import encode
        from cordcodec.discord import Emoji, User

        emoji = Emoji(id=41771983429993937, name="test", user=User(id=1, username="a"))
        data = encode(emoji)
        # b'{ "id":"41771983429993937","name":"test","user":{ ... }}'
        ```
    """
    buf = Buffer()
    encode_into(buf, entity)
    return buf.getvalue()


def encode_into(buf: Buffer, entity: Optional[BaseModel]) -> None:
    """Write one entity into an existing buffer.

    This is the delegation entry point used for nested entities.

    Args:
        buf: Buffer to write to
        entity: Entity instance to encode, or None
    """
    if entity is None:
        buf.write(_NULL)
        return

    model_class = type(entity)
    encoder = _SPECIALIZED.get(model_class)
    if encoder is None and getattr(model_class, "codec_specialize", False):
        # Import here to avoid circular dependency
        from .specialize import compile_encoder

        encoder = compile_encoder(model_class)

    if encoder is not None:
        encoder(buf, entity)
        return

    encode_fields(buf, EntitySchema.for_model(model_class), entity)


def encode_fields(buf: Buffer, schema: EntitySchema, entity: BaseModel) -> None:
    """Write an entity's fields using its schema.

    Every written field is followed by a separator; the final one (or the
    placeholder space of an empty object) is rewound before closing.

    Args:
        buf: Buffer to write to
        schema: Schema of the entity's class
        entity: Entity instance to encode
    """
    buf.write(_OBJECT_OPEN)
    for field_schema in schema.fields:
        value = getattr(entity, field_schema.name)
        if field_schema.omit_empty and field_schema.is_empty(value):
            continue

        buf.write(field_schema.encoded_key)
        write_value(buf, field_schema, value)
        buf.write_byte(_COMMA)

    buf.rewind(1)
    buf.write_byte(_OBJECT_CLOSE)


def write_value(buf: Buffer, field_schema: FieldSchema, value: Any) -> None:
    """Write a single field value.

    Args:
        buf: Buffer to write to
        field_schema: Schema information for the field
        value: Field value to encode

    Raises:
        EncodeError: If value has the wrong type or cannot be represented
    """
    if value is None:
        buf.write(_NULL)
        return

    _WRITERS[field_schema.kind](buf, field_schema, value)


def _type_error(field_schema: FieldSchema, expected: str, value: Any) -> EncodeError:
    return EncodeError(f"Field {field_schema.name}: expected {expected}, got {type(value).__name__}")


def _write_bool(buf: Buffer, field_schema: FieldSchema, value: Any) -> None:
    if value is True:
        buf.write(b"true")
    elif value is False:
        buf.write(b"false")
    else:
        raise _type_error(field_schema, "bool", value)


def _write_int(buf: Buffer, field_schema: FieldSchema, value: Any) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise _type_error(field_schema, "int", value)
    buf.write(b"%d" % value)


def _write_float(buf: Buffer, field_schema: FieldSchema, value: Any) -> None:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        raise _type_error(field_schema, "float", value)
    if not math.isfinite(value):
        raise EncodeError(f"Field {field_schema.name}: {value} is not representable in JSON")
    buf.write_string(repr(float(value)))


def _write_string(buf: Buffer, field_schema: FieldSchema, value: Any) -> None:
    if not isinstance(value, str):
        raise _type_error(field_schema, "str", value)
    buf.write(quote(value))


def _write_snowflake(buf: Buffer, field_schema: FieldSchema, value: Any) -> None:
    if not isinstance(value, Snowflake):
        if not isinstance(value, int) or isinstance(value, bool):
            raise _type_error(field_schema, "snowflake", value)
        value = field_schema.python_type(value)
    buf.write(value.to_json())


def _write_datetime(buf: Buffer, field_schema: FieldSchema, value: Any) -> None:
    if not isinstance(value, datetime.datetime):
        raise _type_error(field_schema, "datetime", value)
    buf.write(quote(format_datetime(value)))


def _write_int_enum(buf: Buffer, field_schema: FieldSchema, value: Any) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise _type_error(field_schema, field_schema.python_type.__name__, value)
    buf.write(b"%d" % value)


def _write_str_enum(buf: Buffer, field_schema: FieldSchema, value: Any) -> None:
    if not isinstance(value, str):
        raise _type_error(field_schema, field_schema.python_type.__name__, value)
    buf.write(quote(getattr(value, "value", value)))


def _write_entity(buf: Buffer, field_schema: FieldSchema, value: Any) -> None:
    if not isinstance(value, BaseModel):
        raise _type_error(field_schema, field_schema.python_type.__name__, value)
    encode_into(buf, value)


def _write_list(buf: Buffer, field_schema: FieldSchema, value: Any) -> None:
    if not isinstance(value, (list, tuple)):
        raise _type_error(field_schema, "list", value)

    item = field_schema.item
    assert item is not None
    buf.write_byte(_ARRAY_OPEN)
    for i, element in enumerate(value):
        if i != 0:
            buf.write_byte(_COMMA)
        write_value(buf, item, element)
    buf.write_byte(_ARRAY_CLOSE)


_WRITERS: Dict[FieldKind, Callable[[Buffer, FieldSchema, Any], None]] = {
    FieldKind.BOOL: _write_bool,
    FieldKind.INT: _write_int,
    FieldKind.FLOAT: _write_float,
    FieldKind.STRING: _write_string,
    FieldKind.SNOWFLAKE: _write_snowflake,
    FieldKind.DATETIME: _write_datetime,
    FieldKind.INT_ENUM: _write_int_enum,
    FieldKind.STR_ENUM: _write_str_enum,
    FieldKind.ENTITY: _write_entity,
    FieldKind.LIST: _write_list,
}
