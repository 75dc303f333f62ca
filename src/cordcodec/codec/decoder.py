"""Streaming JSON decoder for entities.

This module provides the decode() function that converts JSON bytes into an
entity instance without building an intermediate tree. An explicit state
machine consumes lexer tokens, resolves object keys against the entity's
schema and hands each value to a typed field handler that writes straight
into the field's value.

States::

    MAP_START -> WANT_KEY -> WANT_COLON -> WANT_VALUE -> AFTER_VALUE
                    ^                                        |
                    +------------------ , -------------------+

``}`` in WANT_KEY or AFTER_VALUE ends the object. Any other token out of
place raises a StructuralTokenError.
"""

from __future__ import annotations

import enum
import logging
import re
import typing
from typing import Any, Callable, Dict, TypeVar, Union

from pydantic import BaseModel, ValidationError

from ..exceptions import (
    DecodeError,
    LexerError,
    MalformedScalarError,
    StructuralTokenError,
    TypeMismatchError,
)
from .lexer import VALUE_TOKENS, Lexer, Token
from .scalars import parse_bool, parse_datetime, parse_float, parse_int
from .schema import EntitySchema, FieldKind, FieldSchema

T = TypeVar("T", bound=BaseModel)

_LOGGER: typing.Final[logging.Logger] = logging.getLogger("cordcodec.decoder")

_NULL_DOCUMENT_RE = re.compile(rb"[ \t\n\r]*null[ \t\n\r]*")


class ParseState(enum.Enum):
    """Position of the decoder inside a JSON object."""

    MAP_START = "map_start"
    WANT_KEY = "want_key"
    WANT_COLON = "want_colon"
    WANT_VALUE = "want_value"
    AFTER_VALUE = "after_value"


class _Absent:
    """Marker for a value that leaves the field's default in place."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "ABSENT"


ABSENT = _Absent()


def decode(entity_class: type[T], data: Union[bytes, bytearray, memoryview, str]) -> T | None:
    """Decode JSON bytes to a fresh entity instance.

    Args:
        entity_class: Entity class to decode to
        data: A JSON object, or ``null``

    Returns:
        Decoded entity, or None for a ``null`` document

    Raises:
        SchemaError: If the entity schema is invalid
        DecodeError: If the bytes do not fit the token grammar or a field's
            declared type. No partial entity is ever returned.

    Examples:
        ```python
        from cordcodec import decode
        from cordcodec.discord import Emoji

        emoji = decode(Emoji, b'{"id":"41771983429993937","name":"test"}')
        assert emoji.id == 41771983429993937
        ```
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    else:
        data = bytes(data)

    if _NULL_DOCUMENT_RE.fullmatch(data):
        return None

    lexer = Lexer(data)
    try:
        entity = decode_from_lexer(entity_class, lexer, ParseState.MAP_START)
    except RecursionError as e:
        raise lexer.wrap_error(StructuralTokenError, "maximum nesting depth exceeded") from e

    tok = lexer.scan()
    if tok is Token.ERROR:
        raise lexer.wrap_error(LexerError, lexer.error_message, tok)
    if tok is not Token.EOF:
        raise lexer.wrap_error(StructuralTokenError, f"unexpected {tok} after top-level object", tok)

    return entity


def decode_from_lexer(entity_class: type[T], lexer: Lexer, state: ParseState) -> T:
    """Run one entity's state machine over a shared lexer.

    Nested entities are decoded by calling this with ``ParseState.WANT_KEY``
    once the parent has consumed the opening brace.

    Args:
        entity_class: Entity class to decode to
        lexer: Lexer positioned at the entity
        state: Starting state (MAP_START or WANT_KEY)

    Returns:
        Decoded entity
    """
    schema = EntitySchema.for_model(entity_class)
    values: Dict[str, Any] = {}
    current: FieldSchema | None = None

    while True:
        tok = lexer.scan()
        if tok is Token.ERROR:
            raise lexer.wrap_error(LexerError, lexer.error_message, tok)

        if state is ParseState.MAP_START:
            if tok is not Token.OBJECT_OPEN:
                raise _wrong_token(lexer, tok, Token.OBJECT_OPEN)
            state = ParseState.WANT_KEY

        elif state is ParseState.AFTER_VALUE:
            if tok is Token.COMMA:
                state = ParseState.WANT_KEY
            elif tok is Token.OBJECT_CLOSE:
                break
            else:
                raise _wrong_token(lexer, tok, Token.COMMA)

        elif state is ParseState.WANT_KEY:
            if tok is Token.OBJECT_CLOSE:
                break
            if tok is not Token.STRING:
                raise _wrong_token(lexer, tok, Token.STRING)
            current = _resolve_key(schema, lexer)
            state = ParseState.WANT_COLON

        elif state is ParseState.WANT_COLON:
            if tok is not Token.COLON:
                raise _wrong_token(lexer, tok, Token.COLON)
            state = ParseState.WANT_VALUE

        else:
            if tok not in VALUE_TOKENS:
                raise lexer.wrap_error(StructuralTokenError, f"wanted value token, but got token: {tok}", tok)

            if current is None:
                lexer.skip_field(tok)
            else:
                value = decode_value(current, lexer, tok)
                if value is not ABSENT:
                    values[current.name] = value
            state = ParseState.AFTER_VALUE

    try:
        return entity_class(**values)
    except ValidationError as e:
        raise DecodeError(f"Failed to construct {entity_class.__name__}: {e}") from e


def _wrong_token(lexer: Lexer, tok: Token, wanted: Token) -> StructuralTokenError:
    return lexer.wrap_error(StructuralTokenError, f"wanted token: {wanted}, but got token: {tok}", tok)


def _resolve_key(schema: EntitySchema, lexer: Lexer) -> FieldSchema | None:
    key = bytes(lexer.output)
    index = schema.keys.exact(key)

    if index is None and schema.fold_keys:
        index = schema.keys.fold(key)
        if index is not None:
            _LOGGER.debug(
                "matched key %r to %r of %s ignoring case",
                key,
                schema.fields[index].key,
                schema.model_class.__name__,
            )

    if index is None:
        _LOGGER.debug("skipping unknown key %r of %s", key, schema.model_class.__name__)
        return None

    return schema.fields[index]


def decode_value(field_schema: FieldSchema, lexer: Lexer, tok: Token) -> Any:
    """Decode the value starting at the current token into a field value.

    Args:
        field_schema: Schema of the destination field
        lexer: Lexer positioned on the value's first token
        tok: The value's first token

    Returns:
        Decoded value, None for a null nullable field, or ABSENT for a null
        non-nullable field
    """
    if tok is Token.NULL:
        return None if field_schema.nullable else ABSENT

    return _HANDLERS[field_schema.kind](field_schema, lexer, tok)


def _type_mismatch(lexer: Lexer, tok: Token, field_schema: FieldSchema, expected: str) -> TypeMismatchError:
    return lexer.wrap_error(
        TypeMismatchError,
        f"cannot unmarshal {tok} into field {field_schema.name} of type {expected}",
        tok,
    )


def _malformed(lexer: Lexer, tok: Token, field_schema: FieldSchema, error: Exception) -> MalformedScalarError:
    return lexer.wrap_error(MalformedScalarError, f"Field {field_schema.name}: {error}", tok)


def _decode_bool(field_schema: FieldSchema, lexer: Lexer, tok: Token) -> bool:
    if tok is not Token.BOOL:
        raise _type_mismatch(lexer, tok, field_schema, "bool")
    try:
        return parse_bool(lexer.output)
    except ValueError as e:
        raise _malformed(lexer, tok, field_schema, e) from e


def _decode_int(field_schema: FieldSchema, lexer: Lexer, tok: Token) -> int:
    if tok is not Token.INTEGER:
        raise _type_mismatch(lexer, tok, field_schema, "int")
    return parse_int(lexer.output)


def _decode_float(field_schema: FieldSchema, lexer: Lexer, tok: Token) -> float:
    if tok is not Token.INTEGER and tok is not Token.DOUBLE:
        raise _type_mismatch(lexer, tok, field_schema, "float")
    try:
        return parse_float(lexer.output)
    except ValueError as e:
        raise _malformed(lexer, tok, field_schema, e) from e


def _decode_string(field_schema: FieldSchema, lexer: Lexer, tok: Token) -> str:
    if tok is not Token.STRING:
        raise _type_mismatch(lexer, tok, field_schema, "string")
    return lexer.text()


def _decode_snowflake(field_schema: FieldSchema, lexer: Lexer, tok: Token) -> Any:
    if tok is Token.OBJECT_OPEN or tok is Token.ARRAY_OPEN:
        raise _type_mismatch(lexer, tok, field_schema, field_schema.python_type.__name__)
    raw = lexer.capture_field(tok)
    try:
        return field_schema.python_type.from_json(raw)
    except ValueError as e:
        raise _malformed(lexer, tok, field_schema, e) from e


def _decode_datetime(field_schema: FieldSchema, lexer: Lexer, tok: Token) -> Any:
    if tok is not Token.STRING:
        raise _type_mismatch(lexer, tok, field_schema, "datetime")
    try:
        return parse_datetime(lexer.text())
    except ValueError as e:
        raise _malformed(lexer, tok, field_schema, e) from e


def _decode_int_enum(field_schema: FieldSchema, lexer: Lexer, tok: Token) -> Any:
    if tok is not Token.INTEGER:
        raise _type_mismatch(lexer, tok, field_schema, field_schema.python_type.__name__)
    try:
        return field_schema.python_type(parse_int(lexer.output))
    except ValueError as e:
        raise _malformed(lexer, tok, field_schema, e) from e


def _decode_str_enum(field_schema: FieldSchema, lexer: Lexer, tok: Token) -> Any:
    if tok is not Token.STRING:
        raise _type_mismatch(lexer, tok, field_schema, field_schema.python_type.__name__)
    try:
        return field_schema.python_type(lexer.text())
    except ValueError as e:
        raise _malformed(lexer, tok, field_schema, e) from e


def _decode_entity(field_schema: FieldSchema, lexer: Lexer, tok: Token) -> Any:
    if tok is not Token.OBJECT_OPEN:
        raise _type_mismatch(lexer, tok, field_schema, field_schema.python_type.__name__)
    # nested errors propagate unchanged
    return decode_from_lexer(field_schema.python_type, lexer, ParseState.WANT_KEY)


def _decode_list(field_schema: FieldSchema, lexer: Lexer, tok: Token) -> list[Any]:
    if tok is not Token.ARRAY_OPEN:
        raise _type_mismatch(lexer, tok, field_schema, "list")

    item = field_schema.item
    assert item is not None
    items: list[Any] = []
    want_value = True

    while True:
        tok = lexer.scan()
        if tok is Token.ERROR:
            raise lexer.wrap_error(LexerError, lexer.error_message, tok)
        if tok is Token.ARRAY_CLOSE:
            break

        if tok is Token.COMMA:
            if want_value:
                raise lexer.wrap_error(StructuralTokenError, f"wanted value token, but got token: {tok}", tok)
            want_value = True
            continue

        if not want_value:
            raise _wrong_token(lexer, tok, Token.COMMA)
        if tok not in VALUE_TOKENS:
            raise lexer.wrap_error(StructuralTokenError, f"wanted value token, but got token: {tok}", tok)

        items.append(_decode_item(item, lexer, tok))
        want_value = False

    return items


def _decode_item(item: FieldSchema, lexer: Lexer, tok: Token) -> Any:
    if tok is not Token.NULL:
        return _HANDLERS[item.kind](item, lexer, tok)
    if item.nullable:
        return None
    return _zero_value(item, lexer, tok)


def _zero_value(item: FieldSchema, lexer: Lexer, tok: Token) -> Any:
    zero = _ZERO_VALUES.get(item.kind, ABSENT)
    if zero is not ABSENT:
        return zero
    if item.kind is FieldKind.SNOWFLAKE or item.kind is FieldKind.ENTITY:
        return item.python_type()
    if item.kind is FieldKind.LIST:
        return []
    raise _type_mismatch(lexer, tok, item, f"non-nullable {item.python_type.__name__}")


_ZERO_VALUES: Dict[FieldKind, Any] = {
    FieldKind.BOOL: False,
    FieldKind.INT: 0,
    FieldKind.FLOAT: 0.0,
    FieldKind.STRING: "",
}

_HANDLERS: Dict[FieldKind, Callable[[FieldSchema, Lexer, Token], Any]] = {
    FieldKind.BOOL: _decode_bool,
    FieldKind.INT: _decode_int,
    FieldKind.FLOAT: _decode_float,
    FieldKind.STRING: _decode_string,
    FieldKind.SNOWFLAKE: _decode_snowflake,
    FieldKind.DATETIME: _decode_datetime,
    FieldKind.INT_ENUM: _decode_int_enum,
    FieldKind.STR_ENUM: _decode_str_enum,
    FieldKind.ENTITY: _decode_entity,
    FieldKind.LIST: _decode_list,
}
