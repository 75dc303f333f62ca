"""Exception hierarchy for cordcodec.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from CordcodecError for easy catching of any cordcodec-specific error.
"""

from __future__ import annotations

from typing import Any


class CordcodecError(Exception):
    """Base exception for all cordcodec errors."""

    pass


class SchemaError(CordcodecError):
    """Raised when an entity schema is invalid or unsupported.

    Examples:
        - Unsupported field annotation (dict, multi-type Union, Any)
        - Enum type that is neither int- nor str-valued
        - Two fields sharing a wire key
    """

    pass


class EncodeError(CordcodecError):
    """Raised when encoding an entity fails.

    Examples:
        - NaN or infinite float value
        - Field value of the wrong Python type
    """

    pass


class DecodeError(CordcodecError):
    """Raised when decoding JSON bytes fails.

    The decoder never returns a partially populated entity: any error aborts
    the whole call. Position context is attached whenever the lexer has it.

    Attributes:
        token: Token kind being processed when the error occurred (or None)
        raw: Literal bytes of the offending token, if any were scanned
        offset: Byte offset of the offending token in the input
        line: 1-based line of the offending token
        column: 1-based column of the offending token
    """

    def __init__(
        self,
        message: str,
        *,
        token: Any = None,
        raw: bytes | None = None,
        offset: int | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        self.message = message
        self.token = token
        self.raw = raw
        self.offset = offset
        self.line = line
        self.column = column
        super().__init__(self._render())

    def _render(self) -> str:
        parts = [self.message]
        if self.token is not None:
            parts.append(f"token={self.token}")
        if self.raw is not None:
            parts.append(f"raw={self.raw!r}")
        if self.offset is not None:
            parts.append(f"offset={self.offset} line={self.line} char={self.column}")
        return " ".join(parts)


class StructuralTokenError(DecodeError):
    """Raised when a token does not fit the expected grammar position.

    Examples:
        - Missing colon after an object key
        - Object that does not start with an opening brace
        - Unexpected end of input
        - Trailing data after the document
    """

    pass


class TypeMismatchError(DecodeError):
    """Raised when a token kind is incompatible with a field's declared type.

    Examples:
        - String token for a boolean field
        - Array token for a nested entity field
    """

    pass


class MalformedScalarError(DecodeError):
    """Raised when captured scalar bytes fail their dedicated parse.

    Examples:
        - Boolean field whose bytes are neither ``true`` nor ``false``
        - Snowflake that is not an unsigned 64-bit decimal
        - Timestamp that is not ISO-8601
        - Enum value outside the declared members
    """

    pass


class LexerError(DecodeError):
    """Raised when the tokenizer cannot continue.

    Examples:
        - Unterminated string
        - Invalid escape sequence or invalid UTF-8
        - Byte that cannot start any JSON token
    """

    pass
