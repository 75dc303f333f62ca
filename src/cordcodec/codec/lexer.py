"""Byte-level JSON tokenizer.

The lexer turns an in-memory byte buffer into a flat stream of primitive JSON
tokens. It never builds a generic tree: callers pull one token at a time with
``scan()`` and read the captured bytes of scalar tokens straight from
``output``, decoding each value directly into its typed destination.

Captured bytes are exposed as a zero-copy ``memoryview`` into the input
whenever possible (numbers, literals and strings without escapes). Strings
containing escape sequences are unescaped into fresh UTF-8 bytes.

Example:
    >>> lexer = Lexer(b'{"id": "41771983429993937"}')
    >>> lexer.scan()
    <Token.OBJECT_OPEN: '{'>
    >>> lexer.scan(), lexer.text()
    (<Token.STRING: 'string'>, 'id')
"""

from __future__ import annotations

import enum
import re
from typing import Type, TypeVar

from ..exceptions import DecodeError, LexerError, MalformedScalarError, StructuralTokenError

E = TypeVar("E", bound=DecodeError)


class Token(enum.Enum):
    """Primitive JSON token kinds."""

    INIT = "init"
    ERROR = "error"
    EOF = "eof"
    OBJECT_OPEN = "{"
    OBJECT_CLOSE = "}"
    ARRAY_OPEN = "["
    ARRAY_CLOSE = "]"
    COLON = ":"
    COMMA = ","
    STRING = "string"
    INTEGER = "integer"
    DOUBLE = "double"
    BOOL = "bool"
    NULL = "null"

    def __str__(self) -> str:
        return self.name


# Tokens that may start a value
VALUE_TOKENS = frozenset(
    {
        Token.OBJECT_OPEN,
        Token.ARRAY_OPEN,
        Token.STRING,
        Token.INTEGER,
        Token.DOUBLE,
        Token.BOOL,
        Token.NULL,
    }
)

SCALAR_TOKENS = frozenset({Token.STRING, Token.INTEGER, Token.DOUBLE, Token.BOOL, Token.NULL})

_PUNCTUATION = {
    ord("{"): Token.OBJECT_OPEN,
    ord("}"): Token.OBJECT_CLOSE,
    ord("["): Token.ARRAY_OPEN,
    ord("]"): Token.ARRAY_CLOSE,
    ord(":"): Token.COLON,
    ord(","): Token.COMMA,
}

_CLOSERS = {
    Token.OBJECT_OPEN: Token.OBJECT_CLOSE,
    Token.ARRAY_OPEN: Token.ARRAY_CLOSE,
}

_QUOTE = ord('"')
_MINUS = ord("-")
_DIGITS = frozenset(b"0123456789")
_LETTERS = frozenset(b"abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ")
_BOOL_STARTS = frozenset(b"tf")
_BOOL_WORDS = frozenset({b"true", b"false"})

_WHITESPACE_RE = re.compile(rb"[ \t\n\r]*")
_STRING_RE = re.compile(rb'"((?:[^"\\\x00-\x1f]|\\.)*)"', re.DOTALL)
_NUMBER_RE = re.compile(rb"-?(?:0|[1-9][0-9]*)(\.[0-9]+)?([eE][+-]?[0-9]+)?")
_WORD_RE = re.compile(rb"[a-zA-Z]+")
_ESCAPE_RE = re.compile(r'\\(?:u([0-9a-fA-F]{4})|(["\\/bfnrt])|(.?))', re.DOTALL)

_SIMPLE_ESCAPES = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}

_EMPTY = memoryview(b"")


def _replace_escape(match: re.Match[str]) -> str:
    code, simple, invalid = match.groups()
    if code is not None:
        return chr(int(code, 16))
    if simple is not None:
        return _SIMPLE_ESCAPES[simple]
    raise ValueError(f"invalid escape sequence \\{invalid}")


def unescape(raw: bytes) -> bytes:
    """Decode the body of a JSON string containing escape sequences.

    Args:
        raw: String body between the quotes

    Returns:
        UTF-8 encoded unescaped text. Unpaired surrogates become U+FFFD.

    Raises:
        ValueError: If the body is not valid UTF-8 or has an invalid escape
    """
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ValueError(f"invalid UTF-8 in string: {e}") from e

    text = _ESCAPE_RE.sub(_replace_escape, text)
    try:
        return text.encode("utf-8")
    except UnicodeEncodeError:
        # \uXXXX surrogate halves; join pairs, replace strays
        joined = text.encode("utf-16-le", "surrogatepass").decode("utf-16-le", "replace")
        return joined.encode("utf-8")


class Lexer:
    """Pull tokenizer over a single in-memory JSON document.

    A lexer is created per decode call and owns no state beyond the input it
    was given, so independent lexers may run concurrently.

    Attributes:
        pos: Offset of the next byte to scan
        token_start: Offset where the current token starts
        token_end: Offset just past the current token
        error_message: Description of the last ``Token.ERROR``
    """

    __slots__ = ("_data", "_view", "_length", "_output", "pos", "token_start", "token_end", "error_message")

    def __init__(self, data: bytes) -> None:
        self._data = data
        self._view = memoryview(data)
        self._length = len(data)
        self._output: memoryview | bytes = _EMPTY
        self.pos = 0
        self.token_start = 0
        self.token_end = 0
        self.error_message = ""

    @property
    def output(self) -> memoryview | bytes:
        """Captured bytes of the current token (string body without quotes)."""
        return self._output

    def text(self) -> str:
        """Decode the captured bytes of the current token as UTF-8.

        Raises:
            LexerError: If the bytes are not valid UTF-8
        """
        try:
            return str(self._output, "utf-8")
        except UnicodeDecodeError as e:
            raise self.wrap_error(LexerError, f"invalid UTF-8 in string: {e}", Token.STRING) from e

    def scan(self) -> Token:
        """Scan the next token.

        Returns:
            Kind of the scanned token. ``Token.EOF`` at the end of input and
            ``Token.ERROR`` (with ``error_message`` set) on malformed input.
        """
        data = self._data
        pos = _WHITESPACE_RE.match(data, self.pos).end()  # type: ignore[union-attr]
        self.token_start = pos

        if pos >= self._length:
            self.pos = self.token_end = pos
            self._output = _EMPTY
            return Token.EOF

        char = data[pos]
        token = _PUNCTUATION.get(char)
        if token is not None:
            self.pos = self.token_end = pos + 1
            self._output = self._view[pos : pos + 1]
            return token

        if char == _QUOTE:
            return self._scan_string(pos)
        if char == _MINUS or char in _DIGITS:
            return self._scan_number(pos)
        if char in _LETTERS:
            return self._scan_word(pos)

        return self._fail(pos, pos + 1, f"invalid character {chr(char)!r}")

    def _scan_string(self, pos: int) -> Token:
        match = _STRING_RE.match(self._data, pos)
        if match is None:
            return self._fail(pos, self._length, "unterminated string or control character in string")

        self.pos = self.token_end = match.end()
        body_start, body_end = match.span(1)
        if self._data.find(b"\\", body_start, body_end) == -1:
            self._output = self._view[body_start:body_end]
            return Token.STRING

        try:
            self._output = unescape(self._data[body_start:body_end])
        except ValueError as e:
            return self._fail(pos, self.token_end, str(e))

        return Token.STRING

    def _scan_number(self, pos: int) -> Token:
        match = _NUMBER_RE.match(self._data, pos)
        if match is None:
            return self._fail(pos, pos + 1, "invalid number")

        end = match.end()
        self.pos = self.token_end = end
        self._output = self._view[pos:end]
        if match.group(1) is not None or match.group(2) is not None:
            return Token.DOUBLE
        return Token.INTEGER

    def _scan_word(self, pos: int) -> Token:
        end = _WORD_RE.match(self._data, pos).end()  # type: ignore[union-attr]
        self.pos = self.token_end = end
        self._output = self._view[pos:end]

        if self._data[pos:end] == b"null":
            return Token.NULL
        # true/false bytes are validated by the scalar parse
        if self._data[pos] in _BOOL_STARTS:
            return Token.BOOL

        return self._fail(pos, end, f"invalid literal {bytes(self._output)!r}")

    def _fail(self, start: int, end: int, message: str) -> Token:
        self.token_start = start
        self.pos = self.token_end = end
        self._output = self._view[start:end]
        self.error_message = message
        return Token.ERROR

    def capture_field(self, tok: Token) -> bytes:
        """Return the raw bytes of the value starting at the current token.

        Strings keep their quotes, so dedicated scalar parses can tell quoted
        and bare encodings apart. Objects and arrays are consumed whole.

        Args:
            tok: Token that was just scanned

        Returns:
            Raw value bytes
        """
        start = self.token_start
        if tok is Token.OBJECT_OPEN or tok is Token.ARRAY_OPEN:
            self.skip_field(tok)
        return bytes(self._view[start : self.token_end])

    def skip_field(self, tok: Token) -> None:
        """Consume and discard the value starting at the current token.

        Nested objects and arrays are skipped with bracket matching but no
        interpretation of their contents.

        Args:
            tok: Token that was just scanned

        Raises:
            LexerError: If the tokenizer fails inside the skipped value
            MalformedScalarError: On a bool-shaped word other than true/false
            StructuralTokenError: On mismatched brackets or truncated input
        """
        if tok is not Token.OBJECT_OPEN and tok is not Token.ARRAY_OPEN:
            self._check_bool(tok)
            return

        stack = [tok]
        while stack:
            tok = self.scan()
            if tok is Token.ERROR:
                raise self.wrap_error(LexerError, self.error_message, tok)
            if tok is Token.EOF:
                raise self.wrap_error(StructuralTokenError, "unexpected end of input while skipping field", tok)
            self._check_bool(tok)
            if tok is Token.OBJECT_OPEN or tok is Token.ARRAY_OPEN:
                stack.append(tok)
            elif tok is Token.OBJECT_CLOSE or tok is Token.ARRAY_CLOSE:
                opener = stack.pop()
                if _CLOSERS[opener] is not tok:
                    raise self.wrap_error(
                        StructuralTokenError, f"mismatched {tok} while skipping {opener}", tok
                    )

    def _check_bool(self, tok: Token) -> None:
        if tok is Token.BOOL and bytes(self._output) not in _BOOL_WORDS:
            raise self.wrap_error(
                MalformedScalarError, f"invalid literal {bytes(self._output)!r}, wanted true/false", tok
            )

    def line_column(self, offset: int) -> tuple[int, int]:
        """Compute 1-based line and column of a byte offset."""
        line = self._data.count(b"\n", 0, offset) + 1
        column = offset - (self._data.rfind(b"\n", 0, offset) + 1) + 1
        return line, column

    def wrap_error(self, error_type: Type[E], message: str, tok: Token | None = None) -> E:
        """Build a decode error carrying the current token's position context.

        Args:
            error_type: DecodeError subclass to instantiate
            message: Human readable description
            tok: Offending token kind

        Returns:
            Error instance ready to raise
        """
        raw = bytes(self._view[self.token_start : self.token_end]) if self.token_end > self.token_start else None
        line, column = self.line_column(self.token_start)
        return error_type(
            message, token=tok, raw=raw, offset=self.token_start, line=line, column=column
        )
