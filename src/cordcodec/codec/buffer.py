"""Output buffer for encoders.

This module provides the growable byte buffer encoders write into and the
JSON string quoting used for both string values and pre-rendered keys.
"""

from __future__ import annotations

import re

from ..exceptions import EncodeError

# Quote, backslash, control characters, and the characters that are unsafe
# to embed in HTML or JavaScript source
_ESCAPE_RE = re.compile('["\\\\\x00-\x1f<>&\u2028\u2029]')

_SHORT_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def _escape(match: re.Match[str]) -> str:
    char = match.group(0)
    escaped = _SHORT_ESCAPES.get(char)
    if escaped is None:
        escaped = "\\u%04x" % ord(char)
    return escaped


def quote(text: str) -> bytes:
    """Render a string as a quoted, escaped JSON string.

    Raises:
        EncodeError: If the text holds lone surrogates
    """
    try:
        return ('"' + _ESCAPE_RE.sub(_escape, text) + '"').encode("utf-8")
    except UnicodeEncodeError as e:
        raise EncodeError(f"string is not encodable as UTF-8: {e}") from e


class Buffer:
    """Growable byte buffer with fixed-offset rewind.

    Example:
        >>> buf = Buffer()
        >>> buf.write(b'{"a":1,')
        >>> buf.rewind(1)
        >>> buf.write_byte(ord("}"))
        >>> buf.getvalue()
        b'{"a":1}'
    """

    __slots__ = ("_data",)

    def __init__(self) -> None:
        self._data = bytearray()

    def write(self, data: bytes) -> None:
        self._data += data

    def write_byte(self, value: int) -> None:
        self._data.append(value)

    def write_string(self, text: str) -> None:
        """Write raw text as UTF-8 without quoting."""
        self._data += text.encode("utf-8")

    def write_json_string(self, text: str) -> None:
        """Write text as a quoted, escaped JSON string."""
        self._data += quote(text)

    def rewind(self, count: int) -> None:
        """Drop the last ``count`` bytes."""
        if count > 0:
            del self._data[-count:]

    def getvalue(self) -> bytes:
        return bytes(self._data)

    def __len__(self) -> int:
        return len(self._data)
