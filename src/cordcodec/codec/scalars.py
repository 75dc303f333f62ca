"""Dedicated scalar parses over captured token bytes.

Every function here raises ``ValueError`` on malformed input; the decoder
turns that into a ``MalformedScalarError`` carrying the lexer position.
"""

from __future__ import annotations

import datetime
import math

UINT64_MAX = 2**64 - 1

_QUOTE = ord('"')


def strip_quotes(raw: bytes) -> bytes:
    """Remove one pair of surrounding double quotes, if present."""
    if len(raw) >= 2 and raw[0] == _QUOTE and raw[-1] == _QUOTE:
        return raw[1:-1]
    return raw


def parse_uint64(raw: bytes) -> int:
    """Parse a fixed-width unsigned 64-bit integer.

    Both the quoted (``"41771983429993937"``) and the bare
    (``41771983429993937``) encodings are accepted, since the API sends
    64-bit identifiers as strings to avoid precision loss.

    Args:
        raw: Captured token bytes

    Returns:
        Parsed integer

    Raises:
        ValueError: If the bytes are not a decimal in [0, 2**64 - 1]
    """
    digits = strip_quotes(bytes(raw))
    if not digits or not digits.isdigit():
        raise ValueError(f"invalid unsigned integer {bytes(raw)!r}")

    value = int(digits)
    if value > UINT64_MAX:
        raise ValueError(f"unsigned integer {value} overflows 64 bits")
    return value


def parse_bool(raw: bytes) -> bool:
    """Parse the captured bytes of a boolean literal."""
    if raw == b"true":
        return True
    if raw == b"false":
        return False
    raise ValueError("unexpected bytes for true/false value")


def parse_int(raw: bytes) -> int:
    """Parse the captured bytes of an integer literal."""
    return int(bytes(raw))


def parse_float(raw: bytes) -> float:
    """Parse the captured bytes of a number literal as a float."""
    value = float(bytes(raw))
    if math.isinf(value):
        raise ValueError(f"number {bytes(raw)!r} overflows float")
    return value


def parse_datetime(text: str) -> datetime.datetime:
    """Parse an ISO-8601 timestamp as sent by the API.

    Example:
        >>> parse_datetime("2021-08-05T12:34:56.789000+00:00").year
        2021
    """
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    return datetime.datetime.fromisoformat(text)


def format_datetime(value: datetime.datetime) -> str:
    """Format a timestamp the way the API sends it."""
    return value.isoformat()
