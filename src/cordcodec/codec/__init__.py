"""Streaming JSON codec for cordcodec.

This module provides encoding and decoding of entities to and from JSON
bytes, driven by per-entity schemas instead of a generic JSON tree.
"""

from __future__ import annotations

from .buffer import Buffer
from .decoder import ParseState, decode, decode_from_lexer
from .encoder import encode, encode_into
from .lexer import Lexer, Token
from .schema import EntitySchema, FieldKind, FieldSchema
from .specialize import compile_encoder, specialize

__all__ = [
    "encode",
    "encode_into",
    "decode",
    "decode_from_lexer",
    "ParseState",
    "Lexer",
    "Token",
    "Buffer",
    "EntitySchema",
    "FieldSchema",
    "FieldKind",
    "compile_encoder",
    "specialize",
]
