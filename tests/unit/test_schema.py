"""Unit tests for schema introspection."""

from __future__ import annotations

from typing import Any, Optional, Union

import pytest
from pydantic import Field

from cordcodec import Entity, SchemaError
from cordcodec.codec.schema import EntitySchema, FieldKind
from cordcodec.discord import Emoji, GuildUser, Message, MessageType, User


class TestEntitySchema:
    """Test field tables built from models."""

    def test_emoji_wire_order(self) -> None:
        """Test fields keep declaration order and aliases."""
        schema = EntitySchema.for_model(Emoji)
        assert [field.key for field in schema.fields] == [
            "id",
            "name",
            "roles",
            "user",
            "require_colons",
            "managed",
            "animated",
            "available",
        ]

    def test_kinds(self) -> None:
        """Test semantic kinds and omission flags."""
        fields = {field.name: field for field in EntitySchema.for_model(Emoji).fields}

        assert fields["id"].kind is FieldKind.SNOWFLAKE
        assert fields["role_ids"].kind is FieldKind.LIST
        assert fields["role_ids"].item is not None
        assert fields["role_ids"].item.kind is FieldKind.SNOWFLAKE
        assert fields["role_ids"].omit_empty is True
        assert fields["user"].kind is FieldKind.ENTITY
        assert fields["user"].omit_empty is False
        assert fields["require_colons"].kind is FieldKind.BOOL
        assert fields["require_colons"].encoded_key == b'"require_colons":'

    def test_nullable_and_enum(self) -> None:
        """Test Optional and enum annotations."""
        fields = {field.name: field for field in EntitySchema.for_model(Message).fields}

        assert fields["type"].kind is FieldKind.INT_ENUM
        assert fields["type"].python_type is MessageType
        assert fields["referenced_message"].nullable is True
        assert fields["referenced_message"].python_type is Message
        assert fields["edited_timestamp"].kind is FieldKind.DATETIME

    def test_embedding_puts_base_fields_first(self) -> None:
        """Test subclass fields follow the embedded entity's fields."""
        keys = [field.key for field in EntitySchema.for_model(GuildUser).fields]
        user_keys = [field.key for field in EntitySchema.for_model(User).fields]
        assert keys == user_keys + ["member"]

    def test_cached(self) -> None:
        """Test schemas are built once per model."""
        assert EntitySchema.for_model(Emoji) is EntitySchema.for_model(Emoji)

    def test_emptiness(self) -> None:
        """Test the emptiness rule per kind."""
        fields = {field.name: field for field in EntitySchema.for_model(Message).fields}

        assert fields["guild_id"].is_empty(0)
        assert fields["stickers"].is_empty([])
        assert fields["nonce"].is_empty("")
        assert fields["reference"].is_empty(None)
        assert not fields["nonce"].is_empty("1")


class TestUnsupported:
    """Test models the codec cannot handle."""

    def test_dict_field(self) -> None:
        """Test dict fields are rejected."""

        class WithDict(Entity):
            """Entity with a dict field."""

            data: dict = Field(default_factory=dict)

        with pytest.raises(SchemaError, match="unsupported type dict"):
            EntitySchema.for_model(WithDict)

    def test_multi_union(self) -> None:
        """Test unions of several types are rejected."""

        class WithUnion(Entity):
            """Entity with a union field."""

            value: Optional[Union[int, str]] = None

        with pytest.raises(SchemaError, match="complex Union"):
            EntitySchema.for_model(WithUnion)

    def test_any(self) -> None:
        """Test Any is rejected."""

        class WithAny(Entity):
            """Entity with an untyped field."""

            value: Any = None

        with pytest.raises(SchemaError):
            EntitySchema.for_model(WithAny)

    def test_bare_list(self) -> None:
        """Test lists need an element type."""

        class WithList(Entity):
            """Entity with a bare list."""

            values: list = Field(default_factory=list)

        with pytest.raises(SchemaError, match="element type"):
            EntitySchema.for_model(WithList)
