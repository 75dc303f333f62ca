"""Unit tests for snowflake identifiers."""

from __future__ import annotations

import datetime
from typing import Optional

import pytest
from pydantic import ValidationError

from cordcodec import Entity, GuildID, OmitEmpty, Snowflake, UserID, decode, encode


class Holder(Entity):
    """Entity with one identifier field."""

    id: UserID = UserID(0)


class Ref(Entity):
    """Entity with nullable identifiers."""

    owner: Optional[UserID] = None
    guild: Optional[GuildID] = OmitEmpty(None)


class TestSnowflake:
    """Test JSON conversion and helpers."""

    @pytest.mark.parametrize("raw", [b'"null"', b"null", b'""', b'"0"', b"0"])
    def test_zero_forms(self, raw: bytes) -> None:
        """Test every zero form maps to the unset snowflake."""
        value = Snowflake.from_json(raw)
        assert value == 0
        assert not value.is_valid()

    def test_from_json_keeps_subclass(self) -> None:
        """Test typed identifiers parse to their own type."""
        value = GuildID.from_json(b'"197038439483310086"')
        assert type(value) is GuildID
        assert value == 197038439483310086

    def test_from_json_malformed(self) -> None:
        """Test malformed identifiers are rejected."""
        with pytest.raises(ValueError):
            Snowflake.from_json(b'"abc"')

    def test_to_json(self) -> None:
        """Test identifiers are written quoted and zero as null."""
        assert Snowflake(41771983429993937).to_json() == b'"41771983429993937"'
        assert Snowflake(0).to_json() == b"null"

    def test_created_at(self) -> None:
        """Test the creation time encoded in the identifier."""
        created = Snowflake(175928847299117063).created_at
        assert created == datetime.datetime(2016, 4, 30, 11, 18, 25, 796000, tzinfo=datetime.timezone.utc)

    def test_str_and_repr(self) -> None:
        """Test string forms."""
        assert str(UserID(42)) == "42"
        assert repr(UserID(42)) == "UserID(42)"


class TestSnowflakeValidation:
    """Test assignment of identifiers to entity fields."""

    def test_int_and_str(self) -> None:
        """Test ints and decimal strings are converted to the field's type."""
        assert type(Holder(id=5).id) is UserID
        assert Holder(id="80351110224678912").id == 80351110224678912

    def test_rejects_bool(self) -> None:
        """Test booleans are not identifiers."""
        with pytest.raises(ValidationError):
            Holder(id=True)

    def test_rejects_out_of_range(self) -> None:
        """Test negative and oversized identifiers are rejected."""
        with pytest.raises(ValidationError):
            Holder(id=-1)
        with pytest.raises(ValidationError):
            Holder(id=2**64)

    def test_json_mode_dump(self) -> None:
        """Test Pydantic JSON dumps identifiers as strings."""
        assert Holder(id=7).model_dump(mode="json") == {"id": "7"}


class TestUnsetIdentifiers:
    """Test zero and None are the same unset value for nullable identifiers."""

    def test_zero_encodes_as_null(self) -> None:
        """Test a zero identifier is written like a missing one."""
        assert encode(Ref(owner=UserID(0))) == encode(Ref()) == b'{"owner":null}'

    def test_zero_decodes_as_none(self) -> None:
        """Test the null written for zero reads back as None."""
        ref = decode(Ref, encode(Ref(owner=UserID(0))))
        assert ref == Ref(owner=None)

    def test_zero_is_omitted(self) -> None:
        """Test a zero identifier counts as empty for omitted fields."""
        assert b'"guild"' not in encode(Ref(guild=GuildID(0)))
        assert encode(Ref(guild=GuildID(5))) == b'{"owner":null,"guild":"5"}'

    def test_non_nullable_zero(self) -> None:
        """Test non-nullable identifiers keep zero through a round trip."""
        holder = decode(Holder, encode(Holder()))
        assert holder is not None
        assert holder.id == 0
        assert isinstance(holder.id, UserID)
