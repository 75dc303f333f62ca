"""Unit tests for the canonical encoder."""

from __future__ import annotations

import datetime
import enum
from typing import Optional

import pytest

from cordcodec import EncodeError, Entity, OmitEmpty, UserID, decode, encode
from cordcodec.codec.buffer import Buffer, quote
from cordcodec.discord import Emoji, GuildUser, Member, User


class Status(enum.IntEnum):
    """Test int enum."""

    OFFLINE = 0
    ONLINE = 1


class Sample(Entity):
    """Entity covering every field kind."""

    flag: bool = False
    count: int = 0
    ratio: float = 0.0
    label: str = ""
    status: Status = Status.OFFLINE
    when: Optional[datetime.datetime] = None
    numbers: list[int] = []


class Sparse(Entity):
    """Entity where every field is omitted when empty."""

    id: UserID = OmitEmpty(UserID(0))
    label: str = OmitEmpty("")
    count: int = OmitEmpty(0)
    maybe: Optional[int] = OmitEmpty(None)
    user: Optional[User] = OmitEmpty(None)
    numbers: list[int] = OmitEmpty(default_factory=list)


class TestEmojiScenarios:
    """Test the reference Emoji encodings."""

    def test_false_booleans_omitted(self) -> None:
        """Test false booleans are left out while id, name and user stay."""
        emoji = Emoji(id=41771983429993937, name="test", user=User(id=1, username="a"))

        assert encode(emoji) == (
            b'{ "id":"41771983429993937","name":"test",'
            b'"user":{ "id":"1","username":"a","discriminator":"","avatar":""}}'
        )

    def test_true_booleans_written(self) -> None:
        """Test true booleans appear in declaration order."""
        emoji = Emoji(name="x", require_colons=True, available=True)
        data = encode(emoji)

        assert data.endswith(b',"require_colons":true,"available":true}')
        assert b"managed" not in data
        assert b"animated" not in data

    def test_roles_written_when_present(self) -> None:
        """Test non-empty lists are written with quoted identifiers."""
        emoji = Emoji(name="x", role_ids=[1, 2])
        assert b'"roles":["1","2"]' in encode(emoji)


class TestLayout:
    """Test object layout."""

    def test_none(self) -> None:
        """Test None encodes as null."""
        assert encode(None) == b"null"

    def test_empty_object(self) -> None:
        """Test the placeholder space is rewound for empty objects."""
        assert encode(Sparse()) == b"{}"

    def test_single_field(self) -> None:
        """Test the final separator is rewound."""
        assert encode(Sparse(count=3)) == b'{ "count":3}'

    def test_default_user(self) -> None:
        """Test an unset identifier writes null."""
        assert encode(User()) == b'{ "id":null,"username":"","discriminator":"","avatar":""}'

    def test_all_kinds(self) -> None:
        """Test each kind writer."""
        sample = Sample(
            flag=True,
            count=-3,
            ratio=0.5,
            label="hi",
            status=Status.ONLINE,
            when=datetime.datetime(2021, 1, 1, tzinfo=datetime.timezone.utc),
            numbers=[1, 2],
        )

        assert encode(sample) == (
            b'{ "flag":true,"count":-3,"ratio":0.5,"label":"hi","status":1,'
            b'"when":"2021-01-01T00:00:00+00:00","numbers":[1,2]}'
        )

    def test_null_and_empty_always_fields(self) -> None:
        """Test always-written fields with empty values."""
        assert encode(Sample()) == (
            b'{ "flag":false,"count":0,"ratio":0.0,"label":"","status":0,"when":null,"numbers":[]}'
        )

    def test_does_not_mutate(self) -> None:
        """Test encoding leaves the entity untouched."""
        emoji = Emoji(name="x", role_ids=[1])
        before = emoji.model_dump()
        encode(emoji)
        assert emoji.model_dump() == before

    def test_to_json(self) -> None:
        """Test the Entity convenience method."""
        user = User(id=5, username="a")
        assert user.to_json() == encode(user)
        assert User.from_json(user.to_json()) == user


class TestOmission:
    """Test the omit-if-empty policy."""

    def test_nullable_scalar_zero_written(self) -> None:
        """Test only None is empty for nullable scalars."""
        assert encode(Sparse(maybe=0)) == b'{ "maybe":0}'
        assert encode(Sparse(maybe=None)) == b"{}"

    def test_nullable_entity(self) -> None:
        """Test nullable entities are omitted only when None."""
        assert encode(Sparse(user=User())) == b'{ "user":{ "id":null,"username":"","discriminator":"","avatar":""}}'

    def test_zero_snowflake_omitted(self) -> None:
        """Test unset identifiers are empty."""
        assert encode(Sparse(id=0, label="a")) == b'{ "label":"a"}'

    def test_embedded_fields(self) -> None:
        """Test fields of an embedded entity come first."""
        user = GuildUser(id=1, member=Member(nick="n"))
        data = encode(user)
        assert data.startswith(b'{ "id":"1",')
        assert b'"member":{ "user":{' in data
        assert b'"nick":"n","roles":[],"joined_at":null,"deaf":false,"mute":false,' in data


class TestStrings:
    """Test string escaping."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("plain", b'"plain"'),
            ('a"b\\c', b'"a\\"b\\\\c"'),
            ("line\nbreak\ttab\r", b'"line\\nbreak\\ttab\\r"'),
            ("<a&b>", b'"\\u003ca\\u0026b\\u003e"'),
            ("\x00\x1f", b'"\\u0000\\u001f"'),
            ("\u2028\u2029", b'"\\u2028\\u2029"'),
            ("é\U0001f525", '"é\U0001f525"'.encode()),
        ],
    )
    def test_quote(self, text: str, expected: bytes) -> None:
        """Test special characters are escaped and others pass through."""
        assert quote(text) == expected

    def test_lone_surrogate(self) -> None:
        """Test text that cannot be UTF-8 encoded."""
        with pytest.raises(EncodeError):
            quote("\ud800")

    def test_escaped_round_trip(self) -> None:
        """Test escaped strings decode back to the same text."""
        user = User(username='<"\\\n\u2028>')
        decoded = decode(User, encode(user))
        assert decoded is not None
        assert decoded.username == user.username


class TestErrors:
    """Test unencodable values."""

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_float(self, value: float) -> None:
        """Test NaN and infinities cannot be encoded."""
        with pytest.raises(EncodeError, match="not representable"):
            encode(Sample(ratio=value))

    def test_wrong_type(self) -> None:
        """Test values bypassing validation are rejected by the writers."""
        sample = Sample.model_construct(count="3")
        with pytest.raises(EncodeError, match="Field count: expected int, got str"):
            encode(sample)

    def test_bool_is_not_int(self) -> None:
        """Test booleans are not written into integer fields."""
        sample = Sample.model_construct(count=True)
        with pytest.raises(EncodeError, match="expected int, got bool"):
            encode(sample)


class TestBuffer:
    """Test the output buffer."""

    def test_rewind(self) -> None:
        """Test rewinding drops trailing bytes."""
        buf = Buffer()
        buf.write(b"abc,")
        buf.rewind(1)
        buf.write_byte(ord("]"))
        assert buf.getvalue() == b"abc]"
        assert len(buf) == 4

    def test_rewind_zero(self) -> None:
        """Test a zero rewind is a no-op."""
        buf = Buffer()
        buf.write(b"x")
        buf.rewind(0)
        assert buf.getvalue() == b"x"

    def test_strings(self) -> None:
        """Test raw and quoted string writes."""
        buf = Buffer()
        buf.write_string("1.5")
        buf.write_json_string("a<b")
        assert buf.getvalue() == b'1.5"a\\u003cb"'
