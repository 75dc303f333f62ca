"""Unit tests for Discord entity helpers."""

from __future__ import annotations

import datetime

import pytest

from cordcodec.discord import (
    Emoji,
    ImageType,
    Member,
    Message,
    MessageFlags,
    MessageType,
    Sticker,
    StickerFormatType,
    StickerItem,
    User,
    UserFlags,
    UserNitro,
)


class TestUser:
    """Test User helpers."""

    def test_mention_and_tag(self) -> None:
        """Test mention and tag strings."""
        user = User(id=80351110224678912, username="Nelly", discriminator="1337")
        assert user.mention() == "<@80351110224678912>"
        assert user.tag() == "Nelly#1337"

    def test_avatar_url(self) -> None:
        """Test custom and animated avatars."""
        user = User(id=1, avatar="abc")
        assert user.avatar_url() == "https://cdn.discordapp.com/avatars/1/abc.png"
        assert User(id=1, avatar="a_abc").avatar_url() == "https://cdn.discordapp.com/avatars/1/a_abc.gif"
        assert user.avatar_url(ImageType.WEBP) == "https://cdn.discordapp.com/avatars/1/abc.webp"

    def test_default_avatar_url(self) -> None:
        """Test users without an avatar get a default one."""
        user = User(id=1, discriminator="1337")
        assert user.avatar_url() == "https://cdn.discordapp.com/embed/avatars/2.png"

    def test_banner_url(self) -> None:
        """Test banners are empty when unset."""
        assert User(id=1).banner_url() == ""
        assert User(id=1, banner="b").banner_url(ImageType.JPEG) == "https://cdn.discordapp.com/banners/1/b.jpeg"

    def test_flags(self) -> None:
        """Test flag values decode into combined flags."""
        user = User.from_json(b'{"public_flags": 65}')
        assert user is not None
        assert UserFlags.EMPLOYEE in user.public_flags
        assert UserFlags.HOUSE_BRAVERY in user.public_flags

    def test_member_display_name(self) -> None:
        """Test nickname falls back to the username."""
        assert Member(user=User(username="u")).display_name() == "u"
        assert Member(user=User(username="u"), nick="n").display_name() == "n"


class TestEmoji:
    """Test Emoji helpers."""

    def test_custom(self) -> None:
        """Test custom emoji strings and URLs."""
        emoji = Emoji(id=41771983429993937, name="test")

        assert not emoji.is_unicode
        assert emoji.api_string() == "test:41771983429993937"
        assert str(emoji) == "<:test:41771983429993937>"
        assert emoji.url() == "https://cdn.discordapp.com/emojis/41771983429993937.png"

    def test_animated(self) -> None:
        """Test animated emojis default to GIF."""
        emoji = Emoji(id=1, name="dance", animated=True)
        assert str(emoji) == "<a:dance:1>"
        assert emoji.url() == "https://cdn.discordapp.com/emojis/1.gif"
        assert emoji.url(ImageType.PNG) == "https://cdn.discordapp.com/emojis/1.png"

    def test_unicode(self) -> None:
        """Test Unicode emojis have no identifier and no URL."""
        emoji = Emoji(name="\U0001f525")
        assert emoji.is_unicode
        assert emoji.api_string() == "\U0001f525"
        assert str(emoji) == "\U0001f525"
        assert emoji.url() == ""

    def test_created_at(self) -> None:
        """Test creation time comes from the identifier."""
        emoji = Emoji(id=175928847299117063)
        assert emoji.created_at.date() == datetime.date(2016, 4, 30)


class TestMessage:
    """Test Message helpers."""

    def test_url_in_guild(self) -> None:
        """Test guild message URLs."""
        message = Message(id=3, channel_id=2, guild_id=1)
        assert message.url() == "https://discord.com/channels/1/2/3"

    def test_url_direct_message(self) -> None:
        """Test direct messages use @me."""
        message = Message(id=3, channel_id=2)
        assert message.url() == "https://discord.com/channels/@me/2/3"

    def test_flags(self) -> None:
        """Test message flags are combined bits."""
        message = Message.from_json(b'{"flags": 68}')
        assert message is not None
        assert message.flags == MessageFlags.EPHEMERAL | MessageFlags.SUPPRESS_EMBEDS
        assert b'"flags":68' in message.to_json()


class TestSticker:
    """Test Sticker helpers."""

    def test_tag_list(self) -> None:
        """Test tags are split and trimmed."""
        sticker = Sticker(tags="wave, hello ,hi")
        assert sticker.tag_list() == ["wave", "hello", "hi"]

    def test_created_at(self) -> None:
        """Test sticker and pack creation times."""
        sticker = Sticker(id=175928847299117063, pack_id=175928847299117063)
        assert sticker.created_at == sticker.pack_created_at

    def test_url(self) -> None:
        """Test sticker image URLs."""
        assert StickerItem(id=5).url() == "https://cdn.discordapp.com/stickers/5.png"
        assert Sticker(id=5).url(ImageType.AUTO) == "https://cdn.discordapp.com/stickers/5.png"

    def test_sort_value_zero_written(self) -> None:
        """Test a zero sort value is present, unlike an absent one."""
        assert b'"sort_value":0' in Sticker(sort_value=0).to_json()
        assert b"sort_value" not in Sticker().to_json()


class TestApiEnums:
    """Test API enums with values they do not declare."""

    def test_declared_member(self) -> None:
        """Test declared values resolve to their members."""
        assert MessageType(19) is MessageType.INLINED_REPLY
        assert MessageType.INLINED_REPLY.is_known

    def test_undeclared_value(self) -> None:
        """Test undeclared values become cached pseudo-members."""
        kind = MessageType(46)
        assert kind == 46
        assert kind.name == "UNKNOWN_46"
        assert not kind.is_known
        assert MessageType(46) is kind
        assert "UNKNOWN_46" not in MessageType.__members__

    def test_entity_field(self) -> None:
        """Test entities accept undeclared values on construction."""
        assert StickerItem(format_type=9).format_type == StickerFormatType(9)
        assert User(premium_type=7).premium_type == UserNitro(7)
        assert b'"premium_type":7' in User(premium_type=7).to_json()

    def test_rejects_non_integers(self) -> None:
        """Test strings are not coerced to undeclared members."""
        with pytest.raises(ValueError):
            MessageType("46")
