"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import json
from typing import Any

import pytest


@pytest.fixture
def user_data() -> dict[str, Any]:
    """A user object as sent by the API."""
    return {
        "id": "80351110224678912",
        "username": "Nelly",
        "discriminator": "1337",
        "avatar": "8342729096ea3675442027381ff50dfe",
        "bot": False,
        "email": "nelly@discord.com",
        "flags": 64,
        "premium_type": 1,
        "public_flags": 64,
    }


@pytest.fixture
def emoji_payload(user_data: dict[str, Any]) -> bytes:
    """Custom emoji payload with a creator and two boolean flags."""
    return json.dumps(
        {
            "id": "41771983429993937",
            "name": "test",
            "user": user_data,
            "require_colons": True,
            "animated": False,
        }
    ).encode()


@pytest.fixture
def message_data(user_data: dict[str, Any]) -> dict[str, Any]:
    """A guild reply message with most satellites present."""
    return {
        "id": "334385199974967042",
        "channel_id": "290926798999357250",
        "guild_id": "290926798999357249",
        "type": 19,
        "flags": 0,
        "tts": False,
        "pinned": False,
        "mention_everyone": False,
        "mentions": [
            {
                "id": "53908099506183680",
                "username": "Mason",
                "discriminator": "9999",
                "avatar": None,
                "member": {
                    "roles": ["41771983423143936"],
                    "joined_at": "2015-04-26T06:26:56.936000+00:00",
                    "deaf": False,
                    "mute": False,
                },
            }
        ],
        "mention_roles": [],
        "author": user_data,
        "content": "Supa Hot",
        "timestamp": "2017-07-11T17:27:07.299000+00:00",
        "edited_timestamp": None,
        "attachments": [
            {
                "id": "1003720128271712256",
                "filename": "cat.png",
                "content_type": "image/png",
                "size": 45632,
                "url": "https://cdn.discordapp.com/attachments/1/2/cat.png",
                "proxy_url": "https://media.discordapp.net/attachments/1/2/cat.png",
                "height": 512,
                "width": 512,
            }
        ],
        "embeds": [
            {
                "title": "Hello",
                "type": "rich",
                "color": 16711680,
                "fields": [{"name": "a", "value": "b", "inline": True}],
                "video": {"url": "https://example.com/v.mp4"},
            }
        ],
        "reactions": [
            {"count": 1, "me": False, "emoji": {"id": None, "name": "\U0001f525"}},
        ],
        "nonce": "1234",
        "message_reference": {
            "message_id": "334385199974967041",
            "channel_id": "290926798999357250",
            "guild_id": "290926798999357249",
        },
        "referenced_message": None,
        "sticker_items": [{"id": "749054660769218631", "name": "Wave", "format_type": 3}],
        "components": [],
    }


@pytest.fixture
def message_payload(message_data: dict[str, Any]) -> bytes:
    """message_data serialized to JSON bytes."""
    return json.dumps(message_data).encode()
