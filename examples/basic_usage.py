#!/usr/bin/env python3
"""Basic usage example for cordcodec.

This example demonstrates:
1. Decoding an API payload into a Discord entity
2. Reading typed fields and helpers
3. Encoding back to canonical JSON
4. Declaring a custom entity with a generated encoder
5. Handling malformed input
"""

from __future__ import annotations

import logging
from typing import ClassVar

from cordcodec import DecodeError, Entity, OmitEmpty, UserID, decode, encode
from cordcodec.discord import Emoji

PAYLOAD = b"""{
    "id": "41771983429993937",
    "name": "LUL",
    "roles": ["41771983429993000", "41771983429993111"],
    "user": {"username": "Luigi", "discriminator": "0002", "id": "96008815106887111", "avatar": "5500909a3274e1812beb4e8de6631111"},
    "require_colons": true,
    "managed": false,
    "animated": false,
    "available": true,
    "version": 0
}"""


# Define a custom entity
class Presence(Entity):
    """Minimal presence update.

    Empty fields are left out of the encoded object and the encoder is
    generated once for the class.
    """

    user_id: UserID = UserID(0)
    status: str = "offline"
    mobile: bool = OmitEmpty(False)

    codec_specialize: ClassVar[bool] = True


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("cordcodec Basic Usage Example")
    print("=" * 60)
    print()

    print("1. Decoding an emoji payload...")
    emoji = decode(Emoji, PAYLOAD)
    assert emoji is not None
    print(f"   ID: {emoji.id} (created {emoji.created_at:%Y-%m-%d})")
    print(f"   Name: {emoji.name}")
    print(f"   Roles: {[int(role) for role in emoji.role_ids]}")
    print(f"   Creator: {emoji.user.tag()}")
    print()

    print("2. Using entity helpers...")
    print(f"   API string: {emoji.api_string()}")
    print(f"   Message form: {emoji}")
    print(f"   Image: {emoji.url()}")
    print()

    print("3. Encoding to canonical JSON...")
    data = encode(emoji)
    print(f"   {len(PAYLOAD)} bytes in, {len(data)} bytes out")
    print(f"   {data.decode()}")
    assert decode(Emoji, data) == emoji
    print("   Round trip OK")
    print()

    print("4. Custom entity with a generated encoder...")
    presence = Presence(user_id=80351110224678912, status="online")
    print(f"   {encode(presence).decode()}")
    presence = Presence.from_json(b'{"USER_ID": 80351110224678912, "status": "idle", "mobile": true}')
    print(f"   {presence!r}")
    print()

    print("5. Handling malformed input...")
    try:
        decode(Emoji, b'{"id": tru}')
    except DecodeError as e:
        print(f"   {type(e).__name__}: {e}")
    print()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main()
