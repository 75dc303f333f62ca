"""Message embeds.

Only the commonly rendered parts of an embed are modeled; video and provider
objects are skipped as unknown keys.

https://discord.com/developers/docs/resources/channel#embed-object
"""

from __future__ import annotations

import datetime
from typing import Optional

from ..models import Entity, OmitEmpty


class EmbedFooter(Entity):
    text: str = ""
    icon_url: str = OmitEmpty("")
    proxy_icon_url: str = OmitEmpty("")


class EmbedImage(Entity):
    url: str = ""
    proxy_url: str = OmitEmpty("")
    height: int = OmitEmpty(0)
    width: int = OmitEmpty(0)


class EmbedThumbnail(EmbedImage):
    pass


class EmbedAuthor(Entity):
    name: str = OmitEmpty("")
    url: str = OmitEmpty("")
    icon_url: str = OmitEmpty("")
    proxy_icon_url: str = OmitEmpty("")


class EmbedField(Entity):
    name: str = ""
    value: str = ""
    inline: bool = OmitEmpty(False)


class Embed(Entity):
    """Rich content attached to a message.

    Attributes:
        type: Embed type, ``"rich"`` for bot embeds
        color: RGB color as a 24-bit integer
    """

    title: str = OmitEmpty("")
    type: str = OmitEmpty("")
    description: str = OmitEmpty("")
    url: str = OmitEmpty("")
    timestamp: Optional[datetime.datetime] = OmitEmpty(None)
    color: int = OmitEmpty(0)

    footer: Optional[EmbedFooter] = OmitEmpty(None)
    image: Optional[EmbedImage] = OmitEmpty(None)
    thumbnail: Optional[EmbedThumbnail] = OmitEmpty(None)
    author: Optional[EmbedAuthor] = OmitEmpty(None)
    fields: list[EmbedField] = OmitEmpty(default_factory=list)
