"""Emojis.

https://discord.com/developers/docs/resources/emoji#emoji-object
"""

from __future__ import annotations

import datetime

from pydantic import Field

from ..models import EmojiID, Entity, OmitEmpty, RoleID
from .image import CDN_URL, ImageType
from .user import User


class Emoji(Entity):
    """A custom guild emoji, or a Unicode emoji when ``id`` is unset.

    Example:
        >>> emoji = Emoji.from_json(b'{"id":"41771983429993937","name":"test","require_colons":true}')
        >>> emoji.api_string()
        'test:41771983429993937'
    """

    id: EmojiID = EmojiID(0)
    name: str = ""

    role_ids: list[RoleID] = OmitEmpty(default_factory=list, alias="roles")
    user: User = Field(default_factory=User)

    require_colons: bool = OmitEmpty(False)
    managed: bool = OmitEmpty(False)
    animated: bool = OmitEmpty(False)
    available: bool = OmitEmpty(False)

    @property
    def is_unicode(self) -> bool:
        return not self.id.is_valid()

    @property
    def created_at(self) -> datetime.datetime:
        return self.id.created_at

    def api_string(self) -> str:
        """Form used in reaction endpoints: ``name:id``, or the bare Unicode emoji."""
        if self.is_unicode:
            return self.name
        return f"{self.name}:{self.id}"

    def url(self, image_type: ImageType = ImageType.AUTO) -> str:
        """CDN URL of a custom emoji's image; empty for Unicode emojis."""
        if self.is_unicode:
            return ""
        if image_type is ImageType.AUTO:
            image_type = ImageType.GIF if self.animated else ImageType.PNG
        return f"{CDN_URL}/emojis/{image_type.filename(str(self.id))}"

    def __str__(self) -> str:
        if self.is_unicode:
            return self.name
        prefix = "a" if self.animated else ""
        return f"<{prefix}:{self.name}:{self.id}>"
