"""Users and guild members.

https://discord.com/developers/docs/resources/user#user-object
"""

from __future__ import annotations

import datetime
import enum
from typing import Optional

from pydantic import Field

from ..models import Entity, OmitEmpty, OpenIntEnum, RoleID, UserID
from .image import CDN_URL, ImageType


class UserFlags(enum.IntFlag):
    """Badges shown on a user's profile."""

    NONE = 0
    EMPLOYEE = 1 << 0
    PARTNER = 1 << 1
    HYPESQUAD_EVENTS = 1 << 2
    BUG_HUNTER_LEVEL_1 = 1 << 3
    HOUSE_BRAVERY = 1 << 6
    HOUSE_BRILLIANCE = 1 << 7
    HOUSE_BALANCE = 1 << 8
    EARLY_SUPPORTER = 1 << 9
    TEAM_USER = 1 << 10
    SYSTEM = 1 << 12
    BUG_HUNTER_LEVEL_2 = 1 << 14
    VERIFIED_BOT = 1 << 16
    VERIFIED_BOT_DEVELOPER = 1 << 17
    CERTIFIED_MODERATOR = 1 << 18


class UserNitro(OpenIntEnum):
    NONE = 0
    CLASSIC = 1
    FULL = 2
    BASIC = 3


class User(Entity):
    """A Discord user.

    Example:
        >>> user = User(id=82198898841029460, username="Nelly", discriminator="1337")
        >>> user.mention()
        '<@82198898841029460>'
        >>> user.tag()
        'Nelly#1337'
    """

    id: UserID = UserID(0)
    username: str = ""
    discriminator: str = ""
    avatar: str = ""
    banner: str = OmitEmpty("")
    accent_color: int = OmitEmpty(0)

    bot: bool = OmitEmpty(False)
    mfa_enabled: bool = OmitEmpty(False)
    system: bool = OmitEmpty(False)

    locale: str = OmitEmpty("")
    email: str = OmitEmpty("")

    flags: UserFlags = OmitEmpty(UserFlags.NONE)
    public_flags: UserFlags = OmitEmpty(UserFlags.NONE)
    premium_type: UserNitro = OmitEmpty(UserNitro.NONE)

    def mention(self) -> str:
        return f"<@{self.id}>"

    def tag(self) -> str:
        return f"{self.username}#{self.discriminator}"

    def avatar_url(self, image_type: ImageType = ImageType.AUTO) -> str:
        """URL of the user's avatar, or of the default avatar when none is set.

        Args:
            image_type: Requested format (ignored for default avatars)

        Returns:
            CDN URL
        """
        if not self.avatar:
            discriminator = int(self.discriminator) if self.discriminator.isdigit() else 0
            return f"{CDN_URL}/embed/avatars/{discriminator % 5}.png"
        return f"{CDN_URL}/avatars/{self.id}/{image_type.filename(self.avatar)}"

    def banner_url(self, image_type: ImageType = ImageType.AUTO) -> str:
        """URL of the user's banner, or an empty string when none is set."""
        if not self.banner:
            return ""
        return f"{CDN_URL}/banners/{self.id}/{image_type.filename(self.banner)}"


class Member(Entity):
    """A user's membership in a guild.

    https://discord.com/developers/docs/resources/guild#guild-member-object
    """

    user: User = Field(default_factory=User)
    nick: str = OmitEmpty("")
    avatar: str = OmitEmpty("")
    role_ids: list[RoleID] = Field(default_factory=list, alias="roles")
    joined_at: Optional[datetime.datetime] = None
    premium_since: Optional[datetime.datetime] = OmitEmpty(None)
    deaf: bool = False
    mute: bool = False
    pending: bool = OmitEmpty(False)
    communication_disabled_until: Optional[datetime.datetime] = None

    def mention(self) -> str:
        return f"<@!{self.user.id}>"

    def display_name(self) -> str:
        return self.nick or self.user.username


class GuildUser(User):
    """A user with the partial member object sent alongside mentions."""

    member: Optional[Member] = OmitEmpty(None)
