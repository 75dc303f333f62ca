"""Messages and the entities embedded in them.

https://discord.com/developers/docs/resources/channel#message-object
"""

from __future__ import annotations

import datetime
import enum
from typing import ClassVar, List, Optional

from pydantic import Field

from ..models import (
    AppID,
    AttachmentID,
    ChannelID,
    Entity,
    GuildID,
    InteractionID,
    MessageID,
    OmitEmpty,
    OpenIntEnum,
    RoleID,
    StickerID,
    StickerPackID,
    WebhookID,
)
from .embed import Embed
from .emoji import Emoji
from .image import CDN_URL, ImageType
from .user import GuildUser, Member, User


class MessageType(OpenIntEnum):
    DEFAULT = 0
    RECIPIENT_ADD = 1
    RECIPIENT_REMOVE = 2
    CALL = 3
    CHANNEL_NAME_CHANGE = 4
    CHANNEL_ICON_CHANGE = 5
    CHANNEL_PINNED = 6
    GUILD_MEMBER_JOIN = 7
    NITRO_BOOST = 8
    NITRO_TIER_1 = 9
    NITRO_TIER_2 = 10
    NITRO_TIER_3 = 11
    CHANNEL_FOLLOW_ADD = 12
    GUILD_DISCOVERY_DISQUALIFIED = 14
    GUILD_DISCOVERY_REQUALIFIED = 15
    GUILD_DISCOVERY_GRACE_PERIOD_INITIAL_WARNING = 16
    GUILD_DISCOVERY_GRACE_PERIOD_FINAL_WARNING = 17
    THREAD_CREATED = 18
    INLINED_REPLY = 19
    CHAT_INPUT_COMMAND = 20
    THREAD_STARTER = 21
    GUILD_INVITE_REMINDER = 22
    CONTEXT_MENU_COMMAND = 23


class MessageFlags(enum.IntFlag):
    NONE = 0
    CROSSPOSTED = 1 << 0
    IS_CROSSPOST = 1 << 1
    SUPPRESS_EMBEDS = 1 << 2
    SOURCE_MESSAGE_DELETED = 1 << 3
    URGENT = 1 << 4
    HAS_THREAD = 1 << 5
    EPHEMERAL = 1 << 6
    LOADING = 1 << 7


class StickerType(OpenIntEnum):
    STANDARD = 1
    GUILD = 2


class StickerFormatType(OpenIntEnum):
    PNG = 1
    APNG = 2
    LOTTIE = 3
    GIF = 4


class MessageActivityType(OpenIntEnum):
    JOIN = 1
    SPECTATE = 2
    LISTEN = 3
    JOIN_REQUEST = 5


class InteractionType(OpenIntEnum):
    PING = 1
    APPLICATION_COMMAND = 2
    MESSAGE_COMPONENT = 3
    APPLICATION_COMMAND_AUTOCOMPLETE = 4
    MODAL_SUBMIT = 5


def _sticker_url(sticker_id: StickerID, image_type: ImageType) -> str:
    if image_type is ImageType.AUTO:
        image_type = ImageType.PNG
    return f"{CDN_URL}/stickers/{image_type.filename(str(sticker_id))}"


class StickerItem(Entity):
    """Partial sticker sent with messages."""

    id: StickerID = StickerID(0)
    name: str = ""
    format_type: StickerFormatType = StickerFormatType.PNG

    def url(self, image_type: ImageType = ImageType.PNG) -> str:
        return _sticker_url(self.id, image_type)


class Sticker(Entity):
    """A full sticker object.

    https://discord.com/developers/docs/resources/sticker#sticker-object
    """

    id: StickerID = StickerID(0)
    pack_id: StickerPackID = OmitEmpty(StickerPackID(0))
    name: str = ""
    description: str = ""
    tags: str = ""
    type: StickerType = StickerType.STANDARD
    format_type: StickerFormatType = StickerFormatType.PNG
    available: bool = OmitEmpty(False)
    guild_id: GuildID = OmitEmpty(GuildID(0))
    user: Optional[User] = OmitEmpty(None)
    sort_value: Optional[int] = OmitEmpty(None)

    @property
    def created_at(self) -> datetime.datetime:
        return self.id.created_at

    @property
    def pack_created_at(self) -> datetime.datetime:
        return self.pack_id.created_at

    def tag_list(self) -> List[str]:
        """Split the comma-delimited tags, trimming surrounding whitespace."""
        return [tag.strip() for tag in self.tags.split(",")]

    def url(self, image_type: ImageType = ImageType.PNG) -> str:
        return _sticker_url(self.id, image_type)


class ChannelMention(Entity):
    channel_id: ChannelID = Field(default=ChannelID(0), alias="id")
    guild_id: GuildID = GuildID(0)
    channel_type: int = Field(default=0, alias="type")
    channel_name: str = Field(default="", alias="name")


class MessageActivity(Entity):
    type: MessageActivityType = MessageActivityType.JOIN
    party_id: str = OmitEmpty("")


class MessageApplication(Entity):
    id: AppID = AppID(0)
    cover_id: str = OmitEmpty("", alias="cover_image")
    description: str = ""
    icon: str = ""
    name: str = ""

    @property
    def created_at(self) -> datetime.datetime:
        return self.id.created_at


class MessageReference(Entity):
    """Points at the source of a crosspost, pin, channel follow or reply.

    When sending a reply only ``message_id`` is required.
    """

    message_id: MessageID = OmitEmpty(MessageID(0))
    channel_id: ChannelID = OmitEmpty(ChannelID(0))
    guild_id: GuildID = OmitEmpty(GuildID(0))


class MessageInteraction(Entity):
    id: InteractionID = InteractionID(0)
    type: InteractionType = InteractionType.APPLICATION_COMMAND
    name: str = ""
    user: User = Field(default_factory=User)
    member: Optional[Member] = OmitEmpty(None)


class Attachment(Entity):
    id: AttachmentID = AttachmentID(0)
    filename: str = ""
    description: str = OmitEmpty("")
    content_type: str = OmitEmpty("")
    size: int = 0
    url: str = ""
    proxy_url: str = ""
    height: int = OmitEmpty(0)
    width: int = OmitEmpty(0)
    ephemeral: bool = OmitEmpty(False)


class Reaction(Entity):
    count: int = 0
    me: bool = False
    emoji: Emoji = Field(default_factory=Emoji)


class Message(Entity):
    """A message sent in a channel.

    ``referenced_message`` is itself a Message: absent when the reply target
    was not fetched, ``None`` when it was deleted.

    Example:
        >>> message = Message.from_json(payload)
        >>> message.url()
        'https://discord.com/channels/@me/290926798999357250/334385199974967042'
    """

    codec_specialize: ClassVar[bool] = True

    id: MessageID = MessageID(0)
    channel_id: ChannelID = ChannelID(0)
    guild_id: GuildID = OmitEmpty(GuildID(0))

    type: MessageType = MessageType.DEFAULT
    flags: MessageFlags = MessageFlags.NONE

    tts: bool = False
    pinned: bool = False

    mention_everyone: bool = False
    mentions: list[GuildUser] = Field(default_factory=list)
    mention_role_ids: list[RoleID] = Field(default_factory=list, alias="mention_roles")
    mention_channels: list[ChannelMention] = OmitEmpty(default_factory=list)

    author: User = Field(default_factory=User)
    content: str = ""

    timestamp: Optional[datetime.datetime] = OmitEmpty(None)
    edited_timestamp: Optional[datetime.datetime] = OmitEmpty(None)

    attachments: list[Attachment] = Field(default_factory=list)
    embeds: list[Embed] = Field(default_factory=list)
    reactions: list[Reaction] = OmitEmpty(default_factory=list)

    nonce: str = OmitEmpty("")
    webhook_id: WebhookID = OmitEmpty(WebhookID(0))

    activity: Optional[MessageActivity] = OmitEmpty(None)
    application: Optional[MessageApplication] = OmitEmpty(None)
    application_id: AppID = OmitEmpty(AppID(0))

    reference: Optional[MessageReference] = OmitEmpty(None, alias="message_reference")
    referenced_message: Optional[Message] = OmitEmpty(None)
    interaction: Optional[MessageInteraction] = OmitEmpty(None)

    stickers: list[StickerItem] = OmitEmpty(default_factory=list, alias="sticker_items")

    def url(self) -> str:
        """Client URL of the message, using ``@me`` for direct messages."""
        guild = str(self.guild_id) if self.guild_id.is_valid() else "@me"
        return f"https://discord.com/channels/{guild}/{self.channel_id}/{self.id}"

    @property
    def created_at(self) -> datetime.datetime:
        return self.id.created_at
