"""Types for working with Discord's webhook API.

There are two layers here. The `TypedDict`s are the JSON bodies exactly as
Discord sends and receives them. The dataclasses are what callers build, and
each one knows how to turn itself into its `TypedDict` with `to_dict`.

Discord treats a missing key and an empty value differently for some keys
(an embed field with `"name": ""` is an error, a footer with no `"text"` is
too), so `to_dict` only drops the keys Discord documents as optional.
Everything else is always sent, even when it's empty.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any, NotRequired, Required, TypedDict

from discord_webhooks.constants import MAX_COLOR, MIN_COLOR


class EmbedFooterDict(TypedDict):
    text: str
    icon_url: NotRequired[str]
    proxy_icon_url: NotRequired[str]


class EmbedImageDict(TypedDict):
    url: str
    proxy_url: NotRequired[str]
    height: NotRequired[int]
    width: NotRequired[int]


class EmbedProviderDict(TypedDict, total=False):
    name: str
    url: str


class EmbedAuthorDict(TypedDict):
    name: str
    url: NotRequired[str]
    icon_url: NotRequired[str]
    proxy_icon_url: NotRequired[str]


class EmbedFieldDict(TypedDict):
    name: str
    value: str
    inline: NotRequired[bool]


class EmbedDict(TypedDict, total=False):
    """A Discord embed object.

    Documentation can be found [here](https://discord.com/developers/docs/resources/channel#embed-object)
    """

    title: str
    description: str
    url: str  # Valid url
    timestamp: str  # ISO-8601
    color: int  # Between 0 and 0xFFFFFF
    footer: EmbedFooterDict
    image: EmbedImageDict
    thumbnail: EmbedImageDict
    video: EmbedImageDict
    provider: EmbedProviderDict
    author: EmbedAuthorDict
    fields: list[EmbedFieldDict]


class AllowedMentionsDict(TypedDict, total=False):
    parse: list[str]
    users: list[str]
    roles: list[str]


class MessageDict(TypedDict, total=False):
    """The JSON params to Discord's Execute Webhook endpoint.

    Documentation can be found [here](https://discord.com/developers/docs/resources/webhook#execute-webhook)

    This is a representation of the request body, rather than a Discord
    message object. Attachments travel as separate multipart parts, and the
    query parameters travel in the URL, so neither appears here.
    """

    content: str
    username: str
    avatar_url: str  # Valid url
    tts: bool
    thread_name: str
    allowed_mentions: AllowedMentionsDict
    embeds: list[EmbedDict]


class MessageEditDict(TypedDict, total=False):
    """The JSON params to Discord's Edit Webhook Message endpoint.

    Documentation can be found [here](https://discord.com/developers/docs/resources/webhook#edit-webhook-message)
    """

    content: str
    allowed_mentions: AllowedMentionsDict
    embeds: list[EmbedDict]


class WebhookDict(TypedDict, total=False):
    """A webhook object, as returned when fetched with its token.

    Documentation can be found [here](https://discord.com/developers/docs/resources/webhook#webhook-object)

    Fetching with the token leaves out the `user` object, and most keys can
    be `null`.
    """

    id: Required[str]
    type: Required[int]
    guild_id: str | None
    channel_id: str | None
    name: str | None
    avatar: str | None
    token: str
    url: str
    application_id: str | None  # Application-owned webhooks only


def _compact(**values: Any) -> dict[str, Any]:  # noqa: ANN401
    """Drop the values Discord treats as unset.

    That's `None`, and the empty/zero value of each scalar type. Lists are
    kept even when empty, because `"embeds": []` means "remove all embeds"
    when editing, which is not the same as leaving them alone.
    """
    return {
        key: value
        for key, value in values.items()
        if value is not None and (isinstance(value, list | dict) or value)
    }


def color_from_rgb(red: int, green: int, blue: int) -> int:
    """Pack three 0-255 colour channels into an embed colour.

    This is the same value you'd get reading the bytes `00 RR GG BB` as a
    big-endian unsigned integer.
    """
    for channel in (red, green, blue):
        if not 0 <= channel <= 0xFF:  # noqa: PLR2004
            raise ValueError(f"colour channel out of range: {channel}")
    return (red << 16) | (green << 8) | blue


@dataclass(slots=True, kw_only=True)
class EmbedFooter:
    text: str
    icon_url: str = ""
    proxy_icon_url: str = ""

    def to_dict(self) -> EmbedFooterDict:
        return {
            "text": self.text,
            **_compact(icon_url=self.icon_url, proxy_icon_url=self.proxy_icon_url),
        }  # type: ignore[typeddict-item]


@dataclass(slots=True, kw_only=True)
class EmbedImage:
    """An image, thumbnail, or video in an embed. All three have the same shape."""

    url: str
    proxy_url: str = ""
    height: int = 0
    width: int = 0

    def to_dict(self) -> EmbedImageDict:
        return {
            "url": self.url,
            **_compact(proxy_url=self.proxy_url, height=self.height, width=self.width),
        }  # type: ignore[typeddict-item]


EmbedThumbnail = EmbedImage
EmbedVideo = EmbedImage


@dataclass(slots=True, kw_only=True)
class EmbedProvider:
    name: str = ""
    url: str = ""

    def to_dict(self) -> EmbedProviderDict:
        return _compact(name=self.name, url=self.url)  # type: ignore[return-value]


@dataclass(slots=True, kw_only=True)
class EmbedAuthor:
    name: str
    url: str = ""
    icon_url: str = ""
    proxy_icon_url: str = ""

    def to_dict(self) -> EmbedAuthorDict:
        return {
            "name": self.name,
            **_compact(
                url=self.url,
                icon_url=self.icon_url,
                proxy_icon_url=self.proxy_icon_url,
            ),
        }  # type: ignore[typeddict-item]


@dataclass(slots=True, kw_only=True)
class EmbedField:
    name: str
    value: str
    inline: bool = False

    def to_dict(self) -> EmbedFieldDict:
        return {
            "name": self.name,
            "value": self.value,
            **_compact(inline=self.inline),
        }  # type: ignore[typeddict-item]


@dataclass(slots=True, kw_only=True)
class Embed:
    """A rich embed.

    Attributes:
        timestamp: When the embed's content happened. Either an ISO-8601
            string, or a `datetime`, which is formatted with `isoformat`.
            Discord wants an offset, so use an aware `datetime`.
        color: The colour of the embed's left border, as an integer.
            Must be between 0 and 0xFFFFFF (16777215) or Discord complains.
            `color_from_rgb` builds one from separate channels.
    """

    title: str = ""
    description: str = ""
    url: str = ""
    timestamp: str | datetime = ""
    color: int = 0
    footer: EmbedFooter | None = None
    image: EmbedImage | None = None
    thumbnail: EmbedThumbnail | None = None
    video: EmbedVideo | None = None
    provider: EmbedProvider | None = None
    author: EmbedAuthor | None = None
    fields: list[EmbedField] | None = None

    def to_dict(self) -> EmbedDict:
        if not MIN_COLOR <= self.color <= MAX_COLOR:
            raise ValueError(
                f"embed color must be between {MIN_COLOR} and {MAX_COLOR:#08x},"
                f" got {self.color}"
            )
        timestamp = (
            self.timestamp.isoformat()
            if isinstance(self.timestamp, datetime)
            else self.timestamp
        )
        return _compact(  # type: ignore[return-value]
            title=self.title,
            description=self.description,
            url=self.url,
            timestamp=timestamp,
            color=self.color,
            footer=self.footer and self.footer.to_dict(),
            image=self.image and self.image.to_dict(),
            thumbnail=self.thumbnail and self.thumbnail.to_dict(),
            video=self.video and self.video.to_dict(),
            provider=self.provider and self.provider.to_dict(),
            author=self.author and self.author.to_dict(),
            fields=None
            if self.fields is None
            else [field.to_dict() for field in self.fields],
        )


@dataclass(slots=True, kw_only=True)
class AllowedMentions:
    """Which mentions in `content` actually ping anyone.

    Each list is only sent when it isn't `None`. An empty `parse` list is
    meaningful: it stops every mention from pinging.
    """

    parse: list[str] | None = None
    users: list[str] | None = None
    roles: list[str] | None = None

    def to_dict(self) -> AllowedMentionsDict:
        mentions = {"parse": self.parse, "users": self.users, "roles": self.roles}
        return {  # type: ignore[return-value]
            key: list(value) for key, value in mentions.items() if value is not None
        }


@dataclass(slots=True, kw_only=True)
class File:
    """An attachment, sent as its own multipart part. Never part of the JSON."""

    name: str
    data: bytes


@dataclass(slots=True, kw_only=True)
class QueryParams:
    """Query parameters for requests to the webhook.

    `wait` isn't here because it's always sent as `true`: without it Discord
    doesn't return the message, so there would be no way to get its id.
    """

    thread_id: str = ""


@dataclass(slots=True, kw_only=True)
class Message:
    """A message to post through a webhook.

    `files` and `query_params` describe how the message is sent rather than
    what it says, so they're left out of `to_dict`.
    """

    content: str = ""
    username: str = ""
    avatar_url: str = ""
    tts: bool = False
    thread_name: str = ""
    allowed_mentions: AllowedMentions | None = None
    embeds: list[Embed] | None = None
    files: list[File] | None = None
    query_params: QueryParams | None = None

    def to_dict(self) -> MessageDict:
        return _compact(  # type: ignore[return-value]
            content=self.content,
            username=self.username,
            avatar_url=self.avatar_url,
            tts=self.tts,
            thread_name=self.thread_name,
            allowed_mentions=self.allowed_mentions and self.allowed_mentions.to_dict(),
            embeds=None
            if self.embeds is None
            else [embed.to_dict() for embed in self.embeds],
        )


@dataclass(slots=True, kw_only=True)
class MessageEdit:
    """The parts of a posted message that can be changed."""

    content: str = ""
    allowed_mentions: AllowedMentions | None = None
    embeds: list[Embed] | None = None

    def to_dict(self) -> MessageEditDict:
        return _compact(  # type: ignore[return-value]
            content=self.content,
            allowed_mentions=self.allowed_mentions and self.allowed_mentions.to_dict(),
            embeds=None
            if self.embeds is None
            else [embed.to_dict() for embed in self.embeds],
        )


class WebhookType(enum.IntEnum):
    """Webhook types.

    Documentation can be found [here](https://discord.com/developers/docs/resources/webhook#webhook-object-webhook-types)
    """

    incoming = 1
    channel_follower = 2
    application = 3


@dataclass(slots=True, frozen=True, kw_only=True)
class WebhookInfo:
    """What Discord says about a webhook.

    Keys that Discord leaves out or sets to `null` are empty strings here, and
    everything else is converted to a string.

    Attributes:
        application_id: Only set for application-owned webhooks, which are
            the only ones whose messages can be edited.
    """

    id: str
    type: WebhookType
    guild_id: str = ""
    channel_id: str = ""
    name: str = ""
    avatar: str = ""
    token: str = ""
    url: str = ""
    application_id: str = ""

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> WebhookInfo:
        """Build from a decoded webhook object.

        Raises:
            KeyError: `id` or `type` is missing.
            ValueError: `type` isn't a known webhook type.
        """
        return cls(
            id=str(data["id"]),
            type=WebhookType(data["type"]),
            guild_id=str(data.get("guild_id") or ""),
            channel_id=str(data.get("channel_id") or ""),
            name=str(data.get("name") or ""),
            avatar=str(data.get("avatar") or ""),
            token=str(data.get("token") or ""),
            url=str(data.get("url") or ""),
            application_id=str(data.get("application_id") or ""),
        )
