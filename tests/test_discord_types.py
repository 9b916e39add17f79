from datetime import UTC, datetime

import pytest

from discord_webhooks.discord_types import (
    AllowedMentions,
    Embed,
    EmbedAuthor,
    EmbedField,
    EmbedFooter,
    EmbedImage,
    EmbedProvider,
    EmbedThumbnail,
    EmbedVideo,
    File,
    Message,
    MessageEdit,
    QueryParams,
    WebhookInfo,
    WebhookType,
    color_from_rgb,
)


def test_empty_message() -> None:
    """A message with nothing set serialises to an empty object."""
    assert Message().to_dict() == {}


def test_unset_scalars_are_omitted() -> None:
    """Empty strings, `False`, and `0` are treated as unset on optional keys."""
    message = Message(content="hi", username="", tts=False, thread_name="")
    assert message.to_dict() == {"content": "hi"}


def test_all_message_fields() -> None:
    message = Message(
        content="<@&1>",
        username="KiwiFlea",
        avatar_url="https://i.imgur.com/XYbqy7f.png",
        tts=True,
        thread_name="New thread",
        allowed_mentions=AllowedMentions(roles=["1"]),
        embeds=[Embed(title="Page 1")],
    )
    assert message.to_dict() == {
        "content": "<@&1>",
        "username": "KiwiFlea",
        "avatar_url": "https://i.imgur.com/XYbqy7f.png",
        "tts": True,
        "thread_name": "New thread",
        "allowed_mentions": {"roles": ["1"]},
        "embeds": [{"title": "Page 1"}],
    }


def test_files_and_query_params_never_serialised() -> None:
    message = Message(
        content="hi",
        files=[File(name="a.txt", data=b"a")],
        query_params=QueryParams(thread_id="42"),
    )
    assert message.to_dict() == {"content": "hi"}


def test_empty_embed_list_is_kept() -> None:
    """An empty list is different from no list: it clears embeds on edit."""
    assert Message(embeds=[]).to_dict() == {"embeds": []}
    assert MessageEdit(embeds=[]).to_dict() == {"embeds": []}


def test_full_embed() -> None:
    embed = Embed(
        title="Title",
        description="Description",
        url="https://example.org",
        timestamp="2024-01-01T00:00:00Z",
        color=0x5C64F4,
        footer=EmbedFooter(text="Footer", icon_url="https://example.org/f.png"),
        image=EmbedImage(url="attachment://buildit.png"),
        thumbnail=EmbedThumbnail(url="https://example.org/t.png", height=16, width=16),
        video=EmbedVideo(url="https://example.org/v.mp4", proxy_url="https://proxy"),
        provider=EmbedProvider(name="Provider"),
        author=EmbedAuthor(name="Author", url="https://example.org/author"),
        fields=[
            EmbedField(name="A field", value="A value", inline=True),
            EmbedField(name="Another field", value="Another value"),
        ],
    )
    assert embed.to_dict() == {
        "title": "Title",
        "description": "Description",
        "url": "https://example.org",
        "timestamp": "2024-01-01T00:00:00Z",
        "color": 0x5C64F4,
        "footer": {"text": "Footer", "icon_url": "https://example.org/f.png"},
        "image": {"url": "attachment://buildit.png"},
        "thumbnail": {"url": "https://example.org/t.png", "height": 16, "width": 16},
        "video": {"url": "https://example.org/v.mp4", "proxy_url": "https://proxy"},
        "provider": {"name": "Provider"},
        "author": {"name": "Author", "url": "https://example.org/author"},
        "fields": [
            {"name": "A field", "value": "A value", "inline": True},
            {"name": "Another field", "value": "Another value"},
        ],
    }


def test_required_keys_sent_even_when_empty() -> None:
    """Keys Discord requires are sent as-is, even as empty strings.

    Dropping them would turn a bad value into a missing one, which hides
    what actually went wrong.
    """
    embed = Embed(
        footer=EmbedFooter(text=""),
        image=EmbedImage(url=""),
        author=EmbedAuthor(name=""),
        fields=[EmbedField(name="", value="")],
    )
    assert embed.to_dict() == {
        "footer": {"text": ""},
        "image": {"url": ""},
        "author": {"name": ""},
        "fields": [{"name": "", "value": ""}],
    }


def test_datetime_timestamp() -> None:
    embed = Embed(timestamp=datetime(2024, 5, 6, 7, 8, 9, tzinfo=UTC))
    assert embed.to_dict() == {"timestamp": "2024-05-06T07:08:09+00:00"}


@pytest.mark.parametrize("color", [-1, 0x1000000])
def test_color_out_of_range(color: int) -> None:
    with pytest.raises(ValueError, match="color"):
        Embed(color=color).to_dict()


def test_zero_color_is_omitted() -> None:
    assert Embed(title="t", color=0).to_dict() == {"title": "t"}


def test_allowed_mentions_empty_parse_is_kept() -> None:
    """`parse=[]` is how you stop every mention from pinging, so it must be sent."""
    assert AllowedMentions(parse=[]).to_dict() == {"parse": []}
    assert AllowedMentions().to_dict() == {}


def test_color_from_rgb() -> None:
    assert color_from_rgb(0x5C, 0x64, 0xF4) == 0x5C64F4
    assert color_from_rgb(0, 0, 0) == 0
    assert color_from_rgb(255, 255, 255) == 0xFFFFFF


def test_color_from_rgb_bad_channel() -> None:
    with pytest.raises(ValueError, match="256"):
        color_from_rgb(256, 0, 0)


TOKEN = (
    "3d89bb7572e0fb30d8128367b3b1b44fecd1726de135cbe28a41f8b2f777c372"
    "ba2939e72279b94526ff5d1bd4358d65cf11"
)


def test_webhook_info_from_json() -> None:
    info = WebhookInfo.from_json({
        "id": "223704706495545344",
        "type": 1,
        "guild_id": "199737254929760256",
        "channel_id": "199737254929760256",
        "name": "test webhook",
        "avatar": None,
        "token": TOKEN,
        "application_id": None,
        "url": f"https://discord.com/api/webhooks/223704706495545344/{TOKEN}",
    })
    assert info.id == "223704706495545344"
    assert info.type is WebhookType.incoming
    assert info.guild_id == "199737254929760256"
    assert info.name == "test webhook"
    assert info.avatar == ""
    assert info.application_id == ""


def test_webhook_info_unknown_type() -> None:
    with pytest.raises(ValueError):
        WebhookInfo.from_json({"id": "1", "type": 9})


def test_webhook_info_missing_id() -> None:
    with pytest.raises(KeyError):
        WebhookInfo.from_json({"type": 3})


def test_webhook_info_strings_are_strings() -> None:
    """Non-string ids are converted, so every field really is a `str`."""
    info = WebhookInfo.from_json({
        "id": 1,
        "type": 2,
        "guild_id": 199737254929760256,
        "channel_id": 42,
        "name": None,
    })
    assert info.id == "1"
    assert info.type is WebhookType.channel_follower
    assert info.guild_id == "199737254929760256"
    assert info.channel_id == "42"
    assert info.name == ""
