import pytest

from courier.errors import CommandError
from courier.parsing import (
    parse_channel_id,
    parse_url,
    parse_user_id,
    resolve_channel,
    resolve_message,
    resolve_text_channel,
    resolve_user,
)


def test_parse_channel_id_from_mention_or_raw() -> None:
    assert parse_channel_id("<#123456>") == "123456"
    assert parse_channel_id("123456") == "123456"


def test_parse_user_id_accepts_nickname_mentions() -> None:
    assert parse_user_id("<@42>") == "42"
    assert parse_user_id("<@!42>") == "42"
    assert parse_user_id("42") == "42"


def test_parse_url_strips_only_wrapping_brackets() -> None:
    assert parse_url("<https://a.b/c>") == "https://a.b/c"
    assert parse_url("https://a.b/<c>") == "https://a.b/<c>"
    assert parse_url("https://a.b/c") == "https://a.b/c"


@pytest.mark.asyncio
async def test_resolve_channel_delegates_to_client(client) -> None:
    channel = await resolve_channel(client, "<#200>")
    assert channel.id == "200"


@pytest.mark.asyncio
async def test_resolve_channel_failure_is_user_facing(client) -> None:
    with pytest.raises(CommandError, match='Couldn\'t find channel with id "999"'):
        await resolve_channel(client, "<#999>")


@pytest.mark.asyncio
async def test_resolve_text_channel_rejects_other_channels(client) -> None:
    with pytest.raises(CommandError, match="That channel isn't a text channel"):
        await resolve_text_channel(client, "300")


@pytest.mark.asyncio
async def test_resolve_user(client) -> None:
    assert await resolve_user(client, "<@77>") == "user-77"
    with pytest.raises(CommandError, match='Couldn\'t find user with id "78"'):
        await resolve_user(client, "<@78>")


@pytest.mark.asyncio
async def test_resolve_message_failure(client, home_channel) -> None:
    with pytest.raises(CommandError, match='Couldn\'t find message with id "5"'):
        await resolve_message(client, home_channel, "5")
