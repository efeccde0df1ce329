"""Channel, user, message and URL references in command arguments."""

from __future__ import annotations

import re
from typing import Any

from courier.chat import ChatClient, ChatMessage
from courier.errors import CommandError

CHANNEL_MENTION_RE = re.compile(r"<#(\d+)>")
USER_MENTION_RE = re.compile(r"<@!?(\d+)>")
WRAPPED_URL_RE = re.compile(r"^<(.+)>$")


def parse_channel_id(data: str) -> str:
    match = CHANNEL_MENTION_RE.search(data)
    return match.group(1) if match else data


def parse_user_id(data: str) -> str:
    match = USER_MENTION_RE.search(data)
    return match.group(1) if match else data


def parse_url(data: str) -> str:
    """Drop the ``<...>`` wrapping used to suppress link previews."""
    match = WRAPPED_URL_RE.match(data)
    return match.group(1) if match else data


def is_channel_mention(data: str) -> bool:
    return data.startswith("<#")


async def resolve_channel(client: ChatClient, data: str) -> Any:
    channel_id = parse_channel_id(data)
    try:
        return await client.fetch_channel(channel_id)
    except LookupError:
        raise CommandError(f'Couldn\'t find channel with id "{channel_id}"') from None


async def resolve_text_channel(client: ChatClient, data: str) -> Any:
    channel = await resolve_channel(client, data)
    if not client.is_text_channel(channel):
        raise CommandError("That channel isn't a text channel")
    return channel


async def resolve_user(client: ChatClient, data: str) -> Any:
    user_id = parse_user_id(data)
    try:
        return await client.fetch_user(user_id)
    except LookupError:
        raise CommandError(f'Couldn\'t find user with id "{user_id}"') from None


async def resolve_message(client: ChatClient, channel: Any, message_id: str) -> ChatMessage:
    try:
        return await client.fetch_message(channel, message_id)
    except LookupError:
        raise CommandError(f'Couldn\'t find message with id "{message_id}"') from None
