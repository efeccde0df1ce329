"""Discord channel adapter."""

from __future__ import annotations

import asyncio
import io
from pathlib import PurePosixPath
from typing import Any
from urllib import error as urllib_error
from urllib import parse as urllib_parse
from urllib import request as urllib_request

import discord
from loguru import logger

from courier.chat import ChatMessage, Identity
from courier.commands import CommandDispatcher, CommandRegistry, build_registry
from courier.config import Settings
from courier.errors import CommandError, ConfigurationError
from courier.payload import EmbedDocument, MessagePayload

REQUEST_TIMEOUT_SECONDS = 20
MAX_ATTACHMENT_BYTES = 25 * 1024 * 1024
USER_AGENT = "courier-attachments/1.0"


def to_discord_embed(embed: EmbedDocument) -> discord.Embed:
    return discord.Embed.from_dict(embed.to_dict())


def from_discord_embed(embed: discord.Embed) -> EmbedDocument:
    return EmbedDocument.from_dict(embed.to_dict())


def _discord_embeds(payload: MessagePayload) -> list[discord.Embed]:
    return [to_discord_embed(embed) for embed in payload.embeds or () if embed.to_dict()]


def identity_from_discord(user: discord.abc.User) -> Identity:
    return Identity(
        id=str(user.id),
        username=user.name,
        avatar_url=user.display_avatar.with_format("png").url,
        nickname=getattr(user, "nick", None),
        display_name=user.display_name,
        bot=user.bot,
    )


def chat_message_from_discord(message: discord.Message) -> ChatMessage:
    return ChatMessage(
        id=str(message.id),
        channel=message.channel,
        content=message.content,
        author=identity_from_discord(message.author),
        attachments=tuple(att.url for att in message.attachments),
        embeds=tuple(from_discord_embed(embed) for embed in message.embeds),
        raw=message,
    )


def _snowflake(value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise LookupError(value) from None


def _filename_from_url(url: str) -> str:
    name = PurePosixPath(urllib_parse.urlparse(url).path).name
    return name or "attachment"


def _fetch_attachment(url: str) -> bytes:
    if urllib_parse.urlparse(url).scheme not in {"http", "https"}:
        raise CommandError(f'Attachment "{url}" is not an http(s) url')
    request = urllib_request.Request(url, headers={"User-Agent": USER_AGENT})  # noqa: S310 - scheme checked above.
    try:
        with urllib_request.urlopen(request, timeout=REQUEST_TIMEOUT_SECONDS) as response:  # noqa: S310
            data = response.read(MAX_ATTACHMENT_BYTES + 1)
    except (urllib_error.URLError, OSError) as exc:
        raise CommandError(f'Couldn\'t fetch attachment "{url}": {exc!s}') from exc
    if len(data) > MAX_ATTACHMENT_BYTES:
        raise CommandError(f'Attachment "{url}" is too large')
    return data


class DiscordChatClient:
    """``ChatClient`` backed by a discord.py client."""

    def __init__(self, client: discord.Client) -> None:
        self._client = client

    async def fetch_channel(self, channel_id: str) -> Any:
        snowflake = _snowflake(channel_id)
        channel = self._client.get_channel(snowflake)
        if channel is not None:
            return channel
        try:
            return await self._client.fetch_channel(snowflake)
        except (discord.HTTPException, discord.InvalidData) as exc:
            raise LookupError(channel_id) from exc

    def is_text_channel(self, channel: Any) -> bool:
        return isinstance(channel, discord.abc.Messageable)

    async def fetch_user(self, user_id: str) -> Any:
        try:
            return await self._client.fetch_user(_snowflake(user_id))
        except discord.HTTPException as exc:
            raise LookupError(user_id) from exc

    async def fetch_message(self, channel: Any, message_id: str) -> ChatMessage:
        try:
            message = await channel.fetch_message(_snowflake(message_id))
        except discord.HTTPException as exc:
            raise LookupError(message_id) from exc
        return chat_message_from_discord(message)

    async def open_dm(self, user: Any) -> Any:
        return await user.create_dm()

    async def send(self, channel: Any, payload: MessagePayload) -> None:
        kwargs: dict[str, Any] = {"content": payload.content}
        if embeds := _discord_embeds(payload):
            kwargs["embeds"] = embeds
        if payload.files:
            kwargs["files"] = await self._download_all(payload.files)
        await channel.send(**kwargs)

    async def edit(self, message: ChatMessage, payload: MessagePayload) -> None:
        # Embeds and attachments the command did not touch stay on the message.
        kwargs: dict[str, Any] = {"content": payload.content}
        if payload.embeds is not None:
            kwargs["embeds"] = _discord_embeds(payload)
        if payload.files:
            kwargs["attachments"] = [*message.raw.attachments, *await self._download_all(payload.files)]
        await message.raw.edit(**kwargs)

    async def delete(self, message: ChatMessage) -> None:
        await message.raw.delete()

    async def member_role_ids(self, guild_id: str, user_id: str) -> set[str]:
        snowflake = int(guild_id)
        guild = self._client.get_guild(snowflake) or await self._client.fetch_guild(snowflake)
        try:
            member = await guild.fetch_member(int(user_id))
        except discord.NotFound:
            return set()
        return {str(role.id) for role in member.roles}

    async def _download_all(self, urls: list[str]) -> list[discord.File]:
        files: list[discord.File] = []
        for url in urls:
            data = await asyncio.to_thread(_fetch_attachment, url)
            files.append(discord.File(io.BytesIO(data), filename=_filename_from_url(url)))
        return files


class DiscordChannel:
    """Discord adapter based on discord.py."""

    name = "discord"

    def __init__(self, settings: Settings, registry: CommandRegistry | None = None) -> None:
        self._settings = settings
        self._registry = registry if registry is not None else build_registry()
        self._client: discord.Client | None = None
        self._dispatcher: CommandDispatcher | None = None

    async def start(self) -> None:
        if not self._settings.token:
            raise ConfigurationError("Discord token must be specified, use the 'COURIER_TOKEN' env var")

        intents = discord.Intents.default()
        intents.guilds = True
        intents.guild_messages = True
        intents.message_content = True

        proxy = self._settings.proxy or None
        client = discord.Client(intents=intents, proxy=proxy)
        self._client = client
        self._dispatcher = CommandDispatcher(DiscordChatClient(client), self._settings, self._registry)

        @client.event
        async def on_ready() -> None:
            logger.info("discord.ready user={} id={}", str(client.user), client.user.id if client.user else "<unknown>")

        @client.event
        async def on_message(message: discord.Message) -> None:
            await self._on_message(message)

        logger.info(
            "discord.start prefix={} commands={} proxy_enabled={}",
            self._settings.prefix,
            len(self._registry),
            bool(proxy),
        )
        try:
            async with client:
                await client.start(self._settings.token)
        finally:
            self._client = None
            self._dispatcher = None
            logger.info("discord.stopped")

    async def _on_message(self, message: discord.Message) -> None:
        if message.author.bot:
            return
        if not message.content.startswith(self._settings.prefix):
            return
        if self._dispatcher is None:
            logger.warning("discord.inbound no dispatcher for received messages")
            return

        logger.info(
            "discord.inbound channel_id={} sender_id={} username={} content={}",
            message.channel.id,
            message.author.id,
            message.author.name,
            message.content[:100],
        )
        await self._dispatcher.handle(chat_message_from_discord(message))
