"""Builtin command handlers."""

from __future__ import annotations

from datetime import UTC, datetime

from loguru import logger

from courier.commands.context import CommandContext
from courier.commands.registry import Command, CommandRegistry
from courier.errors import empty_message_error
from courier.parsing import (
    ParserState,
    parse_color,
    parse_message_args,
    parse_url,
    resolve_message,
    resolve_text_channel,
    resolve_user,
)
from courier.parsing.references import is_channel_mention
from courier.payload import EmbedAuthor, EmbedDocument, EmbedFooter, MessagePayload


def _plain_payload(content: str, ctx: CommandContext) -> MessagePayload:
    attachments = list(ctx.message.attachments)
    if not content and not attachments:
        raise empty_message_error()
    return MessagePayload(content=content, files=attachments)


async def help_command(_args: str, ctx: CommandContext) -> None:
    prefix = ctx.settings.prefix
    entries = [
        "\n".join([
            f"`{prefix}{command.key}` - {command.title}",
            f"*{command.description}*",
            f"```{prefix}{command.key} {command.args}```",
        ])
        for command in ctx.registry
    ]
    help_text = "\n".join(["*\\~\\~ **Command Help** \\~\\~*", "", "\n".join(entries)])
    await ctx.client.send(ctx.message.channel, MessagePayload(content=help_text))


async def send_command(args: str, ctx: CommandContext) -> None:
    payload = _plain_payload(args, ctx)
    await ctx.client.send(ctx.message.channel, payload)
    await ctx.client.delete(ctx.message)


async def send_to_channel_command(args: str, ctx: CommandContext) -> None:
    state = ParserState(args)
    channel = await resolve_text_channel(ctx.client, state.read_arg())
    payload = _plain_payload(state.remainder.strip(), ctx)
    await ctx.client.send(channel, payload)


async def send_to_user_command(args: str, ctx: CommandContext) -> None:
    state = ParserState(args)
    user = await resolve_user(ctx.client, state.read_arg())
    payload = _plain_payload(state.remainder.strip(), ctx)
    channel = await ctx.client.open_dm(user)
    await ctx.client.send(channel, payload)


async def advanced_send_command(args: str, ctx: CommandContext) -> None:
    channel = ctx.message.channel
    state = ParserState(args)
    if is_channel_mention(state.remainder):
        channel = await resolve_text_channel(ctx.client, state.read_arg())
    payload = await parse_message_args(state.remainder, ctx.message.author)
    if payload.is_empty():
        raise empty_message_error()
    await ctx.client.send(channel, payload)


async def advanced_edit_command(args: str, ctx: CommandContext) -> None:
    channel = ctx.message.channel
    state = ParserState(args)
    message_id = state.read_arg()
    if is_channel_mention(message_id):
        channel = await resolve_text_channel(ctx.client, message_id)
        message_id = state.read_arg()

    original = await resolve_message(ctx.client, channel, message_id)
    payload = await parse_message_args(state.remainder, ctx.message.author, original)
    if payload.is_empty():
        raise empty_message_error()
    logger.info("command.sedit message_id={} channel_id={}", original.id, getattr(channel, "id", None))
    await ctx.client.edit(original, payload)


async def news_command(args: str, ctx: CommandContext) -> None:
    state = ParserState(args)
    header = ParserState(state.read_line())
    title = state.read_line()
    channel_arg = header.read_arg()
    link = None if header.exhausted else header.read_arg()
    color = ctx.settings.news_color if header.exhausted else header.read_arg()

    author = ctx.message.author
    embed = EmbedDocument(
        title=title,
        description=state.remainder,
        color=parse_color(color),
        timestamp=datetime.now(UTC),
        footer=EmbedFooter(text=ctx.settings.news_footer),
        author=EmbedAuthor(name=author.shown_name, icon_url=author.avatar_url),
    )
    if link is not None:
        embed.url = parse_url(link)
    if ctx.message.attachments:
        embed.image_url = ctx.message.attachments[0]

    channel = await resolve_text_channel(ctx.client, channel_arg)
    await ctx.client.send(channel, MessagePayload(embeds=[embed]))


BUILTIN_COMMANDS: tuple[Command, ...] = (
    Command(
        key="help",
        title="Help",
        description="Display help",
        args="",
        handler=help_command,
    ),
    Command(
        key="send",
        title="Send in the same channel",
        description="Send a message in the same channel, deleting the original",
        args="<...content>",
        handler=send_command,
    ),
    Command(
        key="sendc",
        title="Send to channel",
        description="Send a message to a specified channel",
        args="<channel> <...content>",
        handler=send_to_channel_command,
    ),
    Command(
        key="sendu",
        title="Send to user DM",
        description="Send a message to a user's DMs",
        args="<user> <...content>",
        handler=send_to_user_command,
    ),
    Command(
        key="ssend",
        title="Advanced send",
        description="A fairly customizable send command for advanced messages",
        args="[channel] [-c <content>] [-att <url>]... [-embed [-title <title>] [-footer <text>] ...]",
        handler=advanced_send_command,
    ),
    Command(
        key="sedit",
        title="Advanced edit",
        description="A fairly customizable edit command for advanced edits",
        args="[channel] <message id> [-insert] [-c <content>] [-att <url>]... [-embed ...]",
        handler=advanced_edit_command,
    ),
    Command(
        key="news",
        title="Send a news post",
        description="Generates an embed that is formatted as a general news post",
        args="<channel> [title link] [color]\n<title>\n<...content>",
        handler=news_command,
    ),
)


def build_registry() -> CommandRegistry:
    registry = CommandRegistry()
    for command in BUILTIN_COMMANDS:
        registry.register(command)
    return registry
