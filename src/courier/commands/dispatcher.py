"""Prefix matching, role gating and error reporting for commands."""

from __future__ import annotations

from loguru import logger

from courier.chat import ChatClient, ChatMessage
from courier.commands.context import CommandContext
from courier.commands.registry import Command, CommandRegistry, parse_invocation
from courier.config import Settings
from courier.errors import CommandError
from courier.payload import MessagePayload


class CommandDispatcher:
    """Route incoming messages to command handlers."""

    def __init__(self, client: ChatClient, settings: Settings, registry: CommandRegistry) -> None:
        self.client = client
        self.settings = settings
        self.registry = registry

    async def handle(self, message: ChatMessage) -> bool:
        """Run the command in ``message`` if there is one the author may use.

        Returns True when a handler was invoked, whether or not it succeeded.
        """
        if message.author.bot:
            return False
        invocation = parse_invocation(message.content, self.settings.prefix)
        if invocation is None:
            return False
        key, args = invocation
        command = self.registry.get(key)
        if command is None:
            return False

        try:
            if not await self._authorized(command, message):
                logger.warning("command.denied key={} sender_id={}", key, message.author.id)
                return False
            logger.info("command.invoke key={} sender_id={} args={}", key, message.author.id, args[:100])
            ctx = CommandContext(client=self.client, message=message, settings=self.settings, registry=self.registry)
            await command.handler(args, ctx)
        except CommandError as exc:
            logger.info("command.rejected key={} response={}", key, exc.response)
            await self._reply(message, f"Error: {exc.response}")
        except Exception as exc:
            logger.exception("command.error key={}", key)
            await self._reply(message, f"An unknown error occured:\n{exc}")
        return True

    async def _authorized(self, command: Command, message: ChatMessage) -> bool:
        role_ids = await self.client.member_role_ids(self.settings.role_server, message.author.id)
        return command.allows(role_ids, self.settings.role_whitelist_ids)

    async def _reply(self, message: ChatMessage, text: str) -> None:
        await self.client.send(message.channel, MessagePayload(content=text))
