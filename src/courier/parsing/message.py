"""Flag grammar that composes a message payload."""

from __future__ import annotations

import copy
from enum import StrEnum

from courier.chat import ChatMessage, Identity
from courier.errors import CommandError
from courier.parsing.dispatch import REST_FLAG, ParserState, run_flags
from courier.parsing.embed import EmbedComposer
from courier.payload import EmbedDocument, MessagePayload


class MessageFlag(StrEnum):
    CONTENT = "content"
    ATTACHMENT = "attachment"
    EMBED = "embed"
    INSERT = "insert"
    REST = REST_FLAG


COMPOSE_FLAGS: dict[str, MessageFlag] = {
    "content": MessageFlag.CONTENT,
    "text": MessageFlag.CONTENT,
    "txt": MessageFlag.CONTENT,
    "c": MessageFlag.CONTENT,
    "attachment": MessageFlag.ATTACHMENT,
    "attttachment": MessageFlag.ATTACHMENT,
    "att": MessageFlag.ATTACHMENT,
    "f": MessageFlag.ATTACHMENT,
    "embed": MessageFlag.EMBED,
    REST_FLAG: MessageFlag.REST,
}

# Editing an existing message additionally allows copying its body.
EDIT_FLAGS: dict[str, MessageFlag] = {
    **COMPOSE_FLAGS,
    "insert": MessageFlag.INSERT,
    "ins": MessageFlag.INSERT,
}


class MessageComposer:
    """Builds a ``MessagePayload`` from message flags."""

    def __init__(self, state: ParserState, invoker: Identity, original: ChatMessage | None = None) -> None:
        self.state = state
        self.invoker = invoker
        self.original = original
        self.payload = MessagePayload()

    @property
    def flags(self) -> dict[str, MessageFlag]:
        return COMPOSE_FLAGS if self.original is None else EDIT_FLAGS

    async def run(self) -> MessagePayload:
        await run_flags(self.state, self.flags, self.apply)
        return self.payload

    async def apply(self, flag: MessageFlag) -> None:
        state, payload = self.state, self.payload
        match flag:
            case MessageFlag.CONTENT:
                self._set_content(state.read_arg())
            case MessageFlag.REST:
                self._set_content(state.take_rest())
            case MessageFlag.ATTACHMENT:
                payload.files.append(state.read_arg())
            case MessageFlag.INSERT:
                if self.original is None:
                    raise CommandError("There is no message to insert from")
                self._set_content(self.original.content)
                payload.embeds = [copy.deepcopy(embed) for embed in self.original.embeds]
            case MessageFlag.EMBED:
                embed = payload.embed or EmbedDocument()
                payload.embeds = [embed]
                await EmbedComposer(state, embed, self.invoker).run()

    def _set_content(self, text: str) -> None:
        self.state.claim("Content")
        self.payload.content = text


async def parse_message_args(args: str, invoker: Identity, original: ChatMessage | None = None) -> MessagePayload:
    """Parse message flags into a payload.

    ``original`` is the message being edited; passing it enables ``-insert``.
    """
    return await MessageComposer(ParserState(args), invoker, original).run()
