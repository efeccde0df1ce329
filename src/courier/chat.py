"""Platform-neutral view of the chat client used by commands."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol

from courier.payload import EmbedDocument, MessagePayload


@dataclass(frozen=True)
class Identity:
    """The user behind a message."""

    id: str
    username: str
    avatar_url: str | None = None
    nickname: str | None = None
    display_name: str | None = None
    bot: bool = False

    @property
    def signature_name(self) -> str:
        """Server nickname if set, else the account username."""
        return self.nickname or self.username

    @property
    def shown_name(self) -> str:
        return self.display_name or self.username


@dataclass(frozen=True)
class ChatMessage:
    """A received or fetched message.

    ``channel`` and ``raw`` are opaque platform objects handed back to the
    client unchanged.
    """

    id: str
    channel: Any
    content: str
    author: Identity
    attachments: tuple[str, ...] = ()
    embeds: tuple[EmbedDocument, ...] = ()
    raw: Any = field(default=None, compare=False, repr=False)


class ChatClient(Protocol):
    """Capabilities commands need from the platform.

    Lookups raise ``LookupError`` when the target does not exist or is not
    reachable.
    """

    async def fetch_channel(self, channel_id: str) -> Any: ...

    def is_text_channel(self, channel: Any) -> bool: ...

    async def fetch_user(self, user_id: str) -> Any: ...

    async def fetch_message(self, channel: Any, message_id: str) -> ChatMessage: ...

    async def open_dm(self, user: Any) -> Any: ...

    async def send(self, channel: Any, payload: MessagePayload) -> None: ...

    async def edit(self, message: ChatMessage, payload: MessagePayload) -> None: ...

    async def delete(self, message: ChatMessage) -> None: ...

    async def member_role_ids(self, guild_id: str, user_id: str) -> set[str]: ...
