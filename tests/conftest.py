from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import pytest

from courier.chat import ChatMessage, Identity
from courier.config import Settings
from courier.payload import MessagePayload


@dataclass(frozen=True)
class FakeChannel:
    id: str
    text: bool = True


@dataclass
class FakeChatClient:
    channels: dict[str, FakeChannel] = field(default_factory=dict)
    users: dict[str, str] = field(default_factory=dict)
    messages: dict[str, ChatMessage] = field(default_factory=dict)
    roles: set[str] = field(default_factory=set)
    sent: list[tuple[Any, MessagePayload]] = field(default_factory=list)
    edited: list[tuple[ChatMessage, MessagePayload]] = field(default_factory=list)
    deleted: list[ChatMessage] = field(default_factory=list)
    role_lookups: list[tuple[str, str]] = field(default_factory=list)

    async def fetch_channel(self, channel_id: str) -> Any:
        if channel_id not in self.channels:
            raise LookupError(channel_id)
        return self.channels[channel_id]

    def is_text_channel(self, channel: Any) -> bool:
        return bool(channel.text)

    async def fetch_user(self, user_id: str) -> Any:
        if user_id not in self.users:
            raise LookupError(user_id)
        return self.users[user_id]

    async def fetch_message(self, channel: Any, message_id: str) -> ChatMessage:
        if message_id not in self.messages:
            raise LookupError(message_id)
        return self.messages[message_id]

    async def open_dm(self, user: Any) -> Any:
        return FakeChannel(id=f"dm:{user}")

    async def send(self, channel: Any, payload: MessagePayload) -> None:
        self.sent.append((channel, payload))

    async def edit(self, message: ChatMessage, payload: MessagePayload) -> None:
        self.edited.append((message, payload))

    async def delete(self, message: ChatMessage) -> None:
        self.deleted.append(message)

    async def member_role_ids(self, guild_id: str, user_id: str) -> set[str]:
        self.role_lookups.append((guild_id, user_id))
        return set(self.roles)


@pytest.fixture
def invoker() -> Identity:
    return Identity(
        id="42",
        username="leo",
        avatar_url="https://cdn.example/avatars/42.png",
        nickname="Leo-san",
        display_name="Leo",
    )


@pytest.fixture
def home_channel() -> FakeChannel:
    return FakeChannel(id="100")


@pytest.fixture
def make_message(invoker: Identity, home_channel: FakeChannel):
    def _make(content: str, *, attachments: tuple[str, ...] = (), author: Identity | None = None) -> ChatMessage:
        return ChatMessage(
            id="900",
            channel=home_channel,
            content=content,
            author=author or invoker,
            attachments=attachments,
        )

    return _make


@pytest.fixture
def client(home_channel: FakeChannel) -> FakeChatClient:
    return FakeChatClient(
        channels={"100": home_channel, "200": FakeChannel(id="200"), "300": FakeChannel(id="300", text=False)},
        users={"77": "user-77"},
        roles={"role-admin"},
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        token="t",  # noqa: S106
        prefix="p!",
        role_server="555",
        role_whitelist="role-admin,role-mod",
    )
