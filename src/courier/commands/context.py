"""Per-invocation command context."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from courier.chat import ChatClient, ChatMessage
from courier.config import Settings

if TYPE_CHECKING:
    from courier.commands.registry import CommandRegistry


@dataclass(frozen=True)
class CommandContext:
    client: ChatClient
    message: ChatMessage
    settings: Settings
    registry: CommandRegistry
