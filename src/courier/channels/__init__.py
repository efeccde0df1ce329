"""Chat platform adapters."""

from courier.channels.discord import DiscordChannel, DiscordChatClient

__all__ = ["DiscordChannel", "DiscordChatClient"]
