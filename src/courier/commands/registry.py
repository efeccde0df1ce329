"""Command definitions and lookup."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeAlias

if TYPE_CHECKING:
    from courier.commands.context import CommandContext

CommandHandler: TypeAlias = "Callable[[str, CommandContext], Awaitable[None]]"


@dataclass(frozen=True)
class Command:
    """A named command and the roles allowed to run it."""

    key: str
    title: str
    description: str
    args: str
    handler: CommandHandler
    role_whitelist: tuple[str, ...] | None = None

    def allows(self, role_ids: set[str], default_whitelist: list[str]) -> bool:
        whitelist = self.role_whitelist if self.role_whitelist is not None else default_whitelist
        return not role_ids.isdisjoint(whitelist)


class CommandRegistry:
    """Ordered command table keyed by invocation name."""

    def __init__(self) -> None:
        self._commands: dict[str, Command] = {}

    def register(self, command: Command) -> None:
        if command.key in self._commands:
            raise ValueError(f"command already registered: {command.key}")
        self._commands[command.key] = command

    def get(self, key: str) -> Command | None:
        return self._commands.get(key)

    def __iter__(self) -> Iterator[Command]:
        return iter(self._commands.values())

    def __len__(self) -> int:
        return len(self._commands)


def parse_invocation(text: str, prefix: str) -> tuple[str, str] | None:
    """Split ``<prefix><key> <args>`` into ``(key, args)``.

    Returns None when the text does not start with the prefix.
    """
    if not prefix or not text.startswith(prefix):
        return None
    key = text.split(" ", 1)[0][len(prefix) :]
    if not key:
        return None
    return key, text[len(prefix) + len(key) + 1 :]
