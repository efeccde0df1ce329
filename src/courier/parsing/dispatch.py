"""Table-driven flag dispatch over a shared parser cursor."""

from __future__ import annotations

import inspect
import re
from collections.abc import Awaitable, Callable, Mapping
from typing import TypeAlias, TypeVar

from courier.errors import CommandError
from courier.parsing.tokenizer import read_next_arg, read_next_line

FLAG_RE = re.compile(r"^-\w", re.ASCII)
REST_FLAG = "rest"

F = TypeVar("F")

FlagTable: TypeAlias = Mapping[str, F]
FlagHandler: TypeAlias = Callable[[F], Awaitable[None] | None]


class ParserState:
    """Cursor over the unconsumed command text plus the fields already claimed.

    One state is created per command invocation and shared by every grammar
    that runs during it.
    """

    def __init__(self, text: str) -> None:
        self.remainder = text.strip()
        self._claimed: set[str] = set()

    @property
    def exhausted(self) -> bool:
        return not self.remainder

    def read_arg(self) -> str:
        token = read_next_arg(self.remainder)
        self.remainder = token.remainder
        return token.arg

    def read_line(self) -> str:
        line = read_next_line(self.remainder)
        self.remainder = line.remainder
        return line.line

    def take_rest(self) -> str:
        rest, self.remainder = self.remainder, ""
        return rest

    def next_flag(self) -> str:
        """Consume a ``-name`` token, or report ``rest`` for plain text."""
        if FLAG_RE.match(self.remainder):
            return self.read_arg()[1:]
        return REST_FLAG

    def claim(self, *labels: str) -> None:
        """Mark fields as set, failing if any of them already was."""
        for label in labels:
            if label in self._claimed:
                raise CommandError(f"{label} set more than once")
        self._claimed.update(labels)

    def is_claimed(self, label: str) -> bool:
        return label in self._claimed


async def run_flags(state: ParserState, table: FlagTable[F], handle: FlagHandler[F]) -> None:
    """Dispatch flags from ``state`` until the text runs out.

    ``table`` maps every accepted flag name, aliases included, to a flag value
    and ``handle`` performs it, consuming whatever arguments it needs.
    """
    while not state.exhausted:
        name = state.next_flag()
        flag = table.get(name)
        if flag is None:
            raise CommandError(f"Argument {name} is unknown/unexpected here")
        result = handle(flag)
        if inspect.isawaitable(result):
            await result
        state.remainder = state.remainder.strip()
