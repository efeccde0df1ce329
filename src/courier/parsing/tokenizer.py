"""Argument and line extraction from command text."""

from __future__ import annotations

import re
from dataclasses import dataclass

from courier.errors import CommandError

QUOTE = '"'
ESCAPE = "\\"

# Any escaped character missing from this table stands for itself.
ESCAPED_CHARS: dict[str, str] = {
    "r": "\r",
    "n": "\n",
    "t": "\t",
    "\\": "\\",
}

BARE_ARG_RE = re.compile(r"[^ \r\n]+")
LINE_RE = re.compile(r"[^\r\n]*")


@dataclass(frozen=True)
class Token:
    """One extracted argument and the text left after it."""

    arg: str
    remainder: str


@dataclass(frozen=True)
class Line:
    """One extracted line and the text left after it."""

    line: str
    remainder: str


def resolve_escape(char: str) -> str:
    return ESCAPED_CHARS.get(char, char)


def read_next_arg(text: str) -> Token:
    """Read one quoted or bare argument from the start of ``text``.

    A quoted argument runs to the next unescaped quote, or to the end of the
    input when the quote is never closed. Its remainder is the text after the
    closing quote, untouched. A bare argument runs to the next space or line
    break and its remainder is trimmed.
    """
    text = text.strip()
    if not text:
        raise CommandError("Not enough arguments")

    if text.startswith(QUOTE):
        chars: list[str] = []
        escaped = False
        end = len(text)
        for index in range(1, len(text)):
            char = text[index]
            if escaped:
                chars.append(resolve_escape(char))
                escaped = False
            elif char == ESCAPE:
                escaped = True
            elif char == QUOTE:
                end = index
                break
            else:
                chars.append(char)
        return Token(arg="".join(chars), remainder=text[end + 1 :])

    match = BARE_ARG_RE.match(text)
    arg = match.group(0) if match else text
    return Token(arg=arg, remainder=text[len(arg) + 1 :].strip())


def read_next_line(text: str) -> Line:
    """Read everything up to the first line break."""
    if not text:
        raise CommandError("Not enough lines")
    match = LINE_RE.match(text)
    line = match.group(0) if match else text
    return Line(line=line, remainder=text[len(line) + 1 :].strip())
