"""Flag grammar that fills in an embed document."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum

from courier.chat import Identity
from courier.errors import CommandError
from courier.parsing.dispatch import REST_FLAG, ParserState, run_flags
from courier.parsing.references import parse_url
from courier.payload import EmbedAuthor, EmbedDocument, EmbedFooter

MAX_COLOR = 0xFFFFFF


class EmbedFlag(StrEnum):
    TITLE = "title"
    DESCRIPTION = "content"
    URL = "url"
    COLOR = "color"
    TIME = "time"
    IMAGE = "image"
    AUTHOR = "author"
    AUTHOR_ME = "authorme"
    AUTHOR_ICON = "authoricon"
    FOOTER = "footer"
    FOOTER_ME = "footerme"
    FOOTER_ICON = "footericon"
    REST = REST_FLAG


EMBED_FLAGS: dict[str, EmbedFlag] = {
    "title": EmbedFlag.TITLE,
    "content": EmbedFlag.DESCRIPTION,
    "text": EmbedFlag.DESCRIPTION,
    "txt": EmbedFlag.DESCRIPTION,
    "c": EmbedFlag.DESCRIPTION,
    "url": EmbedFlag.URL,
    "color": EmbedFlag.COLOR,
    "col": EmbedFlag.COLOR,
    "time": EmbedFlag.TIME,
    "image": EmbedFlag.IMAGE,
    "img": EmbedFlag.IMAGE,
    "author": EmbedFlag.AUTHOR,
    "authorme": EmbedFlag.AUTHOR_ME,
    "authoricon": EmbedFlag.AUTHOR_ICON,
    "footer": EmbedFlag.FOOTER,
    "footerme": EmbedFlag.FOOTER_ME,
    "footericon": EmbedFlag.FOOTER_ICON,
    REST_FLAG: EmbedFlag.REST,
}


def parse_color(value: str) -> int:
    """Read a hex colour such as ``ff0000`` or ``#0099ff``."""
    try:
        color = int(value.removeprefix("#"), 16)
    except ValueError:
        raise CommandError(f'Couldn\'t parse color "{value}"') from None
    if not 0 <= color <= MAX_COLOR:
        raise CommandError(f'Color "{value}" is out of range, use 000000 to ffffff')
    return color


def parse_time(value: str) -> datetime:
    """Read ``now`` or an ISO date/time; naive values are taken as UTC."""
    if value.lower() == "now":
        return datetime.now(UTC)
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        raise CommandError(f'Couldn\'t parse time "{value}"') from None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


class EmbedComposer:
    """Applies embed flags from the shared parser state to one document."""

    def __init__(self, state: ParserState, embed: EmbedDocument, invoker: Identity) -> None:
        self.state = state
        self.embed = embed
        self.invoker = invoker

    async def run(self) -> EmbedDocument:
        await run_flags(self.state, EMBED_FLAGS, self.apply)
        return self.embed

    def apply(self, flag: EmbedFlag) -> None:
        state, embed = self.state, self.embed
        match flag:
            case EmbedFlag.TITLE:
                state.claim("Embed title")
                embed.title = state.read_arg()
            case EmbedFlag.DESCRIPTION:
                self._set_description(state.read_arg())
            case EmbedFlag.REST:
                self._set_description(state.take_rest())
            case EmbedFlag.URL:
                state.claim("Embed url")
                embed.url = parse_url(state.read_arg())
            case EmbedFlag.COLOR:
                state.claim("Embed color")
                embed.color = parse_color(state.read_arg())
            case EmbedFlag.TIME:
                state.claim("Embed timestamp")
                embed.timestamp = parse_time(state.read_arg())
            case EmbedFlag.IMAGE:
                state.claim("Embed image")
                embed.image_url = parse_url(state.read_arg())
            case EmbedFlag.AUTHOR:
                state.claim("Embed author")
                self._set_author(state.read_arg())
            case EmbedFlag.AUTHOR_ME:
                state.claim("Embed author", "Embed author icon")
                self._set_author(self.invoker.signature_name, self.invoker.avatar_url)
            case EmbedFlag.AUTHOR_ICON:
                state.claim("Embed author icon")
                if embed.author is None:
                    raise CommandError("Author name needs to be set before the author icon")
                embed.author.icon_url = state.read_arg()
            case EmbedFlag.FOOTER:
                state.claim("Embed footer")
                self._set_footer(state.read_arg())
            case EmbedFlag.FOOTER_ME:
                state.claim("Embed footer", "Embed footer icon")
                self._set_footer(self.invoker.signature_name, self.invoker.avatar_url)
            case EmbedFlag.FOOTER_ICON:
                state.claim("Embed footer icon")
                if embed.footer is None:
                    raise CommandError("Footer text needs to be set before the footer icon")
                embed.footer.icon_url = state.read_arg()

    def _set_description(self, text: str) -> None:
        self.state.claim("Embed content")
        self.embed.description = text

    def _set_author(self, name: str, icon_url: str | None = None) -> None:
        if self.embed.author is None:
            self.embed.author = EmbedAuthor(name=name)
        else:
            self.embed.author.name = name
        if icon_url is not None:
            self.embed.author.icon_url = icon_url

    def _set_footer(self, text: str, icon_url: str | None = None) -> None:
        if self.embed.footer is None:
            self.embed.footer = EmbedFooter(text=text)
        else:
            self.embed.footer.text = text
        if icon_url is not None:
            self.embed.footer.icon_url = icon_url
