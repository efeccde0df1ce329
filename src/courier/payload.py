"""Outbound message payloads produced by the command parsers."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

# Keys the platform fills in on received embeds; never sent back.
SERVER_EMBED_KEYS = frozenset({"type", "flags"})
MODELLED_EMBED_KEYS = frozenset({"title", "description", "url", "color", "timestamp", "author", "footer", "image"})


def exclude_none(d: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in d.items() if v is not None}


@dataclass
class EmbedAuthor:
    name: str
    icon_url: str | None = None


@dataclass
class EmbedFooter:
    text: str
    icon_url: str | None = None


@dataclass
class EmbedDocument:
    """A rich embed body, mutable while a command is being parsed.

    ``extra`` holds platform keys this model does not edit (fields,
    thumbnail, provider...) so copied embeds survive a round trip intact.
    """

    title: str | None = None
    description: str | None = None
    url: str | None = None
    color: int | None = None
    timestamp: datetime | None = None
    author: EmbedAuthor | None = None
    footer: EmbedFooter | None = None
    image_url: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Render in the chat platform's embed JSON shape."""
        data: dict[str, Any] = dict(self.extra)
        data.update(
            exclude_none({
                "title": self.title,
                "description": self.description,
                "url": self.url,
                "color": self.color,
                "timestamp": self.timestamp.isoformat() if self.timestamp is not None else None,
            })
        )
        if self.author is not None:
            data["author"] = exclude_none({"name": self.author.name, "icon_url": self.author.icon_url})
        if self.footer is not None:
            data["footer"] = exclude_none({"text": self.footer.text, "icon_url": self.footer.icon_url})
        if self.image_url is not None:
            data["image"] = {"url": self.image_url}
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EmbedDocument:
        author = data.get("author")
        footer = data.get("footer")
        image = data.get("image")
        timestamp = data.get("timestamp")
        return cls(
            title=data.get("title"),
            description=data.get("description"),
            url=data.get("url"),
            color=data.get("color"),
            timestamp=datetime.fromisoformat(timestamp) if timestamp else None,
            author=EmbedAuthor(author.get("name", ""), author.get("icon_url")) if author else None,
            footer=EmbedFooter(footer.get("text", ""), footer.get("icon_url")) if footer else None,
            image_url=image.get("url") if image else None,
            extra={
                key: value
                for key, value in data.items()
                if key not in MODELLED_EMBED_KEYS and key not in SERVER_EMBED_KEYS
            },
        )


@dataclass
class MessagePayload:
    """A send/edit request: text content, attachment URLs and embeds.

    ``embeds`` stays None until a flag sets it, so an edit leaves the
    message's existing embeds alone.
    """

    content: str | None = None
    files: list[str] = field(default_factory=list)
    embeds: list[EmbedDocument] | None = None

    @property
    def embed(self) -> EmbedDocument | None:
        return self.embeds[0] if self.embeds else None

    def is_empty(self) -> bool:
        has_embed = any(embed.to_dict() for embed in self.embeds or ())
        return not self.content and not self.files and not has_embed

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.content is not None:
            data["content"] = self.content
        data["files"] = list(self.files)
        if self.embed is not None:
            data["embed"] = self.embed.to_dict()
        return data
