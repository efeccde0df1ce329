"""Command argument parsing."""

from courier.parsing.dispatch import FLAG_RE, REST_FLAG, ParserState, run_flags
from courier.parsing.embed import EMBED_FLAGS, EmbedComposer, EmbedFlag, parse_color, parse_time
from courier.parsing.message import COMPOSE_FLAGS, EDIT_FLAGS, MessageComposer, MessageFlag, parse_message_args
from courier.parsing.references import (
    parse_channel_id,
    parse_url,
    parse_user_id,
    resolve_channel,
    resolve_message,
    resolve_text_channel,
    resolve_user,
)
from courier.parsing.tokenizer import ESCAPED_CHARS, Line, Token, read_next_arg, read_next_line, resolve_escape

__all__ = [
    "COMPOSE_FLAGS",
    "EDIT_FLAGS",
    "EMBED_FLAGS",
    "ESCAPED_CHARS",
    "FLAG_RE",
    "REST_FLAG",
    "EmbedComposer",
    "EmbedFlag",
    "Line",
    "MessageComposer",
    "MessageFlag",
    "ParserState",
    "Token",
    "parse_channel_id",
    "parse_color",
    "parse_message_args",
    "parse_time",
    "parse_url",
    "parse_user_id",
    "read_next_arg",
    "read_next_line",
    "resolve_channel",
    "resolve_escape",
    "resolve_message",
    "resolve_text_channel",
    "resolve_user",
    "run_flags",
]
