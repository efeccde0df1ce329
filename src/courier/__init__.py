"""Courier - compose, send and edit rich Discord messages from chat commands."""

from .errors import CommandError, ConfigurationError, CourierError
from .payload import EmbedDocument, MessagePayload

__version__ = "0.1.0"

__all__ = ["CommandError", "ConfigurationError", "CourierError", "EmbedDocument", "MessagePayload"]
