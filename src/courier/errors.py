"""Application-level exception types for Courier."""

from __future__ import annotations


class CourierError(Exception):
    """Base exception for Courier."""


class ConfigurationError(CourierError):
    """Raised when required settings are missing or malformed."""


class CommandError(CourierError):
    """A user-facing failure raised while handling a command.

    ``response`` is the text relayed back to the channel the command came from.
    """

    def __init__(self, response: str) -> None:
        super().__init__(response)
        self.response = response


def empty_message_error() -> CommandError:
    return CommandError("Can't send an empty message")
