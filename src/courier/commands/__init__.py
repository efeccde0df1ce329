"""Command handling for Courier.

This module provides the command table, dispatch and builtin handlers.
"""

from __future__ import annotations

from .builtin import BUILTIN_COMMANDS, build_registry
from .context import CommandContext
from .dispatcher import CommandDispatcher
from .registry import Command, CommandRegistry, parse_invocation

__all__ = [
    "BUILTIN_COMMANDS",
    "Command",
    "CommandContext",
    "CommandDispatcher",
    "CommandRegistry",
    "build_registry",
    "parse_invocation",
]
