"""Courier CLI."""

from __future__ import annotations

import asyncio
import json
from typing import get_args

import typer
from loguru import logger

from courier.channels import DiscordChannel
from courier.chat import ChatMessage, Identity
from courier.config import load_settings
from courier.errors import CommandError, ConfigurationError
from courier.logging_utils import LogProfile, configure_logging
from courier.parsing import parse_message_args

app = typer.Typer(name="courier", help="Role-gated Discord bot for advanced messages", add_completion=False)


@app.command("run")
def run(
    log_profile: str = typer.Option("default", "--log-profile", help="Logging profile: default or console"),
) -> None:
    """Start the Discord bot."""

    if log_profile not in get_args(LogProfile):
        typer.echo(f'Error: Unknown log profile "{log_profile}"', err=True)
        raise typer.Exit(2)

    try:
        settings = load_settings()
    except ConfigurationError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1) from exc

    configure_logging(level=settings.log_level, profile=log_profile)  # type: ignore[arg-type]
    try:
        asyncio.run(DiscordChannel(settings).start())
    except ConfigurationError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1) from exc
    except KeyboardInterrupt:
        logger.info("courier.interrupted")


@app.command("parse")
def parse(
    args: str = typer.Argument(..., help="Message flags; put '--' before them: courier parse -- -c hi"),
    original: str | None = typer.Option(None, "--original", help="Text of the message being edited; enables -insert"),
    name: str = typer.Option("courier", "--name", help="Username used by -authorme/-footerme"),
    avatar: str | None = typer.Option(None, "--avatar", help="Avatar url used by -authorme/-footerme"),
) -> None:
    """Parse message flags without sending anything and print the payload as JSON."""

    invoker = Identity(id="0", username=name, avatar_url=avatar)
    edited = None
    if original is not None:
        edited = ChatMessage(id="0", channel=None, content=original, author=invoker)

    try:
        payload = asyncio.run(parse_message_args(args, invoker, edited))
    except CommandError as exc:
        typer.echo(f"Error: {exc.response}", err=True)
        raise typer.Exit(1) from exc
    typer.echo(json.dumps(payload.to_dict(), ensure_ascii=False, indent=2))
