"""Courier CLI entrypoint."""

from __future__ import annotations

from courier.cli import app

if __name__ == "__main__":
    app()
