"""CLI entry points."""

from __future__ import annotations

from flask import Flask

from .conversions import clear_history, convert_amount, show_history


def register_cli(app: Flask) -> None:
    """Register CLI commands on the given Flask app."""

    app.cli.add_command(convert_amount)
    app.cli.add_command(show_history)
    app.cli.add_command(clear_history)
