"""CLI commands for converting amounts and managing history."""

from __future__ import annotations

import asyncio

import click
from flask import current_app
from flask.cli import with_appcontext

from converter.errors import APIError
from converter.services import ConversionRequest, format_history_entry, format_result, get_converter


@click.command("convert")
@click.argument("amount")
@click.argument("from_currency")
@click.argument("to_currency")
@with_appcontext
def convert_amount(amount: str, from_currency: str, to_currency: str) -> None:
    """Convert AMOUNT from FROM_CURRENCY to TO_CURRENCY and record it."""

    converter = get_converter(current_app)
    request = ConversionRequest(amount=amount, from_currency=from_currency, to_currency=to_currency)
    try:
        result = asyncio.run(converter.convert(request))
    except APIError as exc:
        raise click.ClickException(exc.message) from exc

    display = format_result(result)
    click.echo(f"{display['original']} = {display['converted']}")
    click.echo(display["rate"])


@click.command("history")
@with_appcontext
def show_history() -> None:
    """Print recorded conversions, newest first."""

    entries = get_converter(current_app).get_history()
    if not entries:
        click.echo("No conversions recorded.")
        return
    for entry in entries:
        click.echo(f"{entry.timestamp}  {format_history_entry(entry)}")


@click.command("clear-history")
@click.confirmation_option(prompt="Are you sure you want to clear all conversion history?")
@with_appcontext
def clear_history() -> None:
    """Remove every recorded conversion."""

    get_converter(current_app).clear_history()
    click.echo("Conversion history cleared.")
