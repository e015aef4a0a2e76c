"""CLI error handling helpers."""

from decimal import Decimal

import click

from pocketbook.domain.results import CommandResult
from pocketbook.utils.amount_parser import parse_amount


def handle_failure(ctx: click.Context, result: CommandResult) -> None:
    """Render a failed command result and exit with failure."""
    if not result.ok:
        click.echo(f"Error: {result.message}", err=True)
        ctx.exit(1)


def parse_amount_or_exit(ctx: click.Context, amount: str) -> Decimal:
    """Parse an amount option, or exit with a CLI error."""
    try:
        return parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)
