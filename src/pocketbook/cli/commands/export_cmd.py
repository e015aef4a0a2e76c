"""Spreadsheet export command."""

import click
from pocketbook.cli.error_handling import handle_failure
from pocketbook.domain.spreadsheet import SpreadsheetService


@click.command("export")
@click.argument("csv_file", type=click.Path(dir_okay=False, writable=True))
@click.pass_context
def export_csv(ctx, csv_file: str):
    """Export income, expenses, pocket transfers and pending debts to CSV."""
    service = SpreadsheetService(ctx.obj["db"], ctx.obj["user_id"])

    result = service.export_csv(csv_file)
    handle_failure(ctx, result)
    click.echo(result.message)


def register_commands(cli):
    """Register export command with main CLI."""
    cli.add_command(export_csv)
