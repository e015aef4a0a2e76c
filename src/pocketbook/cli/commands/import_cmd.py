"""Spreadsheet import command."""

import click
from pocketbook.cli.account_resolution import resolve_account_or_exit
from pocketbook.cli.error_handling import handle_failure
from pocketbook.domain.account import AccountService
from pocketbook.domain.spreadsheet import SpreadsheetService


@click.command("import")
@click.argument("csv_file", type=click.Path(exists=True))
@click.option("--account", help="Account name or ID the imported records belong to")
@click.pass_context
def import_csv(ctx, csv_file: str, account: str | None):
    """Import income and expenses from a CSV spreadsheet.

    Accepts either Fecha/Descripcion/Ingreso/Egreso columns or
    Fecha/Descripcion/Monto (negative amounts are expenses).
    """
    db = ctx.obj["db"]
    service = SpreadsheetService(db, ctx.obj["user_id"])
    account_id = resolve_account_or_exit(ctx, AccountService(db, ctx.obj["user_id"]), account)

    result = service.import_csv(csv_file, account_id=account_id)
    handle_failure(ctx, result)

    stats = result.value
    click.echo(f"\nImport complete:")
    click.echo(f"  Imported: {stats['imported']} transactions")
    if stats["errors"]:
        click.echo(f"  Errors: {len(stats['errors'])}")
        for error in stats["errors"]:
            click.echo(f"    {error}", err=True)


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_csv)
