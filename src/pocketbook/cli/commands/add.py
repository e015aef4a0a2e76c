"""Add transaction command."""

import click
from pocketbook.cli.account_resolution import resolve_account_or_exit
from pocketbook.cli.error_handling import handle_failure, parse_amount_or_exit
from pocketbook.domain.account import AccountService
from pocketbook.domain.entities import TransactionType
from pocketbook.domain.transaction import TransactionService
from pocketbook.utils.amount_parser import format_amount
from pocketbook.utils.date_parser import parse_date, start_of_day


@click.command("add")
@click.option(
    "--type",
    "txn_type",
    required=True,
    type=click.Choice([t.value for t in TransactionType]),
    help="Transaction type",
)
@click.option("--amount", required=True, help="Positive amount (e.g., 123.45 or S/123.45)")
@click.option("--description", help="Description (optional for transfers)")
@click.option("--category", help="Category (defaults depend on the type)")
@click.option("--account", help="Account name or ID (origin for transfers)")
@click.option("--to", "destination", help="Destination account name or ID (transfers only)")
@click.option(
    "--date",
    help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday'); defaults to now",
)
@click.option("--reconciled", is_flag=True, help="Mark as already checked against a statement")
@click.pass_context
def add_transaction(
    ctx,
    txn_type: str,
    amount: str,
    description: str | None,
    category: str | None,
    account: str | None,
    destination: str | None,
    date: str | None,
    reconciled: bool,
):
    """Add a transaction manually.

    Examples:
        pocketbook add --type ingreso --amount 1500 --description "Salary" --account BCP
        pocketbook add --type gasto --amount 45.90 --description "Groceries" --account Cash
        pocketbook add --type movimiento --amount 200 --account BCP --to Cash
    """
    db = ctx.obj["db"]
    user_id = ctx.obj["user_id"]
    transaction_service = TransactionService(db, user_id)
    account_service = AccountService(db, user_id)

    account_id = resolve_account_or_exit(ctx, account_service, account)
    destination_id = resolve_account_or_exit(ctx, account_service, destination)
    txn_amount = parse_amount_or_exit(ctx, amount)

    created_at = None
    if date:
        try:
            created_at = start_of_day(parse_date(date))
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    result = transaction_service.create_transaction(
        type=txn_type,
        amount=txn_amount,
        description=description,
        category=category,
        account_id=account_id,
        destination_account_id=destination_id,
        created_at=created_at,
        is_reconciled=reconciled,
    )
    handle_failure(ctx, result)

    txn = transaction_service.get_transaction(result.value)
    click.echo(result.message)
    click.echo(f"  Type: {txn.type.value}")
    click.echo(f"  Amount: {format_amount(txn.amount)}")
    click.echo(f"  Description: {txn.description}")
    if txn.category:
        click.echo(f"  Category: {txn.category}")


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_transaction)
