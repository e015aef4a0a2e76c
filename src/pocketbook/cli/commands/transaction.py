"""Transaction management commands."""

import click
from pocketbook.cli.account_resolution import resolve_account_or_exit
from pocketbook.cli.date_filters import resolve_cli_date_range
from pocketbook.cli.error_handling import handle_failure, parse_amount_or_exit
from pocketbook.domain.account import AccountService
from pocketbook.domain.balance import total_expense, total_income
from pocketbook.domain.entities import TransactionType
from pocketbook.domain.transaction import TransactionService
from pocketbook.utils.amount_parser import format_amount


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("update")
@click.argument("transaction_id", type=int)
@click.option("--amount", help="New amount (e.g., 123.45)")
@click.option("--description", help="New description")
@click.pass_context
def update_transaction(
    ctx, transaction_id: int, amount: str | None, description: str | None
) -> None:
    """Update a transaction's description and/or amount.

    Transfers between accounts cannot be edited, and the amount of a debt
    payment is fixed.

    Examples:
        pocketbook transaction update 1 --amount 75.00
        pocketbook transaction update 1 --description "Groceries (market)"
    """
    service = TransactionService(ctx.obj["db"], ctx.obj["user_id"])

    if amount is None and description is None:
        click.echo("Error: Nothing to update; pass --amount and/or --description", err=True)
        ctx.exit(1)

    txn_amount = parse_amount_or_exit(ctx, amount) if amount is not None else None
    result = service.update_transaction(transaction_id, description=description, amount=txn_amount)
    handle_failure(ctx, result)
    click.echo(result.message)


@transaction_group.command("reconcile")
@click.argument("transaction_id", type=int)
@click.option("--undo", is_flag=True, help="Mark as not reconciled")
@click.option("--toggle", is_flag=True, help="Flip the current state")
@click.pass_context
def reconcile_transaction(ctx, transaction_id: int, undo: bool, toggle: bool) -> None:
    """Mark a transaction as checked against a bank statement.

    Examples:
        pocketbook transaction reconcile 4
        pocketbook transaction reconcile 4 --undo
    """
    service = TransactionService(ctx.obj["db"], ctx.obj["user_id"])

    if toggle:
        result = service.toggle_reconciled(transaction_id)
    else:
        result = service.set_reconciled(transaction_id, not undo)
    handle_failure(ctx, result)
    click.echo(result.message)


@transaction_group.command("list")
@click.option(
    "--type",
    "txn_type",
    type=click.Choice([t.value for t in TransactionType]),
    help="Only show this transaction type",
)
@click.option("--account", help="Account name or ID")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'yesterday')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@click.option(
    "--period",
    type=click.Choice(["this-month", "last-month", "this-year", "last-year"]),
    help="Named date range",
)
@click.pass_context
def list_transactions(
    ctx,
    txn_type: str | None,
    account: str | None,
    start_date: str | None,
    end_date: str | None,
    period: str | None,
):
    """View transactions with optional filters, newest first.

    Account can be specified by name or ID; transfers show up for both
    their origin and destination.
    """
    db = ctx.obj["db"]
    service = TransactionService(db, ctx.obj["user_id"])
    account_service = AccountService(db, ctx.obj["user_id"])

    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period=period
    )
    account_id = resolve_account_or_exit(ctx, account_service, account)

    transactions = service.list_transactions(
        type=txn_type, account_id=account_id, start_date=start, end_date=end
    )

    if not transactions:
        click.echo("No transactions found.")
        return

    accounts = {acc.id: acc.name for acc in account_service.list_accounts()}

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    click.echo("-" * 110)
    click.echo(
        f"{'ID':<6} {'Date':<12} {'Type':<11} {'Amount':<14} {'Account':<20} "
        f"{'Category':<12} {'Rec':<4} {'Description':<30}"
    )
    click.echo("-" * 110)

    for txn in transactions:
        account_name = accounts.get(txn.account_id, "")
        if txn.destination_account_id is not None:
            account_name = f"{account_name} -> {accounts.get(txn.destination_account_id, '')}"
        reconciled = "x" if txn.is_reconciled else ""
        description = (txn.description or "")[:30]

        click.echo(
            f"{txn.id:<6} {txn.created_at.date().isoformat():<12} {txn.type.value:<11} "
            f"{format_amount(txn.amount):<14} {account_name[:20]:<20} "
            f"{(txn.category or '')[:12]:<12} {reconciled:<4} {description:<30}"
        )

    click.echo("-" * 110)
    click.echo(
        f"{'TOTAL':<6} Income: {format_amount(total_income(transactions))} | "
        f"Expenses: {format_amount(total_expense(transactions))} | Count: {len(transactions)}"
    )


@transaction_group.command("delete")
@click.argument("transaction_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_transaction(ctx, transaction_id: int, yes: bool) -> None:
    """Delete a transaction.

    Deleting the income recorded by a debt payment reverses that payment
    and reopens the debt.

    Examples:
        pocketbook transaction delete 1
    """
    service = TransactionService(ctx.obj["db"], ctx.obj["user_id"])

    txn = service.get_transaction(transaction_id)
    if txn is None:
        click.echo(f"Error: Transaction {transaction_id} not found", err=True)
        ctx.exit(1)

    prompt = f"Are you sure you want to delete transaction {transaction_id}?"
    if txn.debt_payment_id is not None:
        prompt = f"Transaction {transaction_id} is a debt payment; deleting it reopens the debt. Continue?"
    if not yes and not click.confirm(prompt):
        click.echo("Deletion cancelled.")
        return

    result = service.delete_transaction(transaction_id)
    handle_failure(ctx, result)
    click.echo(result.message)


def register_commands(cli: click.Group) -> None:
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
