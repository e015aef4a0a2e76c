"""Account management commands."""

import click
from pocketbook.cli.account_resolution import resolve_account_or_exit
from pocketbook.cli.error_handling import handle_failure
from pocketbook.domain.account import AccountService
from pocketbook.domain.balance import BalanceService
from pocketbook.utils.amount_parser import format_amount


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.pass_context
def create_account(ctx, name: str):
    """Create a new account.

    Examples:
        pocketbook account create "BCP"
        pocketbook account create "Cash"
    """
    service = AccountService(ctx.obj["db"], ctx.obj["user_id"])

    result = service.create_account(name)
    handle_failure(ctx, result)
    click.echo(result.message)


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List all accounts with their balances."""
    db = ctx.obj["db"]
    service = AccountService(db, ctx.obj["user_id"])
    balances = BalanceService(db, ctx.obj["user_id"])

    accounts = service.list_accounts()
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 60)
    for acc in accounts:
        balance = balances.account_balance(acc.id)
        click.echo(f"ID: {acc.id:3d} | {acc.name:20s} | Balance: {format_amount(balance)}")


@account_group.command("balance")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def account_balance(ctx, account: str) -> None:
    """Show the balance of one account.

    ACCOUNT can be an account name or ID.
    """
    db = ctx.obj["db"]
    service = AccountService(db, ctx.obj["user_id"])
    account_id = resolve_account_or_exit(ctx, service, account)
    account_obj = service.get_account(account_id)

    balance = BalanceService(db, ctx.obj["user_id"]).account_balance(account_id)
    click.echo(f"{account_obj.name}: {format_amount(balance)}")


@account_group.command("rename")
@click.argument("account", metavar="ACCOUNT")
@click.argument("new_name", metavar="NEW_NAME")
@click.pass_context
def rename_account(ctx, account: str, new_name: str) -> None:
    """Rename an account.

    ACCOUNT can be an account name or ID.
    NEW_NAME is the new name for the account.

    Examples:
        pocketbook account rename "BCP" "BCP Soles"
        pocketbook account rename 1 "Wallet"
    """
    service = AccountService(ctx.obj["db"], ctx.obj["user_id"])
    account_id = resolve_account_or_exit(ctx, service, account)

    result = service.rename_account(account_id, new_name)
    handle_failure(ctx, result)
    click.echo(result.message)


@account_group.command("delete")
@click.argument("account", metavar="ACCOUNT")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_account(ctx, account: str, yes: bool) -> None:
    """Delete an account.

    ACCOUNT can be an account name or ID.

    The account can only be deleted if no transactions, debts or pockets
    refer to it. Remove or move them first.

    Examples:
        pocketbook account delete "BCP"
        pocketbook account delete 1 --yes
    """
    service = AccountService(ctx.obj["db"], ctx.obj["user_id"])
    account_id = resolve_account_or_exit(ctx, service, account)
    account_obj = service.get_account(account_id)

    if not yes and not click.confirm(
        f"Are you sure you want to delete account '{account_obj.name}' (ID: {account_id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    result = service.delete_account(account_id)
    handle_failure(ctx, result)
    click.echo(result.message)


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
