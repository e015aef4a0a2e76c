"""Savings pocket commands."""

import click
from pocketbook.cli.account_resolution import resolve_account_or_exit
from pocketbook.cli.error_handling import handle_failure, parse_amount_or_exit
from pocketbook.domain.account import AccountService
from pocketbook.domain.pocket import PocketService
from pocketbook.utils.amount_parser import format_amount


@click.group()
def pocket_group():
    """Manage savings pockets."""
    pass


@pocket_group.command("create")
@click.argument("name")
@click.option("--account", required=True, help="Account name or ID funding the pocket")
@click.pass_context
def create_pocket(ctx, name: str, account: str):
    """Create a savings pocket.

    Examples:
        pocketbook pocket create "Vacation" --account BCP
    """
    db = ctx.obj["db"]
    service = PocketService(db, ctx.obj["user_id"])
    account_id = resolve_account_or_exit(ctx, AccountService(db, ctx.obj["user_id"]), account)

    result = service.create_pocket(name, account_id)
    handle_failure(ctx, result)
    click.echo(result.message)


@pocket_group.command("list")
@click.pass_context
def list_pockets(ctx):
    """List pockets with their balances."""
    db = ctx.obj["db"]
    service = PocketService(db, ctx.obj["user_id"])

    pockets = service.list_pockets()
    if not pockets:
        click.echo("No pockets found.")
        return

    accounts = {a.id: a.name for a in AccountService(db, ctx.obj["user_id"]).list_accounts()}
    click.echo("\nPockets:")
    click.echo("-" * 60)
    for item in pockets:
        click.echo(
            f"ID: {item.pocket.id:3d} | {item.pocket.name:20s} | "
            f"Account: {accounts.get(item.pocket.account_id, ''):12s} | "
            f"Balance: {format_amount(item.balance)}"
        )


@pocket_group.command("rename")
@click.argument("pocket_id", type=int)
@click.argument("new_name")
@click.pass_context
def rename_pocket(ctx, pocket_id: int, new_name: str):
    """Rename a pocket."""
    service = PocketService(ctx.obj["db"], ctx.obj["user_id"])

    result = service.rename_pocket(pocket_id, new_name)
    handle_failure(ctx, result)
    click.echo(result.message)


@pocket_group.command("deposit")
@click.argument("pocket_id", type=int)
@click.argument("amount")
@click.option("--from", "source", help="Source account name or ID (defaults to the pocket's account)")
@click.pass_context
def deposit(ctx, pocket_id: int, amount: str, source: str | None):
    """Move money from an account into a pocket.

    Examples:
        pocketbook pocket deposit 1 200
        pocketbook pocket deposit 1 50 --from Cash
    """
    db = ctx.obj["db"]
    service = PocketService(db, ctx.obj["user_id"])
    source_id = resolve_account_or_exit(ctx, AccountService(db, ctx.obj["user_id"]), source)
    deposit_amount = parse_amount_or_exit(ctx, amount)

    result = service.transfer_to_pocket(pocket_id, deposit_amount, source_account_id=source_id)
    handle_failure(ctx, result)
    click.echo(result.message)
    click.echo(f"Pocket balance: {format_amount(result.value)}")


@pocket_group.command("withdraw")
@click.argument("pocket_id", type=int)
@click.argument("amount")
@click.pass_context
def withdraw(ctx, pocket_id: int, amount: str):
    """Move money from a pocket back to its account."""
    service = PocketService(ctx.obj["db"], ctx.obj["user_id"])
    withdraw_amount = parse_amount_or_exit(ctx, amount)

    result = service.withdraw_from_pocket(pocket_id, withdraw_amount)
    handle_failure(ctx, result)
    click.echo(result.message)
    click.echo(f"Pocket balance: {format_amount(result.value)}")


@pocket_group.command("delete")
@click.argument("pocket_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_pocket(ctx, pocket_id: int, yes: bool):
    """Delete a pocket, returning its balance to its account."""
    service = PocketService(ctx.obj["db"], ctx.obj["user_id"])

    if not yes and not click.confirm(f"Are you sure you want to delete pocket {pocket_id}?"):
        click.echo("Deletion cancelled.")
        return

    result = service.delete_pocket(pocket_id)
    handle_failure(ctx, result)
    click.echo(result.message)


def register_commands(cli):
    """Register pocket commands with main CLI."""
    cli.add_command(pocket_group, name="pocket")
