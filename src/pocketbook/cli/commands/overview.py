"""Overview command."""

import click
from pocketbook.domain.balance import BalanceService
from pocketbook.utils.amount_parser import format_amount


@click.command("overview")
@click.pass_context
def overview(ctx):
    """Show totals, account balances and pocket savings."""
    summary = BalanceService(ctx.obj["db"], ctx.obj["user_id"]).build_overview()

    click.echo("\nOverview")
    click.echo("=" * 60)
    click.echo(f"{'Income':<20} {format_amount(summary.income):>15}")
    click.echo(f"{'Expenses':<20} {format_amount(summary.expense):>15}")
    click.echo(f"{'Pending debts':<20} {format_amount(summary.pending_debt):>15}")
    click.echo(f"{'Net balance':<20} {format_amount(summary.net_balance):>15}")
    click.echo(f"{'Pocket savings':<20} {format_amount(summary.pocket_savings):>15}")

    if summary.accounts:
        click.echo("\nAccounts")
        click.echo("-" * 60)
        for item in summary.accounts:
            click.echo(f"  {item.account.name:<18} {format_amount(item.balance):>15}")

    if summary.pockets:
        click.echo("\nPockets")
        click.echo("-" * 60)
        for item in summary.pockets:
            click.echo(f"  {item.pocket.name:<18} {format_amount(item.balance):>15}")


def register_commands(cli):
    """Register overview command with main CLI."""
    cli.add_command(overview)
