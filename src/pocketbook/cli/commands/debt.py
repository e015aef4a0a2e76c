"""Debt commands: register, review, settle and report."""

import click
from pocketbook.cli.account_resolution import resolve_account_or_exit
from pocketbook.cli.error_handling import handle_failure, parse_amount_or_exit
from pocketbook.domain.account import AccountService
from pocketbook.domain.debt import DebtService, group_by_person
from pocketbook.domain.entities import DebtStatus
from pocketbook.domain.settlement import SettlementService
from pocketbook.utils.amount_parser import format_amount
from pocketbook.utils.date_parser import parse_date, start_of_day


def _created_at_or_exit(ctx, date: str | None):
    if not date:
        return None
    try:
        return start_of_day(parse_date(date))
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)


@click.group()
def debt_group():
    """Manage money people owe you."""
    pass


@debt_group.command("add")
@click.argument("person")
@click.argument("reason")
@click.argument("amount")
@click.option("--account", help="Account name or ID the money came out of")
@click.option("--date", help="Date of the debt (defaults to now)")
@click.pass_context
def add_debt(ctx, person: str, reason: str, amount: str, account: str | None, date: str | None):
    """Register a debt owed by PERSON.

    Examples:
        pocketbook debt add Ana "Dinner" 100
        pocketbook debt add Luis "Concert ticket" 80 --account BCP
    """
    db = ctx.obj["db"]
    service = DebtService(db, ctx.obj["user_id"])
    account_service = AccountService(db, ctx.obj["user_id"])

    account_id = resolve_account_or_exit(ctx, account_service, account)
    debt_amount = parse_amount_or_exit(ctx, amount)
    created_at = _created_at_or_exit(ctx, date)

    result = service.register_debt(
        person, reason, debt_amount, account_id=account_id, created_at=created_at
    )
    handle_failure(ctx, result)
    click.echo(result.message)


@debt_group.command("loan")
@click.argument("reason")
@click.argument("amount")
@click.option("--account", required=True, help="Account name or ID the loan was paid from")
@click.option("--category", help="Category (defaults to 'Prestamo')")
@click.option("--date", help="Date of the loan (defaults to now)")
@click.pass_context
def add_loan(
    ctx, reason: str, amount: str, account: str, category: str | None, date: str | None
):
    """Register a loan paid out of an account.

    Examples:
        pocketbook debt loan "Car repair" 1200 --account BCP
    """
    db = ctx.obj["db"]
    service = DebtService(db, ctx.obj["user_id"])
    account_service = AccountService(db, ctx.obj["user_id"])

    account_id = resolve_account_or_exit(ctx, account_service, account)
    loan_amount = parse_amount_or_exit(ctx, amount)
    created_at = _created_at_or_exit(ctx, date)

    result = service.register_loan(
        reason, loan_amount, account_id, category=category, created_at=created_at
    )
    handle_failure(ctx, result)
    click.echo(result.message)


@debt_group.command("list")
@click.option(
    "--status",
    type=click.Choice([s.value for s in DebtStatus]),
    help="Only show debts with this status",
)
@click.option("--search", help="Filter on person name or reason")
@click.pass_context
def list_debts(ctx, status: str | None, search: str | None):
    """List debts grouped by person."""
    service = DebtService(ctx.obj["db"], ctx.obj["user_id"])

    summaries = service.list_summaries(
        status=DebtStatus(status) if status else None, search=search
    )
    if not summaries:
        click.echo("No debts found.")
        return

    for person, items in group_by_person(summaries).items():
        click.echo(f"\n{person}")
        click.echo("-" * 90)
        for s in items:
            click.echo(
                f"{s.debt.id:<5} {s.debt.created_at.date().isoformat():<12} "
                f"{s.debt.reason[:28]:<28} {s.debt.status.value:<8} "
                f"Original: {format_amount(s.original_amount):<12} "
                f"Pending: {format_amount(s.debt.total_amount)}"
            )


@debt_group.command("show")
@click.argument("debt_id", type=int)
@click.pass_context
def show_debt(ctx, debt_id: int):
    """Show a debt with its payment history."""
    service = DebtService(ctx.obj["db"], ctx.obj["user_id"])

    try:
        summary = service.get_summary(debt_id)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    click.echo(f"Debt {summary.debt.id}: {summary.debt.reason}")
    click.echo(f"  Person: {summary.debtor}")
    click.echo(f"  Status: {summary.debt.status.value}")
    click.echo(f"  Original: {format_amount(summary.original_amount)}")
    click.echo(f"  Paid: {format_amount(summary.total_paid)}")
    click.echo(f"  Pending: {format_amount(summary.debt.total_amount)}")
    for payment in summary.payments:
        click.echo(
            f"  - {payment.paid_at.date().isoformat()} {format_amount(payment.amount)} "
            f"({payment.note or ''})"
        )


@debt_group.command("pay")
@click.argument("debt_id", type=int)
@click.argument("amount")
@click.pass_context
def pay_debt(ctx, debt_id: int, amount: str):
    """Record a partial payment of a debt.

    Examples:
        pocketbook debt pay 3 40
    """
    service = SettlementService(ctx.obj["db"], ctx.obj["user_id"])
    payment = parse_amount_or_exit(ctx, amount)

    result = service.settle(debt_id, payment)
    handle_failure(ctx, result)
    click.echo(result.message)


@debt_group.command("pay-full")
@click.argument("debt_id", type=int)
@click.pass_context
def pay_debt_full(ctx, debt_id: int):
    """Pay whatever remains on a debt."""
    service = SettlementService(ctx.obj["db"], ctx.obj["user_id"])

    result = service.settle_full(debt_id)
    handle_failure(ctx, result)
    click.echo(result.message)


@debt_group.command("delete")
@click.argument("debt_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_debt(ctx, debt_id: int, yes: bool):
    """Delete a debt and its payments.

    Income already recorded for its payments is kept.
    """
    service = SettlementService(ctx.obj["db"], ctx.obj["user_id"])

    if not yes and not click.confirm(f"Are you sure you want to delete debt {debt_id}?"):
        click.echo("Deletion cancelled.")
        return

    result = service.delete_debt(debt_id)
    handle_failure(ctx, result)
    click.echo(result.message)


@debt_group.command("report")
@click.argument("people", nargs=-1)
@click.pass_context
def debt_report(ctx, people: tuple[str, ...]):
    """Print the pending-debt report.

    Lists the given PEOPLE, or everyone with something pending.

    Examples:
        pocketbook debt report
        pocketbook debt report Ana Luis
    """
    db = ctx.obj["db"]
    service = DebtService(db, ctx.obj["user_id"])

    if not people:
        people = tuple(p.name for p in db.list_people(ctx.obj["user_id"]))
    click.echo(service.pending_report(people))


def register_commands(cli):
    """Register debt commands with main CLI."""
    cli.add_command(debt_group, name="debt")
