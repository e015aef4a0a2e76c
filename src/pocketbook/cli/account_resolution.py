"""Turn the ``--account`` style options into account IDs."""

from typing import Optional

import click

from pocketbook.domain.account import AccountService
from pocketbook.domain.errors import NotFoundError
from pocketbook.utils.account_resolver import resolve_account


def _known_accounts_hint(account_service: AccountService) -> str:
    names = sorted(acc.name for acc in account_service.list_accounts())
    if not names:
        return "No accounts yet; create one with 'pocketbook account create NAME'"
    return f"Known accounts: {', '.join(names)}"


def resolve_account_or_exit(
    ctx: click.Context, account_service: AccountService, account: Optional[str]
) -> Optional[int]:
    """Account ID for a name or ID given on the command line.

    An omitted option resolves to None. An unknown account prints the
    user's account names and exits with status 1.
    """
    if account is None:
        return None
    try:
        return resolve_account(account_service, account)
    except NotFoundError as e:
        click.echo(f"Error: {e}", err=True)
        click.echo(_known_accounts_hint(account_service), err=True)
        ctx.exit(1)
