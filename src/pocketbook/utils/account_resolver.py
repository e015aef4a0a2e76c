"""Utility for resolving account names to IDs."""

from pocketbook.domain.account import AccountService
from pocketbook.domain.errors import NotFoundError


def resolve_account(account_service: AccountService, account: str | int) -> int:
    """Resolve account name or ID to account ID.

    Names are matched exactly first, then case-insensitively ("bcp" finds
    "BCP").

    Args:
        account_service: AccountService bound to the current user
        account: Account name (str) or ID (int or string representation of int)

    Returns:
        Account ID

    Raises:
        NotFoundError: If account is not found
    """
    if isinstance(account, int) or str(account).strip().isdigit():
        account_id = int(account)
        if account_service.get_account(account_id) is None:
            raise NotFoundError(f"Account ID {account_id} not found")
        return account_id

    accounts = account_service.list_accounts()
    for acc in accounts:
        if acc.name == account:
            return acc.id
    wanted = account.strip().lower()
    for acc in accounts:
        if acc.name.lower() == wanted:
            return acc.id

    raise NotFoundError(f"Account '{account}' not found")
