"""Account domain service."""

from typing import Optional

import structlog

from pocketbook.database.base import Database
from pocketbook.domain.entities import Account as AccountEntity
from pocketbook.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    account_delete_blocked,
    account_not_found,
    duplicate_account_name,
)
from pocketbook.domain.results import CommandResult, command
from pocketbook.domain.validation import require_text

logger = structlog.get_logger(__name__)


class AccountService:
    """Service for managing accounts."""

    def __init__(self, db: Database, user_id: str):
        """Initialize account service.

        Args:
            db: Database instance
            user_id: Owner of the accounts
        """
        self.db = db
        self.user_id = user_id

    def _ensure_unique_name(self, name: str, exclude_id: Optional[int] = None) -> None:
        for acc in self.db.list_accounts(self.user_id):
            if acc.id != exclude_id and acc.name == name:
                raise ConflictError(duplicate_account_name(name))

    def require_account(self, account_id: int) -> AccountEntity:
        """Get an account or raise NotFoundError."""
        account = self.db.get_account(self.user_id, account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        return account

    @command
    def create_account(self, name: str) -> CommandResult:
        """Create a new account.

        Returns:
            Result whose value is the new account ID
        """
        name = require_text(name, "Account name")
        self._ensure_unique_name(name)
        account_id = self.db.create_account(self.user_id, name)
        logger.info("account_created", user_id=self.user_id, account_id=account_id)
        return CommandResult.success(f"Created account '{name}' (ID: {account_id})", account_id)

    def get_account(self, account_id: int) -> Optional[AccountEntity]:
        """Get account by ID, or None if not found."""
        return self.db.get_account(self.user_id, account_id)

    def list_accounts(self) -> list[AccountEntity]:
        """List all accounts."""
        return self.db.list_accounts(self.user_id)

    @command
    def rename_account(self, account_id: int, name: str) -> CommandResult:
        """Rename an account."""
        name = require_text(name, "Account name")
        self.require_account(account_id)
        self._ensure_unique_name(name, exclude_id=account_id)
        self.db.update_account_name(self.user_id, account_id, name)
        return CommandResult.success(f"Renamed account to '{name}'")

    @command
    def delete_account(self, account_id: int) -> CommandResult:
        """Delete an account that nothing references any more."""
        account = self.require_account(account_id)
        counts = self.db.get_account_reference_counts(self.user_id, account_id)
        if any(counts.values()):
            raise DependencyError(account_delete_blocked(account_id, counts))
        self.db.delete_account(self.user_id, account_id)
        logger.info("account_deleted", user_id=self.user_id, account_id=account_id)
        return CommandResult.success(f"Deleted account '{account.name}'")
