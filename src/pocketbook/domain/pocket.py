"""Savings pockets ("wardas") and the transfers that fund them.

Money moved into a pocket leaves its source account through an outgoing
transfer with no destination, and comes back through an incoming transfer
with no origin. Each move writes the pocket movement and the transfer in one
``Database.atomic`` block, so the sum of account balances plus pocket
balances never changes.
"""

from decimal import Decimal
from typing import Optional

import structlog

from pocketbook.database.base import Database
from pocketbook.domain.balance import BalanceService, pocket_balance
from pocketbook.domain.entities import (
    Pocket,
    PocketBalance,
    PocketTransactionType,
    TransactionType,
)
from pocketbook.domain.errors import (
    NotFoundError,
    ValidationError,
    account_not_found,
    insufficient_funds,
    pocket_not_found,
)
from pocketbook.domain.results import CommandResult, command
from pocketbook.domain.validation import require_positive_amount, require_text
from pocketbook.utils.amount_parser import ZERO

logger = structlog.get_logger(__name__)

MAX_POCKETS = 4


class PocketService:
    """Service for managing pockets and moving money in and out of them."""

    def __init__(self, db: Database, user_id: str):
        """Initialize pocket service.

        Args:
            db: Database instance
            user_id: Owner of the pockets
        """
        self.db = db
        self.user_id = user_id
        self.balances = BalanceService(db, user_id)

    def _require_pocket(self, pocket_id: int) -> Pocket:
        pocket = self.db.get_pocket(self.user_id, pocket_id)
        if pocket is None:
            raise NotFoundError(pocket_not_found(pocket_id))
        return pocket

    def _require_account_name(self, account_id: int) -> str:
        account = self.db.get_account(self.user_id, account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        return account.name

    def list_pockets(self) -> list[PocketBalance]:
        """Pockets with their balance and movements, in creation order."""
        movements = self.db.list_pocket_transactions(self.user_id)
        return [
            PocketBalance(
                pocket=pocket,
                balance=pocket_balance(pocket.id, movements),
                movements=tuple(m for m in movements if m.pocket_id == pocket.id),
            )
            for pocket in self.db.list_pockets(self.user_id)
        ]

    def get_pocket(self, pocket_id: int) -> Optional[Pocket]:
        """Get pocket by ID, or None if not found."""
        return self.db.get_pocket(self.user_id, pocket_id)

    @command
    def create_pocket(self, name: str, account_id: int) -> CommandResult:
        """Create a pocket funded from ``account_id``.

        Returns:
            Result whose value is the new pocket ID
        """
        name = require_text(name, "Pocket name")
        self._require_account_name(account_id)
        if len(self.db.list_pockets(self.user_id)) >= MAX_POCKETS:
            raise ValidationError(f"Maximum of {MAX_POCKETS} pockets reached")

        pocket_id = self.db.create_pocket(self.user_id, name, account_id)
        logger.info("pocket_created", user_id=self.user_id, pocket_id=pocket_id)
        return CommandResult.success(f"Created pocket '{name}' (ID: {pocket_id})", pocket_id)

    @command
    def rename_pocket(self, pocket_id: int, name: str) -> CommandResult:
        """Rename a pocket."""
        name = require_text(name, "Pocket name")
        self._require_pocket(pocket_id)
        self.db.update_pocket_name(self.user_id, pocket_id, name)
        return CommandResult.success(f"Renamed pocket to '{name}'")

    @command
    def transfer_to_pocket(
        self, pocket_id: int, amount: Decimal, source_account_id: Optional[int] = None
    ) -> CommandResult:
        """Move money from an account into a pocket.

        The source defaults to the pocket's parent account and must hold at
        least ``amount``.

        Returns:
            Result whose value is the pocket's new balance
        """
        amount = require_positive_amount(amount)
        pocket = self._require_pocket(pocket_id)
        source_id = source_account_id if source_account_id is not None else pocket.account_id
        source_name = self._require_account_name(source_id)

        available = self.balances.account_balance(source_id)
        if amount > available:
            raise ValidationError(insufficient_funds(source_name, available, amount))

        with self.db.atomic():
            self.db.create_pocket_transaction(
                self.user_id,
                pocket_id=pocket.id,
                type=PocketTransactionType.DEPOSIT,
                amount=amount,
                description=f"Transfer from {source_name}",
            )
            self.db.create_transaction(
                self.user_id,
                type=TransactionType.TRANSFER,
                amount=amount,
                description=f"Contribution to pocket {pocket.name}",
                account_id=source_id,
            )

        balance = self.balances.pocket_balance(pocket.id)
        logger.info(
            "pocket_transfer",
            user_id=self.user_id,
            pocket_id=pocket.id,
            account_id=source_id,
            amount=str(amount),
        )
        return CommandResult.success(
            f"Moved {amount:.2f} from {source_name} to pocket '{pocket.name}'", balance
        )

    def _withdraw(self, pocket: Pocket, amount: Decimal, description: str) -> None:
        """Write a withdrawal and the transfer crediting the parent account."""
        with self.db.atomic():
            self.db.create_pocket_transaction(
                self.user_id,
                pocket_id=pocket.id,
                type=PocketTransactionType.WITHDRAWAL,
                amount=amount,
                description=description,
            )
            self.db.create_transaction(
                self.user_id,
                type=TransactionType.TRANSFER,
                amount=amount,
                description=description,
                destination_account_id=pocket.account_id,
            )

    @command
    def withdraw_from_pocket(self, pocket_id: int, amount: Decimal) -> CommandResult:
        """Move money from a pocket back to its parent account.

        Returns:
            Result whose value is the pocket's new balance
        """
        amount = require_positive_amount(amount)
        pocket = self._require_pocket(pocket_id)
        available = self.balances.pocket_balance(pocket.id)
        if amount > available:
            raise ValidationError(insufficient_funds(pocket.name, available, amount))

        self._withdraw(pocket, amount, f"Withdrawal from pocket {pocket.name}")
        logger.info(
            "pocket_withdrawal", user_id=self.user_id, pocket_id=pocket.id, amount=str(amount)
        )
        return CommandResult.success(
            f"Moved {amount:.2f} from pocket '{pocket.name}' back to its account",
            available - amount,
        )

    @command
    def delete_pocket(self, pocket_id: int) -> CommandResult:
        """Delete a pocket, returning any remaining balance to its account.

        Returns:
            Result whose value is the amount returned
        """
        pocket = self._require_pocket(pocket_id)
        balance = self.balances.pocket_balance(pocket.id)

        with self.db.atomic():
            if balance > ZERO:
                self._withdraw(pocket, balance, f"Refund from deleted pocket {pocket.name}")
            self.db.delete_pocket(self.user_id, pocket.id)

        logger.info(
            "pocket_deleted", user_id=self.user_id, pocket_id=pocket.id, returned=str(balance)
        )
        returned = max(balance, ZERO)
        if returned > ZERO:
            message = f"Deleted pocket '{pocket.name}'; {returned:.2f} returned to its account"
        else:
            message = f"Deleted pocket '{pocket.name}'"
        return CommandResult.success(message, returned)
