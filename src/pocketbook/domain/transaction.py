"""Transaction domain service."""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

import structlog

from pocketbook.database.base import Database
from pocketbook.domain.entities import Transaction as TransactionEntity, TransactionType
from pocketbook.domain.errors import (
    NotFoundError,
    ValidationError,
    account_not_found,
    transaction_not_found,
)
from pocketbook.domain.results import CommandResult, command
from pocketbook.domain.settlement import SettlementService
from pocketbook.domain.validation import require_positive_amount, require_text

logger = structlog.get_logger(__name__)

DEFAULT_CATEGORIES = {
    TransactionType.INCOME: "Deposito",
    TransactionType.LOAN: "Prestamo",
    TransactionType.DEBT: "Deuda",
}


def parse_transaction_type(value: str | TransactionType) -> TransactionType:
    """Accept a TransactionType or its stored value ("ingreso", "gasto"...)."""
    try:
        return TransactionType(value)
    except ValueError:
        allowed = ", ".join(t.value for t in TransactionType)
        raise ValidationError(f"Unknown transaction type '{value}'. Expected one of: {allowed}")


class TransactionService:
    """Service for managing transactions."""

    def __init__(self, db: Database, user_id: str):
        """Initialize transaction service.

        Args:
            db: Database instance
            user_id: Owner of the transactions
        """
        self.db = db
        self.user_id = user_id

    def _account_name(self, account_id: int) -> str:
        account = self.db.get_account(self.user_id, account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        return account.name

    def _require_transaction(self, transaction_id: int) -> TransactionEntity:
        txn = self.db.get_transaction(self.user_id, transaction_id)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        return txn

    @command
    def create_transaction(
        self,
        type: str | TransactionType,
        amount: Decimal,
        description: Optional[str] = None,
        category: Optional[str] = None,
        account_id: Optional[int] = None,
        destination_account_id: Optional[int] = None,
        created_at: Optional[datetime] = None,
        is_reconciled: bool = False,
    ) -> CommandResult:
        """Create a transaction.

        Args:
            type: Transaction type
            amount: Positive amount
            description: Required except for transfers, which get
                "From <origin> to <destination>" when omitted
            category: Optional category; defaults depend on the type
            account_id: Origin account (required for transfers)
            destination_account_id: Target account, transfers only
            created_at: Optional timestamp (defaults to now)
            is_reconciled: Initial reconciliation flag

        Returns:
            Result whose value is the new transaction ID
        """
        txn_type = parse_transaction_type(type)
        amount = require_positive_amount(amount)

        if txn_type == TransactionType.TRANSFER:
            if account_id is None:
                raise ValidationError("Transfers need an origin account")
            if destination_account_id is None:
                raise ValidationError("Transfers need a destination account")
            if account_id == destination_account_id:
                raise ValidationError("Origin and destination accounts must be different")
            origin_name = self._account_name(account_id)
            destination_name = self._account_name(destination_account_id)
            if not description or not description.strip():
                description = f"From {origin_name} to {destination_name}"
            category = None
        else:
            if destination_account_id is not None:
                raise ValidationError("Only transfers can have a destination account")
            description = require_text(description, "Description")
            if account_id is not None:
                self._account_name(account_id)
            if category is None:
                category = DEFAULT_CATEGORIES.get(txn_type)

        transaction_id = self.db.create_transaction(
            self.user_id,
            type=txn_type,
            amount=amount,
            description=description.strip(),
            category=category,
            account_id=account_id,
            destination_account_id=destination_account_id,
            created_at=created_at,
            is_reconciled=is_reconciled,
        )
        logger.info(
            "transaction_created",
            user_id=self.user_id,
            transaction_id=transaction_id,
            type=txn_type.value,
            amount=str(amount),
        )
        return CommandResult.success(f"Created transaction {transaction_id}", transaction_id)

    def get_transaction(self, transaction_id: int) -> Optional[TransactionEntity]:
        """Get transaction by ID, or None if not found."""
        return self.db.get_transaction(self.user_id, transaction_id)

    def list_transactions(
        self,
        type: Optional[str | TransactionType] = None,
        account_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[TransactionEntity]:
        """List transactions, newest first.

        Args:
            type: Optional type filter
            account_id: Optional account filter (origin or destination)
            start_date: Optional start date filter
            end_date: Optional end date filter
        """
        txn_type = parse_transaction_type(type) if type is not None else None
        return self.db.list_transactions(
            self.user_id,
            type=txn_type,
            account_id=account_id,
            start_date=start_date,
            end_date=end_date,
        )

    @command
    def update_transaction(
        self,
        transaction_id: int,
        description: Optional[str] = None,
        amount: Optional[Decimal] = None,
    ) -> CommandResult:
        """Edit description and/or amount.

        Transfers are two-sided and cannot be edited. The amount of a debt
        payment income is fixed; delete it to reverse the payment instead.
        """
        txn = self._require_transaction(transaction_id)
        if txn.type == TransactionType.TRANSFER:
            raise ValidationError("Transfers between accounts cannot be edited")

        new_amount = None
        if amount is not None:
            new_amount = require_positive_amount(amount)
            if txn.debt_payment_id is not None and new_amount != txn.amount:
                raise ValidationError(
                    "The amount of a debt payment cannot be edited; delete it to reverse the payment"
                )
        new_description = None
        if description is not None:
            new_description = require_text(description, "Description")

        self.db.update_transaction(
            self.user_id,
            transaction_id,
            description=new_description,
            amount=new_amount,
        )
        return CommandResult.success(f"Updated transaction {transaction_id}")

    @command
    def set_reconciled(self, transaction_id: int, is_reconciled: bool) -> CommandResult:
        """Mark a transaction as checked (or unchecked) against a statement."""
        self._require_transaction(transaction_id)
        self.db.update_transaction(self.user_id, transaction_id, is_reconciled=is_reconciled)
        state = "reconciled" if is_reconciled else "not reconciled"
        return CommandResult.success(f"Transaction {transaction_id} marked as {state}", is_reconciled)

    @command
    def toggle_reconciled(self, transaction_id: int) -> CommandResult:
        """Flip the reconciliation flag."""
        txn = self._require_transaction(transaction_id)
        return self.set_reconciled(transaction_id, not txn.is_reconciled)

    @command
    def delete_transaction(self, transaction_id: int) -> CommandResult:
        """Delete a transaction.

        A transaction recorded by a debt settlement is reversed instead, which
        also removes the payment and reopens the debt.
        """
        txn = self._require_transaction(transaction_id)
        if txn.debt_payment_id is not None:
            return SettlementService(self.db, self.user_id).reverse(transaction_id)

        self.db.delete_transaction(self.user_id, transaction_id)
        logger.info("transaction_deleted", user_id=self.user_id, transaction_id=transaction_id)
        return CommandResult.success(f"Deleted transaction {transaction_id}")
