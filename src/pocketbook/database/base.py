"""Abstract database interface.

Every query and write is scoped by ``user_id``; records owned by another
user behave as if they did not exist.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

# Import entities directly to avoid circular import through domain services
from pocketbook.domain.entities import (
    Account,
    Person,
    Transaction,
    TransactionType,
    Debt,
    DebtStatus,
    DebtPayment,
    Pocket,
    PocketTransaction,
    PocketTransactionType,
)


class Database(ABC):
    """Abstract record store for pocketbook."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def atomic(self) -> AbstractContextManager[None]:
        """Group several writes into one unit.

        Writes made inside the block are committed together when it exits
        normally and rolled back if it raises. Blocks may be nested; only
        the outermost one commits.
        """
        pass

    # Account operations
    @abstractmethod
    def create_account(self, user_id: str, name: str) -> int:
        """Create a new account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, user_id: str, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def list_accounts(self, user_id: str) -> list[Account]:
        """List all accounts ordered by name."""
        pass

    @abstractmethod
    def update_account_name(self, user_id: str, account_id: int, name: str) -> None:
        """Rename an account."""
        pass

    @abstractmethod
    def delete_account(self, user_id: str, account_id: int) -> None:
        """Delete an account."""
        pass

    @abstractmethod
    def get_account_reference_counts(self, user_id: str, account_id: int) -> dict[str, int]:
        """Count records pointing at an account.

        Returns a dict with ``transaction``, ``debt`` and ``pocket`` counts.
        """
        pass

    # Person operations
    @abstractmethod
    def create_person(self, user_id: str, name: str) -> int:
        """Create a person. Returns person ID."""
        pass

    @abstractmethod
    def get_person(self, user_id: str, person_id: int) -> Optional[Person]:
        """Get person by ID."""
        pass

    @abstractmethod
    def get_person_by_name(self, user_id: str, name: str) -> Optional[Person]:
        """Get person by exact name."""
        pass

    @abstractmethod
    def list_people(self, user_id: str) -> list[Person]:
        """List all people ordered by name."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        user_id: str,
        type: TransactionType,
        amount: Decimal,
        description: Optional[str] = None,
        category: Optional[str] = None,
        account_id: Optional[int] = None,
        destination_account_id: Optional[int] = None,
        created_at: Optional[datetime] = None,
        is_reconciled: bool = False,
        debt_payment_id: Optional[int] = None,
    ) -> int:
        """Create a transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, user_id: str, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def update_transaction(
        self,
        user_id: str,
        transaction_id: int,
        description: Optional[str] = None,
        amount: Optional[Decimal] = None,
        is_reconciled: Optional[bool] = None,
        clear_debt_payment: bool = False,
    ) -> None:
        """Update transaction fields.

        Fields left as None are not changed. ``clear_debt_payment`` drops the
        link to a debt payment.
        """
        pass

    @abstractmethod
    def delete_transaction(self, user_id: str, transaction_id: int) -> None:
        """Delete a transaction."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        user_id: str,
        type: Optional[TransactionType] = None,
        account_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        debt_payment_id: Optional[int] = None,
    ) -> list[Transaction]:
        """List transactions, newest first.

        Args:
            user_id: Owner
            type: Optional transaction type filter
            account_id: Optional filter on origin or destination account
            start_date: Optional start date filter (inclusive)
            end_date: Optional end date filter (inclusive)
            debt_payment_id: Optional filter on linked debt payment
        """
        pass

    # Debt operations
    @abstractmethod
    def create_debt(
        self,
        user_id: str,
        reason: str,
        total_amount: Decimal,
        person_id: Optional[int] = None,
        account_id: Optional[int] = None,
        category: Optional[str] = None,
        created_at: Optional[datetime] = None,
    ) -> int:
        """Create a pending debt. Returns debt ID."""
        pass

    @abstractmethod
    def get_debt(self, user_id: str, debt_id: int) -> Optional[Debt]:
        """Get debt by ID."""
        pass

    @abstractmethod
    def list_debts(self, user_id: str, status: Optional[DebtStatus] = None) -> list[Debt]:
        """List debts, newest first, optionally filtered by status."""
        pass

    @abstractmethod
    def update_debt(
        self, user_id: str, debt_id: int, total_amount: Decimal, status: DebtStatus
    ) -> None:
        """Set a debt's remaining amount and status."""
        pass

    @abstractmethod
    def delete_debt(self, user_id: str, debt_id: int) -> None:
        """Delete a debt."""
        pass

    # Debt payment operations
    @abstractmethod
    def create_debt_payment(
        self,
        user_id: str,
        debt_id: int,
        amount: Decimal,
        note: str,
        paid_at: Optional[datetime] = None,
    ) -> int:
        """Record a debt payment. Returns payment ID."""
        pass

    @abstractmethod
    def get_debt_payment(self, user_id: str, payment_id: int) -> Optional[DebtPayment]:
        """Get debt payment by ID."""
        pass

    @abstractmethod
    def list_debt_payments(
        self, user_id: str, debt_id: Optional[int] = None
    ) -> list[DebtPayment]:
        """List debt payments in payment order, optionally for one debt."""
        pass

    @abstractmethod
    def delete_debt_payment(self, user_id: str, payment_id: int) -> None:
        """Delete a debt payment."""
        pass

    # Pocket operations
    @abstractmethod
    def create_pocket(self, user_id: str, name: str, account_id: int) -> int:
        """Create a pocket. Returns pocket ID."""
        pass

    @abstractmethod
    def get_pocket(self, user_id: str, pocket_id: int) -> Optional[Pocket]:
        """Get pocket by ID."""
        pass

    @abstractmethod
    def list_pockets(self, user_id: str) -> list[Pocket]:
        """List pockets in creation order."""
        pass

    @abstractmethod
    def update_pocket_name(self, user_id: str, pocket_id: int, name: str) -> None:
        """Rename a pocket."""
        pass

    @abstractmethod
    def delete_pocket(self, user_id: str, pocket_id: int) -> None:
        """Delete a pocket and its movements."""
        pass

    @abstractmethod
    def create_pocket_transaction(
        self,
        user_id: str,
        pocket_id: int,
        type: PocketTransactionType,
        amount: Decimal,
        description: Optional[str] = None,
    ) -> int:
        """Record a pocket deposit or withdrawal. Returns its ID."""
        pass

    @abstractmethod
    def list_pocket_transactions(
        self, user_id: str, pocket_id: Optional[int] = None
    ) -> list[PocketTransaction]:
        """List pocket movements, newest first, optionally for one pocket."""
        pass
