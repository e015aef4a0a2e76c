"""Domain model entities for pocketbook.

These are pure data classes representing business concepts, independent of
database schema. Every stored entity carries the ``user_id`` of its owner so
that services never have to read the owner from ambient state.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional


class TransactionType(str, Enum):
    """Kinds of money movement recorded as transactions."""

    INCOME = "ingreso"
    EXPENSE = "gasto"
    TRANSFER = "movimiento"
    LOAN = "prestamo"
    DEBT = "deuda"  # legacy debt-as-transaction


class DebtStatus(str, Enum):
    """Debt lifecycle states."""

    PENDING = "pending"
    PAID = "paid"


class PocketTransactionType(str, Enum):
    """Pocket movement direction."""

    DEPOSIT = "deposito"
    WITHDRAWAL = "retiro"


@dataclass(frozen=True)
class Account:
    """Money pool (bank account, cash...) domain entity."""

    id: int
    user_id: str
    name: str
    created_at: datetime


@dataclass(frozen=True)
class Person:
    """Third party who owes the user money."""

    id: int
    user_id: str
    name: str
    created_at: datetime


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity."""

    id: int
    user_id: str
    type: TransactionType
    amount: Decimal
    description: Optional[str]
    category: Optional[str]
    account_id: Optional[int]
    destination_account_id: Optional[int]
    created_at: datetime
    is_reconciled: bool = False
    debt_payment_id: Optional[int] = None


@dataclass(frozen=True)
class Debt:
    """Money owed to the user.

    ``total_amount`` is what remains to be paid. A debt without a person is a
    loan registered against an account.
    """

    id: int
    user_id: str
    person_id: Optional[int]
    reason: str
    category: Optional[str]
    total_amount: Decimal
    status: DebtStatus
    account_id: Optional[int]
    created_at: datetime

    @property
    def is_paid(self) -> bool:
        return self.status == DebtStatus.PAID


@dataclass(frozen=True)
class DebtPayment:
    """A (full or partial) repayment of a debt."""

    id: int
    user_id: str
    debt_id: int
    amount: Decimal
    note: str
    paid_at: datetime


@dataclass(frozen=True)
class Pocket:
    """Savings pocket earmarked from a parent account."""

    id: int
    user_id: str
    name: str
    account_id: int
    created_at: datetime


@dataclass(frozen=True)
class PocketTransaction:
    """Deposit into or withdrawal from a pocket."""

    id: int
    user_id: str
    pocket_id: int
    type: PocketTransactionType
    amount: Decimal
    description: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class DebtSummary:
    """Debt enriched with its payment history."""

    debt: Debt
    person_name: Optional[str]
    payments: tuple[DebtPayment, ...]
    total_paid: Decimal
    original_amount: Decimal

    @property
    def debtor(self) -> str:
        """Name used when grouping debts; loans have no person."""
        return self.person_name or "Unknown"


@dataclass(frozen=True)
class AccountBalance:
    """Computed balance of one account."""

    account: Account
    balance: Decimal


@dataclass(frozen=True)
class PocketBalance:
    """Computed balance of one pocket."""

    pocket: Pocket
    balance: Decimal
    movements: tuple[PocketTransaction, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Overview:
    """Aggregated figures for one user."""

    income: Decimal
    expense: Decimal
    pending_debt: Decimal
    net_balance: Decimal
    accounts: tuple[AccountBalance, ...]
    pockets: tuple[PocketBalance, ...]
    pocket_savings: Decimal
