"""Balance aggregation.

The module-level functions are pure folds over in-memory records: they never
fail, return 0.00 for empty input and keep no state between calls.
``BalanceService`` loads one user's records and feeds them through.
"""

from decimal import Decimal
from typing import Iterable, Optional

from pocketbook.database.base import Database
from pocketbook.domain.entities import (
    AccountBalance,
    Debt,
    DebtStatus,
    Overview,
    PocketBalance,
    PocketTransaction,
    PocketTransactionType,
    Transaction,
    TransactionType,
)
from pocketbook.utils.amount_parser import ZERO


def _sum_type(transactions: Iterable[Transaction], txn_type: TransactionType) -> Decimal:
    return sum((t.amount for t in transactions if t.type == txn_type), ZERO)


def total_income(transactions: Iterable[Transaction]) -> Decimal:
    """Sum of income amounts."""
    return _sum_type(transactions, TransactionType.INCOME)


def total_expense(transactions: Iterable[Transaction]) -> Decimal:
    """Sum of expense amounts."""
    return _sum_type(transactions, TransactionType.EXPENSE)


def pending_debt_total(debts: Iterable[Debt], account_id: Optional[int] = None) -> Decimal:
    """Sum of what is still owed on pending debts, optionally for one account."""
    return sum(
        (
            d.total_amount
            for d in debts
            if d.status == DebtStatus.PENDING
            and (account_id is None or d.account_id == account_id)
        ),
        ZERO,
    )


def net_balance(transactions: Iterable[Transaction], debts: Iterable[Debt]) -> Decimal:
    """Income minus expense minus pending debt.

    Pending debts count as a committed outflow even though no transaction
    has moved the money yet.
    """
    transactions = list(transactions)
    return total_income(transactions) - total_expense(transactions) - pending_debt_total(debts)


def transaction_effect(account_id: int, txn: Transaction) -> Decimal:
    """Signed effect of one transaction on one account."""
    effect = ZERO
    if txn.account_id == account_id:
        effect += txn.amount if txn.type == TransactionType.INCOME else -txn.amount
    if txn.type == TransactionType.TRANSFER and txn.destination_account_id == account_id:
        effect += txn.amount
    return effect


def account_balance(
    account_id: int, transactions: Iterable[Transaction], debts: Iterable[Debt] = ()
) -> Decimal:
    """Balance of one account.

    Income into the account adds; any other type leaving it (expense,
    transfer out, loan) subtracts; transfers into it add. Pending debts
    registered against the account are subtracted as anticipated debits.
    The result does not depend on input order.
    """
    moved = sum((transaction_effect(account_id, t) for t in transactions), ZERO)
    return moved - pending_debt_total(debts, account_id=account_id)


def pocket_balance(pocket_id: int, pocket_transactions: Iterable[PocketTransaction]) -> Decimal:
    """Deposits minus withdrawals for one pocket."""
    balance = ZERO
    for movement in pocket_transactions:
        if movement.pocket_id != pocket_id:
            continue
        if movement.type == PocketTransactionType.DEPOSIT:
            balance += movement.amount
        else:
            balance -= movement.amount
    return balance


def total_pocket_savings(pocket_transactions: Iterable[PocketTransaction]) -> Decimal:
    """Sum of every pocket's balance."""
    return sum(
        (
            m.amount if m.type == PocketTransactionType.DEPOSIT else -m.amount
            for m in pocket_transactions
        ),
        ZERO,
    )


class BalanceService:
    """Service computing balances for one user from the record store."""

    def __init__(self, db: Database, user_id: str):
        """Initialize balance service.

        Args:
            db: Database instance
            user_id: Owner whose records are aggregated
        """
        self.db = db
        self.user_id = user_id

    def account_balance(self, account_id: int) -> Decimal:
        """Current balance of an account (0.00 if it has no activity)."""
        return account_balance(
            account_id,
            self.db.list_transactions(self.user_id),
            self.db.list_debts(self.user_id, status=DebtStatus.PENDING),
        )

    def pocket_balance(self, pocket_id: int) -> Decimal:
        """Current balance of a pocket (0.00 if it has no movements)."""
        return pocket_balance(
            pocket_id, self.db.list_pocket_transactions(self.user_id, pocket_id=pocket_id)
        )

    def build_overview(self) -> Overview:
        """Aggregate everything the user has recorded."""
        transactions = self.db.list_transactions(self.user_id)
        debts = self.db.list_debts(self.user_id)
        movements = self.db.list_pocket_transactions(self.user_id)

        accounts = tuple(
            AccountBalance(account=acc, balance=account_balance(acc.id, transactions, debts))
            for acc in self.db.list_accounts(self.user_id)
        )
        pockets = tuple(
            PocketBalance(
                pocket=pocket,
                balance=pocket_balance(pocket.id, movements),
                movements=tuple(m for m in movements if m.pocket_id == pocket.id),
            )
            for pocket in self.db.list_pockets(self.user_id)
        )

        return Overview(
            income=total_income(transactions),
            expense=total_expense(transactions),
            pending_debt=pending_debt_total(debts),
            net_balance=net_balance(transactions, debts),
            accounts=accounts,
            pockets=pockets,
            pocket_savings=total_pocket_savings(movements),
        )
