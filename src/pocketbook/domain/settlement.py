"""Debt settlement: full and partial payments, reversal, deletion.

A payment writes three records (the payment, the income it produces and the
debt's new remaining amount) inside one ``Database.atomic`` block, so either
all of them land or none do. The income transaction points at its payment
through ``debt_payment_id``; reversal follows that link.

There is no version check on debts: two processes settling the same debt at
the same time can both read the old remaining amount, and the last write
wins.
"""

from dataclasses import dataclass
from datetime import datetime, UTC
from decimal import Decimal, InvalidOperation

import structlog

from pocketbook.database.base import Database
from pocketbook.domain.entities import Debt, DebtStatus, TransactionType
from pocketbook.domain.errors import (
    NotFoundError,
    ValidationError,
    debt_not_found,
    invalid_payment_amount,
    transaction_not_found,
)
from pocketbook.domain.results import CommandResult, command
from pocketbook.utils.amount_parser import ZERO, quantize_amount

logger = structlog.get_logger(__name__)

REFUND_CATEGORY = "Reembolso"
FULL_PAYMENT_NOTE = "full"
PARTIAL_PAYMENT_NOTE = "partial"


def payment_description(debt: Debt) -> str:
    """Description of the income recorded when a debt is paid."""
    return f"Payment of debt: {debt.reason}"


@dataclass(frozen=True)
class Settlement:
    """Records written by one payment."""

    debt_id: int
    payment_id: int
    transaction_id: int
    amount: Decimal
    remaining: Decimal
    status: DebtStatus


class SettlementService:
    """Service applying payments to debts."""

    def __init__(self, db: Database, user_id: str):
        """Initialize settlement service.

        Args:
            db: Database instance
            user_id: Owner of the debts
        """
        self.db = db
        self.user_id = user_id

    def _require_debt(self, debt_id: int) -> Debt:
        debt = self.db.get_debt(self.user_id, debt_id)
        if debt is None:
            raise NotFoundError(debt_not_found(debt_id))
        return debt

    @command
    def settle(self, debt_id: int, amount: Decimal, is_partial: bool = True) -> CommandResult:
        """Record a payment of ``amount`` against a pending debt.

        The amount must be greater than zero and no more than what remains.
        When nothing remains afterwards the debt becomes paid.

        Returns:
            Result whose value is a Settlement
        """
        debt = self._require_debt(debt_id)
        if debt.is_paid:
            raise ValidationError(f"Debt {debt_id} is already paid")
        try:
            requested = amount if isinstance(amount, Decimal) else Decimal(str(amount))
            amount = quantize_amount(requested)
        except (ValueError, InvalidOperation) as e:
            raise ValidationError(f"Not a valid amount: {amount!r}") from e
        # Bounds apply to the amount as given, before rounding to cents
        if amount <= ZERO or requested > debt.total_amount:
            raise ValidationError(invalid_payment_amount(requested, debt.total_amount))

        remaining = debt.total_amount - amount
        status = DebtStatus.PAID if remaining <= ZERO else DebtStatus.PENDING
        note = PARTIAL_PAYMENT_NOTE if is_partial else FULL_PAYMENT_NOTE
        now = datetime.now(UTC)

        with self.db.atomic():
            payment_id = self.db.create_debt_payment(
                self.user_id, debt_id=debt.id, amount=amount, note=note, paid_at=now
            )
            transaction_id = self.db.create_transaction(
                self.user_id,
                type=TransactionType.INCOME,
                amount=amount,
                description=payment_description(debt),
                category=REFUND_CATEGORY,
                created_at=now,
                debt_payment_id=payment_id,
            )
            self.db.update_debt(self.user_id, debt.id, total_amount=remaining, status=status)

        logger.info(
            "debt_settled",
            user_id=self.user_id,
            debt_id=debt.id,
            amount=str(amount),
            remaining=str(remaining),
            status=status.value,
        )
        settlement = Settlement(
            debt_id=debt.id,
            payment_id=payment_id,
            transaction_id=transaction_id,
            amount=amount,
            remaining=remaining,
            status=status,
        )
        if status == DebtStatus.PAID:
            message = f"Debt '{debt.reason}' paid in full"
        else:
            message = f"Registered payment of {amount:.2f}; {remaining:.2f} still pending"
        return CommandResult.success(message, settlement)

    @command
    def settle_full(self, debt_id: int) -> CommandResult:
        """Pay whatever remains on a debt."""
        debt = self._require_debt(debt_id)
        return self.settle(debt_id, debt.total_amount, is_partial=False)

    @command
    def reverse(self, transaction_id: int) -> CommandResult:
        """Undo a payment through the income transaction it produced.

        Deletes the payment and the transaction, gives the amount back to the
        debt and reopens it. This is the only way a debt's remaining amount
        goes up.
        """
        txn = self.db.get_transaction(self.user_id, transaction_id)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        if txn.debt_payment_id is None:
            raise ValidationError(f"Transaction {transaction_id} is not a debt payment")

        payment = self.db.get_debt_payment(self.user_id, txn.debt_payment_id)
        if payment is None:
            raise NotFoundError(f"Debt payment {txn.debt_payment_id} not found")
        debt = self._require_debt(payment.debt_id)
        restored = debt.total_amount + txn.amount

        with self.db.atomic():
            self.db.delete_transaction(self.user_id, txn.id)
            self.db.delete_debt_payment(self.user_id, payment.id)
            self.db.update_debt(
                self.user_id, debt.id, total_amount=restored, status=DebtStatus.PENDING
            )

        logger.info(
            "debt_payment_reversed",
            user_id=self.user_id,
            debt_id=debt.id,
            transaction_id=txn.id,
            restored=str(restored),
        )
        return CommandResult.success(
            f"Reversed payment of {txn.amount:.2f}; debt '{debt.reason}' has {restored:.2f} pending",
            restored,
        )

    @command
    def delete_debt(self, debt_id: int) -> CommandResult:
        """Delete a debt and its payments.

        Income already recorded for past payments stays; it is only
        unlinked from the deleted payments.
        """
        debt = self._require_debt(debt_id)
        payments = self.db.list_debt_payments(self.user_id, debt_id=debt.id)

        with self.db.atomic():
            for payment in payments:
                for txn in self.db.list_transactions(self.user_id, debt_payment_id=payment.id):
                    self.db.update_transaction(self.user_id, txn.id, clear_debt_payment=True)
                self.db.delete_debt_payment(self.user_id, payment.id)
            self.db.delete_debt(self.user_id, debt.id)

        logger.info(
            "debt_deleted", user_id=self.user_id, debt_id=debt.id, payments=len(payments)
        )
        return CommandResult.success(f"Deleted debt '{debt.reason}'")
