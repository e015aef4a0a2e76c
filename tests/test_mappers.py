"""Tests for database mappers."""

from datetime import datetime, UTC
from decimal import Decimal

from pocketbook.database.models import (
    Account as ORMAccount,
    Debt as ORMDebt,
    DebtPayment as ORMDebtPayment,
    PocketTransaction as ORMPocketTransaction,
    Transaction as ORMTransaction,
)
from pocketbook.database.mappers import (
    account_to_domain,
    debt_payment_to_domain,
    debt_to_domain,
    pocket_transaction_to_domain,
    transaction_to_domain,
)
from pocketbook.domain.entities import (
    Account,
    DebtStatus,
    PocketTransactionType,
    Transaction,
    TransactionType,
)


class TestAccountMapper:
    """Tests for Account mapper."""

    def test_account_to_domain(self):
        """Test converting ORM Account to domain Account."""
        orm_account = ORMAccount(
            id=1,
            user_id="ana",
            name="BCP",
            created_at=datetime.now(UTC),
        )
        domain_account = account_to_domain(orm_account)

        assert isinstance(domain_account, Account)
        assert domain_account.id == 1
        assert domain_account.user_id == "ana"
        assert domain_account.name == "BCP"
        assert domain_account.created_at == orm_account.created_at


class TestTransactionMapper:
    """Tests for Transaction mapper."""

    def test_transaction_to_domain(self):
        """Test type becomes an enum and amount is rounded to cents."""
        orm_txn = ORMTransaction(
            id=7,
            user_id="ana",
            type="movimiento",
            amount=Decimal("200.5"),
            description="From BCP to Cash",
            category=None,
            account_id=1,
            destination_account_id=2,
            created_at=datetime(2024, 3, 1),
            is_reconciled=True,
        )
        txn = transaction_to_domain(orm_txn)

        assert isinstance(txn, Transaction)
        assert txn.type == TransactionType.TRANSFER
        assert txn.amount == Decimal("200.50")
        assert str(txn.amount) == "200.50"
        assert txn.destination_account_id == 2
        assert txn.is_reconciled is True
        assert txn.debt_payment_id is None

    def test_unset_reconciled_flag_is_false(self):
        """Test a missing flag maps to False."""
        orm_txn = ORMTransaction(
            id=8,
            user_id="ana",
            type="gasto",
            amount=Decimal("1"),
            created_at=datetime(2024, 3, 1),
        )

        assert transaction_to_domain(orm_txn).is_reconciled is False


class TestDebtMappers:
    """Tests for Debt and DebtPayment mappers."""

    def test_debt_to_domain(self):
        """Test status becomes an enum."""
        orm_debt = ORMDebt(
            id=3,
            user_id="ana",
            person_id=2,
            reason="Dinner",
            total_amount=Decimal("60"),
            status="pending",
            created_at=datetime(2024, 3, 2),
        )
        debt = debt_to_domain(orm_debt)

        assert debt.status == DebtStatus.PENDING
        assert debt.total_amount == Decimal("60.00")
        assert debt.account_id is None
        assert not debt.is_paid

    def test_debt_payment_to_domain(self):
        """Test converting a payment."""
        paid_at = datetime(2024, 3, 5, 10, 0)
        payment = debt_payment_to_domain(
            ORMDebtPayment(id=1, user_id="ana", debt_id=3, amount=Decimal("40"), note="partial", paid_at=paid_at)
        )

        assert payment.amount == Decimal("40.00")
        assert payment.note == "partial"
        assert payment.paid_at == paid_at


class TestPocketTransactionMapper:
    """Tests for PocketTransaction mapper."""

    def test_pocket_transaction_to_domain(self):
        """Test movement type becomes an enum."""
        movement = pocket_transaction_to_domain(
            ORMPocketTransaction(
                id=1,
                user_id="ana",
                pocket_id=4,
                type="retiro",
                amount=Decimal("12.345"),
                description="Withdrawal from pocket Vacation",
                created_at=datetime(2024, 3, 5),
            )
        )

        assert movement.type == PocketTransactionType.WITHDRAWAL
        assert movement.amount == Decimal("12.35")
