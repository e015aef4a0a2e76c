"""Tests for balance aggregation."""

from datetime import datetime
from decimal import Decimal

from pocketbook.domain.balance import (
    account_balance,
    net_balance,
    pending_debt_total,
    pocket_balance,
    total_expense,
    total_income,
    total_pocket_savings,
)
from pocketbook.domain.entities import (
    Debt,
    DebtStatus,
    PocketTransaction,
    PocketTransactionType,
    Transaction,
    TransactionType,
)

WHEN = datetime(2024, 3, 1, 12, 0)


def make_txn(id, type, amount, account_id=None, destination_account_id=None):
    return Transaction(
        id=id,
        user_id="u",
        type=type,
        amount=Decimal(amount),
        description="x",
        category=None,
        account_id=account_id,
        destination_account_id=destination_account_id,
        created_at=WHEN,
    )


def make_debt(id, amount, status=DebtStatus.PENDING, account_id=None):
    return Debt(
        id=id,
        user_id="u",
        person_id=None,
        reason="r",
        category=None,
        total_amount=Decimal(amount),
        status=status,
        account_id=account_id,
        created_at=WHEN,
    )


def make_movement(id, pocket_id, type, amount):
    return PocketTransaction(
        id=id,
        user_id="u",
        pocket_id=pocket_id,
        type=type,
        amount=Decimal(amount),
        description=None,
        created_at=WHEN,
    )


def test_empty_inputs_are_zero():
    """Test that every fold returns 0.00 for no records."""
    assert total_income([]) == Decimal("0.00")
    assert total_expense([]) == Decimal("0.00")
    assert pending_debt_total([]) == Decimal("0.00")
    assert net_balance([], []) == Decimal("0.00")
    assert account_balance(1, []) == Decimal("0.00")
    assert pocket_balance(1, []) == Decimal("0.00")
    assert total_pocket_savings([]) == Decimal("0.00")


def test_net_balance_subtracts_pending_debt_only():
    """Test net balance = income - expense - pending debt."""
    transactions = [
        make_txn(1, TransactionType.INCOME, "1000.00"),
        make_txn(2, TransactionType.EXPENSE, "250.50"),
        make_txn(3, TransactionType.TRANSFER, "99.00", account_id=1, destination_account_id=2),
    ]
    debts = [
        make_debt(1, "100.00"),
        make_debt(2, "40.00", status=DebtStatus.PAID),
    ]

    assert total_income(transactions) == Decimal("1000.00")
    assert total_expense(transactions) == Decimal("250.50")
    assert pending_debt_total(debts) == Decimal("100.00")
    assert net_balance(transactions, debts) == Decimal("649.50")


def test_account_balance_follows_direction():
    """Test income adds, outflows subtract and incoming transfers add."""
    transactions = [
        make_txn(1, TransactionType.INCOME, "500", account_id=1),
        make_txn(2, TransactionType.EXPENSE, "120", account_id=1),
        make_txn(3, TransactionType.TRANSFER, "80", account_id=1, destination_account_id=2),
        make_txn(4, TransactionType.LOAN, "50", account_id=1),
        make_txn(5, TransactionType.INCOME, "999", account_id=2),
    ]

    assert account_balance(1, transactions) == Decimal("250.00")
    assert account_balance(2, transactions) == Decimal("1079.00")
    assert account_balance(3, transactions) == Decimal("0.00")


def test_account_balance_subtracts_pending_debts_of_that_account():
    """Test pending debts against an account count as anticipated debits."""
    transactions = [make_txn(1, TransactionType.INCOME, "300", account_id=1)]
    debts = [
        make_debt(1, "100", account_id=1),
        make_debt(2, "70", account_id=2),
        make_debt(3, "30", account_id=1, status=DebtStatus.PAID),
    ]

    assert account_balance(1, transactions, debts) == Decimal("200.00")


def test_account_balance_ignores_order():
    """Test that shuffling the input does not change the result."""
    transactions = [
        make_txn(1, TransactionType.INCOME, "10.10", account_id=1),
        make_txn(2, TransactionType.EXPENSE, "3.33", account_id=1),
        make_txn(3, TransactionType.TRANSFER, "1.01", account_id=2, destination_account_id=1),
        make_txn(4, TransactionType.EXPENSE, "0.07", account_id=1),
    ]

    forward = account_balance(1, transactions)
    assert forward == account_balance(1, list(reversed(transactions)))
    assert forward == account_balance(1, transactions[2:] + transactions[:2])
    assert forward == Decimal("7.71")


def test_pocket_balance_and_savings():
    """Test deposits minus withdrawals per pocket and overall."""
    movements = [
        make_movement(1, 1, PocketTransactionType.DEPOSIT, "200"),
        make_movement(2, 1, PocketTransactionType.WITHDRAWAL, "50"),
        make_movement(3, 2, PocketTransactionType.DEPOSIT, "25.25"),
    ]

    assert pocket_balance(1, movements) == Decimal("150.00")
    assert pocket_balance(2, movements) == Decimal("25.25")
    assert total_pocket_savings(movements) == Decimal("175.25")


def test_overview_matches_pure_functions(
    balance_service, transaction_service, debt_service, funded_account
):
    """Test the overview aggregates the stored records."""
    transaction_service.create_transaction(
        type="gasto", amount=Decimal("45.90"), description="Groceries", account_id=funded_account.id
    )
    debt_service.register_debt("Luis", "Dinner", Decimal("100"))

    overview = balance_service.build_overview()

    assert overview.income == Decimal("500.00")
    assert overview.expense == Decimal("45.90")
    assert overview.pending_debt == Decimal("100.00")
    assert overview.net_balance == Decimal("354.10")
    assert [a.balance for a in overview.accounts] == [Decimal("454.10")]
    assert overview.pockets == ()
    assert overview.pocket_savings == Decimal("0.00")
