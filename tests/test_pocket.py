"""Tests for savings pockets."""

from decimal import Decimal

import pytest

from pocketbook.domain.entities import TransactionType
from pocketbook.domain.pocket import MAX_POCKETS


@pytest.fixture
def vacation(pocket_service, funded_account):
    """Pocket funded from the 500.00 account."""
    result = pocket_service.create_pocket("Vacation", funded_account.id)
    assert result.ok
    return result.value


def total_money(balance_service, pocket_service, account_ids):
    accounts = sum(balance_service.account_balance(a) for a in account_ids)
    pockets = sum(p.balance for p in pocket_service.list_pockets())
    return accounts + pockets


def test_transfer_then_delete_returns_money(
    pocket_service, balance_service, funded_account, vacation
):
    """Test BCP 500 -> move 200 to pocket -> delete pocket -> BCP 500."""
    result = pocket_service.transfer_to_pocket(vacation, Decimal("200"))

    assert result.ok
    assert result.value == Decimal("200.00")
    assert balance_service.account_balance(funded_account.id) == Decimal("300.00")
    assert balance_service.pocket_balance(vacation) == Decimal("200.00")

    deleted = pocket_service.delete_pocket(vacation)

    assert deleted.ok
    assert deleted.value == Decimal("200.00")
    assert "200.00 returned" in deleted.message
    assert pocket_service.get_pocket(vacation) is None
    assert balance_service.account_balance(funded_account.id) == Decimal("500.00")


def test_moves_conserve_total(
    pocket_service, balance_service, account_service, transaction_service, funded_account, vacation
):
    """Test account plus pocket balances stay constant across moves."""
    cash = account_service.create_account("Cash").value
    transaction_service.create_transaction(
        type="ingreso", amount=Decimal("80"), description="Tip", account_id=cash
    )
    accounts = [funded_account.id, cash]
    before = total_money(balance_service, pocket_service, accounts)

    pocket_service.transfer_to_pocket(vacation, Decimal("120.50"))
    pocket_service.transfer_to_pocket(vacation, Decimal("30"), source_account_id=cash)
    pocket_service.withdraw_from_pocket(vacation, Decimal("50.25"))

    assert total_money(balance_service, pocket_service, accounts) == before
    assert balance_service.pocket_balance(vacation) == Decimal("100.25")
    # withdrawals go back to the pocket's own account
    assert balance_service.account_balance(cash) == Decimal("50.00")


def test_transfer_records_both_sides(pocket_service, temp_db, user_id, funded_account, vacation):
    """Test a transfer writes a pocket deposit and an outgoing account transfer."""
    pocket_service.transfer_to_pocket(vacation, Decimal("10"))

    movements = temp_db.list_pocket_transactions(user_id, pocket_id=vacation)
    transfers = temp_db.list_transactions(user_id, type=TransactionType.TRANSFER)
    assert [m.amount for m in movements] == [Decimal("10.00")]
    assert len(transfers) == 1
    assert transfers[0].account_id == funded_account.id
    assert transfers[0].destination_account_id is None


def test_transfer_rejects_insufficient_funds(pocket_service, balance_service, funded_account, vacation):
    """Test a transfer above the account balance changes nothing."""
    result = pocket_service.transfer_to_pocket(vacation, Decimal("500.01"))

    assert not result.ok
    assert result.kind == "validation"
    assert "Insufficient funds" in result.message
    assert balance_service.account_balance(funded_account.id) == Decimal("500.00")
    assert balance_service.pocket_balance(vacation) == Decimal("0.00")


def test_withdraw_rejects_more_than_pocket_holds(pocket_service, vacation):
    """Test a pocket cannot go negative."""
    pocket_service.transfer_to_pocket(vacation, Decimal("20"))

    result = pocket_service.withdraw_from_pocket(vacation, Decimal("20.01"))

    assert not result.ok
    assert "Insufficient funds" in result.message


@pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-1"), None])
def test_transfer_requires_positive_amount(pocket_service, vacation, amount):
    """Test non-positive amounts are rejected."""
    result = pocket_service.transfer_to_pocket(vacation, amount)

    assert not result.ok
    assert result.kind == "validation"


def test_delete_empty_pocket(pocket_service, balance_service, funded_account, vacation):
    """Test deleting an empty pocket moves no money."""
    result = pocket_service.delete_pocket(vacation)

    assert result.ok
    assert result.value == Decimal("0.00")
    assert balance_service.account_balance(funded_account.id) == Decimal("500.00")


def test_pocket_limit(pocket_service, funded_account):
    """Test no more than the maximum number of pockets can exist."""
    for i in range(MAX_POCKETS):
        assert pocket_service.create_pocket(f"Pocket {i}", funded_account.id).ok

    result = pocket_service.create_pocket("One too many", funded_account.id)

    assert not result.ok
    assert f"Maximum of {MAX_POCKETS}" in result.message


def test_create_pocket_needs_existing_account(pocket_service):
    """Test pockets must belong to an account."""
    result = pocket_service.create_pocket("Orphan", 42)

    assert not result.ok
    assert result.kind == "not_found"


def test_rename_and_list(pocket_service, vacation):
    """Test renaming shows up in the listing."""
    assert pocket_service.rename_pocket(vacation, "Cusco trip").ok

    pockets = pocket_service.list_pockets()

    assert [p.pocket.name for p in pockets] == ["Cusco trip"]
    assert pockets[0].balance == Decimal("0.00")


def test_account_with_pocket_cannot_be_deleted(account_service, funded_account, vacation):
    """Test pockets keep their account alive."""
    result = account_service.delete_account(funded_account.id)

    assert not result.ok
    assert result.kind == "dependency"
