"""Tests for debt registration, summaries and the pending report."""

from datetime import datetime
from decimal import Decimal

import pytest

from pocketbook.domain.debt import LOAN_CATEGORY
from pocketbook.domain.entities import DebtStatus
from pocketbook.domain.errors import NotFoundError


def test_register_debt_creates_person_once(debt_service, temp_db, user_id):
    """Test people are created on first use and reused after."""
    first = debt_service.register_debt("Ana", "Dinner", Decimal("100"))
    second = debt_service.register_debt("Ana", "Taxi", Decimal("15.50"))

    assert first.ok and second.ok
    assert first.message == f"Registered debt {first.value} for Ana"
    people = temp_db.list_people(user_id)
    assert [p.name for p in people] == ["Ana"]
    assert debt_service.get_debt(first.value).person_id == people[0].id
    assert debt_service.get_debt(first.value).status == DebtStatus.PENDING


def test_register_debt_validation(debt_service, temp_db, user_id):
    """Test invalid debts create nothing, including the person."""
    assert debt_service.register_debt("Ana", "Dinner", Decimal("0")).kind == "validation"
    assert debt_service.register_debt("", "Dinner", Decimal("10")).kind == "validation"
    assert debt_service.register_debt("Ana", "Dinner", Decimal("10"), account_id=7).kind == "not_found"
    assert temp_db.list_people(user_id) == []
    assert temp_db.list_debts(user_id) == []


def test_register_loan(debt_service, sample_account, balance_service):
    """Test loans belong to an account and lower its balance while pending."""
    result = debt_service.register_loan("Car repair", Decimal("300"), sample_account.id)

    assert result.ok
    debt = debt_service.get_debt(result.value)
    assert debt.person_id is None
    assert debt.category == LOAN_CATEGORY
    assert balance_service.account_balance(sample_account.id) == Decimal("-300.00")


def test_register_loan_needs_account(debt_service):
    """Test loans without an account are rejected."""
    result = debt_service.register_loan("Car repair", Decimal("300"), None)

    assert not result.ok
    assert result.kind == "validation"


def test_summary_derives_original_amount(debt_service, settlement_service):
    """Test original amount = remaining + paid."""
    debt_id = debt_service.register_debt("Luis", "Concert", Decimal("80")).value
    settlement_service.settle(debt_id, Decimal("30"))

    summary = debt_service.get_summary(debt_id)

    assert summary.debtor == "Luis"
    assert summary.total_paid == Decimal("30.00")
    assert summary.debt.total_amount == Decimal("50.00")
    assert summary.original_amount == Decimal("80.00")


def test_list_summaries_filters(debt_service, settlement_service, sample_account):
    """Test status and search filters."""
    dinner = debt_service.register_debt("Ana", "Dinner", Decimal("100")).value
    debt_service.register_debt("Luis", "Concert", Decimal("80"))
    debt_service.register_loan("Car repair", Decimal("300"), sample_account.id)
    settlement_service.settle_full(dinner)

    pending = debt_service.list_summaries(status=DebtStatus.PENDING)
    by_name = debt_service.list_summaries(search="luis")
    by_reason = debt_service.list_summaries(search="DINNER")

    assert sorted(s.debt.reason for s in pending) == ["Car repair", "Concert"]
    assert [s.debt.reason for s in by_name] == ["Concert"]
    assert [s.debt.reason for s in by_reason] == ["Dinner"]
    assert {s.debtor for s in debt_service.list_summaries()} == {"Ana", "Luis", "Unknown"}


def test_pending_report(debt_service, settlement_service):
    """Test the text report lists pending debts per person with subtotals."""
    debt_service.register_debt(
        "Ana", "Dinner", Decimal("100"), created_at=datetime(2024, 3, 2, 20, 0)
    )
    taxi = debt_service.register_debt(
        "Ana", "Taxi", Decimal("15.50"), created_at=datetime(2024, 3, 5)
    ).value
    debt_service.register_debt("Luis", "Concert", Decimal("80"), created_at=datetime(2024, 3, 9))
    paid = debt_service.register_debt("Rosa", "Book", Decimal("20")).value
    settlement_service.settle(taxi, Decimal("5.50"))
    settlement_service.settle_full(paid)

    report = debt_service.pending_report(["Ana", "Rosa"])

    assert report.startswith("Debt report")
    assert "- Dinner | 02/03/2024 | Pending: S/100.00" in report
    assert "- Taxi | 05/03/2024 | Pending: S/10.00" in report
    assert "Total pending for Ana: S/110.00" in report
    assert "Rosa" not in report
    assert "Luis" not in report


def test_get_summary_missing(debt_service):
    """Test a missing debt raises NotFoundError."""
    with pytest.raises(NotFoundError):
        debt_service.get_summary(404)
