"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so string columns become enums
and stored numerics become cent-rounded Decimals in one place.
"""

from pocketbook.domain import entities as domain
from pocketbook.database.models import (
    Account as ORMAccount,
    Person as ORMPerson,
    Transaction as ORMTransaction,
    Debt as ORMDebt,
    DebtPayment as ORMDebtPayment,
    Pocket as ORMPocket,
    PocketTransaction as ORMPocketTransaction,
)
from pocketbook.utils.amount_parser import quantize_amount


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        user_id=orm_account.user_id,
        name=orm_account.name,
        created_at=orm_account.created_at,
    )


def person_to_domain(orm_person: ORMPerson) -> domain.Person:
    """Convert SQLAlchemy Person model to domain Person entity."""
    return domain.Person(
        id=orm_person.id,
        user_id=orm_person.user_id,
        name=orm_person.name,
        created_at=orm_person.created_at,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        user_id=orm_transaction.user_id,
        type=domain.TransactionType(orm_transaction.type),
        amount=quantize_amount(orm_transaction.amount),
        description=orm_transaction.description,
        category=orm_transaction.category,
        account_id=orm_transaction.account_id,
        destination_account_id=orm_transaction.destination_account_id,
        created_at=orm_transaction.created_at,
        is_reconciled=bool(orm_transaction.is_reconciled),
        debt_payment_id=orm_transaction.debt_payment_id,
    )


def debt_to_domain(orm_debt: ORMDebt) -> domain.Debt:
    """Convert SQLAlchemy Debt model to domain Debt entity."""
    return domain.Debt(
        id=orm_debt.id,
        user_id=orm_debt.user_id,
        person_id=orm_debt.person_id,
        reason=orm_debt.reason,
        category=orm_debt.category,
        total_amount=quantize_amount(orm_debt.total_amount),
        status=domain.DebtStatus(orm_debt.status),
        account_id=orm_debt.account_id,
        created_at=orm_debt.created_at,
    )


def debt_payment_to_domain(orm_payment: ORMDebtPayment) -> domain.DebtPayment:
    """Convert SQLAlchemy DebtPayment model to domain DebtPayment entity."""
    return domain.DebtPayment(
        id=orm_payment.id,
        user_id=orm_payment.user_id,
        debt_id=orm_payment.debt_id,
        amount=quantize_amount(orm_payment.amount),
        note=orm_payment.note,
        paid_at=orm_payment.paid_at,
    )


def pocket_to_domain(orm_pocket: ORMPocket) -> domain.Pocket:
    """Convert SQLAlchemy Pocket model to domain Pocket entity."""
    return domain.Pocket(
        id=orm_pocket.id,
        user_id=orm_pocket.user_id,
        name=orm_pocket.name,
        account_id=orm_pocket.account_id,
        created_at=orm_pocket.created_at,
    )


def pocket_transaction_to_domain(
    orm_movement: ORMPocketTransaction,
) -> domain.PocketTransaction:
    """Convert SQLAlchemy PocketTransaction model to domain entity."""
    return domain.PocketTransaction(
        id=orm_movement.id,
        user_id=orm_movement.user_id,
        pocket_id=orm_movement.pocket_id,
        type=domain.PocketTransactionType(orm_movement.type),
        amount=quantize_amount(orm_movement.amount),
        description=orm_movement.description,
        created_at=orm_movement.created_at,
    )
