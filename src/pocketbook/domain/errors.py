"""Shared domain error messages and error types."""

from decimal import Decimal


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling. ``kind`` is what command
    results report back to callers.
    """

    kind = "error"


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""

    kind = "validation"


class NotFoundError(DomainError):
    """Requested domain entity does not exist (or belongs to another user)."""

    kind = "not_found"


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""

    kind = "conflict"


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""

    kind = "dependency"


class StoreError(DomainError):
    """The record store rejected or failed a call."""

    kind = "store"


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def debt_not_found(debt_id: int) -> str:
    """Return message for missing debt."""
    return f"Debt {debt_id} not found"


def pocket_not_found(pocket_id: int) -> str:
    """Return message for missing pocket."""
    return f"Pocket {pocket_id} not found"


def duplicate_account_name(name: str) -> str:
    """Return message for an account name already in use."""
    return f"Account with name '{name}' already exists"


def invalid_payment_amount(amount: Decimal, remaining: Decimal) -> str:
    """Return message for a payment outside (0, remaining]."""
    return f"Invalid payment amount {amount}: must be greater than 0 and at most {remaining:.2f}"


def insufficient_funds(name: str, balance: Decimal, amount: Decimal) -> str:
    """Return message when a source cannot cover an amount."""
    return f"Insufficient funds in '{name}': balance {balance:.2f}, requested {amount:.2f}"


def store_failure(action: str, error: Exception) -> str:
    """Return message for an unexpected store failure."""
    return f"Could not complete {action}: {error}"


def account_delete_blocked(account_id: int, counts: dict[str, int]) -> str:
    """Return message when an account is still referenced."""
    parts = [
        f"{count} {label}{'s' if count != 1 else ''}"
        for label, count in counts.items()
        if count > 0
    ]
    return (
        f"Cannot delete account {account_id}: it has {', '.join(parts)}. "
        "Please reassign or delete them first."
    )
