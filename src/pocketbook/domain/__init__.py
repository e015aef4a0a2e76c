"""Domain layer for pocketbook application.

Services live in their own modules (``pocketbook.domain.debt``,
``pocketbook.domain.settlement``...); entities are importable from here
without pulling in the database layer.
"""

from pocketbook.domain.entities import (
    Account,
    Debt,
    DebtPayment,
    DebtStatus,
    Person,
    Pocket,
    PocketTransaction,
    PocketTransactionType,
    Transaction,
    TransactionType,
)

__all__ = [
    "Account",
    "Debt",
    "DebtPayment",
    "DebtStatus",
    "Person",
    "Pocket",
    "PocketTransaction",
    "PocketTransactionType",
    "Transaction",
    "TransactionType",
]
