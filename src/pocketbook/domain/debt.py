"""Debt domain service: registration, summaries and the pending-debt report."""

from collections import defaultdict
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional, Sequence

import structlog

from pocketbook.database.base import Database
from pocketbook.domain.entities import (
    Debt,
    DebtPayment,
    DebtStatus,
    DebtSummary,
)
from pocketbook.domain.errors import (
    NotFoundError,
    ValidationError,
    account_not_found,
    debt_not_found,
)
from pocketbook.domain.results import CommandResult, command
from pocketbook.domain.validation import require_positive_amount, require_text
from pocketbook.utils.amount_parser import ZERO, format_amount

logger = structlog.get_logger(__name__)

LOAN_CATEGORY = "Prestamo"


def summarize_debt(
    debt: Debt, payments: Iterable[DebtPayment], person_name: Optional[str] = None
) -> DebtSummary:
    """Attach payments to a debt and derive what was originally owed.

    The original amount is not stored; it is what remains plus everything
    paid so far.
    """
    own = tuple(p for p in payments if p.debt_id == debt.id)
    total_paid = sum((p.amount for p in own), ZERO)
    return DebtSummary(
        debt=debt,
        person_name=person_name,
        payments=own,
        total_paid=total_paid,
        original_amount=debt.total_amount + total_paid,
    )


def group_by_person(summaries: Iterable[DebtSummary]) -> dict[str, list[DebtSummary]]:
    """Group summaries by debtor name, keeping input order inside each group."""
    grouped: dict[str, list[DebtSummary]] = defaultdict(list)
    for summary in summaries:
        grouped[summary.debtor].append(summary)
    return dict(grouped)


def matches_search(summary: DebtSummary, search: str) -> bool:
    """Case-insensitive match on debtor name or reason."""
    needle = search.lower()
    return needle in summary.debtor.lower() or needle in (summary.debt.reason or "").lower()


def render_pending_report(summaries: Sequence[DebtSummary], people: Iterable[str]) -> str:
    """Plain-text report of pending debts for the selected people.

    Each person gets one line per pending debt and a subtotal. People with
    nothing pending are left out.
    """
    lines = ["Debt report", ""]
    grouped = group_by_person(s for s in summaries if not s.debt.is_paid)
    for name in people:
        pending = grouped.get(name)
        if not pending:
            continue
        subtotal = sum((s.debt.total_amount for s in pending), ZERO)
        lines.append(name)
        for s in pending:
            created = s.debt.created_at.strftime("%d/%m/%Y")
            lines.append(
                f"- {s.debt.reason} | {created} | Pending: {format_amount(s.debt.total_amount)}"
            )
        lines.append(f"Total pending for {name}: {format_amount(subtotal)}")
        lines.append("")
    return "\n".join(lines)


class DebtService:
    """Service for registering and reviewing debts."""

    def __init__(self, db: Database, user_id: str):
        """Initialize debt service.

        Args:
            db: Database instance
            user_id: Owner of the debts
        """
        self.db = db
        self.user_id = user_id

    def _check_account(self, account_id: Optional[int]) -> None:
        if account_id is not None and self.db.get_account(self.user_id, account_id) is None:
            raise NotFoundError(account_not_found(account_id))

    def _person_id(self, name: str) -> int:
        """Look a person up by name, creating them on first use."""
        person = self.db.get_person_by_name(self.user_id, name)
        if person is not None:
            return person.id
        person_id = self.db.create_person(self.user_id, name)
        logger.info("person_created", user_id=self.user_id, person_id=person_id)
        return person_id

    @command
    def register_debt(
        self,
        person_name: str,
        reason: str,
        amount: Decimal,
        account_id: Optional[int] = None,
        created_at: Optional[datetime] = None,
    ) -> CommandResult:
        """Register money a person owes the user.

        Returns:
            Result whose value is the new debt ID
        """
        person_name = require_text(person_name, "Person name")
        reason = require_text(reason, "Reason")
        amount = require_positive_amount(amount)
        self._check_account(account_id)

        with self.db.atomic():
            person_id = self._person_id(person_name)
            debt_id = self.db.create_debt(
                self.user_id,
                reason=reason,
                total_amount=amount,
                person_id=person_id,
                account_id=account_id,
                created_at=created_at,
            )
        logger.info("debt_registered", user_id=self.user_id, debt_id=debt_id, amount=str(amount))
        return CommandResult.success(f"Registered debt {debt_id} for {person_name}", debt_id)

    @command
    def register_loan(
        self,
        reason: str,
        amount: Decimal,
        account_id: int,
        category: Optional[str] = None,
        created_at: Optional[datetime] = None,
    ) -> CommandResult:
        """Register a loan paid out of an account (a debt with no person).

        Returns:
            Result whose value is the new debt ID
        """
        reason = require_text(reason, "Reason")
        amount = require_positive_amount(amount)
        if account_id is None:
            raise ValidationError("Loans need an account")
        self._check_account(account_id)

        debt_id = self.db.create_debt(
            self.user_id,
            reason=reason,
            total_amount=amount,
            account_id=account_id,
            category=category or LOAN_CATEGORY,
            created_at=created_at,
        )
        logger.info("loan_registered", user_id=self.user_id, debt_id=debt_id, amount=str(amount))
        return CommandResult.success(f"Registered loan {debt_id}", debt_id)

    def get_debt(self, debt_id: int) -> Optional[Debt]:
        """Get debt by ID, or None if not found."""
        return self.db.get_debt(self.user_id, debt_id)

    def get_summary(self, debt_id: int) -> DebtSummary:
        """Debt with its payments, original amount and total paid.

        Raises:
            NotFoundError: If the debt does not exist
        """
        debt = self.db.get_debt(self.user_id, debt_id)
        if debt is None:
            raise NotFoundError(debt_not_found(debt_id))
        person = self.db.get_person(self.user_id, debt.person_id) if debt.person_id else None
        return summarize_debt(
            debt,
            self.db.list_debt_payments(self.user_id, debt_id=debt.id),
            person.name if person else None,
        )

    def list_summaries(
        self, status: Optional[DebtStatus] = None, search: Optional[str] = None
    ) -> list[DebtSummary]:
        """List debt summaries, newest first.

        Args:
            status: Optional status filter
            search: Optional case-insensitive filter on person name or reason
        """
        debts = self.db.list_debts(self.user_id, status=status)
        payments = self.db.list_debt_payments(self.user_id)
        people = {p.id: p.name for p in self.db.list_people(self.user_id)}

        summaries = [summarize_debt(d, payments, people.get(d.person_id)) for d in debts]
        if search:
            summaries = [s for s in summaries if matches_search(s, search)]
        return summaries

    def pending_report(self, people: Iterable[str]) -> str:
        """Pending-debt text report for the given people."""
        return render_pending_report(self.list_summaries(status=DebtStatus.PENDING), people)
