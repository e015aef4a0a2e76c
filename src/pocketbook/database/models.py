"""SQLAlchemy models for pocketbook database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Numeric,
    Boolean,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


def _now() -> datetime:
    return datetime.now(UTC)


class Account(Base):
    """Account model."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    created_at = Column(DateTime, default=_now, nullable=False)

    __table_args__ = (UniqueConstraint("user_id", "name", name="uq_account_user_name"),)


class Person(Base):
    """Debtor model."""

    __tablename__ = "people"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    created_at = Column(DateTime, default=_now, nullable=False)

    __table_args__ = (UniqueConstraint("user_id", "name", name="uq_person_user_name"),)


class Transaction(Base):
    """Transaction model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, nullable=False, index=True)
    type = Column(String, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    description = Column(String, nullable=True)
    category = Column(String, nullable=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=True)
    destination_account_id = Column(Integer, ForeignKey("accounts.id"), nullable=True)
    created_at = Column(DateTime, default=_now, nullable=False)
    is_reconciled = Column(Boolean, default=False, nullable=False)
    debt_payment_id = Column(Integer, ForeignKey("debt_payments.id"), nullable=True)


class Debt(Base):
    """Debt (or loan, when there is no person) model."""

    __tablename__ = "debts"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, nullable=False, index=True)
    person_id = Column(Integer, ForeignKey("people.id"), nullable=True)
    reason = Column(String, nullable=False)
    category = Column(String, nullable=True)
    total_amount = Column(Numeric(12, 2), nullable=False)
    status = Column(String, nullable=False, default="pending")
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=True)
    created_at = Column(DateTime, default=_now, nullable=False)

    # Relationships
    person = relationship("Person")
    payments = relationship("DebtPayment", back_populates="debt", cascade="all, delete-orphan")


class DebtPayment(Base):
    """Debt payment model."""

    __tablename__ = "debt_payments"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, nullable=False, index=True)
    debt_id = Column(Integer, ForeignKey("debts.id"), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    note = Column(String, nullable=False)
    paid_at = Column(DateTime, default=_now, nullable=False)

    # Relationships
    debt = relationship("Debt", back_populates="payments")


class Pocket(Base):
    """Savings pocket model."""

    __tablename__ = "pockets"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    created_at = Column(DateTime, default=_now, nullable=False)

    # Relationships
    movements = relationship(
        "PocketTransaction", back_populates="pocket", cascade="all, delete-orphan"
    )


class PocketTransaction(Base):
    """Pocket deposit/withdrawal model."""

    __tablename__ = "pocket_transactions"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, nullable=False, index=True)
    pocket_id = Column(Integer, ForeignKey("pockets.id"), nullable=False)
    type = Column(String, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    description = Column(String, nullable=True)
    created_at = Column(DateTime, default=_now, nullable=False)

    # Relationships
    pocket = relationship("Pocket", back_populates="movements")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
