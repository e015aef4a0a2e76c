"""Shared pytest fixtures for pocketbook tests."""

import tempfile
import os
from decimal import Decimal
import pytest

from pocketbook.database.factories import create_sqlite_database
from pocketbook.domain.account import AccountService
from pocketbook.domain.balance import BalanceService
from pocketbook.domain.debt import DebtService
from pocketbook.domain.pocket import PocketService
from pocketbook.domain.settlement import SettlementService
from pocketbook.domain.spreadsheet import SpreadsheetService
from pocketbook.domain.transaction import TransactionService

USER_ID = "ana@example.com"


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def user_id():
    """Owner of the records created in a test."""
    return USER_ID


@pytest.fixture
def account_service(temp_db, user_id):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db, user_id)


@pytest.fixture
def transaction_service(temp_db, user_id):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db, user_id)


@pytest.fixture
def balance_service(temp_db, user_id):
    """Create a BalanceService with a temporary database."""
    return BalanceService(temp_db, user_id)


@pytest.fixture
def debt_service(temp_db, user_id):
    """Create a DebtService with a temporary database."""
    return DebtService(temp_db, user_id)


@pytest.fixture
def settlement_service(temp_db, user_id):
    """Create a SettlementService with a temporary database."""
    return SettlementService(temp_db, user_id)


@pytest.fixture
def pocket_service(temp_db, user_id):
    """Create a PocketService with a temporary database."""
    return PocketService(temp_db, user_id)


@pytest.fixture
def spreadsheet_service(temp_db, user_id):
    """Create a SpreadsheetService with a temporary database."""
    return SpreadsheetService(temp_db, user_id)


@pytest.fixture
def sample_account(account_service):
    """Create a sample account for testing."""
    result = account_service.create_account(name="BCP")
    return account_service.get_account(result.value)


@pytest.fixture
def funded_account(sample_account, transaction_service):
    """Sample account holding 500.00 of income."""
    transaction_service.create_transaction(
        type="ingreso",
        amount=Decimal("500"),
        description="Salary",
        account_id=sample_account.id,
    )
    return sample_account


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
