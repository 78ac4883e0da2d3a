"""Shared pytest fixtures for agencyledger tests."""

import tempfile
import os
from datetime import date
import pytest

from agencyledger.database.factories import create_sqlite_database
from agencyledger.domain.bank_account import BankAccountService
from agencyledger.domain.commission import CommissionService
from agencyledger.domain.directory import DirectoryService
from agencyledger.domain.entities import (
    CostType,
    PreparedTransaction,
    TransactionNature,
    TransactionStatus,
    TransactionType,
)
from agencyledger.domain.reports import ReportService
from agencyledger.domain.transaction import TransactionService


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

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def directory_service(temp_db):
    """Create a DirectoryService with a temporary database."""
    return DirectoryService(temp_db)


@pytest.fixture
def bank_account_service(temp_db):
    """Create a BankAccountService with a temporary database."""
    return BankAccountService(temp_db)


@pytest.fixture
def report_service(temp_db):
    """Create a ReportService with a 15% tax rate."""
    return ReportService(temp_db, tax_rate_percent=15)


@pytest.fixture
def commission_service(temp_db, transaction_service):
    """Create a CommissionService sharing the transaction service."""
    return CommissionService(temp_db, transaction_service=transaction_service)


@pytest.fixture
def sample_client(directory_service, temp_db):
    """Create a sample client."""
    client_id = directory_service.create_client("Acme")
    return temp_db.get_client(client_id)


@pytest.fixture
def sample_project(directory_service, sample_client, temp_db):
    """Create a sample project for the sample client."""
    project_id = directory_service.create_project("Website", sample_client.id)
    return temp_db.get_project(project_id)


@pytest.fixture
def sample_member(directory_service, temp_db):
    """Create a team member costing 100,00 per hour."""
    member_id = directory_service.create_team_member("Ana", hourly_rate=10000)
    return temp_db.get_team_member(member_id)


@pytest.fixture
def sample_account(bank_account_service, temp_db):
    """Create the default bank account opening at 1.000,00."""
    account_id = bank_account_service.create_account(
        "Conta PJ", opening_balance=100000, is_default=True, bank_name="Itaú"
    )
    return temp_db.get_bank_account(account_id)


@pytest.fixture
def raw_revenue():
    """Raw input for a valid operational revenue."""
    return {
        "description": "Fee março",
        "category": "Fee Mensal",
        "value": 100000,
        "type": "receita",
        "date": "2024-03-10",
    }


@pytest.fixture
def make_txn():
    """Factory for prepared transactions used by the pure report functions."""

    def factory(**overrides) -> PreparedTransaction:
        fields = {
            "description": "Test",
            "category": "Fee Mensal",
            "value": 1000,
            "type": TransactionType.REVENUE,
            "nature": TransactionNature.OPERATIONAL,
            "cost_type": CostType.FIXED,
            "is_repasse": False,
            "status": TransactionStatus.PENDING,
            "date": date(2024, 3, 10),
            "competence_date": date(2024, 3, 10),
        }
        fields.update(overrides)
        return PreparedTransaction(**fields)

    return factory


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
