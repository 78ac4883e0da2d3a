"""Abstract database interface.

Services read a full snapshot through this interface on every request; the
classification and reporting functions never touch it directly.
"""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import date

# Import entities directly to avoid circular import through domain/__init__.py
from agencyledger.domain.entities import (
    BankAccount,
    Client,
    PreparedTransaction,
    Project,
    TeamMember,
    TimeEntry,
    Transaction,
    TransactionStatus,
)


class Database(ABC):
    """Abstract database interface for agencyledger."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Client operations
    @abstractmethod
    def create_client(self, name: str) -> int:
        """Create a client. Returns client ID."""
        pass

    @abstractmethod
    def get_client(self, client_id: int) -> Optional[Client]:
        """Get client by ID."""
        pass

    @abstractmethod
    def get_client_by_name(self, name: str) -> Optional[Client]:
        """Get client by name."""
        pass

    @abstractmethod
    def list_clients(self) -> list[Client]:
        """List all clients."""
        pass

    # Project operations
    @abstractmethod
    def create_project(self, name: str, client_id: int) -> int:
        """Create a project. Returns project ID."""
        pass

    @abstractmethod
    def get_project(self, project_id: int) -> Optional[Project]:
        """Get project by ID."""
        pass

    @abstractmethod
    def list_projects(self, client_id: Optional[int] = None) -> list[Project]:
        """List projects, optionally filtered by client."""
        pass

    # Team member operations
    @abstractmethod
    def create_team_member(
        self,
        name: str,
        hourly_rate: Optional[int] = None,
        commission_percent: Optional[float] = None,
    ) -> int:
        """Create a team member. Returns member ID."""
        pass

    @abstractmethod
    def get_team_member(self, member_id: int) -> Optional[TeamMember]:
        """Get team member by ID."""
        pass

    @abstractmethod
    def list_team_members(self) -> list[TeamMember]:
        """List all team members."""
        pass

    @abstractmethod
    def update_team_member_rate(self, member_id: int, hourly_rate: Optional[int]) -> None:
        """Set or clear a team member's hourly rate."""
        pass

    @abstractmethod
    def update_team_member_commission(
        self, member_id: int, commission_percent: Optional[float]
    ) -> None:
        """Set or clear a team member's sales commission percentage."""
        pass

    # Bank account operations
    @abstractmethod
    def create_bank_account(
        self,
        name: str,
        opening_balance: int = 0,
        is_default: bool = False,
        bank_name: Optional[str] = None,
    ) -> int:
        """Create a bank account. Returns account ID.

        A new default account takes the default flag from any other account.
        """
        pass

    @abstractmethod
    def get_bank_account(self, account_id: int) -> Optional[BankAccount]:
        """Get bank account by ID."""
        pass

    @abstractmethod
    def list_bank_accounts(self) -> list[BankAccount]:
        """List bank accounts, the default one first."""
        pass

    # Time tracking operations
    @abstractmethod
    def create_time_entry(
        self,
        project_id: int,
        minutes_spent: int,
        entry_date: date,
        assignee_id: Optional[int] = None,
    ) -> int:
        """Create a time entry. Returns entry ID."""
        pass

    @abstractmethod
    def list_time_entries(self, project_id: Optional[int] = None) -> list[TimeEntry]:
        """List time entries, optionally filtered by project."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(self, prepared: PreparedTransaction) -> int:
        """Persist a prepared transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def update_transaction(self, transaction_id: int, prepared: PreparedTransaction) -> None:
        """Replace every field of a stored transaction with a prepared one."""
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        project_id: Optional[int] = None,
        status: Optional[TransactionStatus] = None,
        is_repasse: Optional[bool] = None,
    ) -> list[Transaction]:
        """List transactions with optional filters.

        Args:
            start_date: Optional competence date lower bound (inclusive)
            end_date: Optional competence date upper bound (inclusive)
            project_id: Optional project ID filter
            status: Optional status filter
            is_repasse: Optional repasse flag filter
        """
        pass

    def get_hourly_rates(self) -> dict[int, Optional[int]]:
        """Get team member ID -> hourly rate lookup."""
        return {member.id: member.hourly_rate for member in self.list_team_members()}
