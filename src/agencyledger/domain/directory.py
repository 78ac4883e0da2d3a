"""Directory service for clients, projects, team members and tracked time."""

from datetime import date
from typing import Optional

from agencyledger.database.base import Database
from agencyledger.domain.entities import Client, Project, TeamMember, TimeEntry
from agencyledger.domain.errors import (
    NotFoundError,
    ValidationError,
    client_not_found,
    invalid_commission_percent,
    project_not_found,
    team_member_not_found,
)


def _check_commission(commission_percent: Optional[float]) -> None:
    if commission_percent is not None and not 0 <= commission_percent <= 100:
        raise ValidationError(invalid_commission_percent(commission_percent))


class DirectoryService:
    """Service for the records the ledger reports join against."""

    def __init__(self, db: Database):
        """Initialize directory service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_client(self, name: str) -> int:
        """Create a client.

        Raises:
            ValidationError: If the name is empty
            ConflictError: If a client with the same name exists
        """
        name = name.strip()
        if not name:
            raise ValidationError("Client name is required")
        return self.db.create_client(name=name)

    def list_clients(self) -> list[Client]:
        """List all clients."""
        return self.db.list_clients()

    def resolve_client(self, client: str | int) -> Client:
        """Resolve a client name or ID.

        Args:
            client: Client name (str) or ID (int or string representation of int)

        Raises:
            NotFoundError: If client is not found
        """
        if isinstance(client, int) or (isinstance(client, str) and client.strip().isdigit()):
            client_id = int(client)
            found = self.db.get_client(client_id)
            if found is None:
                raise NotFoundError(client_not_found(client_id))
            return found

        found = self.db.get_client_by_name(client)
        if found is None:
            raise NotFoundError(f"Client '{client}' not found")
        return found

    def create_project(self, name: str, client_id: int) -> int:
        """Create a project for an existing client.

        Raises:
            ValidationError: If the name is empty
            NotFoundError: If the client doesn't exist
        """
        name = name.strip()
        if not name:
            raise ValidationError("Project name is required")
        if self.db.get_client(client_id) is None:
            raise NotFoundError(client_not_found(client_id))
        return self.db.create_project(name=name, client_id=client_id)

    def list_projects(self, client_id: Optional[int] = None) -> list[Project]:
        """List projects, optionally for one client."""
        return self.db.list_projects(client_id=client_id)

    def create_team_member(
        self,
        name: str,
        hourly_rate: Optional[int] = None,
        commission_percent: Optional[float] = None,
    ) -> int:
        """Create a team member.

        Args:
            name: Member name
            hourly_rate: Hourly cost in minor units; None when unknown
            commission_percent: Sales commission on closed deals; None for no commission

        Raises:
            ValidationError: If the name is empty, the rate is negative or the
                commission is outside [0, 100]
        """
        name = name.strip()
        if not name:
            raise ValidationError("Team member name is required")
        if hourly_rate is not None and hourly_rate < 0:
            raise ValidationError("Hourly rate cannot be negative")
        _check_commission(commission_percent)
        return self.db.create_team_member(
            name=name, hourly_rate=hourly_rate, commission_percent=commission_percent
        )

    def set_hourly_rate(self, member_id: int, hourly_rate: Optional[int]) -> None:
        """Set or clear a team member's hourly rate."""
        if hourly_rate is not None and hourly_rate < 0:
            raise ValidationError("Hourly rate cannot be negative")
        self.db.update_team_member_rate(member_id, hourly_rate)

    def set_commission_percent(self, member_id: int, commission_percent: Optional[float]) -> None:
        """Set or clear a team member's sales commission."""
        _check_commission(commission_percent)
        self.db.update_team_member_commission(member_id, commission_percent)


    def list_team_members(self) -> list[TeamMember]:
        """List all team members."""
        return self.db.list_team_members()

    def log_time(
        self,
        project_id: int,
        minutes_spent: int,
        entry_date: Optional[date] = None,
        assignee_id: Optional[int] = None,
    ) -> int:
        """Record time spent on a project.

        Raises:
            ValidationError: If minutes are not positive
            NotFoundError: If the project or assignee doesn't exist
        """
        if minutes_spent <= 0:
            raise ValidationError("Minutes spent must be greater than zero")
        if self.db.get_project(project_id) is None:
            raise NotFoundError(project_not_found(project_id))
        if assignee_id is not None and self.db.get_team_member(assignee_id) is None:
            raise NotFoundError(team_member_not_found(assignee_id))
        return self.db.create_time_entry(
            project_id=project_id,
            minutes_spent=minutes_spent,
            entry_date=entry_date or date.today(),
            assignee_id=assignee_id,
        )

    def list_time_entries(self, project_id: Optional[int] = None) -> list[TimeEntry]:
        """List time entries, optionally for one project."""
        return self.db.list_time_entries(project_id=project_id)
