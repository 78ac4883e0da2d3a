"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic: enums are stored as their string
values and turned back into domain enums here.
"""

from agencyledger.domain import entities as domain
from agencyledger.database.models import (
    BankAccount as ORMBankAccount,
    Client as ORMClient,
    Project as ORMProject,
    TeamMember as ORMTeamMember,
    TimeEntry as ORMTimeEntry,
    Transaction as ORMTransaction,
)


def client_to_domain(orm_client: ORMClient) -> domain.Client:
    """Convert SQLAlchemy Client model to domain Client entity."""
    return domain.Client(
        id=orm_client.id,
        name=orm_client.name,
        created_at=orm_client.created_at,
    )


def project_to_domain(orm_project: ORMProject) -> domain.Project:
    """Convert SQLAlchemy Project model to domain Project entity."""
    return domain.Project(
        id=orm_project.id,
        name=orm_project.name,
        client_id=orm_project.client_id,
        created_at=orm_project.created_at,
    )


def team_member_to_domain(orm_member: ORMTeamMember) -> domain.TeamMember:
    """Convert SQLAlchemy TeamMember model to domain TeamMember entity."""
    return domain.TeamMember(
        id=orm_member.id,
        name=orm_member.name,
        hourly_rate=orm_member.hourly_rate,
        commission_percent=orm_member.commission_percent,
        created_at=orm_member.created_at,
    )


def bank_account_to_domain(orm_account: ORMBankAccount) -> domain.BankAccount:
    """Convert SQLAlchemy BankAccount model to domain BankAccount entity."""
    return domain.BankAccount(
        id=orm_account.id,
        name=orm_account.name,
        bank_name=orm_account.bank_name,
        opening_balance=orm_account.opening_balance,
        is_default=orm_account.is_default,
        created_at=orm_account.created_at,
    )


def time_entry_to_domain(orm_entry: ORMTimeEntry) -> domain.TimeEntry:
    """Convert SQLAlchemy TimeEntry model to domain TimeEntry entity."""
    return domain.TimeEntry(
        id=orm_entry.id,
        project_id=orm_entry.project_id,
        assignee_id=orm_entry.assignee_id,
        minutes_spent=orm_entry.minutes_spent,
        entry_date=orm_entry.entry_date,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        description=orm_transaction.description,
        category=orm_transaction.category,
        value=orm_transaction.value,
        type=domain.TransactionType(orm_transaction.type),
        nature=domain.TransactionNature(orm_transaction.nature),
        cost_type=domain.CostType(orm_transaction.cost_type),
        is_repasse=orm_transaction.is_repasse,
        status=domain.TransactionStatus(orm_transaction.status),
        date=orm_transaction.date,
        competence_date=orm_transaction.competence_date,
        payment_date=orm_transaction.payment_date,
        project_id=orm_transaction.project_id,
        salesperson_id=orm_transaction.salesperson_id,
        notes=orm_transaction.notes,
        created_at=orm_transaction.created_at,
        bank_account_id=orm_transaction.bank_account_id,
    )


def apply_prepared(orm_transaction: ORMTransaction, prepared: domain.PreparedTransaction) -> ORMTransaction:
    """Copy every field of a prepared transaction onto an ORM row."""
    orm_transaction.description = prepared.description
    orm_transaction.category = prepared.category
    orm_transaction.value = prepared.value
    orm_transaction.type = prepared.type.value
    orm_transaction.nature = prepared.nature.value
    orm_transaction.cost_type = prepared.cost_type.value
    orm_transaction.is_repasse = prepared.is_repasse
    orm_transaction.status = prepared.status.value
    orm_transaction.date = prepared.date
    orm_transaction.competence_date = prepared.competence_date
    orm_transaction.payment_date = prepared.payment_date
    orm_transaction.project_id = prepared.project_id
    orm_transaction.salesperson_id = prepared.salesperson_id
    orm_transaction.bank_account_id = prepared.bank_account_id
    orm_transaction.notes = prepared.notes
    return orm_transaction


def transaction_to_raw(txn: domain.Transaction) -> dict:
    """Turn a persisted transaction back into validator input.

    Used when an update merges changes onto the stored record and the result
    has to go through validation again.
    """
    return {
        "description": txn.description,
        "category": txn.category,
        "value": txn.value,
        "type": txn.type.value,
        "nature": txn.nature.value,
        "cost_type": txn.cost_type.value,
        "is_repasse": txn.is_repasse,
        "status": txn.status.value,
        "date": txn.date,
        "competence_date": txn.competence_date,
        "payment_date": txn.payment_date,
        "project_id": txn.project_id,
        "salesperson_id": txn.salesperson_id,
        "bank_account_id": txn.bank_account_id,
        "notes": txn.notes,
    }
