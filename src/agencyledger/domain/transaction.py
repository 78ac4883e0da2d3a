"""Transaction domain service.

Every write goes through validate -> prepare, on creation and on every later
mutation, so the store only ever holds a last-known-valid record.
"""

from datetime import date
from typing import Any, Mapping, Optional

import structlog

from agencyledger.database.base import Database
from agencyledger.database.mappers import transaction_to_raw
from agencyledger.config.settings import get_settings
from agencyledger.domain.entities import (
    PreparedTransaction,
    Transaction,
    TransactionStatus,
)
from agencyledger.domain.errors import (
    NotFoundError,
    TransactionValidationError,
    bank_account_not_found,
    project_not_found,
    team_member_not_found,
    transaction_not_found,
)
from agencyledger.domain.preparation import prepare
from agencyledger.domain.validation import TransactionValidator

logger = structlog.get_logger(__name__)


class TransactionService:
    """Service for managing ledger transactions."""

    def __init__(self, db: Database, max_value: Optional[int] = None):
        """Initialize transaction service.

        Args:
            db: Database instance
            max_value: Largest accepted value in minor units (defaults to settings)
        """
        self.db = db
        self.max_value = max_value if max_value is not None else get_settings().max_value

    def build_transaction(
        self, raw: Mapping[str, Any], today: Optional[date] = None
    ) -> PreparedTransaction:
        """Validate and prepare raw input without persisting it.

        Args:
            raw: Raw transaction fields
            today: Reference date for date bounds and defaults

        Returns:
            PreparedTransaction

        Raises:
            TransactionValidationError: If any field is invalid
            NotFoundError: If a referenced project, salesperson or bank account doesn't exist
        """
        result = TransactionValidator(max_value=self.max_value, today=today).validate(raw)
        if not result.is_valid:
            logger.info(
                "transaction_rejected",
                fields=[issue.field for issue in result.errors],
                codes=[issue.code for issue in result.errors],
            )
            raise TransactionValidationError(result.errors)

        prepared = prepare(result.transaction, today=today)

        if prepared.project_id is not None and self.db.get_project(prepared.project_id) is None:
            raise NotFoundError(project_not_found(prepared.project_id))
        if (
            prepared.salesperson_id is not None
            and self.db.get_team_member(prepared.salesperson_id) is None
        ):
            raise NotFoundError(team_member_not_found(prepared.salesperson_id))
        if (
            prepared.bank_account_id is not None
            and self.db.get_bank_account(prepared.bank_account_id) is None
        ):
            raise NotFoundError(bank_account_not_found(prepared.bank_account_id))

        return prepared

    def create_transaction(self, raw: Mapping[str, Any], today: Optional[date] = None) -> int:
        """Create a transaction.

        Args:
            raw: Raw transaction fields (description, category, value, type, ...)
            today: Reference date for date bounds and defaults

        Returns:
            Transaction ID

        Raises:
            TransactionValidationError: If any field is invalid
            NotFoundError: If a referenced project, salesperson or bank account doesn't exist
        """
        prepared = self.build_transaction(raw, today=today)
        transaction_id = self.db.create_transaction(prepared)
        logger.info(
            "transaction_created",
            transaction_id=transaction_id,
            type=prepared.type.value,
            nature=prepared.nature.value,
            cost_type=prepared.cost_type.value,
            is_repasse=prepared.is_repasse,
            value=prepared.value,
        )
        return transaction_id

    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID.

        Args:
            transaction_id: Transaction ID

        Returns:
            Transaction entity or None if not found
        """
        return self.db.get_transaction(transaction_id)

    def require_transaction(self, transaction_id: int) -> Transaction:
        """Get transaction by ID or raise NotFoundError."""
        txn = self.db.get_transaction(transaction_id)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        return txn

    def update_transaction(
        self,
        transaction_id: int,
        changes: Mapping[str, Any],
        today: Optional[date] = None,
    ) -> PreparedTransaction:
        """Update transaction fields.

        The changes are merged onto the stored record and the result is
        validated and prepared again. A rejected update leaves the stored
        record untouched. Moving the date also moves a competence date that
        was equal to it, unless the changes set one explicitly.

        Args:
            transaction_id: Transaction ID to update
            changes: Fields to change, in the same shape as creation input
            today: Reference date for date bounds and defaults

        Returns:
            The prepared transaction that was stored

        Raises:
            NotFoundError: If the transaction or a referenced record doesn't exist
            TransactionValidationError: If the merged record is invalid
        """
        existing = self.require_transaction(transaction_id)

        raw = transaction_to_raw(existing)
        # A competence date that tracked the old date follows the new one
        if (
            "date" in changes
            and "competence_date" not in changes
            and existing.competence_date == existing.date
        ):
            raw["competence_date"] = None
        raw.update(changes)

        prepared = self.build_transaction(raw, today=today)
        self.db.update_transaction(transaction_id, prepared)
        logger.info(
            "transaction_updated",
            transaction_id=transaction_id,
            fields=sorted(changes.keys()),
        )
        return prepared

    def update_status(
        self,
        transaction_id: int,
        status: TransactionStatus | str,
        today: Optional[date] = None,
    ) -> PreparedTransaction:
        """Move a transaction to another status."""
        if isinstance(status, TransactionStatus):
            status = status.value
        return self.update_transaction(transaction_id, {"status": status}, today=today)

    def mark_paid(
        self,
        transaction_id: int,
        payment_date: Optional[date] = None,
        today: Optional[date] = None,
        bank_account_id: Optional[int] = None,
    ) -> PreparedTransaction:
        """Mark a transaction as paid.

        Args:
            transaction_id: Transaction ID
            payment_date: Settlement date; keeps the stored one, or today, when omitted
            today: Reference date for defaults
            bank_account_id: Account the payment settles against; keeps the stored one when omitted
        """
        changes: dict[str, Any] = {"status": TransactionStatus.PAID.value}
        if payment_date is not None:
            changes["payment_date"] = payment_date
        if bank_account_id is not None:
            changes["bank_account_id"] = bank_account_id
        return self.update_transaction(transaction_id, changes, today=today)

    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction.

        Args:
            transaction_id: Transaction ID to delete

        Raises:
            NotFoundError: If transaction doesn't exist
        """
        self.require_transaction(transaction_id)
        self.db.delete_transaction(transaction_id)
        logger.info("transaction_deleted", transaction_id=transaction_id)

    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        project_id: Optional[int] = None,
        status: Optional[TransactionStatus] = None,
        is_repasse: Optional[bool] = None,
    ) -> list[Transaction]:
        """List transactions with filters.

        Args:
            start_date: Optional competence date lower bound
            end_date: Optional competence date upper bound
            project_id: Optional project filter
            status: Optional status filter
            is_repasse: Optional repasse flag filter

        Returns:
            List of transaction entities, newest due date first
        """
        return self.db.list_transactions(
            start_date=start_date,
            end_date=end_date,
            project_id=project_id,
            status=status,
            is_repasse=is_repasse,
        )
