"""Bank account domain service."""

from typing import Optional

import structlog

from agencyledger.database.base import Database
from agencyledger.domain.entities import BankAccount
from agencyledger.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    bank_account_not_found,
    duplicate_bank_account_name,
)

logger = structlog.get_logger(__name__)


class BankAccountService:
    """Service for managing the bank accounts paid transactions settle against."""

    def __init__(self, db: Database):
        """Initialize bank account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(
        self,
        name: str,
        opening_balance: int = 0,
        is_default: bool = False,
        bank_name: Optional[str] = None,
    ) -> int:
        """Create a new bank account.

        Args:
            name: Account name
            opening_balance: Balance before any recorded movement, in minor units
            is_default: Make this the default account
            bank_name: Optional bank name

        Returns:
            Account ID

        Raises:
            ValidationError: If the name is empty
            ConflictError: If account name already exists
        """
        name = name.strip()
        if not name:
            raise ValidationError("Bank account name is required")

        for account in self.db.list_bank_accounts():
            if account.name == name:
                raise ConflictError(duplicate_bank_account_name(name))

        account_id = self.db.create_bank_account(
            name=name,
            opening_balance=opening_balance,
            is_default=is_default,
            bank_name=bank_name.strip() if bank_name and bank_name.strip() else None,
        )
        logger.info("bank_account_created", account_id=account_id, is_default=is_default)
        return account_id

    def get_account(self, account_id: int) -> Optional[BankAccount]:
        """Get bank account by ID.

        Args:
            account_id: Account ID

        Returns:
            BankAccount entity or None if not found
        """
        return self.db.get_bank_account(account_id)

    def list_accounts(self) -> list[BankAccount]:
        """List all bank accounts, the default one first."""
        return self.db.list_bank_accounts()

    def default_account(self) -> Optional[BankAccount]:
        """Return the default account, if one is set."""
        for account in self.db.list_bank_accounts():
            if account.is_default:
                return account
        return None

    def resolve_account(self, account: str | int) -> BankAccount:
        """Resolve a bank account name or ID.

        Raises:
            NotFoundError: If the account is not found
        """
        if isinstance(account, int) or (isinstance(account, str) and account.strip().isdigit()):
            account_id = int(account)
            found = self.db.get_bank_account(account_id)
            if found is None:
                raise NotFoundError(bank_account_not_found(account_id))
            return found

        for found in self.db.list_bank_accounts():
            if found.name == account:
                return found
        raise NotFoundError(f"Bank account '{account}' not found")
