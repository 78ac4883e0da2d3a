"""Shared domain error messages and error types."""

from enum import Enum
from typing import Iterable

from agencyledger.domain.entities import ValidationIssue


class ErrorCode(str, Enum):
    """Machine-readable codes attached to validation issues."""

    REQUIRED = "required"
    TOO_LONG = "too_long"
    INVALID_TYPE = "invalid_type"
    OUT_OF_RANGE = "out_of_range"
    INVALID_CHOICE = "invalid_choice"
    INVALID_DATE = "invalid_date"
    BUSINESS_RULE_VIOLATION = "business_rule_violation"


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class TransactionValidationError(ValidationError):
    """Transaction input rejected by validation.

    Carries every collected issue, not only the first one.
    """

    def __init__(self, issues: Iterable[ValidationIssue]):
        self.issues = tuple(issues)
        super().__init__(
            "; ".join(f"{issue.field}: {issue.message}" for issue in self.issues)
        )

    @property
    def business_rule_violations(self) -> tuple[ValidationIssue, ...]:
        return tuple(
            issue
            for issue in self.issues
            if issue.code == ErrorCode.BUSINESS_RULE_VIOLATION.value
        )


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def client_not_found(client_id: int) -> str:
    """Return message for missing client."""
    return f"Client {client_id} not found"


def project_not_found(project_id: int) -> str:
    """Return message for missing project."""
    return f"Project {project_id} not found"


def team_member_not_found(member_id: int) -> str:
    """Return message for missing team member."""
    return f"Team member {member_id} not found"


def bank_account_not_found(account_id: int) -> str:
    """Return message for missing bank account."""
    return f"Bank account {account_id} not found"


def duplicate_client_name(name: str) -> str:
    """Return message for duplicate client name."""
    return f"Client with name '{name}' already exists"


def duplicate_bank_account_name(name: str) -> str:
    """Return message for duplicate bank account name."""
    return f"Bank account with name '{name}' already exists"


def invalid_commission_percent(commission_percent: float) -> str:
    """Return message for a commission outside [0, 100]."""
    return f"Commission must be between 0 and 100, got {commission_percent}"


def repasse_category_rejected(category: str) -> str:
    """Return message when a repasse is flagged on a non-media category."""
    return (
        "Repasse can only be flagged on media/ads categories; "
        f"category '{category}' is not eligible"
    )


def invalid_tax_rate(tax_rate_percent: float) -> str:
    """Return message for a tax rate outside [0, 100]."""
    return f"Tax rate must be between 0 and 100, got {tax_rate_percent}"
