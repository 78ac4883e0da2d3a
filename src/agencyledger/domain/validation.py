"""Transaction input validation.

Validation only reports problems. It never rewrites nature or cost type; the
preparation step does that, so what failed and what was auto-corrected are
never mixed up.
"""

from datetime import date
from enum import Enum
from typing import Any, Mapping, Optional, TypeVar

from agencyledger.domain.categories import is_repasse_eligible
from agencyledger.domain.entities import (
    CostType,
    TransactionNature,
    TransactionStatus,
    TransactionType,
    ValidatedTransaction,
    ValidationIssue,
    ValidationResult,
)
from agencyledger.domain.errors import (
    ErrorCode,
    TransactionValidationError,
    repasse_category_rejected,
)
from agencyledger.utils.date_parser import one_year_after, parse_iso_date

DEFAULT_MAX_VALUE = 100_000_000_000
MAX_DESCRIPTION_LENGTH = 500
MAX_CATEGORY_LENGTH = 100
MAX_NOTES_LENGTH = 1000

E = TypeVar("E", bound=Enum)


def parse_choice(enum_cls: type[E], value: Any) -> E:
    """Resolve an enum from its stored value or its member name.

    Both "despesa" and "expense" resolve to TransactionType.EXPENSE.

    Raises:
        ValueError: If the value matches neither
    """
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        candidate = value.strip().lower()
        for member in enum_cls:
            if candidate in (str(member.value).lower(), member.name.lower()):
                return member
    raise ValueError(f"'{value}' is not a valid {enum_cls.__name__}")


class TransactionValidator:
    """Validates raw transaction input, collecting every violation."""

    def __init__(self, max_value: int = DEFAULT_MAX_VALUE, today: Optional[date] = None):
        """Initialize validator.

        Args:
            max_value: Largest accepted value in minor units
            today: Reference date for the competence-date bound (defaults to today)
        """
        self.max_value = max_value
        self.today = today

    def validate(self, raw: Mapping[str, Any]) -> ValidationResult:
        """Validate raw input.

        Args:
            raw: Mapping of transaction fields

        Returns:
            ValidationResult with either a ValidatedTransaction or the issues found
        """
        issues: list[ValidationIssue] = []

        def reject(field: str, message: str, code: ErrorCode) -> None:
            issues.append(ValidationIssue(field=field, message=message, code=code.value))

        description = self._text(raw, "description", MAX_DESCRIPTION_LENGTH, reject)
        category = self._text(raw, "category", MAX_CATEGORY_LENGTH, reject)
        value = self._value(raw.get("value"), reject)

        txn_type = self._choice(raw, "type", TransactionType, None, reject)
        nature = self._choice(
            raw, "nature", TransactionNature, TransactionNature.OPERATIONAL, reject
        )
        cost_type = self._choice(raw, "cost_type", CostType, CostType.FIXED, reject)
        status = self._choice(
            raw, "status", TransactionStatus, TransactionStatus.PENDING, reject
        )

        is_repasse = raw.get("is_repasse", False)
        if is_repasse is None:
            is_repasse = False
        if not isinstance(is_repasse, bool):
            reject("is_repasse", "is_repasse must be true or false", ErrorCode.INVALID_TYPE)
            is_repasse = False

        txn_date = self._date(raw, "date", True, reject)
        competence_date = self._date(raw, "competence_date", False, reject)
        payment_date = self._date(raw, "payment_date", False, reject)

        project_id = self._reference(raw, "project_id", reject)
        salesperson_id = self._reference(raw, "salesperson_id", reject)
        bank_account_id = self._reference(raw, "bank_account_id", reject)

        notes = raw.get("notes")
        if notes is not None:
            if not isinstance(notes, str):
                reject("notes", "Notes must be text", ErrorCode.INVALID_TYPE)
                notes = None
            elif len(notes) > MAX_NOTES_LENGTH:
                reject(
                    "notes",
                    f"Notes must be at most {MAX_NOTES_LENGTH} characters",
                    ErrorCode.TOO_LONG,
                )
            else:
                notes = notes.strip() or None

        # Repasse on a non-media category is rejected, never coerced
        if is_repasse and category is not None and not is_repasse_eligible(category):
            reject(
                "is_repasse",
                repasse_category_rejected(category),
                ErrorCode.BUSINESS_RULE_VIOLATION,
            )

        effective_competence = competence_date or txn_date
        if effective_competence is not None:
            limit = one_year_after(self.today or date.today())
            if effective_competence > limit:
                reject(
                    "competence_date",
                    "Competence date cannot be more than one year in the future",
                    ErrorCode.OUT_OF_RANGE,
                )

        if issues:
            return ValidationResult(errors=tuple(issues))

        return ValidationResult(
            transaction=ValidatedTransaction(
                description=description,
                category=category,
                value=value,
                type=txn_type,
                nature=nature,
                cost_type=cost_type,
                is_repasse=is_repasse,
                status=status,
                date=txn_date,
                competence_date=competence_date,
                payment_date=payment_date,
                project_id=project_id,
                salesperson_id=salesperson_id,
                bank_account_id=bank_account_id,
                notes=notes,
            )
        )

    def _text(self, raw, field, max_length, reject) -> Optional[str]:
        value = raw.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            reject(field, f"{field.capitalize()} is required", ErrorCode.REQUIRED)
            return None
        if not isinstance(value, str):
            reject(field, f"{field.capitalize()} must be text", ErrorCode.INVALID_TYPE)
            return None
        value = value.strip()
        if len(value) > max_length:
            reject(
                field,
                f"{field.capitalize()} must be at most {max_length} characters",
                ErrorCode.TOO_LONG,
            )
            return None
        return value

    def _value(self, value, reject) -> Optional[int]:
        if value is None:
            reject("value", "Value is required", ErrorCode.REQUIRED)
            return None
        # bool is an int subclass
        if isinstance(value, bool) or not isinstance(value, int):
            reject("value", "Value must be an integer in minor units", ErrorCode.INVALID_TYPE)
            return None
        if value < 1:
            reject("value", "Value must be greater than zero", ErrorCode.OUT_OF_RANGE)
            return None
        if value > self.max_value:
            reject(
                "value",
                f"Value must be at most {self.max_value}",
                ErrorCode.OUT_OF_RANGE,
            )
            return None
        return value

    def _choice(self, raw, field, enum_cls, default, reject):
        value = raw.get(field)
        if value is None:
            if default is None:
                reject(field, f"{field} is required", ErrorCode.REQUIRED)
            return default
        try:
            return parse_choice(enum_cls, value)
        except ValueError:
            allowed = ", ".join(member.value for member in enum_cls)
            reject(field, f"{field} must be one of: {allowed}", ErrorCode.INVALID_CHOICE)
            return default

    def _date(self, raw, field, required, reject) -> Optional[date]:
        value = raw.get(field)
        if value is None or value == "":
            if required:
                reject(field, f"{field} is required", ErrorCode.REQUIRED)
            return None
        try:
            return parse_iso_date(value)
        except ValueError as e:
            reject(field, str(e), ErrorCode.INVALID_DATE)
            return None

    def _reference(self, raw, field, reject) -> Optional[int]:
        value = raw.get(field)
        if value is None or value == "":
            return None
        if isinstance(value, str) and value.strip().isdigit():
            value = int(value.strip())
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            reject(field, f"{field} must be a positive integer ID", ErrorCode.INVALID_TYPE)
            return None
        return value


def validate(
    raw: Mapping[str, Any],
    max_value: int = DEFAULT_MAX_VALUE,
    today: Optional[date] = None,
) -> ValidationResult:
    """Validate raw transaction input with a one-off validator."""
    return TransactionValidator(max_value=max_value, today=today).validate(raw)


def validate_or_raise(
    raw: Mapping[str, Any],
    max_value: int = DEFAULT_MAX_VALUE,
    today: Optional[date] = None,
) -> ValidatedTransaction:
    """Validate raw input, raising with every issue when it is rejected.

    Raises:
        TransactionValidationError: If any field is invalid
    """
    result = validate(raw, max_value=max_value, today=today)
    if not result.is_valid:
        raise TransactionValidationError(result.errors)
    return result.transaction
