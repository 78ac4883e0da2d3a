"""Domain layer for agencyledger application.

The pure classification and reporting functions are exported here. Services
that talk to the database live in their own modules and are imported from
there.
"""

from agencyledger.domain.validation import validate, validate_or_raise, TransactionValidator
from agencyledger.domain.preparation import prepare
from agencyledger.domain.ledger import aggregate
from agencyledger.domain.income_statement import build_income_statement
from agencyledger.domain.profitability import compute_profitability

__all__ = [
    "validate",
    "validate_or_raise",
    "TransactionValidator",
    "prepare",
    "aggregate",
    "build_income_statement",
    "compute_profitability",
]
