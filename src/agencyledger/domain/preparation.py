"""Transaction preparation: the silent corrections applied after validation.

Each step is a small pure function so it can be tested on its own. The steps
run in a fixed order; the repasse nature correction comes first because
later computations depend on nature.
"""

from dataclasses import asdict, replace
from datetime import date
from typing import Callable, Optional

import structlog

from agencyledger.domain.entities import (
    CostType,
    PreparedTransaction,
    TransactionNature,
    TransactionStatus,
    ValidatedTransaction,
)

logger = structlog.get_logger(__name__)

PreparationStep = Callable[[ValidatedTransaction, date], ValidatedTransaction]


def force_repasse_nature(txn: ValidatedTransaction, today: date) -> ValidatedTransaction:
    """A repasse is always non-operational, whatever the caller supplied."""
    if txn.is_repasse and txn.nature != TransactionNature.NON_OPERATIONAL:
        logger.debug("repasse_nature_forced", category=txn.category)
        return replace(txn, nature=TransactionNature.NON_OPERATIONAL)
    return txn


def derive_cost_type(txn: ValidatedTransaction, today: date) -> ValidatedTransaction:
    """Cost type follows the project reference: direct with one, fixed without."""
    cost_type = CostType.DIRECT if txn.project_id is not None else CostType.FIXED
    if txn.cost_type != cost_type:
        return replace(txn, cost_type=cost_type)
    return txn


def default_competence_date(txn: ValidatedTransaction, today: date) -> ValidatedTransaction:
    """Competence date falls back to the due date."""
    if txn.competence_date is None:
        return replace(txn, competence_date=txn.date)
    return txn


def default_payment_date(txn: ValidatedTransaction, today: date) -> ValidatedTransaction:
    """A paid transaction without a payment date was paid today."""
    if txn.status == TransactionStatus.PAID and txn.payment_date is None:
        return replace(txn, payment_date=today)
    return txn


PREPARATION_STEPS: tuple[PreparationStep, ...] = (
    force_repasse_nature,
    derive_cost_type,
    default_competence_date,
    default_payment_date,
)


def prepare(validated: ValidatedTransaction, today: Optional[date] = None) -> PreparedTransaction:
    """Apply every preparation step to a validated transaction.

    Args:
        validated: Output of validation
        today: Date used for payment-date defaulting (defaults to today)

    Returns:
        PreparedTransaction ready to be persisted
    """
    today = today or date.today()
    txn = validated
    for step in PREPARATION_STEPS:
        txn = step(txn, today)
    return PreparedTransaction(**asdict(txn))
