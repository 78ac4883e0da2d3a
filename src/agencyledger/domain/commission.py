"""Sales commission provisioning.

When a deal is won, the salesperson's commission is booked as a pending
operational expense. It goes through the regular transaction pipeline like
any other write.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

import structlog

from agencyledger.database.base import Database
from agencyledger.domain.categories import COMMISSION_CATEGORY
from agencyledger.domain.entities import (
    TransactionNature,
    TransactionStatus,
    TransactionType,
)
from agencyledger.domain.errors import (
    NotFoundError,
    ValidationError,
    invalid_commission_percent,
    team_member_not_found,
)
from agencyledger.domain.transaction import TransactionService
from agencyledger.utils.amount_parser import round_half_up

logger = structlog.get_logger(__name__)


def commission_value(deal_value: int, commission_percent: float) -> int:
    """Commission in minor units, rounded half-up."""
    return round_half_up(Decimal(deal_value) * Decimal(str(commission_percent)) / 100)


class CommissionService:
    """Service for provisioning sales commissions."""

    def __init__(self, db: Database, transaction_service: Optional[TransactionService] = None):
        """Initialize commission service.

        Args:
            db: Database instance
            transaction_service: Service used for the write (created if omitted)
        """
        self.db = db
        self.transaction_service = transaction_service or TransactionService(db)

    def provision_commission(
        self,
        deal_value: int,
        salesperson_id: int,
        commission_percent: Optional[float] = None,
        project_id: Optional[int] = None,
        today: Optional[date] = None,
    ) -> Optional[int]:
        """Book a commission expense for a closed deal.

        Args:
            deal_value: Deal value in minor units
            salesperson_id: Team member earning the commission
            commission_percent: Commission rate overriding the salesperson's
                own; 0 means no commission
            project_id: Project created from the deal, if any
            today: Booking date (defaults to today)

        Returns:
            The new transaction ID, or None when no commission applies

        Raises:
            ValidationError: If the percentage is outside [0, 100]
            NotFoundError: If the salesperson or project doesn't exist
            TransactionValidationError: If the resulting transaction is invalid
        """
        salesperson = self.db.get_team_member(salesperson_id)
        if salesperson is None:
            raise NotFoundError(team_member_not_found(salesperson_id))

        if commission_percent is None:
            commission_percent = salesperson.commission_percent or 0
        if not 0 <= commission_percent <= 100:
            raise ValidationError(invalid_commission_percent(commission_percent))
        if commission_percent == 0:
            return None

        booking_date = today or date.today()
        transaction_id = self.transaction_service.create_transaction(
            {
                "description": f"Comissão de Vendas - {salesperson.name}",
                "category": COMMISSION_CATEGORY,
                "value": commission_value(deal_value, commission_percent),
                "type": TransactionType.EXPENSE.value,
                "nature": TransactionNature.OPERATIONAL.value,
                "is_repasse": False,
                "status": TransactionStatus.PENDING.value,
                "date": booking_date,
                "competence_date": booking_date,
                "project_id": project_id,
                "salesperson_id": salesperson_id,
                "notes": f"Comissão de {commission_percent:g}% sobre negócio fechado",
            },
            today=booking_date,
        )
        logger.info(
            "commission_provisioned",
            transaction_id=transaction_id,
            salesperson_id=salesperson_id,
            project_id=project_id,
        )
        return transaction_id
