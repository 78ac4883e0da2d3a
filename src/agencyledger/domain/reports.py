"""Report service: fetch a fresh snapshot, hand it to the pure report functions."""

from datetime import date
from typing import Optional

import structlog

from agencyledger.config.settings import get_settings
from agencyledger.database.base import Database
from agencyledger.domain.entities import (
    AccountBalance,
    ClientProfitability,
    IncomeStatement,
    LedgerTotals,
)
from agencyledger.domain.income_statement import build_income_statement
from agencyledger.domain.ledger import account_balances, aggregate
from agencyledger.domain.profitability import compute_profitability

logger = structlog.get_logger(__name__)


class ReportService:
    """Service for building ledger reports.

    Nothing is cached: every call reads the latest snapshot. Collections are
    read one after another, so a report that joins several of them is a
    best-effort point-in-time view.
    """

    def __init__(self, db: Database, tax_rate_percent: Optional[float] = None):
        """Initialize report service.

        Args:
            db: Database instance
            tax_rate_percent: Organization tax rate (defaults to settings)
        """
        self.db = db
        self.tax_rate_percent = (
            tax_rate_percent if tax_rate_percent is not None else get_settings().tax_rate_percent
        )

    def ledger_totals(
        self, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> LedgerTotals:
        """Aggregate the ledger for a competence period."""
        transactions = self.db.list_transactions(start_date=start_date, end_date=end_date)
        return aggregate(transactions)

    def income_statement(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        tax_rate_percent: Optional[float] = None,
    ) -> IncomeStatement:
        """Build the income statement for a competence period.

        Args:
            start_date: Optional competence date lower bound
            end_date: Optional competence date upper bound
            tax_rate_percent: Overrides the configured tax rate
        """
        rate = tax_rate_percent if tax_rate_percent is not None else self.tax_rate_percent
        transactions = self.db.list_transactions(start_date=start_date, end_date=end_date)
        logger.debug(
            "income_statement_requested",
            transactions=len(transactions),
            tax_rate_percent=rate,
        )
        return build_income_statement(transactions, rate)

    def client_profitability(self, descending: bool = True) -> list[ClientProfitability]:
        """Compute profitability for every client."""
        return compute_profitability(
            clients=self.db.list_clients(),
            projects=self.db.list_projects(),
            transactions=self.db.list_transactions(),
            time_entries=self.db.list_time_entries(),
            hourly_rates=self.db.get_hourly_rates(),
            descending=descending,
        )

    def bank_balances(self) -> list[AccountBalance]:
        """Realized balance of every bank account, the default one first.

        Balances ignore the competence period: every paid movement counts.
        """
        return account_balances(self.db.list_bank_accounts(), self.db.list_transactions())
