"""Per-client profitability.

This is a best-effort point-in-time join: transactions, time entries and
hourly rates are usually fetched independently and may be momentarily out of
sync. Records pointing at unknown projects are treated as unassigned instead
of failing the whole report.
"""

from collections import defaultdict
from decimal import Decimal
from typing import Iterable, Mapping, Optional

import structlog

from agencyledger.domain.entities import (
    Client,
    ClientProfitability,
    LedgerEntry,
    Project,
    TimeEntry,
    TransactionType,
)
from agencyledger.domain.ledger import operational_transactions
from agencyledger.utils.amount_parser import percent_of, round_half_up

logger = structlog.get_logger(__name__)

MINUTES_PER_HOUR = 60


def labor_cost(minutes_spent: int, hourly_rate: int) -> Decimal:
    """Exact labor cost in minor units (not yet rounded)."""
    return Decimal(minutes_spent) * Decimal(hourly_rate) / MINUTES_PER_HOUR


def compute_profitability(
    clients: Iterable[Client],
    projects: Iterable[Project],
    transactions: Iterable[LedgerEntry],
    time_entries: Iterable[TimeEntry],
    hourly_rates: Mapping[int, Optional[int]],
    descending: bool = True,
) -> list[ClientProfitability]:
    """Compute revenue, direct cost, labor cost and margin per client.

    Args:
        clients: Clients to report on
        projects: Projects, used to resolve transactions and time to clients
        transactions: Ledger snapshot; only operational, non-repasse rows count
        time_entries: Tracked time per project
        hourly_rates: Team member ID -> hourly rate in minor units. Unknown or
            empty rates count as zero, which overstates profitability; those
            minutes are reported in ``unrated_minutes``.
        descending: Sort by profit, highest first when True

    Returns:
        One row per client, sorted by profit (ties by client name)
    """
    project_to_client = {project.id: project.client_id for project in projects}
    client_projects: dict[int, list[int]] = defaultdict(list)
    for project_id, client_id in project_to_client.items():
        client_projects[client_id].append(project_id)

    revenue: dict[int, int] = defaultdict(int)
    direct_costs: dict[int, int] = defaultdict(int)
    for txn in operational_transactions(transactions):
        client_id = project_to_client.get(txn.project_id) if txn.project_id else None
        if client_id is None:
            continue
        if txn.type == TransactionType.REVENUE:
            revenue[client_id] += txn.value
        else:
            direct_costs[client_id] += txn.value

    labor: dict[int, Decimal] = defaultdict(Decimal)
    unrated_minutes: dict[int, int] = defaultdict(int)
    for entry in time_entries:
        client_id = project_to_client.get(entry.project_id)
        if client_id is None:
            continue
        rate = hourly_rates.get(entry.assignee_id) if entry.assignee_id is not None else None
        if not rate:
            unrated_minutes[client_id] += entry.minutes_spent
            continue
        labor[client_id] += labor_cost(entry.minutes_spent, rate)

    rows = []
    for client in clients:
        client_revenue = revenue[client.id]
        client_labor = labor[client.id]
        exact_profit = client_revenue - direct_costs[client.id] - client_labor
        rows.append(
            ClientProfitability(
                client_id=client.id,
                client_name=client.name,
                revenue=client_revenue,
                direct_costs=direct_costs[client.id],
                labor_cost=round_half_up(client_labor),
                profit=round_half_up(exact_profit),
                margin=percent_of(exact_profit, client_revenue),
                unrated_minutes=unrated_minutes[client.id],
                project_ids=tuple(sorted(client_projects[client.id])),
            )
        )

    unrated = [row.client_id for row in rows if row.has_unrated_labor]
    if unrated:
        logger.warning(
            "unrated_labor_detected",
            client_ids=unrated,
            minutes=sum(unrated_minutes[client_id] for client_id in unrated),
        )

    rows.sort(key=lambda row: row.client_name)
    rows.sort(key=lambda row: row.profit, reverse=descending)
    return rows
