"""Ledger aggregation over a snapshot of prepared transactions.

Every function here is pure and re-runs over the full snapshot it is given.
The filters are shared with the income statement and profitability reports so
that all of them agree on what counts as operational.
"""

from typing import Iterable, Iterator

from agencyledger.domain.entities import (
    AccountBalance,
    BankAccount,
    CashFlow,
    CostBreakdown,
    CostType,
    LedgerEntry,
    LedgerTotals,
    OperationalTotals,
    RepasseTotals,
    TransactionNature,
    TransactionStatus,
    TransactionType,
)


def is_operational(txn: LedgerEntry) -> bool:
    """Operational and not a repasse, whatever the stored nature says."""
    return txn.nature == TransactionNature.OPERATIONAL and not txn.is_repasse


def operational_transactions(transactions: Iterable[LedgerEntry]) -> Iterator[LedgerEntry]:
    """Yield the transactions that feed the income statement."""
    return (txn for txn in transactions if is_operational(txn))


def operational_expenses(transactions: Iterable[LedgerEntry]) -> Iterator[LedgerEntry]:
    """Yield operational, non-repasse expenses."""
    return (
        txn
        for txn in operational_transactions(transactions)
        if txn.type == TransactionType.EXPENSE
    )


def operational_revenues(transactions: Iterable[LedgerEntry]) -> Iterator[LedgerEntry]:
    """Yield operational, non-repasse revenues."""
    return (
        txn
        for txn in operational_transactions(transactions)
        if txn.type == TransactionType.REVENUE
    )


def _sum_by_type(transactions: Iterable[LedgerEntry]) -> tuple[int, int]:
    revenue = 0
    expense = 0
    for txn in transactions:
        if txn.type == TransactionType.REVENUE:
            revenue += txn.value
        else:
            expense += txn.value
    return revenue, expense


def operational_totals(transactions: Iterable[LedgerEntry]) -> OperationalTotals:
    """Sum operational revenue and expense."""
    revenue, expense = _sum_by_type(operational_transactions(transactions))
    return OperationalTotals(revenue=revenue, expense=expense, result=revenue - expense)


def repasse_totals(transactions: Iterable[LedgerEntry]) -> RepasseTotals:
    """Sum pass-through inflow and outflow."""
    inflow, outflow = _sum_by_type(txn for txn in transactions if txn.is_repasse)
    return RepasseTotals(inflow=inflow, outflow=outflow, net=inflow - outflow)


def cash_flow(transactions: Iterable[LedgerEntry]) -> CashFlow:
    """Operational result plus repasse net, with both parts reported."""
    transactions = list(transactions)
    operational = operational_totals(transactions)
    repasse = repasse_totals(transactions)
    return CashFlow(
        operational=operational.result,
        repasse=repasse.net,
        total=operational.result + repasse.net,
    )


def realized_totals(transactions: Iterable[LedgerEntry]) -> OperationalTotals:
    """Operational totals of paid transactions only."""
    return operational_totals(
        txn for txn in transactions if txn.status == TransactionStatus.PAID
    )


def forecast_totals(transactions: Iterable[LedgerEntry]) -> OperationalTotals:
    """Operational totals of every non-cancelled transaction."""
    return operational_totals(
        txn for txn in transactions if txn.status != TransactionStatus.CANCELLED
    )


def cost_breakdown(transactions: Iterable[LedgerEntry]) -> CostBreakdown:
    """Split operational expenses into direct and fixed cost."""
    direct = 0
    fixed = 0
    for txn in operational_expenses(transactions):
        if txn.cost_type == CostType.DIRECT:
            direct += txn.value
        else:
            fixed += txn.value
    return CostBreakdown(direct=direct, fixed=fixed, total=direct + fixed)


def aggregate(transactions: Iterable[LedgerEntry]) -> LedgerTotals:
    """Compute every ledger aggregate for one snapshot."""
    snapshot = list(transactions)
    return LedgerTotals(
        operational=operational_totals(snapshot),
        repasse=repasse_totals(snapshot),
        cash_flow=cash_flow(snapshot),
        realized=realized_totals(snapshot),
        forecast=forecast_totals(snapshot),
        costs=cost_breakdown(snapshot),
    )


def account_balances(
    accounts: Iterable[BankAccount], transactions: Iterable[LedgerEntry]
) -> list[AccountBalance]:
    """Opening balance plus paid inflows minus paid outflows, per account.

    Repasses move real money, so they count here even though they never
    reach the operational totals. Unlinked transactions are ignored.
    """
    movements: dict[int, tuple[int, int]] = {}
    for txn in transactions:
        if txn.status != TransactionStatus.PAID or txn.bank_account_id is None:
            continue
        inflow, outflow = movements.get(txn.bank_account_id, (0, 0))
        if txn.type == TransactionType.REVENUE:
            inflow += txn.value
        else:
            outflow += txn.value
        movements[txn.bank_account_id] = (inflow, outflow)

    balances = []
    for account in accounts:
        inflow, outflow = movements.get(account.id, (0, 0))
        balances.append(
            AccountBalance(
                account_id=account.id,
                name=account.name,
                opening_balance=account.opening_balance,
                inflow=inflow,
                outflow=outflow,
                balance=account.opening_balance + inflow - outflow,
                is_default=account.is_default,
            )
        )
    return balances
