"""Income statement (DRE) builder."""

from collections import defaultdict
from decimal import Decimal
from typing import Iterable, Optional

from agencyledger.domain.categories import classify_expense_category
from agencyledger.domain.entities import (
    CategoryAmount,
    IncomeStatement,
    LedgerEntry,
    StatementGroup,
    StatementLine,
)
from agencyledger.domain.errors import ValidationError, invalid_tax_rate
from agencyledger.domain.ledger import (
    operational_expenses,
    operational_revenues,
    repasse_totals,
)
from agencyledger.utils.amount_parser import percent_of, round_half_up

LINE_LABELS: dict[str, str] = {
    "gross_revenue": "Receita Bruta",
    "taxes": "(-) Impostos",
    "variable_costs": "(-) Custos Variáveis",
    "contribution_margin": "(=) Margem de Contribuição",
    "fixed_costs": "(-) Custos Fixos",
    "investments": "(-) Investimentos",
    "net_operating_profit": "(=) Lucro Líquido Operacional",
}


def group_by_category(transactions: Iterable[LedgerEntry]) -> tuple[CategoryAmount, ...]:
    """Sum values per category, largest first and ties by label."""
    totals: dict[str, int] = defaultdict(int)
    for txn in transactions:
        totals[txn.category] += txn.value
    return tuple(
        CategoryAmount(name=name, value=value)
        for name, value in sorted(totals.items(), key=lambda item: (-item[1], item[0]))
    )


def compute_taxes(gross_revenue: int, tax_rate_percent: float) -> int:
    """Taxes on gross revenue, rounded once to whole minor units."""
    rate = Decimal(str(tax_rate_percent))
    return round_half_up(Decimal(gross_revenue) * rate / 100)


def _line(key: str, categories: tuple[CategoryAmount, ...] = (), value: Optional[int] = None,
          percent: Optional[float] = None) -> StatementLine:
    if value is None:
        value = sum(category.value for category in categories)
    return StatementLine(
        key=key, label=LINE_LABELS[key], value=value, categories=categories, percent=percent
    )


def build_income_statement(
    transactions: Iterable[LedgerEntry], tax_rate_percent: float
) -> IncomeStatement:
    """Build the seven-line income statement for a snapshot.

    Args:
        transactions: Prepared or persisted transactions
        tax_rate_percent: Organization tax rate applied to gross revenue

    Returns:
        IncomeStatement with the seven lines in order and repasse totals
        reported on the side

    Raises:
        ValidationError: If the tax rate is outside [0, 100]
    """
    if not 0 <= tax_rate_percent <= 100:
        raise ValidationError(invalid_tax_rate(tax_rate_percent))

    snapshot = list(transactions)

    expenses_by_group: dict[StatementGroup, list[LedgerEntry]] = defaultdict(list)
    for txn in operational_expenses(snapshot):
        expenses_by_group[classify_expense_category(txn.category)].append(txn)

    gross_revenue = _line("gross_revenue", group_by_category(operational_revenues(snapshot)))
    taxes = _line("taxes", value=compute_taxes(gross_revenue.value, tax_rate_percent))
    variable_costs = _line(
        "variable_costs", group_by_category(expenses_by_group[StatementGroup.VARIABLE_COST])
    )

    margin_value = gross_revenue.value - taxes.value - variable_costs.value
    contribution_margin = _line(
        "contribution_margin",
        value=margin_value,
        percent=percent_of(margin_value, gross_revenue.value),
    )

    fixed_costs = _line(
        "fixed_costs", group_by_category(expenses_by_group[StatementGroup.FIXED_COST])
    )
    investments = _line(
        "investments", group_by_category(expenses_by_group[StatementGroup.INVESTMENT])
    )

    profit_value = contribution_margin.value - fixed_costs.value - investments.value
    net_operating_profit = _line(
        "net_operating_profit",
        value=profit_value,
        percent=percent_of(profit_value, gross_revenue.value),
    )

    # Informational only, never summed into the lines above
    repasse = repasse_totals(snapshot)

    return IncomeStatement(
        lines=(
            gross_revenue,
            taxes,
            variable_costs,
            contribution_margin,
            fixed_costs,
            investments,
            net_operating_profit,
        ),
        tax_rate_percent=tax_rate_percent,
        repasse_inflow=repasse.inflow,
        repasse_outflow=repasse.outflow,
    )
