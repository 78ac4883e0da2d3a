"""Report commands: ledger totals, income statement, profitability and bank balances."""

import click
from agencyledger.cli.date_filters import period_options, pop_period_flags, resolve_cli_date_range
from agencyledger.cli.error_handling import handle_domain_error
from agencyledger.domain.entities import IncomeStatement, LedgerTotals
from agencyledger.domain.errors import DomainError
from agencyledger.domain.reports import ReportService
from agencyledger.utils.amount_parser import format_amount

LABEL_WIDTH = 44
AMOUNT_WIDTH = 20


def _row(label: str, value: int, indent: int = 0, suffix: str = "") -> str:
    indent_str = " " * (4 * indent)
    width = LABEL_WIDTH - 4 * indent
    return f"{indent_str}{label:<{width}} {format_amount(value):>{AMOUNT_WIDTH}}{suffix}"


def _display_totals(totals: LedgerTotals) -> None:
    click.echo("Operational (forecast)")
    click.echo(_row("Revenue", totals.operational.revenue, 1))
    click.echo(_row("Expense", totals.operational.expense, 1))
    click.echo(_row("Result", totals.operational.result, 1))
    click.echo()
    click.echo("Operational (realized, paid only)")
    click.echo(_row("Revenue", totals.realized.revenue, 1))
    click.echo(_row("Expense", totals.realized.expense, 1))
    click.echo(_row("Result", totals.realized.result, 1))
    click.echo()
    click.echo("Repasses (pass-through)")
    click.echo(_row("Inflow", totals.repasse.inflow, 1))
    click.echo(_row("Outflow", totals.repasse.outflow, 1))
    click.echo(_row("Net", totals.repasse.net, 1))
    click.echo()
    click.echo("Cash flow")
    click.echo(_row("Operational", totals.cash_flow.operational, 1))
    click.echo(_row("Repasses", totals.cash_flow.repasse, 1))
    click.echo(_row("Total", totals.cash_flow.total, 1))
    click.echo()
    click.echo("Costs")
    click.echo(_row("Direct", totals.costs.direct, 1))
    click.echo(_row("Fixed", totals.costs.fixed, 1))
    click.echo(_row("Total", totals.costs.total, 1))


def _display_income_statement(statement: IncomeStatement, expand: bool) -> None:
    for line in statement.lines:
        suffix = ""
        if line.percent is not None:
            suffix = f"  ({line.percent:.2f}%)"
        elif line.key == "taxes":
            suffix = f"  ({statement.tax_rate_percent:g}%)"
        click.echo(_row(line.label, line.value, suffix=suffix))
        if expand:
            for category in line.categories:
                click.echo(_row(category.name, category.value, 1))
    click.echo()
    click.echo("Repasses (informational, not part of the result)")
    click.echo(_row("Inflow", statement.repasse_inflow, 1))
    click.echo(_row("Outflow", statement.repasse_outflow, 1))


@click.group("report")
def report_group():
    """Financial reports."""
    pass


@report_group.command("totals")
@period_options
@click.pass_context
def totals(ctx, start_date, end_date, **period_kwargs):
    """Show operational, repasse, cash flow and cost totals."""
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period_flags=pop_period_flags(period_kwargs)
    )
    service = ReportService(ctx.obj["db"])
    _display_totals(service.ledger_totals(start_date=start, end_date=end))


@report_group.command("dre")
@period_options
@click.option("--tax-rate", type=float, help="Tax rate percent (overrides AGENCYLEDGER_TAX_RATE_PERCENT)")
@click.option("--expand", is_flag=True, help="Show the categories behind each line")
@click.pass_context
def dre(ctx, start_date, end_date, tax_rate, expand, **period_kwargs):
    """Show the income statement (DRE)."""
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period_flags=pop_period_flags(period_kwargs)
    )
    service = ReportService(ctx.obj["db"])
    try:
        statement = service.income_statement(
            start_date=start, end_date=end, tax_rate_percent=tax_rate
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    _display_income_statement(statement, expand)


@report_group.command("profitability")
@click.option("--ascending", is_flag=True, help="Least profitable clients first")
@click.pass_context
def profitability(ctx, ascending: bool):
    """Show profitability per client."""
    service = ReportService(ctx.obj["db"])
    rows = service.client_profitability(descending=not ascending)
    if not rows:
        click.echo("No clients found.")
        return

    click.echo(
        f"{'Client':<24} {'Revenue':>16} {'Direct costs':>16} {'Labor':>16} {'Profit':>16} {'Margin':>8}"
    )
    for row in rows:
        marker = " *" if row.has_unrated_labor else ""
        click.echo(
            f"{row.client_name[:24]:<24} {format_amount(row.revenue):>16} "
            f"{format_amount(row.direct_costs):>16} {format_amount(row.labor_cost):>16} "
            f"{format_amount(row.profit):>16} {row.margin:>7.2f}%{marker}"
        )
    if any(row.has_unrated_labor for row in rows):
        click.echo()
        click.echo(
            "* Includes time from team members without an hourly rate; "
            "labor cost is understated and profit overstated."
        )


@report_group.command("balances")
@click.pass_context
def balances(ctx):
    """Show the realized balance of every bank account.

    Opening balance plus paid inflows minus paid outflows, repasses included.
    """
    service = ReportService(ctx.obj["db"])
    rows = service.bank_balances()
    if not rows:
        click.echo("No bank accounts found.")
        return

    click.echo(f"{'Account':<24} {'Opening':>16} {'Inflow':>16} {'Outflow':>16} {'Balance':>16}")
    for row in rows:
        marker = " *" if row.is_default else ""
        click.echo(
            f"{row.name[:24]:<24} {format_amount(row.opening_balance):>16} "
            f"{format_amount(row.inflow):>16} {format_amount(row.outflow):>16} "
            f"{format_amount(row.balance):>16}{marker}"
        )
    click.echo(_row("Consolidated balance", sum(row.balance for row in rows)))


def register_commands(cli):

    """Register report commands with main CLI."""
    cli.add_command(report_group)
