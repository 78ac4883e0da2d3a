"""CLI helpers for date range resolution."""

from datetime import date

import click

from agencyledger.utils.date_parser import get_date_range, parse_date

PERIOD_OPTIONS = ("this-month", "this-year", "last-month", "last-year")


def period_options(command):
    """Attach --start-date/--end-date and the period flags to a command."""
    for period in reversed(PERIOD_OPTIONS):
        command = click.option(
            f"--{period}",
            period.replace("-", "_"),
            is_flag=True,
            help=f"Filter to {period.replace('-', ' ')}",
        )(command)
    command = click.option(
        "--end-date", help="End competence date (YYYY-MM-DD or relative like 'today')"
    )(command)
    command = click.option(
        "--start-date", help="Start competence date (YYYY-MM-DD or relative like 'this month')"
    )(command)
    return command


def resolve_cli_date_range(
    ctx,
    *,
    start_date: str | None,
    end_date: str | None,
    period_flags: dict[str, bool],
) -> tuple[date | None, date | None]:
    """Resolve CLI date range from period flags or explicit dates."""
    period_count = sum(1 for is_set in period_flags.values() if is_set)

    if period_count > 1:
        click.echo(
            "Error: Only one period option (--this-month, --this-year, --last-month, --last-year) can be specified at a time.",
            err=True,
        )
        ctx.exit(1)

    if period_count > 0 and (start_date or end_date):
        click.echo(
            "Error: Period options (--this-month, --this-year, etc.) cannot be combined with --start-date or --end-date.",
            err=True,
        )
        ctx.exit(1)

    start = None
    end = None

    if period_count == 1:
        for period, is_set in period_flags.items():
            if is_set:
                start, end = get_date_range(period)
                break
    else:
        if start_date:
            try:
                start = parse_date(start_date)
            except ValueError as e:
                click.echo(f"Error: Invalid start date: {e}", err=True)
                ctx.exit(1)

        if end_date:
            try:
                end = parse_date(end_date)
            except ValueError as e:
                click.echo(f"Error: Invalid end date: {e}", err=True)
                ctx.exit(1)

    return start, end


def pop_period_flags(kwargs: dict) -> dict[str, bool]:
    """Remove period flags from command kwargs, keyed by period name."""
    return {period: kwargs.pop(period.replace("-", "_")) for period in PERIOD_OPTIONS}
