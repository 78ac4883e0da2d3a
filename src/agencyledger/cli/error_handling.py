"""CLI error handling helpers."""

import click

from agencyledger.domain.errors import DomainError, TransactionValidationError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    if isinstance(error, TransactionValidationError):
        click.echo("Error: transaction rejected", err=True)
        for issue in error.issues:
            click.echo(f"  {issue.field} [{issue.code}]: {issue.message}", err=True)
    else:
        click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
