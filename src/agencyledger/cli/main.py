"""Main CLI entry point."""

import click
from agencyledger.config.logging import configure_logging
from agencyledger.config.settings import get_settings
from agencyledger.database.factories import create_sqlite_database

# Import and register all commands at module level
from agencyledger.cli.commands import account, directory, report, transaction


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides AGENCYLEDGER_DB_PATH environment variable)",
    envvar="AGENCYLEDGER_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging level (overrides AGENCYLEDGER_LOG_LEVEL)",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str | None):
    """Agencyledger - agency financial ledger.

    Record revenue, expenses and media pass-throughs (repasses), then derive
    cash flow, the income statement (DRE) and per-client profitability.
    """
    ctx.ensure_object(dict)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        configure_logging(level=log_level.upper() if log_level else None)
        db = create_sqlite_database(database_path=db_path or get_settings().db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
directory.register_commands(cli)
account.register_commands(cli)
transaction.register_commands(cli)
report.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
