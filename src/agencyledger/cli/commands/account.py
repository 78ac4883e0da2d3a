"""Bank account management commands."""

import click
from agencyledger.cli.error_handling import handle_domain_error
from agencyledger.domain.bank_account import BankAccountService
from agencyledger.domain.errors import DomainError
from agencyledger.utils.amount_parser import format_amount, parse_amount


@click.group("account")
def account_group():
    """Manage bank accounts."""
    pass


@account_group.command("add")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option("--bank", help="Bank name")
@click.option("--opening-balance", default="0", help="Balance before any movement (e.g., 1.500,00)")
@click.option("--default", "is_default", is_flag=True, help="Make this the default account")
@click.pass_context
def add_account(ctx, name: str, bank: str | None, opening_balance: str, is_default: bool):
    """Add a bank account.

    Examples:
        agencyledger account add "Conta PJ" --bank "Itaú" --opening-balance "R$ 5.000" --default
        agencyledger account add "Caixa"
    """
    service = BankAccountService(ctx.obj["db"])
    try:
        balance = parse_amount(opening_balance)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)
    try:
        account_id = service.create_account(
            name, opening_balance=balance, is_default=is_default, bank_name=bank
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created bank account '{name.strip()}' (ID: {account_id})")


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List bank accounts, the default one first."""
    service = BankAccountService(ctx.obj["db"])
    accounts = service.list_accounts()
    if not accounts:
        click.echo("No bank accounts found.")
        return
    for account in accounts:
        marker = "*" if account.is_default else " "
        bank = account.bank_name or "-"
        click.echo(
            f"{account.id:>4} {marker} {account.name:<25} {bank:<20} "
            f"opening {format_amount(account.opening_balance)}"
        )


def register_commands(cli):
    """Register bank account commands with main CLI."""
    cli.add_command(account_group)
