"""Transaction management commands."""

import click
from agencyledger.cli.date_filters import period_options, pop_period_flags, resolve_cli_date_range
from agencyledger.cli.error_handling import handle_domain_error
from agencyledger.domain.entities import (
    CostType,
    TransactionNature,
    TransactionStatus,
    TransactionType,
)
from agencyledger.domain.errors import DomainError
from agencyledger.domain.transaction import TransactionService
from agencyledger.domain.validation import parse_choice
from agencyledger.utils.amount_parser import format_amount, parse_amount
from agencyledger.utils.date_parser import parse_date

TYPE_CHOICES = ["revenue", "expense", "receita", "despesa"]
NATURE_CHOICES = ["operational", "non_operational", "operacional", "nao_operacional"]
STATUS_CHOICES = [
    "pending", "paid", "overdue", "cancelled", "pendente", "pago", "atrasado", "cancelado",
]


def _parse_cli_date(ctx, label: str, value: str | None):
    if value is None:
        return None
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def _parse_cli_amount(ctx, value: str | None):
    if value is None:
        return None
    try:
        return parse_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)


@click.group("transaction")
def transaction_group():
    """Manage ledger transactions."""
    pass


@transaction_group.command("add")
@click.option("--type", "txn_type", type=click.Choice(TYPE_CHOICES, case_sensitive=False), required=True)
@click.option("--description", required=True, help="Transaction description")
@click.option("--category", required=True, help="Category (e.g., 'Fee Mensal', 'Google Ads')")
@click.option("--value", "amount", required=True, help="Value (e.g., 1.500,00 or 1500.00)")
@click.option("--date", "due_date", default="today", show_default=True, help="Due date (YYYY-MM-DD or relative)")
@click.option("--competence-date", help="Accounting period date (defaults to the due date)")
@click.option("--payment-date", help="Settlement date")
@click.option("--status", type=click.Choice(STATUS_CHOICES, case_sensitive=False), default="pending", show_default=True)
@click.option("--nature", type=click.Choice(NATURE_CHOICES, case_sensitive=False), default="operational", show_default=True)
@click.option("--repasse", is_flag=True, help="Media pass-through paid on a client's behalf")
@click.option("--project", "project_id", type=int, help="Project ID (makes the cost direct)")
@click.option("--salesperson", "salesperson_id", type=int, help="Salesperson team member ID")
@click.option("--account", "bank_account_id", type=int, help="Bank account ID the payment settles against")
@click.option("--notes", help="Notes")
@click.pass_context
def add_transaction(
    ctx,
    txn_type: str,
    description: str,
    category: str,
    amount: str,
    due_date: str,
    competence_date: str | None,
    payment_date: str | None,
    status: str,
    nature: str,
    repasse: bool,
    project_id: int | None,
    salesperson_id: int | None,
    bank_account_id: int | None,
    notes: str | None,
):
    """Add a transaction.

    Examples:
        agencyledger transaction add --type revenue --description "Fee março" --category "Fee Mensal" --value 10.000,00
        agencyledger transaction add --type expense --description "Campanha" --category "Google Ads" --value 5.000,00 --repasse
    """
    service = TransactionService(ctx.obj["db"])
    raw = {
        "type": txn_type,
        "description": description,
        "category": category,
        "value": _parse_cli_amount(ctx, amount),
        "date": _parse_cli_date(ctx, "date", due_date),
        "competence_date": _parse_cli_date(ctx, "competence date", competence_date),
        "payment_date": _parse_cli_date(ctx, "payment date", payment_date),
        "status": status,
        "nature": nature,
        "is_repasse": repasse,
        "project_id": project_id,
        "salesperson_id": salesperson_id,
        "bank_account_id": bank_account_id,
        "notes": notes,
    }
    try:
        transaction_id = service.create_transaction(raw)
    except DomainError as e:
        handle_domain_error(ctx, e)

    txn = service.get_transaction(transaction_id)
    click.echo(f"Created transaction {transaction_id}")
    click.echo(f"  Value: {format_amount(txn.value)}")
    click.echo(f"  Classification: {txn.type.value} / {txn.nature.value} / {txn.cost_type.value}")
    if txn.is_repasse:
        click.echo("  Repasse: excluded from operational results")


@transaction_group.command("update")
@click.argument("transaction_id", type=int)
@click.option("--type", "txn_type", type=click.Choice(TYPE_CHOICES, case_sensitive=False))
@click.option("--description", help="Transaction description")
@click.option("--category", help="Category")
@click.option("--value", "amount", help="Value (e.g., 1.500,00)")
@click.option("--date", "due_date", help="Due date")
@click.option("--competence-date", help="Accounting period date")
@click.option("--status", type=click.Choice(STATUS_CHOICES, case_sensitive=False))
@click.option("--nature", type=click.Choice(NATURE_CHOICES, case_sensitive=False))
@click.option("--repasse/--no-repasse", default=None, help="Set or clear the repasse flag")
@click.option("--project", "project_id", type=int, help="Project ID")
@click.option("--clear-project", is_flag=True, help="Detach from its project (makes the cost fixed)")
@click.option("--account", "bank_account_id", type=int, help="Bank account ID")
@click.option("--notes", help="Notes")
@click.pass_context
def update_transaction(
    ctx,
    transaction_id: int,
    txn_type: str | None,
    description: str | None,
    category: str | None,
    amount: str | None,
    due_date: str | None,
    competence_date: str | None,
    status: str | None,
    nature: str | None,
    repasse: bool | None,
    project_id: int | None,
    clear_project: bool,
    bank_account_id: int | None,
    notes: str | None,
) -> None:
    """Update a transaction.

    Updates only the fields that are provided. The whole record is validated
    again, so an update that breaks a rule is rejected.
    """
    if clear_project and project_id is not None:
        click.echo("Error: Cannot combine --project and --clear-project", err=True)
        ctx.exit(1)

    changes = {
        "type": txn_type,
        "description": description,
        "category": category,
        "value": _parse_cli_amount(ctx, amount),
        "date": _parse_cli_date(ctx, "date", due_date),
        "competence_date": _parse_cli_date(ctx, "competence date", competence_date),
        "status": status,
        "nature": nature,
        "is_repasse": repasse,
        "project_id": project_id,
        "bank_account_id": bank_account_id,
        "notes": notes,
    }
    changes = {field: value for field, value in changes.items() if value is not None}
    if clear_project:
        changes["project_id"] = None

    if not changes:
        click.echo("Nothing to update.")
        return

    service = TransactionService(ctx.obj["db"])
    try:
        service.update_transaction(transaction_id, changes)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated transaction {transaction_id}")


@transaction_group.command("pay")
@click.argument("transaction_id", type=int)
@click.option("--payment-date", help="Settlement date (defaults to today)")
@click.option("--account", "bank_account_id", type=int, help="Bank account ID the payment settles against")
@click.pass_context
def pay_transaction(ctx, transaction_id: int, payment_date: str | None, bank_account_id: int | None):
    """Mark a transaction as paid."""
    service = TransactionService(ctx.obj["db"])
    try:
        prepared = service.mark_paid(
            transaction_id,
            payment_date=_parse_cli_date(ctx, "payment date", payment_date),
            bank_account_id=bank_account_id,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Transaction {transaction_id} paid on {prepared.payment_date}")


@transaction_group.command("delete")
@click.argument("transaction_id", type=int)
@click.pass_context
def delete_transaction(ctx, transaction_id: int):
    """Delete a transaction."""
    service = TransactionService(ctx.obj["db"])
    try:
        service.delete_transaction(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted transaction {transaction_id}")


@transaction_group.command("list")
@period_options
@click.option("--project", "project_id", type=int, help="Project ID")
@click.option("--status", type=click.Choice(STATUS_CHOICES, case_sensitive=False))
@click.option("--repasse/--no-repasse", default=None, help="Only repasses, or only non-repasses")
@click.pass_context
def list_transactions(ctx, start_date, end_date, project_id, status, repasse, **period_kwargs):
    """List transactions by competence date."""
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=pop_period_flags(period_kwargs),
    )
    service = TransactionService(ctx.obj["db"])
    transactions = service.list_transactions(
        start_date=start,
        end_date=end,
        project_id=project_id,
        status=parse_choice(TransactionStatus, status) if status else None,
        is_repasse=repasse,
    )
    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo(
        f"{'ID':>5}  {'Date':<10}  {'Type':<8}  {'Category':<28} {'Value':>16}  {'Status':<10} Flags"
    )
    for txn in transactions:
        flags = []
        if txn.is_repasse:
            flags.append("repasse")
        if txn.nature == TransactionNature.NON_OPERATIONAL:
            flags.append("non-op")
        if txn.cost_type == CostType.DIRECT:
            flags.append(f"project {txn.project_id}")
        value = format_amount(txn.value if txn.type == TransactionType.REVENUE else -txn.value)
        click.echo(
            f"{txn.id:>5}  {txn.date.isoformat():<10}  {txn.type.value:<8}  "
            f"{txn.category[:28]:<28} {value:>16}  {txn.status.value:<10} {', '.join(flags)}"
        )


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group)
