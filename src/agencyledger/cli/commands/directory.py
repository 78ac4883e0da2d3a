"""Client, project, team member and time tracking commands."""

import click
from agencyledger.cli.error_handling import handle_domain_error
from agencyledger.domain.directory import DirectoryService
from agencyledger.domain.errors import DomainError
from agencyledger.utils.amount_parser import format_amount, parse_amount
from agencyledger.utils.date_parser import parse_date


@click.group("client")
def client_group():
    """Manage clients."""
    pass


@client_group.command("add")
@click.argument("name")
@click.pass_context
def add_client(ctx, name: str):
    """Add a client."""
    service = DirectoryService(ctx.obj["db"])
    try:
        client_id = service.create_client(name)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created client '{name.strip()}' (ID: {client_id})")


@client_group.command("list")
@click.pass_context
def list_clients(ctx):
    """List clients."""
    service = DirectoryService(ctx.obj["db"])
    clients = service.list_clients()
    if not clients:
        click.echo("No clients found.")
        return
    for client in clients:
        click.echo(f"{client.id:>4}  {client.name}")


@click.group("project")
def project_group():
    """Manage projects."""
    pass


@project_group.command("add")
@click.argument("name")
@click.option("--client", "client_ref", required=True, help="Client name or ID")
@click.pass_context
def add_project(ctx, name: str, client_ref: str):
    """Add a project for a client."""
    service = DirectoryService(ctx.obj["db"])
    try:
        client = service.resolve_client(client_ref)
        project_id = service.create_project(name, client.id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created project '{name.strip()}' for {client.name} (ID: {project_id})")


@project_group.command("list")
@click.option("--client", "client_ref", help="Client name or ID")
@click.pass_context
def list_projects(ctx, client_ref: str | None):
    """List projects."""
    service = DirectoryService(ctx.obj["db"])
    client_id = None
    if client_ref is not None:
        try:
            client_id = service.resolve_client(client_ref).id
        except DomainError as e:
            handle_domain_error(ctx, e)
    projects = service.list_projects(client_id=client_id)
    if not projects:
        click.echo("No projects found.")
        return
    for project in projects:
        click.echo(f"{project.id:>4}  {project.name:<40} client {project.client_id}")


@click.group("member")
def member_group():
    """Manage team members."""
    pass


@member_group.command("add")
@click.argument("name")
@click.option("--hourly-rate", help="Hourly cost (e.g., 100,00)")
@click.option("--commission", type=float, help="Sales commission percentage on closed deals")
@click.pass_context
def add_member(ctx, name: str, hourly_rate: str | None, commission: float | None):
    """Add a team member."""
    service = DirectoryService(ctx.obj["db"])
    rate = None
    if hourly_rate is not None:
        try:
            rate = parse_amount(hourly_rate)
        except ValueError as e:
            click.echo(f"Error: Invalid amount format: {e}", err=True)
            ctx.exit(1)
    try:
        member_id = service.create_team_member(
            name, hourly_rate=rate, commission_percent=commission
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created team member '{name.strip()}' (ID: {member_id})")


@member_group.command("list")
@click.pass_context
def list_members(ctx):
    """List team members with their hourly rates and commissions."""
    service = DirectoryService(ctx.obj["db"])
    members = service.list_team_members()
    if not members:
        click.echo("No team members found.")
        return
    for member in members:
        rate = format_amount(member.hourly_rate) if member.hourly_rate else "no rate"
        commission = (
            f"{member.commission_percent:g}% commission" if member.commission_percent else ""
        )
        click.echo(f"{member.id:>4}  {member.name:<30} {rate:<15} {commission}".rstrip())


@click.group("time")
def time_group():
    """Track time on projects."""
    pass


@time_group.command("add")
@click.option("--project", "project_id", type=int, required=True, help="Project ID")
@click.option("--minutes", type=int, required=True, help="Minutes spent")
@click.option("--member", "member_id", type=int, help="Team member ID")
@click.option("--date", "entry_date", help="Date (YYYY-MM-DD or relative like 'today')")
@click.pass_context
def add_time(ctx, project_id: int, minutes: int, member_id: int | None, entry_date: str | None):
    """Record time spent on a project."""
    service = DirectoryService(ctx.obj["db"])
    parsed_date = None
    if entry_date is not None:
        try:
            parsed_date = parse_date(entry_date)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)
    try:
        entry_id = service.log_time(
            project_id, minutes, entry_date=parsed_date, assignee_id=member_id
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Recorded {minutes} minutes on project {project_id} (ID: {entry_id})")


def register_commands(cli):
    """Register directory commands with main CLI."""
    cli.add_command(client_group)
    cli.add_command(project_group)
    cli.add_command(member_group)
    cli.add_command(time_group)
