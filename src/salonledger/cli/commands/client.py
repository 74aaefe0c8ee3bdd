"""Client management commands."""

import click
from salonledger.cli.error_handling import handle_domain_error
from salonledger.cli.resolution import resolve_member_or_exit, resolve_workspace_or_exit
from salonledger.domain.client import ClientService
from salonledger.domain.report import format_money
from salonledger.utils.resolvers import resolve_client


def _resolve_client_or_exit(ctx, service: ClientService, workspace_id: int, client: str) -> int:
    try:
        return resolve_client(service, workspace_id, client)
    except ValueError as e:
        handle_domain_error(ctx, e)


@click.group()
def client_group():
    """Manage salon clients."""
    pass


@client_group.command("add")
@click.argument("name", metavar="NAME")
@click.option("--workspace", required=True, help="Workspace name or ID")
@click.option("--phone", help="Phone number")
@click.option("--description", help="Free-form notes")
@click.option("--as", "acting", help="Member performing the operation (name or ID)")
@click.pass_context
def add_client(ctx, name: str, workspace: str, phone: str | None, description: str | None, acting: str | None):
    """Add a client.

    Examples:
        salonledger client add "Maria" --workspace 1 --phone "+49 151 000000"
    """
    service = ClientService(ctx.obj["db"])
    workspace_id = resolve_workspace_or_exit(ctx, workspace)
    acting_id = resolve_member_or_exit(ctx, workspace_id, acting) if acting else None

    try:
        client_id = service.add_client(
            workspace_id, name, phone=phone, description=description, acting_member_id=acting_id
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Added client '{name.strip()}' (ID: {client_id})")


@client_group.command("list")
@click.option("--workspace", required=True, help="Workspace name or ID")
@click.pass_context
def list_clients(ctx, workspace: str):
    """List clients with their visit statistics."""
    service = ClientService(ctx.obj["db"])
    workspace_id = resolve_workspace_or_exit(ctx, workspace)

    clients = service.list_clients(workspace_id)
    if not clients:
        click.echo("No clients found.")
        return

    click.echo(f"\n{'ID':<5} {'Name':<20} {'Phone':<16} {'Visits':>6} {'Spent':>10}  Last visit")
    click.echo("-" * 75)
    for c in clients:
        stats = service.get_client_stats(c.id)
        last = str(stats.last_visit) if stats.last_visit else "-"
        click.echo(
            f"{c.id:<5} {c.name:<20} {c.phone or '':<16} {stats.visit_count:>6} "
            f"{format_money(stats.total_spent):>10}  {last}"
        )


@client_group.command("update")
@click.argument("client", metavar="CLIENT")
@click.option("--workspace", required=True, help="Workspace name or ID")
@click.option("--name", help="New name")
@click.option("--phone", help="New phone number")
@click.option("--description", help="New notes")
@click.option("--as", "acting", help="Member performing the operation (name or ID)")
@click.pass_context
def update_client(ctx, client: str, workspace: str, name, phone, description, acting):
    """Update a client's details."""
    service = ClientService(ctx.obj["db"])
    workspace_id = resolve_workspace_or_exit(ctx, workspace)
    client_id = _resolve_client_or_exit(ctx, service, workspace_id, client)
    acting_id = resolve_member_or_exit(ctx, workspace_id, acting) if acting else None

    if name is None and phone is None and description is None:
        click.echo("Nothing to update.")
        return

    try:
        service.update_client(
            client_id, name=name, phone=phone, description=description, acting_member_id=acting_id
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated client {client_id}")


@client_group.command("delete")
@click.argument("client", metavar="CLIENT")
@click.option("--workspace", required=True, help="Workspace name or ID")
@click.option("--as", "acting", help="Member performing the operation (name or ID)")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_client(ctx, client: str, workspace: str, acting: str | None, yes: bool):
    """Delete a client. Entries keep the client's name."""
    service = ClientService(ctx.obj["db"])
    workspace_id = resolve_workspace_or_exit(ctx, workspace)
    client_id = _resolve_client_or_exit(ctx, service, workspace_id, client)
    acting_id = resolve_member_or_exit(ctx, workspace_id, acting) if acting else None

    if not yes and not click.confirm(f"Delete client {client_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_client(client_id, acting_member_id=acting_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted client {client_id}")


def register_commands(cli):
    """Register client commands with main CLI."""
    cli.add_command(client_group, name="client")
