"""Workspace management commands."""

import click
from salonledger.cli.error_handling import handle_domain_error
from salonledger.domain.workspace import WorkspaceService


@click.group()
def workspace_group():
    """Manage salon workspaces."""
    pass


@workspace_group.command("create")
@click.argument("name", metavar="WORKSPACE_NAME")
@click.option("--owner", help="Name of the owning admin (added as admin member)")
@click.pass_context
def create_workspace(ctx, name: str, owner: str | None):
    """Create a new workspace.

    Examples:
        salonledger workspace create "Studio Nord"
        salonledger workspace create "Studio Nord" --owner "Olga"
    """
    service = WorkspaceService(ctx.obj["db"])

    try:
        workspace_id = service.create_workspace(name=name, owner_name=owner)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created workspace '{name}' (ID: {workspace_id})")
    if owner:
        click.echo(f"Admin: {owner}")


@workspace_group.command("list")
@click.pass_context
def list_workspaces(ctx):
    """List all workspaces."""
    service = WorkspaceService(ctx.obj["db"])

    workspaces = service.list_workspaces()
    if not workspaces:
        click.echo("No workspaces found.")
        return

    click.echo("\nWorkspaces:")
    click.echo("-" * 60)
    for ws in workspaces:
        click.echo(f"ID: {ws.id:3d} | {ws.name:25s} | Owner: {ws.owner_name or '-'}")


def register_commands(cli):
    """Register workspace commands with main CLI."""
    cli.add_command(workspace_group, name="workspace")
