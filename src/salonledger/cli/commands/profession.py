"""Profession list commands."""

import click
from salonledger.cli.error_handling import handle_domain_error
from salonledger.domain.profession import ProfessionService
from salonledger.utils.resolvers import resolve_profession


@click.group()
def profession_group():
    """Manage the professions masters can have."""
    pass


@profession_group.command("add")
@click.argument("name", metavar="NAME")
@click.pass_context
def add_profession(ctx, name: str):
    """Add a profession."""
    service = ProfessionService(ctx.obj["db"])
    try:
        profession_id = service.add_profession(name)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Added profession '{name.strip()}' (ID: {profession_id})")


@profession_group.command("list")
@click.pass_context
def list_professions(ctx):
    """List professions by name."""
    service = ProfessionService(ctx.obj["db"])

    professions = service.list_professions()
    if not professions:
        click.echo("No professions found. Members can have any profession until one is added.")
        return

    click.echo("\nProfessions:")
    for p in professions:
        click.echo(f"  {p.name} (ID: {p.id})")


@profession_group.command("remove")
@click.argument("profession", metavar="PROFESSION")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def remove_profession(ctx, profession: str, yes: bool):
    """Remove a profession. Members keep their profession text."""
    service = ProfessionService(ctx.obj["db"])
    try:
        profession_id = resolve_profession(service, profession)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if not yes and not click.confirm(f"Remove profession {profession_id}?"):
        click.echo("Removal cancelled.")
        return

    try:
        service.delete_profession(profession_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Removed profession {profession_id}")


def register_commands(cli):
    """Register profession commands with main CLI."""
    cli.add_command(profession_group, name="profession")
