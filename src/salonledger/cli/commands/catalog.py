"""Service catalog commands."""

from collections import defaultdict

import click
from salonledger.cli.error_handling import handle_domain_error
from salonledger.cli.resolution import resolve_member_or_exit, resolve_workspace_or_exit
from salonledger.domain.catalog import CatalogService
from salonledger.domain.report import format_money
from salonledger.utils.amount_parser import parse_amount
from salonledger.utils.resolvers import resolve_catalog_service, resolve_category


def _resolve_category_or_exit(ctx, service: CatalogService, workspace_id: int, category: str) -> int:
    try:
        return resolve_category(service, workspace_id, category)
    except ValueError as e:
        handle_domain_error(ctx, e)


def _resolve_service_or_exit(ctx, service: CatalogService, workspace_id: int, name: str) -> int:
    try:
        return resolve_catalog_service(service, workspace_id, name)
    except ValueError as e:
        handle_domain_error(ctx, e)


@click.group()
def service_group():
    """Manage the service catalog."""
    pass


@service_group.command("add")
@click.argument("name", metavar="NAME")
@click.option("--workspace", required=True, help="Workspace name or ID")
@click.option("--price", required=True, help="List price (e.g., 35 or 35,50)")
@click.option("--duration", type=click.IntRange(min=1), help="Length in minutes")
@click.option("--category", help="Category name or ID")
@click.option("--as", "acting", help="Member performing the operation (name or ID)")
@click.pass_context
def add_service(ctx, name: str, workspace: str, price: str, duration, category, acting):
    """Add a service to the catalog.

    Examples:
        salonledger service add "Gel polish" --workspace 1 --price 35 --duration 60 --category Nails
    """
    service = CatalogService(ctx.obj["db"])
    workspace_id = resolve_workspace_or_exit(ctx, workspace)
    category_id = _resolve_category_or_exit(ctx, service, workspace_id, category) if category else None
    acting_id = resolve_member_or_exit(ctx, workspace_id, acting) if acting else None

    try:
        service_id = service.add_service(
            workspace_id,
            name,
            parse_amount(price),
            duration=duration,
            category_id=category_id,
            acting_member_id=acting_id,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Added service '{name.strip()}' (ID: {service_id})")


@service_group.command("list")
@click.option("--workspace", required=True, help="Workspace name or ID")
@click.option("--category", help="Only services of this category (name or ID)")
@click.pass_context
def list_services(ctx, workspace: str, category: str | None):
    """List catalog services grouped by category."""
    service = CatalogService(ctx.obj["db"])
    workspace_id = resolve_workspace_or_exit(ctx, workspace)
    category_id = _resolve_category_or_exit(ctx, service, workspace_id, category) if category else None

    items = service.list_services(workspace_id, category_id=category_id)
    if not items:
        click.echo("No services found.")
        return

    grouped = defaultdict(list)
    for item in items:
        grouped[item.category_label].append(item)

    for label in sorted(grouped):
        click.echo(f"\n{label}:")
        for item in grouped[label]:
            duration = f"{item.duration} min" if item.duration else "-"
            click.echo(
                f"  {item.id:<5} {item.name:<24} {format_money(item.price):>10}  {duration}"
            )


@service_group.command("update")
@click.argument("name", metavar="SERVICE")
@click.option("--workspace", required=True, help="Workspace name or ID")
@click.option("--name", "new_name", help="New name")
@click.option("--price", help="New price")
@click.option("--duration", type=click.IntRange(min=1), help="New length in minutes")
@click.option("--category", help="New category name or ID")
@click.option("--no-category", is_flag=True, help="Move the service out of its category")
@click.option("--as", "acting", help="Member performing the operation (name or ID)")
@click.pass_context
def update_service(ctx, name: str, workspace: str, new_name, price, duration, category, no_category, acting):
    """Update a catalog service."""
    service = CatalogService(ctx.obj["db"])
    workspace_id = resolve_workspace_or_exit(ctx, workspace)
    service_id = _resolve_service_or_exit(ctx, service, workspace_id, name)
    category_id = _resolve_category_or_exit(ctx, service, workspace_id, category) if category else None
    acting_id = resolve_member_or_exit(ctx, workspace_id, acting) if acting else None

    if all(v is None for v in (new_name, price, duration, category_id)) and not no_category:
        click.echo("Nothing to update.")
        return

    try:
        updated = service.update_service(
            service_id,
            name=new_name,
            price=parse_amount(price) if price is not None else None,
            duration=duration,
            category_id=category_id,
            clear_category=no_category,
            acting_member_id=acting_id,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(
        f"Updated service {service_id}: {updated.name}, {format_money(updated.price)}, "
        f"{updated.category_label}"
    )


@service_group.command("remove")
@click.argument("name", metavar="SERVICE")
@click.option("--workspace", required=True, help="Workspace name or ID")
@click.option("--as", "acting", help="Member performing the operation (name or ID)")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def remove_service(ctx, name: str, workspace: str, acting: str | None, yes: bool):
    """Remove a service from the catalog. Recorded entries are unchanged."""
    service = CatalogService(ctx.obj["db"])
    workspace_id = resolve_workspace_or_exit(ctx, workspace)
    service_id = _resolve_service_or_exit(ctx, service, workspace_id, name)
    acting_id = resolve_member_or_exit(ctx, workspace_id, acting) if acting else None

    if not yes and not click.confirm(f"Remove service {service_id}?"):
        click.echo("Removal cancelled.")
        return

    try:
        service.delete_service(service_id, acting_member_id=acting_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Removed service {service_id}")


@service_group.group("category")
def category_group():
    """Manage service categories."""
    pass


@category_group.command("add")
@click.argument("name", metavar="NAME")
@click.option("--workspace", required=True, help="Workspace name or ID")
@click.option("--as", "acting", help="Member performing the operation (name or ID)")
@click.pass_context
def add_category(ctx, name: str, workspace: str, acting: str | None):
    """Add a service category."""
    service = CatalogService(ctx.obj["db"])
    workspace_id = resolve_workspace_or_exit(ctx, workspace)
    acting_id = resolve_member_or_exit(ctx, workspace_id, acting) if acting else None

    try:
        category_id = service.add_category(workspace_id, name, acting_member_id=acting_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Added category '{name.strip()}' (ID: {category_id})")


@category_group.command("list")
@click.option("--workspace", required=True, help="Workspace name or ID")
@click.pass_context
def list_categories(ctx, workspace: str):
    """List service categories."""
    service = CatalogService(ctx.obj["db"])
    workspace_id = resolve_workspace_or_exit(ctx, workspace)

    categories = service.list_categories(workspace_id)
    if not categories:
        click.echo("No categories found.")
        return

    click.echo("\nCategories:")
    for c in categories:
        click.echo(f"  {c.name} (ID: {c.id})")


@category_group.command("remove")
@click.argument("category", metavar="CATEGORY")
@click.option("--workspace", required=True, help="Workspace name or ID")
@click.option("--as", "acting", help="Member performing the operation (name or ID)")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def remove_category(ctx, category: str, workspace: str, acting: str | None, yes: bool):
    """Remove a category. Its services become uncategorized."""
    service = CatalogService(ctx.obj["db"])
    workspace_id = resolve_workspace_or_exit(ctx, workspace)
    category_id = _resolve_category_or_exit(ctx, service, workspace_id, category)
    acting_id = resolve_member_or_exit(ctx, workspace_id, acting) if acting else None

    if not yes and not click.confirm(f"Remove category {category_id}?"):
        click.echo("Removal cancelled.")
        return

    try:
        service.delete_category(category_id, acting_member_id=acting_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Removed category {category_id}")


def register_commands(cli):
    """Register service catalog commands with main CLI."""
    cli.add_command(service_group, name="service")
