"""Member and commission rate commands."""

import click
from salonledger.cli.error_handling import handle_domain_error
from salonledger.cli.resolution import resolve_member_or_exit, resolve_workspace_or_exit
from salonledger.domain.entities import MemberRole
from salonledger.domain.master import MemberService
from salonledger.domain.report import format_rate
from salonledger.utils.amount_parser import parse_percentage


def _percentage_or_exit(ctx, value: str | None, option: str):
    if value is None:
        return None
    try:
        return parse_percentage(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {option}: {e}", err=True)
        ctx.exit(1)


@click.group()
def member_group():
    """Manage workspace members and their rates."""
    pass


@member_group.command("add")
@click.argument("name", metavar="NAME")
@click.option("--workspace", required=True, help="Workspace name or ID")
@click.option(
    "--role",
    type=click.Choice([r.value for r in MemberRole]),
    default=MemberRole.MASTER.value,
    show_default=True,
    help="Member role",
)
@click.option("--profession", help="Profession shown next to the name")
@click.option("--manage-clients", is_flag=True, help="Allow managing the client list")
@click.pass_context
def add_member(ctx, name: str, workspace: str, role: str, profession: str | None, manage_clients: bool):
    """Add a member to a workspace.

    Masters start with the default 40% rate.

    Examples:
        salonledger member add "Anna" --workspace "Studio Nord" --profession "Nail artist"
        salonledger member add "Olga" --workspace 1 --role admin
    """
    service = MemberService(ctx.obj["db"])
    workspace_id = resolve_workspace_or_exit(ctx, workspace)

    try:
        member_id = service.create_member(
            workspace_id=workspace_id,
            name=name,
            role=MemberRole(role),
            profession=profession,
            manage_clients=manage_clients,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Added {role} '{name}' (ID: {member_id})")


@member_group.command("list")
@click.option("--workspace", required=True, help="Workspace name or ID")
@click.pass_context
def list_members(ctx, workspace: str):
    """List members of a workspace with their rates."""
    service = MemberService(ctx.obj["db"])
    workspace_id = resolve_workspace_or_exit(ctx, workspace)

    members = service.list_members(workspace_id)
    if not members:
        click.echo("No members found.")
        return

    click.echo(f"\n{'ID':<5} {'Name':<20} {'Role':<8} {'Cash %':>7} {'Card %':>7}  Profession")
    click.echo("-" * 70)
    for m in members:
        cash = card = ""
        if m.role == MemberRole.MASTER:
            rates = service.get_resolved_rates(workspace_id, m.id)
            cash, card = format_rate(rates.cash_rate), format_rate(rates.card_rate)
        click.echo(
            f"{m.id:<5} {m.name:<20} {m.role.value:<8} {cash:>7} {card:>7}  {m.profession or ''}"
        )


@member_group.command("rates")
@click.argument("master", metavar="MASTER")
@click.option("--workspace", required=True, help="Workspace name or ID")
@click.option("--general", help="Rate for both cash and card (percent)")
@click.option("--cash", help="Rate for cash payments (percent)")
@click.option("--card", help="Rate for card payments (percent)")
@click.option("--different/--same", default=None, help="Use separate cash and card rates")
@click.option("--as", "acting", help="Member performing the change (name or ID)")
@click.pass_context
def rates(ctx, master: str, workspace: str, general, cash, card, different, acting):
    """Show or change the commission rates of a master.

    Without options the current rates are shown.

    Examples:
        salonledger member rates "Anna" --workspace 1
        salonledger member rates "Anna" --workspace 1 --general 45
        salonledger member rates "Anna" --workspace 1 --different --cash 40 --card 50
    """
    service = MemberService(ctx.obj["db"])
    workspace_id = resolve_workspace_or_exit(ctx, workspace)
    master_id = resolve_member_or_exit(ctx, workspace_id, master)
    acting_id = resolve_member_or_exit(ctx, workspace_id, acting) if acting else None

    general = _percentage_or_exit(ctx, general, "general rate")
    cash = _percentage_or_exit(ctx, cash, "cash rate")
    card = _percentage_or_exit(ctx, card, "card rate")

    if all(value is None for value in (general, cash, card, different)):
        config = service.get_rate_config(workspace_id, master_id)
        if config is None:
            click.echo("No rate settings (default 40% applies).")
            return
    else:
        try:
            config = service.update_rates(
                workspace_id,
                master_id,
                use_different_rates=different,
                rate_general=general,
                rate_cash=cash,
                rate_card=card,
                acting_member_id=acting_id,
            )
        except ValueError as e:
            handle_domain_error(ctx, e)
        click.echo("Rates updated.")

    mode = "separate cash/card" if config.use_different_rates else "single rate"
    click.echo(f"  Mode: {mode}")
    click.echo(f"  General: {format_rate(config.rate_general)}%")
    click.echo(f"  Cash: {format_rate(config.rate_cash)}%")
    click.echo(f"  Card: {format_rate(config.rate_card)}%")


@member_group.command("remove")
@click.argument("member", metavar="MEMBER")
@click.option("--workspace", required=True, help="Workspace name or ID")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def remove_member(ctx, member: str, workspace: str, yes: bool):
    """Remove a member together with its settings and entries."""
    service = MemberService(ctx.obj["db"])
    workspace_id = resolve_workspace_or_exit(ctx, workspace)
    member_id = resolve_member_or_exit(ctx, workspace_id, member)

    if not yes and not click.confirm(
        f"Remove member {member_id} and all of its entries?"
    ):
        click.echo("Removal cancelled.")
        return

    try:
        service.delete_member(workspace_id, member_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Removed member {member_id}")


def register_commands(cli):
    """Register member commands with main CLI."""
    cli.add_command(member_group, name="member")
