"""Settlement balance command."""

import click
from salonledger.cli.date_filters import period_options, resolve_cli_date_range
from salonledger.cli.error_handling import handle_domain_error
from salonledger.cli.resolution import resolve_member_or_exit, resolve_workspace_or_exit
from salonledger.domain.entities import Perspective
from salonledger.domain.report import ReportService, format_day, format_money
from salonledger.utils.date_parser import get_date_range


@click.command("balance")
@click.option("--workspace", required=True, help="Workspace name or ID")
@click.option("--master", required=True, help="Master name or ID")
@period_options
@click.option("--admin", is_flag=True, help="Show the balance from the salon's point of view")
@click.option("--entries", is_flag=True, help="List the entries behind the balance")
@click.pass_context
def balance(
    ctx,
    workspace: str,
    master: str,
    start_date: str | None,
    end_date: str | None,
    this_week: bool,
    this_month: bool,
    last_week: bool,
    last_month: bool,
    admin: bool,
    entries: bool,
):
    """Show the settlement between a master and the salon.

    Defaults to today's entries. A positive balance means the salon owes
    the master (or, with --admin, the master owes the salon).

    Examples:
        salonledger balance --workspace 1 --master Anna
        salonledger balance --workspace 1 --master Anna --this-month --entries
        salonledger balance --workspace 1 --master Anna --last-week --admin
    """
    db = ctx.obj["db"]
    workspace_id = resolve_workspace_or_exit(ctx, workspace)
    master_id = resolve_member_or_exit(ctx, workspace_id, master)

    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags={
            "this-week": this_week,
            "this-month": this_month,
            "last-week": last_week,
            "last-month": last_month,
        },
        default_range=get_date_range("today"),
    )
    perspective = Perspective.ADMIN if admin else Perspective.MASTER

    try:
        report = ReportService(db).build_master_report(
            workspace_id, master_id, start_date=start, end_date=end, perspective=perspective
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    settlement = report.settlement
    click.echo(f"\n{report.master_name}: {report.period_label}")
    click.echo("=" * 60)

    if entries:
        if not report.rows_by_date:
            click.echo("No entries in this period.")
        for day, rows in report.rows_by_date.items():
            click.echo(f"\n{format_day(day)}")
            for row in rows:
                click.echo(
                    f"  {row.index:>3}. {row.client:<16} {row.service:<20} {row.method:<15} "
                    f"{format_money(row.price):>10} {format_money(row.card_tips):>8} "
                    f"{row.recipient:<10} {format_money(row.balance, signed=True):>10}"
                )
        click.echo(f"\n  Total: {format_money(report.total)}")
        click.echo("-" * 60)

    click.echo(f"Income: {format_money(settlement.income)}")
    click.echo(f"  of which tips: {format_money(settlement.tips_total)}")
    click.echo(f"Salon income: {format_money(settlement.salon_income)}")
    click.echo(f"Card tips: {format_money(settlement.card_tips)}")
    for name, amount in sorted(settlement.recipients.items()):
        click.echo(f"Held by {name}: {format_money(amount)}")
    click.echo("")
    click.echo(f"{report.balance_caption}: {format_money(abs(settlement.balance))}")
    click.echo(f"Balance: {format_money(settlement.balance, signed=True)}")


def register_commands(cli):
    """Register balance command with main CLI."""
    cli.add_command(balance)
