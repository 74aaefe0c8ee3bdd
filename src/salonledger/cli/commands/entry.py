"""Entry listing and editing commands."""

import click
from salonledger.cli.commands.add import TYPE_CHOICES, parse_entry_type
from salonledger.cli.date_filters import period_options, resolve_cli_date_range
from salonledger.cli.error_handling import handle_domain_error
from salonledger.cli.resolution import resolve_member_or_exit, resolve_workspace_or_exit
from salonledger.domain.client import ClientService
from salonledger.domain.entities import PaymentMethod, RecipientRole
from salonledger.domain.master import MemberService
from salonledger.domain.report import format_money, method_label
from salonledger.domain.settlement import compute_entry_balance
from salonledger.domain.transaction import TransactionService
from salonledger.utils.amount_parser import parse_amount, parse_percentage
from salonledger.utils.date_parser import parse_date
from salonledger.utils.resolvers import resolve_client


@click.group()
def entry_group():
    """List, update and delete ledger entries."""
    pass


@entry_group.command("list")
@click.option("--workspace", required=True, help="Workspace name or ID")
@click.option("--master", help="Only entries of this master (name or ID)")
@period_options
@click.pass_context
def list_entries(
    ctx,
    workspace: str,
    master: str | None,
    start_date: str | None,
    end_date: str | None,
    this_week: bool,
    this_month: bool,
    last_week: bool,
    last_month: bool,
):
    """List ledger entries.

    Examples:
        salonledger entry list --workspace 1
        salonledger entry list --workspace 1 --master Anna --this-month
    """
    db = ctx.obj["db"]
    transaction_service = TransactionService(db)
    member_service = MemberService(db)

    workspace_id = resolve_workspace_or_exit(ctx, workspace)
    master_id = resolve_member_or_exit(ctx, workspace_id, master) if master else None
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
    )

    entries = transaction_service.list_transactions(
        workspace_id, master_id=master_id, start_date=start, end_date=end
    )
    if not entries:
        click.echo("No entries found.")
        return

    masters = {m.id: m.name for m in member_service.list_members(workspace_id)}
    rates_by_master = {}

    click.echo(
        f"\n{'ID':<5} {'Date':<12} {'Time':<12} {'Master':<12} {'Method':<16} "
        f"{'Price':>10} {'Tips':>8} {'Balance':>10}  Client"
    )
    click.echo("-" * 100)
    for txn in entries:
        if txn.master_id not in rates_by_master:
            rates_by_master[txn.master_id] = member_service.get_rate_config(
                workspace_id, txn.master_id
            )
        slot = f"{txn.start_time}-{txn.end_time}" if txn.start_time and txn.end_time else ""
        balance = compute_entry_balance(txn, rates_by_master[txn.master_id])
        click.echo(
            f"{txn.id:<5} {str(txn.date):<12} {slot:<12} "
            f"{masters.get(txn.master_id, '?'):<12} {method_label(txn):<16} "
            f"{format_money(txn.price):>10} {format_money(txn.tips):>8} "
            f"{format_money(balance, signed=True):>10}  {txn.client_name or ''}"
        )


@entry_group.command("update")
@click.argument("transaction_id", type=int)
@click.option("--workspace", required=True, help="Workspace name or ID")
@click.option("--date", help="New date")
@click.option("--type", "entry_type", type=click.Choice(list(TYPE_CHOICES)), help="New type")
@click.option("--price", help="New price")
@click.option("--payment", type=click.Choice([m.value for m in PaymentMethod]), help="New payment method")
@click.option("--tips", help="New tips amount")
@click.option("--tips-payment", type=click.Choice([m.value for m in PaymentMethod]), help="New tips payment method")
@click.option("--start", "start_time", help="New start time HH:MM")
@click.option("--end", "end_time", help="New end time HH:MM")
@click.option("--recipient", type=click.Choice([r.value for r in RecipientRole]), help="New recipient")
@click.option("--recipient-name", help="Name of the master who took the payment")
@click.option("--client", help="Client name or ID")
@click.option("--service", help="New service names or description")
@click.option("--revenue-share", help="Master's share in percent (admin only)")
@click.option("--clear-revenue-share", is_flag=True, help="Remove the per-entry revenue share")
@click.option("--as", "acting", help="Member performing the operation (name or ID)")
@click.option("--allow-overlap", is_flag=True, help="Accept a time slot that overlaps another service")
@click.pass_context
def update_entry(
    ctx,
    transaction_id: int,
    workspace: str,
    date: str | None,
    entry_type: str | None,
    price: str | None,
    payment: str | None,
    tips: str | None,
    tips_payment: str | None,
    start_time: str | None,
    end_time: str | None,
    recipient: str | None,
    recipient_name: str | None,
    client: str | None,
    service: str | None,
    revenue_share: str | None,
    clear_revenue_share: bool,
    acting: str | None,
    allow_overlap: bool,
):
    """Update fields of an existing entry.

    Examples:
        salonledger entry update 12 --workspace 1 --price 50
        salonledger entry update 12 --workspace 1 --payment card --tips 5 --tips-payment card
    """
    db = ctx.obj["db"]
    transaction_service = TransactionService(db)

    workspace_id = resolve_workspace_or_exit(ctx, workspace)
    acting_id = resolve_member_or_exit(ctx, workspace_id, acting) if acting else None

    txn = transaction_service.get_transaction(transaction_id)
    if txn is None or txn.workspace_id != workspace_id:
        click.echo(f"Error: Transaction {transaction_id} not found", err=True)
        ctx.exit(1)

    changes = {}
    try:
        if date is not None:
            changes["date"] = parse_date(date)
        if price is not None:
            changes["price"] = parse_amount(price)
        if tips is not None:
            changes["tips"] = parse_amount(tips)
        if revenue_share is not None:
            changes["master_revenue_share"] = parse_percentage(revenue_share)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    if clear_revenue_share:
        changes["master_revenue_share"] = None
    if entry_type is not None:
        changes["transaction_type"] = parse_entry_type(entry_type)
    if payment is not None:
        changes["payment_method"] = PaymentMethod(payment)
    if tips_payment is not None:
        changes["tips_payment_method"] = PaymentMethod(tips_payment)
    if start_time is not None:
        changes["start_time"] = start_time
    if end_time is not None:
        changes["end_time"] = end_time
    if recipient is not None:
        changes["recipient_role"] = RecipientRole(recipient)
    if recipient_name is not None:
        changes["recipient_name"] = recipient_name
    if service is not None:
        changes["service"] = service
    if client is not None:
        try:
            changes["client_id"] = resolve_client(ClientService(db), workspace_id, client)
            changes["client_name"] = None
        except ValueError:
            changes["client_id"] = None
            changes["client_name"] = client

    if not changes:
        click.echo("Nothing to update.")
        return

    try:
        updated = transaction_service.update_transaction(
            transaction_id,
            acting_member_id=acting_id,
            reject_overlap=not allow_overlap,
            **changes,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    rates = MemberService(db).get_rate_config(workspace_id, updated.master_id)
    click.echo(f"Updated entry {transaction_id}")
    click.echo(f"  Balance: {format_money(compute_entry_balance(updated, rates), signed=True)}")


@entry_group.command("delete")
@click.argument("transaction_id", type=int)
@click.option("--workspace", required=True, help="Workspace name or ID")
@click.option("--as", "acting", help="Member performing the operation (name or ID)")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_entry(ctx, transaction_id: int, workspace: str, acting: str | None, yes: bool):
    """Delete an entry."""
    db = ctx.obj["db"]
    transaction_service = TransactionService(db)

    workspace_id = resolve_workspace_or_exit(ctx, workspace)
    acting_id = resolve_member_or_exit(ctx, workspace_id, acting) if acting else None

    txn = transaction_service.get_transaction(transaction_id)
    if txn is None or txn.workspace_id != workspace_id:
        click.echo(f"Error: Transaction {transaction_id} not found", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(f"Delete entry {transaction_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        transaction_service.delete_transaction(transaction_id, acting_member_id=acting_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted entry {transaction_id}")


def register_commands(cli):
    """Register entry commands with main CLI."""
    cli.add_command(entry_group, name="entry")
