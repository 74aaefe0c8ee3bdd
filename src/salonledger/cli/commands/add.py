"""Add entry command."""

import click
from salonledger.cli.error_handling import handle_domain_error
from salonledger.cli.resolution import resolve_member_or_exit, resolve_workspace_or_exit
from salonledger.domain.client import ClientService
from salonledger.domain.entities import ZERO, PaymentMethod, RecipientRole, TransactionType
from salonledger.domain.master import MemberService
from salonledger.domain.report import format_money
from salonledger.domain.settlement import compute_entry_balance
from salonledger.domain.transaction import TransactionService
from salonledger.utils.amount_parser import parse_amount, parse_percentage
from salonledger.utils.date_parser import parse_date
from salonledger.utils.resolvers import resolve_client

TYPE_CHOICES = {t.value.replace("_", "-"): t for t in TransactionType}


def parse_entry_type(value: str) -> TransactionType:
    """Map a CLI type name (``debt-salon-to-master``) to its TransactionType."""
    return TYPE_CHOICES[value]


@click.command("add")
@click.option("--workspace", required=True, help="Workspace name or ID")
@click.option("--master", required=True, help="Master name or ID")
@click.option("--date", default="today", show_default=True, help="Entry date (YYYY-MM-DD or 'today', 'yesterday')")
@click.option(
    "--type",
    "entry_type",
    type=click.Choice(list(TYPE_CHOICES)),
    default="service",
    show_default=True,
    help="Service or debt direction",
)
@click.option("--price", required=True, help="Price or debt amount (e.g., 45 or 45.50)")
@click.option("--payment", type=click.Choice([m.value for m in PaymentMethod]), help="Payment method of the service")
@click.option("--tips", help="Tips amount")
@click.option("--tips-payment", type=click.Choice([m.value for m in PaymentMethod]), help="How the tips were paid")
@click.option("--start", "start_time", help="Start time HH:MM")
@click.option("--end", "end_time", help="End time HH:MM")
@click.option(
    "--recipient",
    type=click.Choice([r.value for r in RecipientRole]),
    default=RecipientRole.ME.value,
    show_default=True,
    help="Who took the payment",
)
@click.option("--recipient-name", help="Name of the master who took the payment")
@click.option("--client", help="Client name or ID (unknown names are stored as text)")
@click.option("--service", default="", help="Service names, comma separated, or debt description")
@click.option("--revenue-share", help="Master's share for this entry in percent (admin only)")
@click.option("--as", "acting", help="Member performing the operation (name or ID)")
@click.option("--allow-overlap", is_flag=True, help="Accept a time slot that overlaps another service")
@click.pass_context
def add_entry(
    ctx,
    workspace: str,
    master: str,
    date: str,
    entry_type: str,
    price: str,
    payment: str | None,
    tips: str | None,
    tips_payment: str | None,
    start_time: str | None,
    end_time: str | None,
    recipient: str,
    recipient_name: str | None,
    client: str | None,
    service: str,
    revenue_share: str | None,
    acting: str | None,
    allow_overlap: bool,
):
    """Add a ledger entry for a master.

    Examples:
        salonledger add --workspace 1 --master Anna --price 45 --payment cash --start 10:00 --end 11:00 --service manicure
        salonledger add --workspace 1 --master Anna --price 60 --payment card --tips 5 --tips-payment card --start 12:00 --end 13:30
        salonledger add --workspace 1 --master Anna --type debt-salon-to-master --price 20 --service "Supplies refund"
    """
    db = ctx.obj["db"]
    transaction_service = TransactionService(db)
    member_service = MemberService(db)

    workspace_id = resolve_workspace_or_exit(ctx, workspace)
    master_id = resolve_member_or_exit(ctx, workspace_id, master)
    acting_id = resolve_member_or_exit(ctx, workspace_id, acting) if acting else None

    try:
        entry_date = parse_date(date)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    try:
        entry_price = parse_amount(price)
        entry_tips = parse_amount(tips) if tips else None
        share = parse_percentage(revenue_share) if revenue_share else None
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    client_id = None
    client_name = None
    if client:
        try:
            client_id = resolve_client(ClientService(db), workspace_id, client)
        except ValueError:
            client_name = client

    try:
        transaction_id = transaction_service.create_transaction(
            workspace_id=workspace_id,
            master_id=master_id,
            date=entry_date,
            price=entry_price,
            transaction_type=parse_entry_type(entry_type),
            tips=entry_tips if entry_tips is not None else ZERO,
            payment_method=PaymentMethod(payment) if payment else None,
            tips_payment_method=PaymentMethod(tips_payment) if tips_payment else None,
            recipient_role=RecipientRole(recipient),
            recipient_name=recipient_name,
            start_time=start_time,
            end_time=end_time,
            client_name=client_name,
            client_id=client_id,
            master_revenue_share=share,
            service=service,
            acting_member_id=acting_id,
            reject_overlap=not allow_overlap,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    txn = transaction_service.get_transaction(transaction_id)
    rates = member_service.get_rate_config(workspace_id, master_id)
    click.echo(f"Created entry {transaction_id}")
    click.echo(f"  Date: {txn.date}")
    if txn.start_time and txn.end_time:
        click.echo(f"  Time: {txn.start_time}-{txn.end_time}")
    click.echo(f"  Type: {txn.transaction_type.value}")
    click.echo(f"  Price: {format_money(txn.price)}")
    if txn.client_name:
        click.echo(f"  Client: {txn.client_name}")
    click.echo(f"  Balance: {format_money(compute_entry_balance(txn, rates), signed=True)}")


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_entry)
