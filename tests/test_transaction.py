"""Tests for add and entry commands."""

from datetime import date
from decimal import Decimal

import pytest

from salonledger.cli.main import cli
from salonledger.domain.entities import PaymentMethod, RecipientRole, TransactionType


def run(cli_runner, temp_db, *args, **kwargs):
    return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args], **kwargs)


def add(cli_runner, temp_db, *extra):
    return run(
        cli_runner, temp_db, "add", "--workspace", "Studio Nord", "--master", "Anna",
        "--date", "2024-03-15", *extra,
    )


@pytest.fixture
def cash_entry(transaction_service, sample_workspace, sample_master):
    return transaction_service.create_transaction(
        workspace_id=sample_workspace.id,
        master_id=sample_master.id,
        date=date(2024, 3, 15),
        price=Decimal("100"),
        payment_method=PaymentMethod.CASH,
        start_time="10:00",
        end_time="11:00",
    )


def test_add_cash_service(cli_runner, temp_db, transaction_service, sample_master):
    result = add(
        cli_runner, temp_db, "--price", "100", "--payment", "cash",
        "--start", "10:00", "--end", "11:00", "--service", "manicure",
    )

    assert result.exit_code == 0
    assert "Created entry" in result.output
    assert "Time: 10:00-11:00" in result.output
    assert "Balance: -€60.00" in result.output

    (txn,) = transaction_service.list_transactions(sample_master.workspace_id)
    assert txn.price == Decimal("100")
    assert txn.service == "manicure"


def test_add_card_service_with_tips(cli_runner, temp_db, sample_master):
    result = add(
        cli_runner, temp_db, "--price", "80", "--payment", "card", "--tips", "10",
        "--tips-payment", "card", "--start", "12:00", "--end", "13:00",
    )

    assert result.exit_code == 0
    assert "Balance: +€36.00" in result.output


def test_add_debt(cli_runner, temp_db, transaction_service, sample_master):
    result = add(cli_runner, temp_db, "--type", "debt-salon-to-master", "--price", "20")

    assert result.exit_code == 0
    assert "Type: debt_salon_to_master" in result.output
    assert "Balance: +€20.00" in result.output
    (txn,) = transaction_service.list_transactions(sample_master.workspace_id)
    assert txn.transaction_type == TransactionType.DEBT_SALON_TO_MASTER
    assert txn.payment_method == PaymentMethod.CARD


def test_add_service_without_times(cli_runner, temp_db, sample_master):
    result = add(cli_runner, temp_db, "--price", "50", "--payment", "cash")

    assert result.exit_code == 1
    assert "start and end time" in result.output


def test_add_service_without_payment(cli_runner, temp_db, sample_master):
    result = add(cli_runner, temp_db, "--price", "50", "--start", "10:00", "--end", "11:00")

    assert result.exit_code == 1
    assert "payment method" in result.output


def test_add_negative_price(cli_runner, temp_db, sample_master):
    result = add(cli_runner, temp_db, "--price", "-5", "--payment", "cash")

    assert result.exit_code == 1
    assert "cannot be negative" in result.output


def test_add_rejects_overlap(cli_runner, temp_db, cash_entry):
    result = add(
        cli_runner, temp_db, "--price", "50", "--payment", "card",
        "--start", "10:30", "--end", "11:30",
    )

    assert result.exit_code == 1
    assert "overlaps an existing service entry" in result.output


def test_add_touching_slot_and_allow_overlap(cli_runner, temp_db, cash_entry):
    touching = add(
        cli_runner, temp_db, "--price", "50", "--payment", "card",
        "--start", "11:00", "--end", "12:00",
    )
    forced = add(
        cli_runner, temp_db, "--price", "50", "--payment", "card",
        "--start", "10:30", "--end", "11:30", "--allow-overlap",
    )

    assert touching.exit_code == 0
    assert forced.exit_code == 0


def test_add_with_other_master_recipient(cli_runner, temp_db, transaction_service, sample_master):
    result = add(
        cli_runner, temp_db, "--price", "45", "--payment", "cash", "--start", "10:00",
        "--end", "11:00", "--recipient", "master", "--recipient-name", "Bella",
    )

    assert result.exit_code == 0
    (txn,) = transaction_service.list_transactions(sample_master.workspace_id)
    assert txn.recipient_role == RecipientRole.MASTER
    assert txn.recipient_name == "Bella"


def test_add_links_known_client(
    cli_runner, temp_db, client_service, transaction_service, sample_workspace, sample_master
):
    client_id = client_service.add_client(sample_workspace.id, "Maria")
    add(
        cli_runner, temp_db, "--price", "50", "--payment", "cash", "--start", "10:00",
        "--end", "11:00", "--client", "Maria",
    )
    add(
        cli_runner, temp_db, "--price", "50", "--payment", "cash", "--start", "12:00",
        "--end", "13:00", "--client", "Walk-in",
    )

    linked, free_text = transaction_service.list_transactions(sample_workspace.id)
    assert linked.client_id == client_id
    assert linked.client_name == "Maria"
    assert free_text.client_id is None
    assert free_text.client_name == "Walk-in"


def test_revenue_share_needs_admin(cli_runner, temp_db, sample_master, sample_admin):
    base = ("--price", "100", "--payment", "card", "--start", "10:00", "--end", "11:00")

    denied = add(cli_runner, temp_db, *base, "--revenue-share", "70")
    allowed = add(cli_runner, temp_db, *base, "--revenue-share", "70", "--as", "Olga",
                  "--allow-overlap")

    assert denied.exit_code == 1
    assert "Only an admin" in denied.output
    assert allowed.exit_code == 0
    assert "Balance: +€70.00" in allowed.output


def test_entry_update_keeps_admin_share(
    cli_runner, temp_db, transaction_service, sample_workspace, sample_master, sample_admin
):
    txn_id = transaction_service.create_transaction(
        workspace_id=sample_workspace.id,
        master_id=sample_master.id,
        date=date(2024, 3, 15),
        price=Decimal("100"),
        payment_method=PaymentMethod.CARD,
        start_time="10:00",
        end_time="11:00",
        master_revenue_share=Decimal("70"),
        acting_member_id=sample_admin.id,
    )

    edited = run(
        cli_runner, temp_db, "entry", "update", str(txn_id), "--workspace", "1",
        "--service", "manicure",
    )
    cleared = run(
        cli_runner, temp_db, "entry", "update", str(txn_id), "--workspace", "1",
        "--clear-revenue-share",
    )

    assert edited.exit_code == 0
    assert cleared.exit_code == 1
    assert "Only an admin" in cleared.output
    txn = transaction_service.get_transaction(txn_id)
    assert txn.service == "manicure"
    assert txn.master_revenue_share == Decimal("70")


def test_entry_list(cli_runner, temp_db, cash_entry):
    result = run(cli_runner, temp_db, "entry", "list", "--workspace", "Studio Nord")

    assert result.exit_code == 0
    assert "10:00-11:00" in result.output
    assert "Anna" in result.output
    assert "-€60.00" in result.output


def test_entry_list_empty_period(cli_runner, temp_db, cash_entry):
    result = run(
        cli_runner, temp_db, "entry", "list", "--workspace", "Studio Nord",
        "--start-date", "2024-04-01",
    )

    assert result.exit_code == 0
    assert "No entries found." in result.output


def test_entry_update(cli_runner, temp_db, transaction_service, cash_entry):
    result = run(
        cli_runner, temp_db, "entry", "update", str(cash_entry), "--workspace", "Studio Nord",
        "--payment", "card", "--price", "50",
    )

    assert result.exit_code == 0
    assert "Balance: +€20.00" in result.output
    txn = transaction_service.get_transaction(cash_entry)
    assert txn.payment_method == PaymentMethod.CARD
    assert txn.price == Decimal("50")


def test_entry_update_nothing(cli_runner, temp_db, cash_entry):
    result = run(cli_runner, temp_db, "entry", "update", str(cash_entry), "--workspace", "1")

    assert result.exit_code == 0
    assert "Nothing to update." in result.output


def test_entry_update_invalid_times(cli_runner, temp_db, transaction_service, cash_entry):
    result = run(
        cli_runner, temp_db, "entry", "update", str(cash_entry), "--workspace", "1",
        "--end", "09:00",
    )

    assert result.exit_code == 1
    assert "must be before" in result.output
    assert transaction_service.get_transaction(cash_entry).end_time == "11:00"


def test_entry_update_missing(cli_runner, temp_db, sample_workspace):
    result = run(cli_runner, temp_db, "entry", "update", "42", "--workspace", "1", "--price", "5")

    assert result.exit_code == 1
    assert "Transaction 42 not found" in result.output


def test_entry_delete(cli_runner, temp_db, transaction_service, cash_entry):
    result = run(
        cli_runner, temp_db, "entry", "delete", str(cash_entry), "--workspace", "1", "--yes"
    )

    assert result.exit_code == 0
    assert f"Deleted entry {cash_entry}" in result.output
    assert transaction_service.get_transaction(cash_entry) is None


def test_entry_delete_by_other_master(
    cli_runner, temp_db, member_service, transaction_service, sample_workspace, cash_entry
):
    member_service.create_member(sample_workspace.id, "Bella")
    result = run(
        cli_runner, temp_db, "entry", "delete", str(cash_entry), "--workspace", "1",
        "--as", "Bella", "--yes",
    )

    assert result.exit_code == 1
    assert transaction_service.get_transaction(cash_entry) is not None
