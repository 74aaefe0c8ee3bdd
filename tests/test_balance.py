"""Tests for the balance command."""

from datetime import date, timedelta
from decimal import Decimal

import pytest

from salonledger.cli.main import cli
from salonledger.domain.entities import PaymentMethod, RecipientRole, TransactionType


def run(cli_runner, temp_db, *args):
    return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args])


@pytest.fixture
def march_entries(transaction_service, sample_workspace, sample_master):
    def add(**values):
        base = dict(
            workspace_id=sample_workspace.id,
            master_id=sample_master.id,
            date=date(2024, 3, 15),
            price=Decimal("100"),
            payment_method=PaymentMethod.CASH,
            start_time="10:00",
            end_time="11:00",
        )
        base.update(values)
        return transaction_service.create_transaction(**base)

    add(client_name="Maria", service="manicure")
    add(
        price=Decimal("80"),
        payment_method=PaymentMethod.CARD,
        tips=Decimal("10"),
        tips_payment_method=PaymentMethod.CARD,
        start_time="12:00",
        end_time="13:00",
    )
    add(
        price=Decimal("45"),
        recipient_role=RecipientRole.MASTER,
        recipient_name="Bella",
        start_time="14:00",
        end_time="15:00",
    )
    add(
        date=date(2024, 3, 16),
        transaction_type=TransactionType.DEBT_SALON_TO_MASTER,
        price=Decimal("20"),
        start_time=None,
        end_time=None,
    )


BALANCE_ARGS = ("balance", "--workspace", "Studio Nord", "--master", "Anna")


def test_balance_for_range(cli_runner, temp_db, march_entries):
    result = run(
        cli_runner, temp_db, *BALANCE_ARGS, "--start-date", "2024-03-01", "--end-date", "2024-03-31"
    )

    assert result.exit_code == 0
    assert "Anna: 1 March 2024 – 31 March 2024" in result.output
    # -60 + 36 - 27 + 20
    assert "Balance: -€31.00" in result.output
    assert "Master owes salon: €31.00" in result.output
    assert "Card tips: €10.00" in result.output
    assert "Held by Bella: €45.00" in result.output


def test_balance_admin_view_is_mirrored(cli_runner, temp_db, march_entries):
    result = run(
        cli_runner, temp_db, *BALANCE_ARGS, "--start-date", "2024-03-01", "--end-date", "2024-03-31",
        "--admin",
    )

    assert result.exit_code == 0
    assert "Balance: +€31.00" in result.output
    assert "Master owes salon: €31.00" in result.output


def test_balance_single_day(cli_runner, temp_db, march_entries):
    result = run(cli_runner, temp_db, *BALANCE_ARGS, "--start-date", "2024-03-16")

    assert result.exit_code == 0
    assert "Balance: +€20.00" in result.output
    assert "Salon owes master: €20.00" in result.output


def test_balance_with_entries(cli_runner, temp_db, march_entries):
    result = run(
        cli_runner, temp_db, *BALANCE_ARGS, "--start-date", "2024-03-15", "--entries"
    )

    assert result.exit_code == 0
    assert "15 March 2024" in result.output
    assert "Maria" in result.output
    assert "Manicure" in result.output
    assert "Bella" in result.output
    # 100 + (80 + 10) + 45
    assert "Total: €235.00" in result.output


def test_balance_defaults_to_today(cli_runner, temp_db, transaction_service, sample_master):
    transaction_service.create_transaction(
        workspace_id=sample_master.workspace_id,
        master_id=sample_master.id,
        date=date.today() - timedelta(days=1),
        price=Decimal("100"),
        payment_method=PaymentMethod.CARD,
        start_time="10:00",
        end_time="11:00",
    )

    result = run(cli_runner, temp_db, *BALANCE_ARGS)

    assert result.exit_code == 0
    assert "Balance: +€0.00" in result.output

    result = run(cli_runner, temp_db, *BALANCE_ARGS, "--start-date", "yesterday")
    assert "Balance: +€40.00" in result.output


def test_balance_rejects_two_periods(cli_runner, temp_db, sample_master):
    result = run(cli_runner, temp_db, *BALANCE_ARGS, "--this-week", "--last-week")

    assert result.exit_code == 1
    assert "Only one period option" in result.output


def test_balance_unknown_master(cli_runner, temp_db, sample_workspace):
    result = run(cli_runner, temp_db, *BALANCE_ARGS)

    assert result.exit_code == 1
    assert "Member 'Anna' not found" in result.output
