"""Tests for client commands."""

from datetime import date
from decimal import Decimal

from salonledger.cli.main import cli
from salonledger.domain.entities import PaymentMethod


def run(cli_runner, temp_db, *args, **kwargs):
    return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args], **kwargs)


def test_add_client(cli_runner, temp_db, client_service, sample_workspace):
    result = run(
        cli_runner, temp_db, "client", "add", "Maria", "--workspace", "Studio Nord",
        "--phone", "+49 151 000000",
    )

    assert result.exit_code == 0
    assert "Added client 'Maria'" in result.output
    (client,) = client_service.list_clients(sample_workspace.id)
    assert client.phone == "+49 151 000000"


def test_add_client_needs_permission(cli_runner, temp_db, sample_workspace, sample_master):
    result = run(
        cli_runner, temp_db, "client", "add", "Maria", "--workspace", "Studio Nord", "--as", "Anna"
    )

    assert result.exit_code == 1
    assert "cannot manage clients" in result.output


def test_list_clients_with_stats(
    cli_runner, temp_db, client_service, transaction_service, sample_workspace, sample_master
):
    client_id = client_service.add_client(sample_workspace.id, "Maria")
    transaction_service.create_transaction(
        workspace_id=sample_workspace.id,
        master_id=sample_master.id,
        date=date(2024, 3, 15),
        price=Decimal("50"),
        tips=Decimal("5"),
        payment_method=PaymentMethod.CASH,
        tips_payment_method=PaymentMethod.CASH,
        start_time="10:00",
        end_time="11:00",
        client_id=client_id,
    )

    result = run(cli_runner, temp_db, "client", "list", "--workspace", "Studio Nord")

    assert result.exit_code == 0
    assert "Maria" in result.output
    assert "€55.00" in result.output
    assert "2024-03-15" in result.output


def test_list_clients_empty(cli_runner, temp_db, sample_workspace):
    result = run(cli_runner, temp_db, "client", "list", "--workspace", "Studio Nord")

    assert result.exit_code == 0
    assert "No clients found." in result.output


def test_update_client(cli_runner, temp_db, client_service, sample_workspace):
    client_id = client_service.add_client(sample_workspace.id, "Maria")
    result = run(
        cli_runner, temp_db, "client", "update", "Maria", "--workspace", "Studio Nord",
        "--description", "Prefers mornings",
    )

    assert result.exit_code == 0
    assert client_service.get_client(client_id).description == "Prefers mornings"


def test_delete_client(cli_runner, temp_db, client_service, sample_workspace):
    client_id = client_service.add_client(sample_workspace.id, "Maria")
    result = run(
        cli_runner, temp_db, "client", "delete", str(client_id), "--workspace", "1", "--yes"
    )

    assert result.exit_code == 0
    assert client_service.get_client(client_id) is None


def test_unknown_client(cli_runner, temp_db, sample_workspace):
    result = run(cli_runner, temp_db, "client", "delete", "Nobody", "--workspace", "1", "--yes")

    assert result.exit_code == 1
    assert "Client 'Nobody' not found" in result.output
