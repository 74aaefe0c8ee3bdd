"""Shared pytest fixtures for salonledger tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal

import pytest

from salonledger.database.factories import create_sqlite_database
from salonledger.domain.catalog import CatalogService
from salonledger.domain.client import ClientService
from salonledger.domain.entities import (
    PaymentMethod,
    RecipientRole,
    TransactionRecord,
    TransactionType,
)
from salonledger.domain.master import MemberService
from salonledger.domain.profession import ProfessionService
from salonledger.domain.transaction import TransactionService
from salonledger.domain.workspace import WorkspaceService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for CLI tests
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def workspace_service(temp_db):
    return WorkspaceService(temp_db)


@pytest.fixture
def member_service(temp_db):
    return MemberService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    return TransactionService(temp_db)


@pytest.fixture
def client_service(temp_db):
    return ClientService(temp_db)


@pytest.fixture
def catalog_service(temp_db):
    return CatalogService(temp_db)


@pytest.fixture
def profession_service(temp_db):
    return ProfessionService(temp_db)


@pytest.fixture
def sample_workspace(workspace_service):
    """Workspace 'Studio Nord' owned by admin 'Olga'."""
    workspace_id = workspace_service.create_workspace(name="Studio Nord", owner_name="Olga")
    return workspace_service.get_workspace(workspace_id)


@pytest.fixture
def sample_admin(member_service, sample_workspace):
    for member in member_service.list_members(sample_workspace.id):
        if member.name == "Olga":
            return member
    raise LookupError("owner admin missing")


@pytest.fixture
def sample_master(member_service, sample_workspace):
    """Master 'Anna' with the default 40% rate."""
    member_id = member_service.create_member(
        workspace_id=sample_workspace.id, name="Anna", profession="Nail artist"
    )
    return member_service.get_member(member_id)


@pytest.fixture
def make_txn():
    """Build an in-memory TransactionRecord with service defaults."""

    def _make(**overrides):
        values = dict(
            workspace_id=1,
            master_id=1,
            date=date(2024, 3, 15),
            transaction_type=TransactionType.SERVICE,
            price=Decimal("100"),
            payment_method=PaymentMethod.CASH,
            recipient_role=RecipientRole.ME,
            start_time="10:00",
            end_time="11:00",
        )
        values.update(overrides)
        return TransactionRecord(**values)

    return _make


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
