"""Client domain service."""

from decimal import Decimal
from typing import Optional

from salonledger import log
from salonledger.database.base import Database
from salonledger.domain.entities import Client, ClientStats, ZERO
from salonledger.domain.errors import (
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
    client_not_found,
    member_not_found,
    workspace_not_found,
)


class ClientService:
    """Service for managing the clients of a workspace."""

    def __init__(self, db: Database):
        self.db = db

    def _check_manager(self, workspace_id: int, acting_member_id: Optional[int]) -> None:
        if acting_member_id is None:
            return
        actor = self.db.get_member(acting_member_id)
        if actor is None or actor.workspace_id != workspace_id:
            raise NotFoundError(member_not_found(acting_member_id))
        if not actor.can_manage_clients:
            raise PermissionDeniedError(f"Member {acting_member_id} cannot manage clients")

    def add_client(
        self,
        workspace_id: int,
        name: str,
        phone: Optional[str] = None,
        description: Optional[str] = None,
        acting_member_id: Optional[int] = None,
    ) -> int:
        """Add a client to a workspace.

        Raises:
            NotFoundError: If the workspace doesn't exist
            ValidationError: If the name is empty
            PermissionDeniedError: If the acting member cannot manage clients
        """
        if self.db.get_workspace(workspace_id) is None:
            raise NotFoundError(workspace_not_found(workspace_id))
        if not name or not name.strip():
            raise ValidationError("Client name cannot be empty")
        self._check_manager(workspace_id, acting_member_id)

        client_id = self.db.create_client(
            workspace_id=workspace_id, name=name.strip(), phone=phone, description=description
        )
        log.info("Added client %s to workspace %s", client_id, workspace_id)
        return client_id

    def get_client(self, client_id: int) -> Optional[Client]:
        return self.db.get_client(client_id)

    def require_client(self, client_id: int) -> Client:
        client = self.db.get_client(client_id)
        if client is None:
            raise NotFoundError(client_not_found(client_id))
        return client

    def list_clients(self, workspace_id: int) -> list[Client]:
        return self.db.list_clients(workspace_id)

    def update_client(
        self,
        client_id: int,
        name: Optional[str] = None,
        phone: Optional[str] = None,
        description: Optional[str] = None,
        acting_member_id: Optional[int] = None,
    ) -> None:
        """Update the fields that are provided."""
        client = self.require_client(client_id)
        self._check_manager(client.workspace_id, acting_member_id)
        if name is not None and not name.strip():
            raise ValidationError("Client name cannot be empty")
        self.db.update_client(client_id, name=name, phone=phone, description=description)
        log.info("Updated client %s", client_id)

    def delete_client(self, client_id: int, acting_member_id: Optional[int] = None) -> None:
        """Delete a client; linked entries keep their client name."""
        client = self.require_client(client_id)
        self._check_manager(client.workspace_id, acting_member_id)
        self.db.delete_client(client_id)
        log.info("Deleted client %s", client_id)

    def get_client_stats(self, client_id: int) -> ClientStats:
        """Visit count, total spent (price plus tips) and last visit of a client."""
        client = self.require_client(client_id)
        visits = [
            txn
            for txn in self.db.list_transactions(client.workspace_id, client_id=client_id)
            if txn.is_service
        ]
        total: Decimal = sum((txn.price + txn.tips for txn in visits), ZERO)
        return ClientStats(
            client_id=client_id,
            visit_count=len(visits),
            total_spent=total,
            last_visit=max((txn.date for txn in visits), default=None),
        )
