"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from salonledger.domain.entities import (
    Client,
    Member,
    MemberRole,
    Profession,
    RateConfig,
    ServiceCategory,
    ServiceItem,
    TransactionRecord,
    Workspace,
)


class Database(ABC):
    """Abstract record store and rate provider for salonledger."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Workspace operations
    @abstractmethod
    def create_workspace(self, name: str, owner_name: Optional[str] = None) -> int:
        """Create a workspace. Returns workspace ID."""
        pass

    @abstractmethod
    def get_workspace(self, workspace_id: int) -> Optional[Workspace]:
        """Get workspace by ID."""
        pass

    @abstractmethod
    def list_workspaces(self) -> list[Workspace]:
        """List all workspaces."""
        pass

    # Member operations
    @abstractmethod
    def create_member(
        self,
        workspace_id: int,
        name: str,
        role: MemberRole = MemberRole.MASTER,
        profession: Optional[str] = None,
        manage_clients: bool = False,
    ) -> int:
        """Add a member to a workspace. Returns member ID."""
        pass

    @abstractmethod
    def get_member(self, member_id: int) -> Optional[Member]:
        """Get member by ID."""
        pass

    @abstractmethod
    def list_members(self, workspace_id: int, role: Optional[MemberRole] = None) -> list[Member]:
        """List members of a workspace, optionally filtered by role."""
        pass

    @abstractmethod
    def delete_member(self, member_id: int) -> None:
        """Remove a member together with its settings and entries."""
        pass

    # Rate settings operations
    @abstractmethod
    def create_rate_config(self, workspace_id: int, master_id: int, config: RateConfig) -> None:
        """Create the settings row of a master."""
        pass

    @abstractmethod
    def get_rate_config(self, workspace_id: int, master_id: int) -> Optional[RateConfig]:
        """Get the rate configuration of a master, or None if it has none."""
        pass

    @abstractmethod
    def update_rate_config(self, workspace_id: int, master_id: int, config: RateConfig) -> None:
        """Replace the rate configuration of a master."""
        pass

    # Client operations
    @abstractmethod
    def create_client(
        self,
        workspace_id: int,
        name: str,
        phone: Optional[str] = None,
        description: Optional[str] = None,
    ) -> int:
        """Create a client. Returns client ID."""
        pass

    @abstractmethod
    def get_client(self, client_id: int) -> Optional[Client]:
        """Get client by ID."""
        pass

    @abstractmethod
    def list_clients(self, workspace_id: int) -> list[Client]:
        """List clients of a workspace ordered by name."""
        pass

    @abstractmethod
    def update_client(
        self,
        client_id: int,
        name: Optional[str] = None,
        phone: Optional[str] = None,
        description: Optional[str] = None,
    ) -> None:
        """Update client fields that are not None."""
        pass

    @abstractmethod
    def delete_client(self, client_id: int) -> None:
        """Delete a client, clearing its link on transactions."""
        pass

    # Service catalog operations
    @abstractmethod
    def create_service_category(self, workspace_id: int, name: str) -> int:
        """Create a service category. Returns category ID."""
        pass

    @abstractmethod
    def get_service_category(self, category_id: int) -> Optional[ServiceCategory]:
        """Get service category by ID."""
        pass

    @abstractmethod
    def list_service_categories(self, workspace_id: int) -> list[ServiceCategory]:
        """List service categories of a workspace ordered by name."""
        pass

    @abstractmethod
    def delete_service_category(self, category_id: int) -> None:
        """Delete a category; its services become uncategorized."""
        pass

    @abstractmethod
    def create_service_item(
        self,
        workspace_id: int,
        name: str,
        price: Decimal,
        duration: Optional[int] = None,
        category_id: Optional[int] = None,
    ) -> int:
        """Create a catalog service. Returns service ID."""
        pass

    @abstractmethod
    def get_service_item(self, service_id: int) -> Optional[ServiceItem]:
        """Get catalog service by ID."""
        pass

    @abstractmethod
    def list_service_items(
        self, workspace_id: int, category_id: Optional[int] = None
    ) -> list[ServiceItem]:
        """List catalog services of a workspace, newest first."""
        pass

    @abstractmethod
    def update_service_item(
        self,
        service_id: int,
        name: Optional[str] = None,
        price: Optional[Decimal] = None,
        duration: Optional[int] = None,
        category_id: Optional[int] = None,
        clear_category: bool = False,
    ) -> None:
        """Update catalog service fields that are not None."""
        pass

    @abstractmethod
    def delete_service_item(self, service_id: int) -> None:
        """Delete a catalog service."""
        pass

    # Profession operations
    @abstractmethod
    def create_profession(self, name: str) -> int:
        """Create a profession. Returns profession ID."""
        pass

    @abstractmethod
    def get_profession(self, profession_id: int) -> Optional[Profession]:
        """Get profession by ID."""
        pass

    @abstractmethod
    def list_professions(self) -> list[Profession]:
        """List all professions ordered by name."""
        pass

    @abstractmethod
    def delete_profession(self, profession_id: int) -> None:
        """Delete a profession."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(self, record: TransactionRecord) -> int:
        """Store a new transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[TransactionRecord]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def update_transaction(self, transaction_id: int, record: TransactionRecord) -> None:
        """Replace all mutable fields of a transaction."""
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        workspace_id: int,
        master_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        client_id: Optional[int] = None,
    ) -> list[TransactionRecord]:
        """List transactions of a workspace with optional filters.

        Args:
            workspace_id: Owning workspace
            master_id: Optional master filter
            start_date: Optional inclusive start date
            end_date: Optional inclusive end date
            client_id: Optional client filter
        """
        pass
