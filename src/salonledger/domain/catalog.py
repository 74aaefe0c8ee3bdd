"""Service catalog: priced services grouped into categories."""

from decimal import Decimal
from typing import Optional

from salonledger import log
from salonledger.database.base import Database
from salonledger.domain.entities import ServiceCategory, ServiceItem, ZERO
from salonledger.domain.errors import (
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
    category_not_found,
    member_not_found,
    service_not_found,
    workspace_not_found,
)


class CatalogService:
    """Service for managing the service catalog of a workspace."""

    def __init__(self, db: Database):
        self.db = db

    def _check_admin(self, workspace_id: int, acting_member_id: Optional[int]) -> None:
        if acting_member_id is None:
            return
        actor = self.db.get_member(acting_member_id)
        if actor is None or actor.workspace_id != workspace_id:
            raise NotFoundError(member_not_found(acting_member_id))
        if not actor.is_admin:
            raise PermissionDeniedError("Only an admin can edit the service catalog")

    def _require_workspace(self, workspace_id: int) -> None:
        if self.db.get_workspace(workspace_id) is None:
            raise NotFoundError(workspace_not_found(workspace_id))

    @staticmethod
    def _clean_name(name: Optional[str], what: str) -> str:
        if not name or not name.strip():
            raise ValidationError(f"{what} name cannot be empty")
        return name.strip()

    # Categories
    def add_category(
        self, workspace_id: int, name: str, acting_member_id: Optional[int] = None
    ) -> int:
        """Add a service category to a workspace.

        Raises:
            NotFoundError: If the workspace doesn't exist
            ValidationError: If the name is empty
            ConflictError: If the workspace already has a category with this name
        """
        self._require_workspace(workspace_id)
        name = self._clean_name(name, "Category")
        self._check_admin(workspace_id, acting_member_id)
        if any(c.name.lower() == name.lower() for c in self.db.list_service_categories(workspace_id)):
            raise ConflictError(f"Category '{name}' already exists")

        category_id = self.db.create_service_category(workspace_id, name)
        log.info("Added category %s to workspace %s", category_id, workspace_id)
        return category_id

    def get_category(self, category_id: int) -> Optional[ServiceCategory]:
        return self.db.get_service_category(category_id)

    def require_category(self, category_id: int) -> ServiceCategory:
        category = self.db.get_service_category(category_id)
        if category is None:
            raise NotFoundError(category_not_found(category_id))
        return category

    def list_categories(self, workspace_id: int) -> list[ServiceCategory]:
        return self.db.list_service_categories(workspace_id)

    def delete_category(self, category_id: int, acting_member_id: Optional[int] = None) -> None:
        """Delete a category; its services stay in the catalog uncategorized."""
        category = self.require_category(category_id)
        self._check_admin(category.workspace_id, acting_member_id)
        self.db.delete_service_category(category_id)
        log.info("Deleted category %s", category_id)

    # Services
    def _check_fields(
        self,
        workspace_id: int,
        price: Optional[Decimal],
        duration: Optional[int],
        category_id: Optional[int],
    ) -> None:
        if price is not None and price < ZERO:
            raise ValidationError("Service price cannot be negative")
        if duration is not None and duration <= 0:
            raise ValidationError("Service duration must be a positive number of minutes")
        if category_id is not None:
            category = self.db.get_service_category(category_id)
            if category is None or category.workspace_id != workspace_id:
                raise NotFoundError(category_not_found(category_id))

    def _check_unique(self, workspace_id: int, name: str, exclude_id: Optional[int] = None) -> None:
        for item in self.db.list_service_items(workspace_id):
            if item.id != exclude_id and item.name.lower() == name.lower():
                raise ConflictError(f"Service '{name}' already exists")

    def add_service(
        self,
        workspace_id: int,
        name: str,
        price: Decimal,
        duration: Optional[int] = None,
        category_id: Optional[int] = None,
        acting_member_id: Optional[int] = None,
    ) -> int:
        """Add a priced service to the catalog.

        Args:
            workspace_id: Owning workspace
            name: Display name, unique within the workspace
            price: List price, not negative
            duration: Optional length in minutes
            category_id: Optional category of the same workspace

        Raises:
            NotFoundError: If the workspace or category doesn't exist
            ValidationError: If a field is invalid
            ConflictError: If the name is already taken
            PermissionDeniedError: If the acting member is not an admin
        """
        self._require_workspace(workspace_id)
        name = self._clean_name(name, "Service")
        self._check_fields(workspace_id, price, duration, category_id)
        self._check_admin(workspace_id, acting_member_id)
        self._check_unique(workspace_id, name)

        service_id = self.db.create_service_item(
            workspace_id=workspace_id,
            name=name,
            price=price,
            duration=duration,
            category_id=category_id,
        )
        log.info("Added service %s to workspace %s", service_id, workspace_id)
        return service_id

    def get_service(self, service_id: int) -> Optional[ServiceItem]:
        return self.db.get_service_item(service_id)

    def require_service(self, service_id: int) -> ServiceItem:
        service = self.db.get_service_item(service_id)
        if service is None:
            raise NotFoundError(service_not_found(service_id))
        return service

    def list_services(
        self, workspace_id: int, category_id: Optional[int] = None
    ) -> list[ServiceItem]:
        return self.db.list_service_items(workspace_id, category_id=category_id)

    def update_service(
        self,
        service_id: int,
        name: Optional[str] = None,
        price: Optional[Decimal] = None,
        duration: Optional[int] = None,
        category_id: Optional[int] = None,
        clear_category: bool = False,
        acting_member_id: Optional[int] = None,
    ) -> ServiceItem:
        """Update the fields that are provided and return the stored service."""
        service = self.require_service(service_id)
        self._check_admin(service.workspace_id, acting_member_id)
        if name is not None:
            name = self._clean_name(name, "Service")
            self._check_unique(service.workspace_id, name, exclude_id=service_id)
        self._check_fields(service.workspace_id, price, duration, category_id)

        self.db.update_service_item(
            service_id,
            name=name,
            price=price,
            duration=duration,
            category_id=category_id,
            clear_category=clear_category,
        )
        log.info("Updated service %s", service_id)
        return self.require_service(service_id)

    def delete_service(self, service_id: int, acting_member_id: Optional[int] = None) -> None:
        """Remove a service; entries that named it keep their text."""
        service = self.require_service(service_id)
        self._check_admin(service.workspace_id, acting_member_id)
        self.db.delete_service_item(service_id)
        log.info("Deleted service %s", service_id)

    def service_labels(self, workspace_id: int) -> dict[str, str]:
        """Map the codes an entry may store for a catalog service to its name.

        Entries refer to catalog services by ID or by name; both keys are
        provided, names in lower case.
        """
        labels = {}
        for item in self.db.list_service_items(workspace_id):
            labels[str(item.id)] = item.name
            labels[item.name.lower()] = item.name
        return labels
