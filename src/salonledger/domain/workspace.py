"""Workspace domain service."""

from typing import Optional

from salonledger import log
from salonledger.database.base import Database
from salonledger.domain.entities import (
    DEFAULT_RATE,
    MemberRole,
    RateConfig,
    Workspace as WorkspaceEntity,
)
from salonledger.domain.errors import ConflictError, NotFoundError, workspace_not_found


class WorkspaceService:
    """Service for managing salon workspaces."""

    def __init__(self, db: Database):
        """Initialize workspace service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_workspace(self, name: str, owner_name: Optional[str] = None) -> int:
        """Create a new workspace.

        When an owner is given, it joins the workspace as its first admin.

        Args:
            name: Workspace name
            owner_name: Optional name of the owning admin

        Returns:
            Workspace ID

        Raises:
            ConflictError: If a workspace with the same name exists
        """
        for ws in self.db.list_workspaces():
            if ws.name == name:
                raise ConflictError(f"Workspace with name '{name}' already exists")

        workspace_id = self.db.create_workspace(name=name, owner_name=owner_name)
        if owner_name:
            self.db.create_member(
                workspace_id=workspace_id,
                name=owner_name,
                role=MemberRole.ADMIN,
                manage_clients=True,
            )
        log.info("Created workspace %s (%s)", workspace_id, name)
        return workspace_id

    def get_workspace(self, workspace_id: int) -> Optional[WorkspaceEntity]:
        """Get workspace by ID."""
        return self.db.get_workspace(workspace_id)

    def require_workspace(self, workspace_id: int) -> WorkspaceEntity:
        """Get workspace by ID or raise NotFoundError."""
        workspace = self.db.get_workspace(workspace_id)
        if workspace is None:
            raise NotFoundError(workspace_not_found(workspace_id))
        return workspace

    def list_workspaces(self) -> list[WorkspaceEntity]:
        """List all workspaces."""
        return self.db.list_workspaces()


def default_rate_config(workspace_id: int, master_id: int) -> RateConfig:
    """Settings row given to a master when it joins a workspace."""
    return RateConfig(
        use_different_rates=False,
        rate_general=DEFAULT_RATE,
        rate_cash=DEFAULT_RATE,
        rate_card=DEFAULT_RATE,
        workspace_id=workspace_id,
        master_id=master_id,
    )
