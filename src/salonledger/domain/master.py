"""Member and commission settings domain service."""

from dataclasses import replace
from decimal import Decimal
from typing import Optional

from salonledger import log
from salonledger.database.base import Database
from salonledger.domain.entities import Member, MemberRole, RateConfig, ResolvedRates
from salonledger.domain.errors import (
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
    member_not_found,
    workspace_not_found,
)
from salonledger.domain.profession import ProfessionService
from salonledger.domain.rates import resolve_rates
from salonledger.domain.validation import validate_rate_config
from salonledger.domain.workspace import default_rate_config


class MemberService:
    """Service for workspace members and their rate settings."""

    def __init__(self, db: Database):
        """Initialize member service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_member(
        self,
        workspace_id: int,
        name: str,
        role: MemberRole = MemberRole.MASTER,
        profession: Optional[str] = None,
        manage_clients: bool = False,
    ) -> int:
        """Add a member to a workspace.

        Masters get a settings row with the default 40% rate.
        Once professions are listed, a given profession must be one of them.

        Returns:
            Member ID

        Raises:
            NotFoundError: If the workspace doesn't exist
            ConflictError: If the name is already taken in the workspace
            ValidationError: If the profession is not in the profession list
        """
        if self.db.get_workspace(workspace_id) is None:
            raise NotFoundError(workspace_not_found(workspace_id))
        for member in self.db.list_members(workspace_id):
            if member.name == name:
                raise ConflictError(
                    f"Member '{name}' already exists in workspace {workspace_id}"
                )

        if profession is not None and self.db.list_professions():
            known = ProfessionService(self.db).find_profession(profession)
            if known is None:
                raise ValidationError(f"Unknown profession '{profession}'")
            profession = known.name

        role = MemberRole(role)
        member_id = self.db.create_member(
            workspace_id=workspace_id,
            name=name,
            role=role,
            profession=profession,
            manage_clients=manage_clients,
        )
        if role == MemberRole.MASTER:
            self.db.create_rate_config(
                workspace_id, member_id, default_rate_config(workspace_id, member_id)
            )
        log.info("Added %s %s (%s) to workspace %s", role.value, member_id, name, workspace_id)
        return member_id

    def get_member(self, member_id: int) -> Optional[Member]:
        """Get member by ID."""
        return self.db.get_member(member_id)

    def require_member(self, workspace_id: int, member_id: int) -> Member:
        """Get a member of the given workspace or raise NotFoundError."""
        member = self.db.get_member(member_id)
        if member is None or member.workspace_id != workspace_id:
            raise NotFoundError(member_not_found(member_id))
        return member

    def list_members(self, workspace_id: int) -> list[Member]:
        """List all members of a workspace."""
        return self.db.list_members(workspace_id)

    def list_masters(self, workspace_id: int) -> list[Member]:
        """List the masters of a workspace, admins excluded."""
        return self.db.list_members(workspace_id, role=MemberRole.MASTER)

    def delete_member(self, workspace_id: int, member_id: int) -> None:
        """Remove a member with its settings and entries."""
        self.require_member(workspace_id, member_id)
        self.db.delete_member(member_id)
        log.info("Removed member %s from workspace %s", member_id, workspace_id)

    def get_rate_config(self, workspace_id: int, master_id: int) -> Optional[RateConfig]:
        """Get the stored rate configuration of a master (None if missing)."""
        return self.db.get_rate_config(workspace_id, master_id)

    def get_resolved_rates(self, workspace_id: int, master_id: int) -> ResolvedRates:
        """Resolve the effective cash and card rates of a master."""
        return resolve_rates(self.db.get_rate_config(workspace_id, master_id))

    def update_rates(
        self,
        workspace_id: int,
        master_id: int,
        use_different_rates: Optional[bool] = None,
        rate_general: Optional[Decimal] = None,
        rate_cash: Optional[Decimal] = None,
        rate_card: Optional[Decimal] = None,
        acting_member_id: Optional[int] = None,
    ) -> RateConfig:
        """Update the rate configuration of a master.

        Only the fields that are provided change. Rates may be edited by an
        admin of the workspace or by the master themself.

        Returns:
            The updated RateConfig

        Raises:
            NotFoundError: If the master or its settings don't exist
            PermissionDeniedError: If the acting member may not edit the rates
            InvalidRateConfigError: If a rate is outside [0, 100]
        """
        self.require_member(workspace_id, master_id)
        if acting_member_id is not None and acting_member_id != master_id:
            actor = self.require_member(workspace_id, acting_member_id)
            if not actor.is_admin:
                raise PermissionDeniedError(
                    f"Member {acting_member_id} cannot change rates of member {master_id}"
                )

        current = self.db.get_rate_config(workspace_id, master_id)
        if current is None:
            raise NotFoundError(f"Member {master_id} has no rate settings")

        changes = {
            key: value
            for key, value in (
                ("use_different_rates", use_different_rates),
                ("rate_general", rate_general),
                ("rate_cash", rate_cash),
                ("rate_card", rate_card),
            )
            if value is not None
        }
        updated = replace(current, **changes)
        validate_rate_config(updated)

        self.db.update_rate_config(workspace_id, master_id, updated)
        log.info("Updated rates of member %s: %s", master_id, changes)
        return updated
