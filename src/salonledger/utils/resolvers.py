"""Utilities for resolving workspace, member, client and catalog names to IDs."""

from salonledger.domain.catalog import CatalogService
from salonledger.domain.client import ClientService
from salonledger.domain.master import MemberService
from salonledger.domain.profession import ProfessionService
from salonledger.domain.workspace import WorkspaceService


def _as_id(value: str | int) -> int | None:
    if isinstance(value, int):
        return value
    try:
        return int(value)
    except (ValueError, TypeError):
        return None


def resolve_workspace(workspace_service: WorkspaceService, workspace: str | int) -> int:
    """Resolve workspace name or ID to workspace ID.

    Args:
        workspace_service: WorkspaceService instance
        workspace: Workspace name, or ID as int or numeric string

    Returns:
        Workspace ID

    Raises:
        ValueError: If workspace is not found
    """
    workspace_id = _as_id(workspace)
    if workspace_id is not None:
        if workspace_service.get_workspace(workspace_id) is None:
            raise ValueError(f"Workspace ID {workspace_id} not found")
        return workspace_id

    for ws in workspace_service.list_workspaces():
        if ws.name == workspace:
            return ws.id

    raise ValueError(f"Workspace '{workspace}' not found")


def resolve_member(member_service: MemberService, workspace_id: int, member: str | int) -> int:
    """Resolve a member name or ID within a workspace to member ID.

    Raises:
        ValueError: If the member is not found in the workspace
    """
    member_id = _as_id(member)
    if member_id is not None:
        found = member_service.get_member(member_id)
        if found is None or found.workspace_id != workspace_id:
            raise ValueError(f"Member ID {member_id} not found in workspace {workspace_id}")
        return member_id

    for m in member_service.list_members(workspace_id):
        if m.name == member:
            return m.id

    raise ValueError(f"Member '{member}' not found in workspace {workspace_id}")


def resolve_client(client_service: ClientService, workspace_id: int, client: str | int) -> int:
    """Resolve a client name or ID within a workspace to client ID.

    Raises:
        ValueError: If the client is not found in the workspace
    """
    client_id = _as_id(client)
    if client_id is not None:
        found = client_service.get_client(client_id)
        if found is None or found.workspace_id != workspace_id:
            raise ValueError(f"Client ID {client_id} not found in workspace {workspace_id}")
        return client_id

    for c in client_service.list_clients(workspace_id):
        if c.name == client:
            return c.id

    raise ValueError(f"Client '{client}' not found in workspace {workspace_id}")


def resolve_category(catalog_service: CatalogService, workspace_id: int, category: str | int) -> int:
    """Resolve a service category name or ID within a workspace to category ID.

    Names are matched ignoring case.

    Raises:
        ValueError: If the category is not found in the workspace
    """
    category_id = _as_id(category)
    if category_id is not None:
        found = catalog_service.get_category(category_id)
        if found is None or found.workspace_id != workspace_id:
            raise ValueError(f"Category ID {category_id} not found in workspace {workspace_id}")
        return category_id

    for c in catalog_service.list_categories(workspace_id):
        if c.name.lower() == category.lower():
            return c.id

    raise ValueError(f"Category '{category}' not found in workspace {workspace_id}")


def resolve_catalog_service(
    catalog_service: CatalogService, workspace_id: int, service: str | int
) -> int:
    """Resolve a catalog service name or ID within a workspace to service ID.

    Raises:
        ValueError: If the service is not found in the workspace
    """
    service_id = _as_id(service)
    if service_id is not None:
        found = catalog_service.get_service(service_id)
        if found is None or found.workspace_id != workspace_id:
            raise ValueError(f"Service ID {service_id} not found in workspace {workspace_id}")
        return service_id

    for s in catalog_service.list_services(workspace_id):
        if s.name.lower() == service.lower():
            return s.id

    raise ValueError(f"Service '{service}' not found in workspace {workspace_id}")


def resolve_profession(profession_service: ProfessionService, profession: str | int) -> int:
    """Resolve a profession name or ID to profession ID.

    Raises:
        ValueError: If the profession is not found
    """
    profession_id = _as_id(profession)
    if profession_id is not None:
        if all(p.id != profession_id for p in profession_service.list_professions()):
            raise ValueError(f"Profession ID {profession_id} not found")
        return profession_id

    found = profession_service.find_profession(profession)
    if found is None:
        raise ValueError(f"Profession '{profession}' not found")
    return found.id
