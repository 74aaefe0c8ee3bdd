"""CLI helpers for workspace and member resolution."""

from __future__ import annotations

import click
from salonledger.cli.error_handling import handle_domain_error
from salonledger.domain.master import MemberService
from salonledger.domain.workspace import WorkspaceService
from salonledger.utils.resolvers import resolve_member, resolve_workspace


def resolve_workspace_or_exit(ctx: click.Context, workspace: str | int) -> int:
    """Resolve workspace name or ID, or exit with a CLI error."""
    try:
        return resolve_workspace(WorkspaceService(ctx.obj["db"]), workspace)
    except ValueError as exc:
        handle_domain_error(ctx, exc)


def resolve_member_or_exit(ctx: click.Context, workspace_id: int, member: str | int) -> int:
    """Resolve member name or ID inside a workspace, or exit with a CLI error."""
    try:
        return resolve_member(MemberService(ctx.obj["db"]), workspace_id, member)
    except ValueError as exc:
        handle_domain_error(ctx, exc)
