"""CLI error handling helpers."""

import click

from salonledger import log
from salonledger.domain.errors import DomainError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Print a domain error for the user and exit with status 1.

    The error class goes to the debug log so ``--verbose`` shows which
    layer refused the operation.
    """
    log.debug("%s in '%s': %s", type(error).__name__, ctx.command_path, error)
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
