"""Main CLI entry point."""

import logging

import click
from salonledger import set_console_level
from salonledger.database.factories import create_sqlite_database

# Import and register all commands at module level
from salonledger.cli.commands import (
    workspace,
    member,
    add,
    entry,
    balance,
    client,
    catalog,
    profession,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides SALONLEDGER_DB_PATH environment variable)",
    envvar="SALONLEDGER_DB_PATH",
)
@click.option("--verbose", is_flag=True, help="Log debug details to stderr")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """Salonledger - salon finance ledger.

    Record service takings of masters and settle who owes whom between
    each master and the salon.
    """
    ctx.ensure_object(dict)
    set_console_level(logging.DEBUG if verbose else logging.WARNING)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
workspace.register_commands(cli)
member.register_commands(cli)
add.register_commands(cli)
entry.register_commands(cli)
balance.register_commands(cli)
client.register_commands(cli)
catalog.register_commands(cli)
profession.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
