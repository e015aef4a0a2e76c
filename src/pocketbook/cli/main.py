"""Main CLI entry point."""

import click
from pocketbook.database.factories import create_sqlite_database
from pocketbook.logging_config import configure_logging

# Import and register all commands at module level
from pocketbook.cli.commands import (
    account,
    add,
    transaction,
    debt,
    pocket,
    overview,
    import_cmd,
    export_cmd,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides POCKETBOOK_DB_PATH environment variable)",
    envvar="POCKETBOOK_DB_PATH",
)
@click.option(
    "--user",
    "user_id",
    default="default",
    show_default=True,
    help="User whose records are read and written",
    envvar="POCKETBOOK_USER",
)
@click.option("--verbose", is_flag=True, help="Log debug events to stderr")
@click.pass_context
def cli(ctx, db_path: str | None, user_id: str, verbose: bool):
    """Pocketbook - Personal finance tracking.

    Keep accounts, income and expenses, money people owe you and savings
    pockets in one place, and move data in and out through spreadsheets.
    """
    configure_logging(verbose)
    ctx.ensure_object(dict)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.obj["user_id"] = user_id
        ctx.call_on_close(db.disconnect)


# Register all commands
account.register_commands(cli)
add.register_commands(cli)
transaction.register_commands(cli)
debt.register_commands(cli)
pocket.register_commands(cli)
overview.register_commands(cli)
import_cmd.register_commands(cli)
export_cmd.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
