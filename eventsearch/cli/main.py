"""Main CLI entry point for eventsearch commands."""

import click

from eventsearch import __version__
from eventsearch.cli.commands import database, search
from eventsearch.infra.logging.config import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="eventsearch")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """eventsearch - query the SFTP audit event store.

    \b
    Command Groups:
      db      Connectivity checks
      search  Filtered, paginated event searches

    \b
    Quick Start:
      eventsearch db ping
      eventsearch search fs --limit 10
    """
    ctx.ensure_object(dict)


cli.add_command(database.db)
cli.add_command(search.search)


def main() -> None:
    """Entry point for CLI."""
    setup_logging()
    cli(obj={})


if __name__ == "__main__":
    main()
