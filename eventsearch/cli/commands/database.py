"""Database connectivity commands.

Example:bash
    # Check the store configured through EVENTSEARCH_DB_*
    eventsearch db ping

    # Check another store
    eventsearch db ping --driver mysql --dsn "mysql://user:pass@db:3306/sftpgo?tls=custom" \
        --tls-config "root_cert=/etc/ssl/ca.pem"
"""

import sys

import click

from eventsearch.cli.commands.options import connection_options, resolve_connection
from eventsearch.cli.utils import coro, error, info, success
from eventsearch.core.exceptions import AppException
from eventsearch.infra.database import initialize


@click.group(name="db")
def db() -> None:
    """Database connectivity commands."""


@db.command()
@connection_options
@coro
async def ping(
    driver: str | None, dsn: str | None, tls_config: str | None, pool_size: int | None
) -> None:
    """Connect to the event store and run SELECT 1."""
    try:
        driver, dsn, tls_config = resolve_connection(driver, dsn, tls_config)
        info(f"Connecting to the {driver} event store...")
        provider = await initialize(driver, dsn, tls_config=tls_config, pool_size=pool_size)
    except AppException as e:
        error(e.detail)
        sys.exit(1)
    except Exception as e:
        error(f"Database connection failed: {e}")
        sys.exit(1)

    await provider.dispose()
    success("Event store is reachable")
