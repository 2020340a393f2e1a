"""Connection options shared by every command that talks to the store."""

from collections.abc import Callable
from typing import Any

import click

from eventsearch.core.exceptions import ConfigurationError
from eventsearch.core.settings import get_db_settings


def connection_options(f: Callable[..., Any]) -> Callable[..., Any]:
    """Add --driver, --dsn, --tls-config and --pool-size.

    Each option falls back to the EVENTSEARCH_DB_* settings when omitted.
    """
    options = [
        click.option(
            "--driver",
            type=click.Choice(["postgres", "mysql"], case_sensitive=False),
            default=None,
            help="Database driver (default: EVENTSEARCH_DB_DRIVER).",
        ),
        click.option("--dsn", default=None, help="Data source URL (default: EVENTSEARCH_DB_DSN)."),
        click.option(
            "--tls-config",
            default=None,
            help="MySQL custom TLS options as a query string (default: EVENTSEARCH_DB_TLS_CONFIG).",
        ),
        click.option(
            "--pool-size",
            type=click.IntRange(min=1),
            default=None,
            help="Maximum open connections (default: EVENTSEARCH_DB_POOL_SIZE).",
        ),
    ]
    for option in reversed(options):
        f = option(f)
    return f


def resolve_connection(
    driver: str | None, dsn: str | None, tls_config: str | None
) -> tuple[str, str, str]:
    """Merge command line values over settings.

    Raises:
        ConfigurationError: If no DSN is available from either source.
    """
    settings = get_db_settings()
    if dsn is None and settings.dsn is not None:
        dsn = settings.dsn.get_secret_value()
    if not dsn:
        raise ConfigurationError("no dsn configured, pass --dsn or set EVENTSEARCH_DB_DSN")
    return (
        (driver or settings.driver).lower(),
        dsn,
        settings.tls_config if tls_config is None else tls_config,
    )
