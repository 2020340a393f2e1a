"""Ad-hoc event searches.

Each command runs a single search and prints a JSON document on stdout::

    {"events": [...], "same_ts_at_start": [...], "same_ts_at_end": [...], "next": {...}}

``next`` holds the options to pass for the following page (``null`` once
the page is shorter than the limit).

Example:bash
    eventsearch search fs --action upload --protocol SFTP --limit 20
    eventsearch search fs --limit 20 --end 1700000000000 --from-id 01HF...
    eventsearch search log --event 1 --event 2 --order 1
"""

import json
import sys
from collections.abc import Awaitable, Callable
from typing import Any

import click

from eventsearch.cli.commands.options import connection_options, resolve_connection
from eventsearch.cli.utils import coro, error
from eventsearch.core.exceptions import AppException
from eventsearch.core.pagination import KeysetPage, is_descending, page_after
from eventsearch.features.events import (
    EventSearcher,
    FsEventSearch,
    LogEventSearch,
    ProviderEventSearch,
)
from eventsearch.infra.database import initialize


@click.group(name="search")
def search() -> None:
    """Search stored events."""


def filter_options(f: Callable[..., Any]) -> Callable[..., Any]:
    """Add the filters every event kind supports."""
    options = [
        click.option(
            "--start", "start_timestamp", type=int, default=0, help="Inclusive lower timestamp bound."
        ),
        click.option(
            "--end", "end_timestamp", type=int, default=0, help="Inclusive upper timestamp bound."
        ),
        click.option("--username", default="", help="Exact username."),
        click.option("--ip", default="", help="Exact client IP."),
        click.option(
            "--instance-id", "instance_ids", multiple=True, help="Instance ID (repeatable)."
        ),
        click.option(
            "--exclude-id", "exclude_ids", multiple=True, help="Event ID to skip (repeatable)."
        ),
        click.option("--role", default="", help="Exact role."),
        click.option("--from-id", default="", help="Resume after this event ID."),
        click.option("--limit", type=int, default=100, show_default=True, help="Maximum events."),
        click.option(
            "--order",
            type=int,
            default=0,
            show_default=True,
            help="0 = newest first, 1 = oldest first.",
        ),
    ]
    for option in reversed(options):
        f = option(f)
    return f


def _next_options(params: Any, page: KeysetPage[Any]) -> dict[str, Any] | None:
    if len(page) < params.limit:
        return None
    following = page_after(params, page)
    if following is None:
        return None
    bound = "end" if is_descending(params.order) else "start"
    return {
        bound: following.end_timestamp if bound == "end" else following.start_timestamp,
        "from_id": following.from_id,
    }


async def _run(
    connection: tuple[str | None, str | None, str | None, int | None],
    params: Any,
    run: Callable[[EventSearcher, Any], Awaitable[KeysetPage[Any]]],
) -> None:
    driver, dsn, tls_config, pool_size = connection
    try:
        driver, dsn, tls_config = resolve_connection(driver, dsn, tls_config)
        provider = await initialize(driver, dsn, tls_config=tls_config, pool_size=pool_size)
    except AppException as e:
        error(e.detail)
        sys.exit(1)
    except Exception as e:
        error(f"Database connection failed: {e}")
        sys.exit(1)

    async with provider:
        try:
            page = await run(EventSearcher(provider), params)
        except AppException as e:
            error(e.detail)
            sys.exit(2)
        except Exception as e:
            error(f"Search failed: {e}")
            sys.exit(1)

    payload, start_ties, end_ties = page.as_tuple()
    click.echo(
        json.dumps(
            {
                "events": json.loads(payload),
                "same_ts_at_start": start_ties,
                "same_ts_at_end": end_ties,
                "next": _next_options(params, page),
            }
        )
    )


@search.command()
@connection_options
@filter_options
@click.option("--action", "actions", multiple=True, help="Action (repeatable).")
@click.option("--ssh-cmd", default="", help="Exact SSH command.")
@click.option("--protocol", "protocols", multiple=True, help="Protocol (repeatable).")
@click.option("--status", "statuses", type=int, multiple=True, help="Status code (repeatable).")
@click.option(
    "--fs-provider",
    type=int,
    default=-1,
    show_default=True,
    help="Storage provider; negative means any.",
)
@click.option("--bucket", default="", help="Exact bucket.")
@click.option("--endpoint", default="", help="Exact endpoint.")
@coro
async def fs(
    driver: str | None, dsn: str | None, tls_config: str | None, pool_size: int | None, **filters: Any
) -> None:
    """Search filesystem events."""
    await _run(
        (driver, dsn, tls_config, pool_size),
        FsEventSearch(**filters),
        lambda searcher, params: searcher.search_fs_events(params),
    )


@search.command()
@connection_options
@filter_options
@click.option("--action", "actions", multiple=True, help="Action (repeatable).")
@click.option("--object-name", default="", help="Exact object name.")
@click.option("--object-type", "object_types", multiple=True, help="Object type (repeatable).")
@coro
async def provider(
    driver: str | None, dsn: str | None, tls_config: str | None, pool_size: int | None, **filters: Any
) -> None:
    """Search provider events."""
    await _run(
        (driver, dsn, tls_config, pool_size),
        ProviderEventSearch(**filters),
        lambda searcher, params: searcher.search_provider_events(params),
    )


@search.command()
@connection_options
@filter_options
@click.option("--event", "events", type=int, multiple=True, help="Event code (repeatable).")
@click.option("--protocol", "protocols", multiple=True, help="Protocol (repeatable).")
@coro
async def log(
    driver: str | None, dsn: str | None, tls_config: str | None, pool_size: int | None, **filters: Any
) -> None:
    """Search log events."""
    await _run(
        (driver, dsn, tls_config, pool_size),
        LogEventSearch(**filters),
        lambda searcher, params: searcher.search_log_events(params),
    )
