"""Event search service.

``EventSearcher`` is the entry point transports call: one coroutine per
event kind, each returning a ``KeysetPage`` with the encoded payload and
the tie sets of the page.

Example:
    provider = await initialize("postgres", dsn)
    searcher = EventSearcher(provider)
    page = await searcher.search_fs_events(FsEventSearch(limit=100, actions=["upload"]))
    payload, start_ties, end_ties = page.as_tuple()
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any, TypeVar

from eventsearch.core.exceptions import MissingLimitError
from eventsearch.core.pagination import KeysetPage, compute_tie_sets, is_descending
from eventsearch.features.events.encoder import encode_events
from eventsearch.features.events.filters import (
    fs_event_predicates,
    log_event_predicates,
    provider_event_predicates,
)
from eventsearch.features.events.repository import (
    FsEventRepository,
    LogEventRepository,
    ProviderEventRepository,
)
from eventsearch.features.events.schemas import (
    FsEventRecord,
    LogEventRecord,
    ProviderEventRecord,
)
from eventsearch.infra.logging import get_lazy_logger
from eventsearch.infra.metrics.prometheus import (
    search_duration_seconds,
    search_page_rows,
    searches_total,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from eventsearch.core.database.filters import Predicate
    from eventsearch.core.database.repository import EventFinder
    from eventsearch.features.events.schemas import (
        CommonSearchParams,
        EventRecord,
        FsEventSearch,
        LogEventSearch,
        ProviderEventSearch,
    )
    from eventsearch.infra.database.session import SessionProvider

P = TypeVar("P", bound="CommonSearchParams")
R = TypeVar("R", bound="EventRecord")

logger = logging.getLogger(__name__)
lazy_logger = get_lazy_logger(__name__)


class EventSearcher:
    """Runs filtered, keyset-paginated searches against the event store.

    Each search is a single read statement in its own time-bounded session.
    Store errors are logged and re-raised unchanged; there are no retries.
    """

    def __init__(
        self,
        provider: SessionProvider,
        *,
        fs_events: EventFinder[Any] | None = None,
        provider_events: EventFinder[Any] | None = None,
        log_events: EventFinder[Any] | None = None,
    ) -> None:
        self.provider = provider
        self._fs_events = fs_events or FsEventRepository()
        self._provider_events = provider_events or ProviderEventRepository()
        self._log_events = log_events or LogEventRepository()

    async def search_fs_events(self, params: FsEventSearch) -> KeysetPage[FsEventRecord]:
        return await self._search(
            "fs", params, self._fs_events, fs_event_predicates, FsEventRecord
        )

    async def search_provider_events(
        self, params: ProviderEventSearch
    ) -> KeysetPage[ProviderEventRecord]:
        return await self._search(
            "provider",
            params,
            self._provider_events,
            provider_event_predicates,
            ProviderEventRecord,
        )

    async def search_log_events(self, params: LogEventSearch) -> KeysetPage[LogEventRecord]:
        return await self._search(
            "log", params, self._log_events, log_event_predicates, LogEventRecord
        )

    async def _search(
        self,
        kind: str,
        params: P,
        finder: EventFinder[Any],
        build_predicates: Callable[[P], tuple[Predicate, ...]],
        record_type: type[R],
    ) -> KeysetPage[R]:
        if params.limit <= 0:
            searches_total.labels(kind=kind, outcome="invalid").inc()
            logger.info(
                "Rejected search without a limit",
                extra={"kind": kind, "limit": params.limit},
            )
            raise MissingLimitError(params.limit)

        predicates = build_predicates(params)
        descending = is_descending(params.order)
        lazy_logger.debug(
            lambda: f"search {kind}: {len(predicates)} predicates, "
            f"descending={descending}, limit={params.limit}"
        )

        start = time.perf_counter()
        try:
            async with self.provider.session() as session:
                rows = await finder.find_events(
                    session, predicates, descending=descending, limit=params.limit
                )
                records = [record_type.model_validate(row) for row in rows]
            payload = encode_events(records)
        except TimeoutError:
            searches_total.labels(kind=kind, outcome="timeout").inc()
            logger.warning(f"Unable to search {kind} events: deadline exceeded", extra={"kind": kind})
            raise
        except Exception as exc:
            searches_total.labels(kind=kind, outcome="error").inc()
            logger.warning(
                f"Unable to search {kind} events",
                extra={"kind": kind, "error": str(exc), "error_type": type(exc).__name__},
            )
            raise
        finally:
            search_duration_seconds.labels(kind=kind).observe(time.perf_counter() - start)

        start_ties, end_ties = compute_tie_sets(records)
        searches_total.labels(kind=kind, outcome="ok").inc()
        search_page_rows.labels(kind=kind).observe(len(records))
        return KeysetPage(
            items=records,
            payload=payload,
            same_ts_at_start=tuple(start_ties),
            same_ts_at_end=tuple(end_ties),
        )


__all__ = ["EventSearcher"]
