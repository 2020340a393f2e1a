"""Keyset (seek) pagination over ``(timestamp, id)``.

Rows are ordered by timestamp and then by id, both in the same direction.
Timestamps are not unique, so a page boundary expressed by timestamp alone
is ambiguous. Two ways of resuming after a boundary row are supported:

1. Cursor ID (the contract): the next request carries the boundary row's
   timestamp as its range bound and the row's id as ``from_id``. The seek
   condition then skips everything up to and including that row::

       ascending:  timestamp > T OR (timestamp = T AND id > from_id)
       descending: timestamp < T OR (timestamp = T AND id < from_id)

2. Boundary exclusion (deprecated): the next request starts exactly at the
   boundary timestamp and excludes, by id, the rows already returned at
   that timestamp. Each page reports its tie sets for this purpose.

Example:
    params = FsEventSearch(limit=50, order=0)
    while (page := await searcher.search_fs_events(params)):
        consume(page.items)
        params = page_after(params, page)
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, TypeVar

from sqlalchemy import and_, or_

from eventsearch.core.database.filters import Predicate, resolve_column

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy import ColumnElement
    from pydantic import BaseModel

    from eventsearch.core.pagination.schemas import KeysetPage


P = TypeVar("P", bound="BaseModel")


class KeysetRow(Protocol):
    """The two sort keys every paginated row exposes."""

    id: str
    timestamp: int


def is_descending(order: int) -> bool:
    """``0`` sorts newest first; every other value sorts oldest first."""
    return order == 0


@dataclass(frozen=True, slots=True)
class KeysetSeek(Predicate):
    """Seek past the row identified by ``(timestamp, from_id)``.

    Without a timestamp only the id is compared.

    Example:
        KeysetSeek(from_id="0000000003", timestamp=101, descending=False)
        # Generates: WHERE timestamp > 101 OR (timestamp = 101 AND id > '0000000003')
    """

    from_id: str
    timestamp: int | None = None
    descending: bool = False
    column: str = "id"
    timestamp_column: str = "timestamp"

    def compile(self, model: type[Any]) -> ColumnElement[bool]:
        id_column = resolve_column(model, self.column)
        if self.descending:
            past_id = id_column < self.from_id
        else:
            past_id = id_column > self.from_id
        if self.timestamp is None:
            return past_id

        ts_column = resolve_column(model, self.timestamp_column)
        if self.descending:
            past_ts = ts_column < self.timestamp
        else:
            past_ts = ts_column > self.timestamp
        return or_(past_ts, and_(ts_column == self.timestamp, past_id))


def seek_from(params: Any) -> KeysetSeek | None:
    """Build the seek predicate carried by a request, if any.

    The boundary timestamp is ``end_timestamp`` for descending requests and
    ``start_timestamp`` for ascending ones; a non-positive value means the
    request has no boundary timestamp.
    """
    if not params.from_id:
        return None
    descending = is_descending(params.order)
    boundary = params.end_timestamp if descending else params.start_timestamp
    return KeysetSeek(
        from_id=params.from_id,
        timestamp=boundary if boundary > 0 else None,
        descending=descending,
    )


def compute_tie_sets(rows: Sequence[KeysetRow]) -> tuple[list[str], list[str]]:
    """Return the ids sharing the first and the last row's timestamp.

    The start set is collected from the front, the end set from the back
    (tail-encounter order). An empty page yields two empty sets; when the
    whole page shares one timestamp both sets cover it.
    """
    if not rows:
        return [], []

    first_ts = rows[0].timestamp
    start: list[str] = []
    for row in rows:
        if row.timestamp != first_ts:
            break
        start.append(row.id)

    last_ts = rows[-1].timestamp
    end: list[str] = []
    for row in reversed(rows):
        if row.timestamp != last_ts:
            break
        end.append(row.id)

    return start, end


def _near_bound(descending: bool) -> str:
    return "end_timestamp" if descending else "start_timestamp"


def page_after(
    params: P,
    page: KeysetPage[Any],
    *,
    exclude_ties: bool = False,
) -> P | None:
    """Parameters for the page following ``page`` in the same direction.

    Args:
        params: The request that produced ``page``
        page: The page just returned
        exclude_ties: Resume with boundary exclusion instead of a cursor id.
            Deprecated, kept for callers that cannot carry ``from_id``.

    Returns:
        A copy of ``params`` positioned after the page's last row, or
        ``None`` when the page is empty.
    """
    last = page.last
    if last is None:
        return None

    bound = _near_bound(is_descending(params.order))
    if not exclude_ties:
        return params.model_copy(update={bound: last.timestamp, "from_id": last.id})

    warnings.warn(
        "boundary exclusion paging is deprecated, resume with from_id instead",
        DeprecationWarning,
        stacklevel=2,
    )
    # The request's exclusions are kept whatever the boundary: they may be
    # the caller's own filter. Ids below a moved boundary are already out of
    # range.
    excluded = list(params.exclude_ids)
    excluded.extend(i for i in page.same_ts_at_end if i not in excluded)
    return params.model_copy(
        update={bound: last.timestamp, "from_id": "", "exclude_ids": excluded}
    )


def page_before(params: P, page: KeysetPage[Any]) -> P | None:
    """Parameters for the page preceding ``page``.

    The order is flipped and the request seeks from the page's first row,
    so the returned rows come back in the opposite order. When ``params``
    was itself a cursor continuation, the bound it carried on its near
    side was a cursor position, not a caller filter, and is lifted.
    ``exclude_ids`` is kept as a filter.

    ``params`` is expected to be a cursor-ID request. A boundary exclusion
    continuation carries no cursor, so its bound and exclusions are kept
    as filters too.

    Returns:
        A copy of ``params`` positioned before the page's first row, or
        ``None`` when the page is empty.
    """
    first = page.first
    if first is None:
        return None

    descending = is_descending(params.order)
    update: dict[str, Any] = {
        "order": 1 if descending else 0,
        _near_bound(not descending): first.timestamp,
        "from_id": first.id,
    }
    if params.from_id:
        update[_near_bound(descending)] = 0
    return params.model_copy(update=update)


__all__ = [
    "KeysetRow",
    "KeysetSeek",
    "compute_tie_sets",
    "is_descending",
    "page_after",
    "page_before",
    "seek_from",
]
