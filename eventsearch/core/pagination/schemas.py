"""Keyset pagination result container."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import Sequence


T = TypeVar("T")


@dataclass(slots=True, frozen=True)
class KeysetPage(Generic[T]):
    """One page of a keyset-paginated search.

    Attributes:
        items: Records of the page, in the requested order
        payload: The encoded records, ready to hand to a transport
        same_ts_at_start: IDs sharing the first row's timestamp, front to back
        same_ts_at_end: IDs sharing the last row's timestamp, back to front

    Example:
        page = await searcher.search_fs_events(params)
        if page:
            next_params = page_after(params, page)
    """

    items: Sequence[T]
    payload: bytes
    same_ts_at_start: Sequence[str] = ()
    same_ts_at_end: Sequence[str] = ()

    def __len__(self) -> int:
        return len(self.items)

    def __bool__(self) -> bool:
        return bool(self.items)

    @property
    def first(self) -> T | None:
        """First record of the page, if any."""
        return self.items[0] if self.items else None

    @property
    def last(self) -> T | None:
        """Last record of the page, if any."""
        return self.items[-1] if self.items else None

    def as_tuple(self) -> tuple[bytes, list[str], list[str]]:
        """``(payload, same_ts_at_start, same_ts_at_end)``."""
        return self.payload, list(self.same_ts_at_start), list(self.same_ts_at_end)
