"""Keyset pagination for time-ordered events.

Usage:
    from eventsearch.core.pagination import page_after

    page = await searcher.search_log_events(params)
    next_params = page_after(params, page)
"""

from __future__ import annotations

from .keyset import (
    KeysetSeek,
    compute_tie_sets,
    is_descending,
    page_after,
    page_before,
    seek_from,
)
from .schemas import KeysetPage

__all__ = [
    "KeysetPage",
    "KeysetSeek",
    "compute_tie_sets",
    "is_descending",
    "page_after",
    "page_before",
    "seek_from",
]
