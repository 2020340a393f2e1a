"""Audit event search: filesystem, provider and log events."""

from __future__ import annotations

from .encoder import decode_events, encode_events
from .schemas import (
    CommonSearchParams,
    FsEventRecord,
    FsEventSearch,
    LogEventRecord,
    LogEventSearch,
    ProviderEventRecord,
    ProviderEventSearch,
)
from .service import EventSearcher

__all__ = [
    "CommonSearchParams",
    "EventSearcher",
    "FsEventRecord",
    "FsEventSearch",
    "LogEventRecord",
    "LogEventSearch",
    "ProviderEventRecord",
    "ProviderEventSearch",
    "decode_events",
    "encode_events",
]
