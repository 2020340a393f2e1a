"""Repositories for the three event tables."""

from __future__ import annotations

from eventsearch.core.database.repository import EventRepository
from eventsearch.features.events.models import FsEvent, LogEvent, ProviderEvent


class FsEventRepository(EventRepository[FsEvent]):
    def __init__(self) -> None:
        super().__init__(FsEvent)


class ProviderEventRepository(EventRepository[ProviderEvent]):
    def __init__(self) -> None:
        super().__init__(ProviderEvent)


class LogEventRepository(EventRepository[LogEvent]):
    def __init__(self) -> None:
        super().__init__(LogEvent)


__all__ = ["FsEventRepository", "LogEventRepository", "ProviderEventRepository"]
