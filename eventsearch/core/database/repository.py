"""Minimal generic event repository for SQLAlchemy models.

The pagination engine only depends on the ``EventFinder`` protocol: give it
predicates, a direction and a limit, get back rows in keyset order. A single
SQLAlchemy implementation serves PostgreSQL and MySQL alike; the dialect of
the session's engine renders the SQL.

Example:
    from eventsearch.core.database import EventRepository
    from eventsearch.features.events.models import FsEvent

    repo = EventRepository(FsEvent)
    async with provider.session() as session:
        rows = await repo.find_events(session, predicates, descending=True, limit=50)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Generic, Protocol, TypeVar

from sqlalchemy import asc, desc, select

from eventsearch.core.database.filters import apply_predicates, resolve_column
from eventsearch.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from sqlalchemy.ext.asyncio import AsyncSession

    from eventsearch.core.database.filters import Predicate


T = TypeVar("T")


class EventFinder(Protocol[T]):
    """Anything that can run a filtered, ordered, limited event query."""

    async def find_events(
        self,
        session: AsyncSession,
        predicates: Iterable[Predicate],
        *,
        descending: bool,
        limit: int,
    ) -> Sequence[T]: ...


class EventRepository(Generic[T]):
    """Read-only repository over one event table.

    Rows are always ordered by ``sort_columns`` in a single direction.
    The last sort column must be unique so the order is total.

    Session is always explicit - no hidden state.
    """

    __slots__ = ("model", "sort_columns", "_logger", "_lazy")

    def __init__(
        self,
        model: type[T],
        *,
        sort_columns: Sequence[str] = ("timestamp", "id"),
    ) -> None:
        """Initialize repository with model class.

        Args:
            model: SQLAlchemy model class (e.g., FsEvent)
            sort_columns: Keyset ordering columns, most significant first
        """
        self.model = model
        self.sort_columns = tuple(sort_columns)
        # Standard logger for INFO/WARNING/ERROR
        self._logger = logging.getLogger(f"repository.{model.__name__}")
        # Lazy logger for DEBUG (zero overhead when DEBUG disabled)
        self._lazy = get_lazy_logger(f"repository.{model.__name__}")

    def build_statement(
        self,
        predicates: Iterable[Predicate],
        *,
        descending: bool,
        limit: int,
    ) -> Any:
        """Build the SELECT without executing it.

        Args:
            predicates: Conditions to AND together
            descending: Sort newest first when True
            limit: Maximum number of rows

        Returns:
            SQLAlchemy select statement
        """
        direction = desc if descending else asc
        stmt = apply_predicates(select(self.model), self.model, predicates)
        ordering = [direction(resolve_column(self.model, name)) for name in self.sort_columns]
        return stmt.order_by(*ordering).limit(limit)

    async def find_events(
        self,
        session: AsyncSession,
        predicates: Iterable[Predicate],
        *,
        descending: bool,
        limit: int,
    ) -> Sequence[T]:
        """Run a keyset-ordered query.

        Args:
            session: Database session
            predicates: Conditions to AND together
            descending: Sort newest first when True
            limit: Maximum number of rows

        Returns:
            Matching rows, at most ``limit`` of them
        """
        predicates = tuple(predicates)
        stmt = self.build_statement(predicates, descending=descending, limit=limit)
        result = await session.execute(stmt)
        items = result.scalars().all()

        self._lazy.debug(
            lambda: f"db.find_events: {self.model.__name__}(predicates={len(predicates)}, "
            f"descending={descending}, limit={limit}) -> {len(items)} items"
        )
        return items


__all__ = ["EventFinder", "EventRepository"]
