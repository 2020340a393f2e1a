"""Typed query predicates for SQLAlchemy.

Predicates are small immutable values that name a column by its mapped
attribute key and describe a condition on it. They stay backend-neutral
until ``compile()`` turns them into a SQLAlchemy clause for a concrete
model; the engine's dialect renders the final SQL.

Usage:
    from sqlalchemy import select
    from eventsearch.core.database.filters import FilterBuilder, apply_predicates

    predicates = (
        FilterBuilder()
        .range("timestamp", start, end)
        .in_set("action", ["upload", "download"])
        .equals("username", "alice")
        .build()
    )
    stmt = apply_predicates(select(FsEvent), FsEvent, predicates)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Self

from sqlalchemy import and_, inspect, true

from eventsearch.core.database.exceptions import InvalidFilterError

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement, Select


def resolve_column(model: type[Any], name: str) -> Any:
    """Look up a mapped column by attribute key.

    Raises:
        InvalidFilterError: If the model maps no column under ``name``.
    """
    columns = inspect(model).columns
    if name not in columns:
        raise InvalidFilterError(model.__name__, name)
    return columns[name]


class Predicate(ABC):
    """Base class for predicates.

    All predicates implement ``compile()`` which renders a boolean clause
    for the given mapped model.
    """

    column: str

    @abstractmethod
    def compile(self, model: type[Any]) -> ColumnElement[bool]:
        """Render the predicate for ``model``.

        Args:
            model: SQLAlchemy mapped class

        Returns:
            Boolean clause usable in ``Select.where()``
        """
        ...


@dataclass(frozen=True, slots=True)
class Equals(Predicate):
    """Exact match: ``column = value``."""

    column: str
    value: Any

    def compile(self, model: type[Any]) -> ColumnElement[bool]:
        return resolve_column(model, self.column) == self.value


@dataclass(frozen=True, slots=True)
class InSet(Predicate):
    """Set membership: ``column IN values``."""

    column: str
    values: tuple[Any, ...]

    def compile(self, model: type[Any]) -> ColumnElement[bool]:
        return resolve_column(model, self.column).in_(self.values)


@dataclass(frozen=True, slots=True)
class ExcludeSet(Predicate):
    """Set exclusion: ``column NOT IN values``."""

    column: str
    values: tuple[Any, ...]

    def compile(self, model: type[Any]) -> ColumnElement[bool]:
        return resolve_column(model, self.column).not_in(self.values)


@dataclass(frozen=True, slots=True)
class Range(Predicate):
    """Inclusive range. ``None`` leaves that side unbounded.

    Example:
        Range("timestamp", lower=100, upper=None)
        # Generates: WHERE timestamp >= 100
    """

    column: str
    lower: Any = None
    upper: Any = None

    def compile(self, model: type[Any]) -> ColumnElement[bool]:
        column = resolve_column(model, self.column)
        conditions = []
        if self.lower is not None:
            conditions.append(column >= self.lower)
        if self.upper is not None:
            conditions.append(column <= self.upper)
        if not conditions:
            return true()
        return and_(*conditions)


def compile_predicates(
    model: type[Any], predicates: Iterable[Predicate]
) -> list[ColumnElement[bool]]:
    """Compile every predicate against ``model``, preserving order."""
    return [predicate.compile(model) for predicate in predicates]


def apply_predicates(
    statement: Select[Any], model: type[Any], predicates: Iterable[Predicate]
) -> Select[Any]:
    """AND all predicates into the statement's WHERE clause."""
    clauses = compile_predicates(model, predicates)
    if not clauses:
        return statement
    return statement.where(*clauses)


class FilterBuilder:
    """Accumulates predicates for one search, skipping unrestricted filters.

    Each method follows the "empty means no restriction" rule of its filter
    kind, so callers can forward request fields without checking them:

    - ``range``: zero or negative bounds are unbounded
    - ``in_set``: an empty collection adds nothing (never "match nothing")
    - ``equals``: an empty string or ``None`` adds nothing
    - ``exclude``: an empty collection adds nothing

    Example:
        builder = FilterBuilder()
        builder.range("timestamp", params.start_timestamp, params.end_timestamp)
        builder.in_set("protocol", params.protocols)
        predicates = builder.build()
    """

    __slots__ = ("_predicates",)

    def __init__(self) -> None:
        self._predicates: list[Predicate] = []

    def range(self, column: str, start: int = 0, end: int = 0) -> Self:
        lower = start if start > 0 else None
        upper = end if end > 0 else None
        if lower is not None or upper is not None:
            self._predicates.append(Range(column, lower, upper))
        return self

    def equals(self, column: str, value: Any) -> Self:
        if value is not None and value != "":
            self._predicates.append(Equals(column, value))
        return self

    def in_set(self, column: str, values: Sequence[Any] | None) -> Self:
        if values:
            self._predicates.append(InSet(column, tuple(values)))
        return self

    def exclude(self, column: str, values: Sequence[Any] | None) -> Self:
        if values:
            self._predicates.append(ExcludeSet(column, tuple(values)))
        return self

    def add(self, predicate: Predicate | None) -> Self:
        """Append an already-built predicate; ``None`` is ignored."""
        if predicate is not None:
            self._predicates.append(predicate)
        return self

    def build(self) -> tuple[Predicate, ...]:
        return tuple(self._predicates)

    def __len__(self) -> int:
        return len(self._predicates)


__all__ = [
    "Equals",
    "ExcludeSet",
    "FilterBuilder",
    "InSet",
    "Predicate",
    "Range",
    "apply_predicates",
    "compile_predicates",
    "resolve_column",
]
