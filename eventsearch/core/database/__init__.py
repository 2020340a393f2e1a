"""Database building blocks: declarative base, predicates and repository."""

from __future__ import annotations

from .base import Base
from .exceptions import InvalidFilterError, RepositoryError
from .filters import (
    Equals,
    ExcludeSet,
    FilterBuilder,
    InSet,
    Predicate,
    Range,
    apply_predicates,
    compile_predicates,
)
from .repository import EventFinder, EventRepository

__all__ = [
    "Base",
    "Equals",
    "EventFinder",
    "EventRepository",
    "ExcludeSet",
    "FilterBuilder",
    "InSet",
    "InvalidFilterError",
    "Predicate",
    "Range",
    "RepositoryError",
    "apply_predicates",
    "compile_predicates",
]
