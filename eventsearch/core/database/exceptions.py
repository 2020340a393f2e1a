"""Database repository exceptions.

Custom exceptions for repository operations that provide better
error messages than raw SQLAlchemy exceptions.
"""
from __future__ import annotations

from typing import Any


class RepositoryError(Exception):
    """Base exception for repository operations.

    Raised when a repository operation fails due to programming
    errors, such as a predicate naming a column the table lacks.

    Driver and SQLAlchemy errors raised while a query runs are not
    wrapped in this class; they propagate unchanged.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """Initialize repository error.

        Args:
            message: Error description
            details: Additional context about the error
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Format error message with details."""
        if self.details:
            details_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class InvalidFilterError(RepositoryError):
    """A predicate cannot be compiled against the target model.

    Attributes:
        model_name: Name of the model class the predicate targeted
        column: The column name that could not be resolved
    """

    def __init__(self, model_name: str, column: str):
        self.model_name = model_name
        self.column = column
        super().__init__(
            f"{model_name} has no filterable column {column!r}",
            details={"model": model_name, "column": column},
        )

    def __repr__(self) -> str:
        """Repr for debugging."""
        return f"InvalidFilterError(model={self.model_name!r}, column={self.column!r})"


__all__ = ["InvalidFilterError", "RepositoryError"]
