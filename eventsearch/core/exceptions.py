"""Custom exception classes for the application.

Request errors are caller-fixable and abort a single search before any
query runs. Configuration errors are raised while building the store
handle and prevent startup. Store errors (SQLAlchemy and driver
exceptions, timeouts) are deliberately not part of this hierarchy: they
reach the caller unchanged.
"""

from __future__ import annotations

from typing import Any


class AppException(Exception):
    """Base application exception.

    All custom exceptions should inherit from this class.

    Attributes:
        detail: Human-readable error message.
        type: Error type identifier.
        title: Short, human-readable summary of the problem type.
        extra: Additional context-specific information about the error.

    Example:
            raise AppException(
            detail="unsupported database driver 'oracle'",
            type="unsupported-driver",
            title="Configuration Error",
            extra={"driver": "oracle"},
        )
    """

    default_type: str = "about:blank"
    default_title: str = "Application Error"

    def __init__(
        self,
        detail: str,
        type: str | None = None,  # noqa: A002
        title: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        """Initialize application exception.

        Args:
            detail: Human-readable error message.
            type: Error type identifier.
            title: Short summary of the problem type.
            extra: Additional context about the error.
        """
        self.detail = detail
        self.type = type or self.default_type
        self.title = title or self.default_title
        self.extra = extra or {}
        super().__init__(detail)

    def to_dict(self) -> dict[str, Any]:
        """Problem-details style representation of the error."""
        data: dict[str, Any] = {
            "type": self.type,
            "title": self.title,
            "detail": self.detail,
        }
        if self.extra:
            data.update(self.extra)
        return data


class RequestError(AppException):
    """A search request the caller has to fix before retrying."""

    default_type = "invalid-request"
    default_title = "Invalid Request"


class MissingLimitError(RequestError):
    """Raised when a search is issued without a positive limit."""

    default_type = "missing-limit"

    def __init__(self, limit: int | None = None) -> None:
        super().__init__(
            detail="please specify a limit",
            extra={"limit": limit} if limit is not None else None,
        )


class ConfigurationError(AppException):
    """Invalid store configuration detected at initialization."""

    default_type = "configuration-error"
    default_title = "Configuration Error"


class UnsupportedDriverError(ConfigurationError):
    """The requested database driver is not one we can talk to."""

    default_type = "unsupported-driver"

    def __init__(self, driver: str) -> None:
        self.driver = driver
        super().__init__(
            detail=f"unsupported database driver {driver!r}",
            extra={"driver": driver},
        )


class TLSConfigError(ConfigurationError):
    """The custom TLS configuration is malformed or references unusable files."""

    default_type = "tls-config-error"


__all__ = [
    "AppException",
    "ConfigurationError",
    "MissingLimitError",
    "RequestError",
    "TLSConfigError",
    "UnsupportedDriverError",
]
