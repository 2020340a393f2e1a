"""CLI utilities for running async operations and formatting output."""

from eventsearch.cli.utils.async_runner import coro
from eventsearch.cli.utils.formatters import error, info, success, warning

__all__ = [
    "coro",
    "error",
    "info",
    "success",
    "warning",
]
