"""Logging infrastructure.

Usage:
    from eventsearch.infra.logging import setup_logging, get_lazy_logger

    setup_logging()
    logger = get_lazy_logger(__name__)
    logger.debug(lambda: f"expensive {value!r}")
"""

from __future__ import annotations

from .config import build_logging_config, configure_logging, setup_logging
from .formatters import JSONFormatter
from .lazy import LazyLoggerAdapter, get_lazy_logger

__all__ = [
    "JSONFormatter",
    "LazyLoggerAdapter",
    "build_logging_config",
    "configure_logging",
    "get_lazy_logger",
    "setup_logging",
]
