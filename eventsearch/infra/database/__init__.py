"""Event store connectivity."""

from __future__ import annotations

from .session import (
    DRIVERS,
    SessionProvider,
    build_url,
    create_engine_for,
    initialize,
    instrument_engine,
)
from .tls import parse_tls_config

__all__ = [
    "DRIVERS",
    "SessionProvider",
    "build_url",
    "create_engine_for",
    "initialize",
    "instrument_engine",
    "parse_tls_config",
]
