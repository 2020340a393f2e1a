"""Modular Pydantic Settings v2 configuration.

Settings come from environment variables (and a local .env file), are
validated once and cached:

    from eventsearch.core.settings import get_db_settings

    settings = get_db_settings()
    print(settings.driver, settings.pool_size)

Configuration precedence (highest to lowest):
    1. init kwargs (testing/overrides)
    2. Environment variables
    3. .env file
"""

from __future__ import annotations

from .database import DatabaseSettings
from .loader import get_db_settings, get_logging_settings
from .logs import LoggingSettings

__all__ = [
    "DatabaseSettings",
    "LoggingSettings",
    "get_db_settings",
    "get_logging_settings",
]
