"""Translate search parameters into predicates, one function per event kind."""

from __future__ import annotations

from typing import TYPE_CHECKING

from eventsearch.core.database.filters import Equals, FilterBuilder
from eventsearch.core.pagination import seek_from

if TYPE_CHECKING:
    from eventsearch.core.database.filters import Predicate
    from eventsearch.features.events.schemas import (
        CommonSearchParams,
        FsEventSearch,
        LogEventSearch,
        ProviderEventSearch,
    )


def _common(params: CommonSearchParams) -> FilterBuilder:
    return (
        FilterBuilder()
        .range("timestamp", params.start_timestamp, params.end_timestamp)
        .equals("username", params.username)
        .equals("ip", params.ip)
        .in_set("instance_id", params.instance_ids)
        .exclude("id", params.exclude_ids)
        .equals("role", params.role)
        .add(seek_from(params))
    )


def fs_event_predicates(params: FsEventSearch) -> tuple[Predicate, ...]:
    builder = (
        _common(params)
        .in_set("action", params.actions)
        .equals("ssh_cmd", params.ssh_cmd)
        .in_set("protocol", params.protocols)
        .in_set("status", params.statuses)
        .equals("bucket", params.bucket)
        .equals("endpoint", params.endpoint)
    )
    # 0 is a real provider (local filesystem), only negatives mean "any"
    if params.fs_provider >= 0:
        builder.add(Equals("fs_provider", params.fs_provider))
    return builder.build()


def provider_event_predicates(params: ProviderEventSearch) -> tuple[Predicate, ...]:
    return (
        _common(params)
        .in_set("action", params.actions)
        .equals("object_name", params.object_name)
        .in_set("object_type", params.object_types)
        .build()
    )


def log_event_predicates(params: LogEventSearch) -> tuple[Predicate, ...]:
    return (
        _common(params)
        .in_set("event", params.events)
        .in_set("protocol", params.protocols)
        .build()
    )


__all__ = ["fs_event_predicates", "log_event_predicates", "provider_event_predicates"]
