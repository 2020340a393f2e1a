"""Prometheus metrics for searches and the store connection pool."""

from __future__ import annotations

from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram

# Custom registry so embedding applications decide what to expose
REGISTRY = CollectorRegistry()

# Covers query times from 1ms to the 20s default deadline
DEFAULT_LATENCY_BUCKETS = (
    0.001,
    0.005,
    0.01,
    0.025,
    0.05,
    0.1,
    0.25,
    0.5,
    1.0,
    2.5,
    5.0,
    10.0,
    20.0,
)

PAGE_SIZE_BUCKETS = (0, 1, 10, 50, 100, 500, 1000, 5000)

# Search metrics
searches_total = Counter(
    "eventsearch_searches_total",
    "Total searches by event kind and outcome (ok, invalid, error, timeout)",
    ["kind", "outcome"],
    registry=REGISTRY,
)

search_duration_seconds = Histogram(
    "eventsearch_search_duration_seconds",
    "End-to-end search duration in seconds, session acquisition included",
    ["kind"],
    buckets=DEFAULT_LATENCY_BUCKETS,
    registry=REGISTRY,
)

search_page_rows = Histogram(
    "eventsearch_search_page_rows",
    "Number of rows returned per search page",
    ["kind"],
    buckets=PAGE_SIZE_BUCKETS,
    registry=REGISTRY,
)

# Database metrics
database_connections_active = Gauge(
    "database_connections_active",
    "Number of open database connections",
    registry=REGISTRY,
)

database_pool_checkedout = Gauge(
    "database_pool_checkedout",
    "Number of connections currently checked out of the pool",
    registry=REGISTRY,
)

database_pool_checkout_time_seconds = Histogram(
    "database_pool_checkout_time_seconds",
    "Time a connection stays checked out of the pool",
    buckets=DEFAULT_LATENCY_BUCKETS,
    registry=REGISTRY,
)

database_pool_invalidations_total = Counter(
    "database_pool_invalidations_total",
    "Connections invalidated and removed from the pool",
    ["reason"],
    registry=REGISTRY,
)

database_query_duration_seconds = Histogram(
    "database_query_duration_seconds",
    "Database query duration in seconds",
    ["operation"],
    buckets=DEFAULT_LATENCY_BUCKETS,
    registry=REGISTRY,
)
