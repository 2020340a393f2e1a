"""Tests for the eventsearch CLI.

Testing approach:
- Uses Click's CliRunner for command invocation
- Replaces ``initialize`` with an in-memory SQLite store built inside the
  command's own event loop
- Checks the JSON document printed on stdout and the exit codes
"""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from eventsearch import __version__
from eventsearch.cli.commands import database as database_commands
from eventsearch.cli.commands import search as search_commands
from eventsearch.cli.main import cli
from eventsearch.infra.database.session import SessionProvider
from tests.utils import (
    build_fs_events,
    build_log_events,
    build_provider_events,
    create_memory_engine,
    event_id,
    insert_rows,
)

DSN = ["--dsn", "postgresql://u:p@db/sftpgo"]


@pytest.fixture
def cli_runner():
    """Create Click CLI runner for testing commands."""
    return CliRunner()


@pytest.fixture
def memory_store(monkeypatch):
    """Route ``initialize`` in both command modules to a seeded in-memory store.

    Returns:
        List of (driver, dsn, kwargs) tuples, one per initialize call.
    """
    calls = []

    async def fake_initialize(driver, dsn, **kwargs):
        calls.append((driver, dsn, kwargs))
        engine = await create_memory_engine()
        await insert_rows(
            engine, [*build_fs_events(), *build_provider_events(), *build_log_events()]
        )
        return SessionProvider(engine, query_timeout=5.0)

    monkeypatch.setattr(search_commands, "initialize", fake_initialize)
    monkeypatch.setattr(database_commands, "initialize", fake_initialize)
    return calls


# =============================================================================
# Top-level group
# =============================================================================


class TestMain:
    """Tests for the root command group."""

    def test_version(self, cli_runner):
        result = cli_runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_lists_groups(self, cli_runner):
        result = cli_runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        assert "db" in result.output
        assert "search" in result.output


# =============================================================================
# db ping
# =============================================================================


class TestPing:
    """Tests for ``eventsearch db ping``."""

    def test_without_dsn(self, cli_runner):
        result = cli_runner.invoke(cli, ["db", "ping"])

        assert result.exit_code == 1
        assert "no dsn configured" in result.output

    def test_unparsable_dsn(self, cli_runner):
        result = cli_runner.invoke(cli, ["db", "ping", "--dsn", "user@tcp(db)/sftpgo"])

        assert result.exit_code == 1
        assert "must be a URL" in result.output

    def test_reachable(self, cli_runner, memory_store):
        result = cli_runner.invoke(cli, ["db", "ping", *DSN, "--pool-size", "2"])

        assert result.exit_code == 0, result.output
        assert "Event store is reachable" in result.output
        assert memory_store == [
            ("postgres", "postgresql://u:p@db/sftpgo", {"tls_config": "", "pool_size": 2})
        ]

    def test_settings_fallback(self, cli_runner, memory_store, monkeypatch):
        monkeypatch.setenv("EVENTSEARCH_DB_DRIVER", "mysql")
        monkeypatch.setenv("EVENTSEARCH_DB_DSN", "mysql://u:p@db/sftpgo?tls=custom")
        monkeypatch.setenv("EVENTSEARCH_DB_TLS_CONFIG", "tls_mode=1")

        result = cli_runner.invoke(cli, ["db", "ping"])

        assert result.exit_code == 0, result.output
        driver, dsn, kwargs = memory_store[0]
        assert driver == "mysql"
        assert dsn == "mysql://u:p@db/sftpgo?tls=custom"
        assert kwargs["tls_config"] == "tls_mode=1"


# =============================================================================
# search
# =============================================================================


class TestSearch:
    """Tests for ``eventsearch search``."""

    def test_fs_search(self, cli_runner, memory_store):
        result = cli_runner.invoke(
            cli, ["search", "fs", *DSN, "--order", "1", "--limit", "2", "--protocol", "SFTP"]
        )

        assert result.exit_code == 0, result.output
        document = json.loads(result.stdout)
        assert [e["id"] for e in document["events"]] == [event_id(0), event_id(3)]
        assert document["same_ts_at_start"] == [event_id(0)]
        assert document["same_ts_at_end"] == [event_id(3)]
        assert document["next"] == {"start": 101, "from_id": event_id(3)}

    def test_next_options_resume(self, cli_runner, memory_store):
        result = cli_runner.invoke(
            cli,
            [
                "search", "fs", *DSN,
                "--order", "1", "--limit", "2", "--protocol", "SFTP",
                "--start", "101", "--from-id", event_id(3),
            ],
        )

        assert result.exit_code == 0, result.output
        document = json.loads(result.stdout)
        assert [e["id"] for e in document["events"]] == [event_id(4)]
        assert document["next"] is None

    def test_descending_next_uses_end(self, cli_runner, memory_store):
        result = cli_runner.invoke(cli, ["search", "fs", *DSN, "--limit", "1"])

        document = json.loads(result.stdout)
        assert document["next"] == {"end": 102, "from_id": event_id(4)}

    def test_fs_provider_filter(self, cli_runner, memory_store):
        result = cli_runner.invoke(
            cli, ["search", "fs", *DSN, "--order", "1", "--fs-provider", "0"]
        )

        document = json.loads(result.stdout)
        assert [e["id"] for e in document["events"]] == [event_id(0), event_id(2), event_id(4)]

    def test_provider_search(self, cli_runner, memory_store):
        result = cli_runner.invoke(
            cli, ["search", "provider", *DSN, "--object-type", "folder"]
        )

        assert result.exit_code == 0, result.output
        (event,) = json.loads(result.stdout)["events"]
        assert event["object_name"] == "shared"
        assert event["object_data"] == ""

    def test_log_search(self, cli_runner, memory_store):
        result = cli_runner.invoke(
            cli, ["search", "log", *DSN, "--event", "1", "--username", "mallory"]
        )

        assert result.exit_code == 0, result.output
        events = json.loads(result.stdout)["events"]
        assert [e["id"] for e in events] == [event_id(1), event_id(0)]

    def test_zero_limit(self, cli_runner, memory_store):
        result = cli_runner.invoke(cli, ["search", "log", *DSN, "--limit", "0"])

        assert result.exit_code == 2
        assert "please specify a limit" in result.output

    def test_without_dsn(self, cli_runner):
        result = cli_runner.invoke(cli, ["search", "fs"])

        assert result.exit_code == 1
        assert "no dsn configured" in result.output

    def test_unsupported_driver_choice(self, cli_runner):
        result = cli_runner.invoke(cli, ["search", "fs", "--driver", "oracle", *DSN])

        assert result.exit_code == 2
        assert "oracle" in result.output
