"""Test utilities and helper functions.

Row builders and an in-memory store shared by fixtures and by tests that
need a database inside their own event loop (CLI commands run under
``asyncio.run``).

Usage:
    from tests.utils import build_fs_events, create_memory_engine, insert_rows

    engine = await create_memory_engine()
    await insert_rows(engine, build_fs_events())

The fs-event rows have timestamps 100, 101, 101, 101, 102 and ids that sort
in insertion order, so three rows tie on timestamp 101.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from eventsearch.core.database.base import Base
from eventsearch.features.events.models import FsEvent, LogEvent, ProviderEvent
from eventsearch.infra.database.session import instrument_engine

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine


FS_TIMESTAMPS = (100, 101, 101, 101, 102)


def event_id(index: int) -> str:
    """Sequential ids that sort lexically in creation order."""
    return f"{index:010d}"


# ============================================================================
# Row Builders
# ============================================================================


def build_fs_events() -> list[FsEvent]:
    """Five filesystem events; three of them share timestamp 101."""
    rows: list[dict[str, Any]] = [
        {
            "action": "upload",
            "username": "alice",
            "protocol": "SFTP",
            "status": 1,
            "fs_provider": 0,
            "ip": "10.0.0.1",
            "instance_id": "node1",
            "file_size": 1024,
            "elapsed": 12,
        },
        {
            "action": "download",
            "username": "bob",
            "protocol": "SCP",
            "status": 1,
            "fs_provider": 1,
            "ip": "10.0.0.2",
            "role": "admins",
            "instance_id": "node2",
            "bucket": "bucket1",
            "endpoint": "https://s3.example.com",
        },
        {
            "action": "upload",
            "username": "alice",
            "protocol": "FTP",
            "status": 2,
            "fs_provider": 0,
            "ip": "10.0.0.1",
            "instance_id": "node1",
        },
        {
            "action": "rename",
            "username": "alice",
            "protocol": "SFTP",
            "status": 1,
            "fs_provider": 2,
            "ssh_cmd": "md5sum",
            "fs_target_path": "/srv/alice/b.txt",
            "virtual_target_path": "/b.txt",
        },
        {
            "action": "delete",
            "username": "carol",
            "protocol": "SFTP",
            "status": 3,
            "fs_provider": 0,
            "ip": "10.0.0.3",
            "role": "admins",
            "instance_id": "node2",
            "open_flags": 512,
        },
    ]
    return [
        FsEvent(
            id=event_id(index),
            timestamp=FS_TIMESTAMPS[index],
            fs_path=f"/srv/{row['username']}/a.txt",
            virtual_path="/a.txt",
            session_id=f"session-{index}",
            **row,
        )
        for index, row in enumerate(rows)
    ]


def build_provider_events() -> list[ProviderEvent]:
    """Three provider events: user add, user update, folder delete."""
    return [
        ProviderEvent(
            id=event_id(0),
            timestamp=200,
            action="add",
            username="admin",
            ip="192.168.1.1",
            object_type="user",
            object_name="alice",
            object_data=b'{"username":"alice"}',
            role="",
            instance_id="node1",
        ),
        ProviderEvent(
            id=event_id(1),
            timestamp=201,
            action="update",
            username="admin",
            ip="192.168.1.1",
            object_type="user",
            object_name="alice",
            object_data=b"\x00\x01\x02\xff",
            instance_id="node1",
        ),
        ProviderEvent(
            id=event_id(2),
            timestamp=201,
            action="delete",
            username="other-admin",
            object_type="folder",
            object_name="shared",
            role="operators",
            instance_id="node2",
        ),
    ]


def build_log_events() -> list[LogEvent]:
    """Three log events: two failed logins and one no-login-tried."""
    return [
        LogEvent(
            id=event_id(0),
            timestamp=300,
            event=1,
            protocol="SSH",
            username="mallory",
            ip="203.0.113.7",
            message="login failed",
            instance_id="node1",
        ),
        LogEvent(
            id=event_id(1),
            timestamp=301,
            event=1,
            protocol="FTP",
            username="mallory",
            ip="203.0.113.7",
            message="login failed",
        ),
        LogEvent(id=event_id(2), timestamp=302, event=3, protocol="SSH", ip="198.51.100.2"),
    ]


# ============================================================================
# In-memory Store
# ============================================================================


async def create_memory_engine() -> AsyncEngine:
    """In-memory SQLite engine with the event tables created.

    StaticPool keeps a single connection so every session sees the same
    in-memory database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    instrument_engine(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    return engine


async def insert_rows(engine: AsyncEngine, rows: Sequence[Base]) -> None:
    async with AsyncSession(engine, expire_on_commit=False) as session:
        session.add_all(rows)
        await session.commit()
