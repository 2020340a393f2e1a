"""Event store tables.

The tables are created and filled by an external writer; these mappings
only describe them for querying. Column sizes and index names follow the
writer's schema so ``Base.metadata.create_all`` builds an equivalent
store for tests.
"""

from __future__ import annotations

from sqlalchemy import BigInteger, Index, Integer, LargeBinary, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from eventsearch.core.database.base import Base


class FsEvent(Base):
    """A filesystem operation (upload, download, rename, ssh command, ...)."""

    __tablename__ = "eventstore_fs_events"
    __table_args__ = (
        Index("idx_fs_events_timestamp", "timestamp"),
        Index("idx_fs_events_action", "action"),
        Index("idx_fs_events_username", "username"),
        Index("idx_fs_events_ssh_cmd", "ssh_cmd"),
        Index("idx_fs_events_status", "status"),
        Index("idx_fs_events_protocol", "protocol"),
        Index("idx_fs_events_ip", "ip"),
        Index("idx_fs_events_provider", "fs_provider"),
        Index("idx_fs_events_bucket", "bucket"),
        Index("idx_fs_events_endpoint", "endpoint"),
        Index("idx_fs_events_role", "role"),
        Index("idx_fs_events_instance_id", "instance_id"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    timestamp: Mapped[int] = mapped_column(BigInteger, nullable=False)
    action: Mapped[str] = mapped_column(String(60), nullable=False)
    username: Mapped[str] = mapped_column(String(255), nullable=False)
    fs_path: Mapped[str | None] = mapped_column(Text)
    fs_target_path: Mapped[str | None] = mapped_column(Text)
    virtual_path: Mapped[str | None] = mapped_column(Text)
    virtual_target_path: Mapped[str | None] = mapped_column(Text)
    ssh_cmd: Mapped[str | None] = mapped_column(String(60))
    file_size: Mapped[int | None] = mapped_column(BigInteger)
    elapsed: Mapped[int | None] = mapped_column(BigInteger)
    status: Mapped[int | None] = mapped_column(Integer)
    protocol: Mapped[str] = mapped_column(String(30), nullable=False)
    session_id: Mapped[str | None] = mapped_column(String(100))
    ip: Mapped[str | None] = mapped_column(String(50))
    fs_provider: Mapped[int | None] = mapped_column(Integer)
    bucket: Mapped[str | None] = mapped_column(String(512))
    endpoint: Mapped[str | None] = mapped_column(String(512))
    open_flags: Mapped[int | None] = mapped_column(Integer)
    role: Mapped[str | None] = mapped_column(String(255))
    instance_id: Mapped[str | None] = mapped_column(String(60))

    def __repr__(self) -> str:
        return f"<FsEvent(id={self.id!r}, timestamp={self.timestamp}, action={self.action!r})>"


class ProviderEvent(Base):
    """A change to a provider object (user, group, folder, admin, ...)."""

    __tablename__ = "eventstore_provider_events"
    __table_args__ = (
        Index("idx_provider_events__timestamp", "timestamp"),
        Index("idx_provider_events_action", "action"),
        Index("idx_provider_events_username", "username"),
        Index("idx_provider_events_ip", "ip"),
        Index("idx_provider_events_object_type", "object_type"),
        Index("idx_provider_events_object_name", "object_name"),
        Index("idx_provider_events_role", "role"),
        Index("idx_provider_events_instance_id", "instance_id"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    timestamp: Mapped[int] = mapped_column(BigInteger, nullable=False)
    action: Mapped[str] = mapped_column(String(60), nullable=False)
    username: Mapped[str] = mapped_column(String(255), nullable=False)
    ip: Mapped[str | None] = mapped_column(String(50))
    object_type: Mapped[str | None] = mapped_column(String(50))
    object_name: Mapped[str | None] = mapped_column(String(255))
    object_data: Mapped[bytes | None] = mapped_column(LargeBinary)
    role: Mapped[str | None] = mapped_column(String(255))
    instance_id: Mapped[str | None] = mapped_column(String(60))

    def __repr__(self) -> str:
        return (
            f"<ProviderEvent(id={self.id!r}, timestamp={self.timestamp}, "
            f"object={self.object_type}/{self.object_name})>"
        )


class LogEvent(Base):
    """A protocol log message (login failed, no login tried, ...)."""

    __tablename__ = "eventstore_log_events"
    __table_args__ = (
        Index("idx_log_events_timestamp", "timestamp"),
        Index("idx_log_events_event", "event"),
        Index("idx_log_events_protocol", "protocol"),
        Index("idx_log_events_username", "username"),
        Index("idx_log_events_ip", "ip"),
        Index("idx_log_events_role", "role"),
        Index("idx_log_events_instance_id", "instance_id"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    timestamp: Mapped[int] = mapped_column(BigInteger, nullable=False)
    event: Mapped[int] = mapped_column(Integer, nullable=False)
    protocol: Mapped[str] = mapped_column(String(30), nullable=False)
    username: Mapped[str | None] = mapped_column(String(255))
    ip: Mapped[str | None] = mapped_column(String(50))
    message: Mapped[str | None] = mapped_column(String(2048))
    role: Mapped[str | None] = mapped_column(String(255))
    instance_id: Mapped[str | None] = mapped_column(String(60))

    def __repr__(self) -> str:
        return f"<LogEvent(id={self.id!r}, timestamp={self.timestamp}, event={self.event})>"
