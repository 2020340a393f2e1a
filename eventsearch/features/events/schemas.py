"""Pydantic schemas for event searches and event records."""

from __future__ import annotations

import base64
import binascii
from typing import Any, ClassVar

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializerFunctionWrapHandler,
    field_serializer,
    field_validator,
    model_serializer,
    model_validator,
)

# ──────────────────────────────────────────────────────────────
# Search parameters
# ──────────────────────────────────────────────────────────────


class CommonSearchParams(BaseModel):
    """Filters shared by every event kind.

    Empty values never restrict the search. ``limit`` is checked when the
    search runs, so an invalid request still builds and can be logged.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    start_timestamp: int = Field(
        default=0, description="Inclusive lower bound; 0 or less means unbounded."
    )
    end_timestamp: int = Field(
        default=0, description="Inclusive upper bound; 0 or less means unbounded."
    )
    username: str = ""
    ip: str = ""
    instance_ids: list[str] = Field(default_factory=list)
    exclude_ids: list[str] = Field(
        default_factory=list,
        description="IDs to leave out. Used by boundary-exclusion paging (deprecated).",
    )
    role: str = ""
    from_id: str = Field(
        default="",
        description="Resume after this row; pairs with the boundary timestamp.",
    )
    limit: int = Field(default=0, description="Maximum rows; must be positive.")
    order: int = Field(default=0, description="0 = newest first, anything else = oldest first.")


class FsEventSearch(CommonSearchParams):
    """Filesystem event search."""

    actions: list[str] = Field(default_factory=list)
    ssh_cmd: str = ""
    protocols: list[str] = Field(default_factory=list)
    statuses: list[int] = Field(default_factory=list)
    fs_provider: int = Field(default=-1, description="Negative means any provider.")
    bucket: str = ""
    endpoint: str = ""


class ProviderEventSearch(CommonSearchParams):
    """Provider (configuration object) event search."""

    actions: list[str] = Field(default_factory=list)
    object_name: str = ""
    object_types: list[str] = Field(default_factory=list)


class LogEventSearch(CommonSearchParams):
    """Log event search."""

    events: list[int] = Field(default_factory=list)
    protocols: list[str] = Field(default_factory=list)


# ──────────────────────────────────────────────────────────────
# Event records
# ──────────────────────────────────────────────────────────────


class EventRecord(BaseModel):
    """Wire representation of a stored event.

    NULL columns become the field's zero value, and the fields listed in
    ``omit_when_zero`` are left out of serialized output while they hold
    their zero value.
    """

    model_config = ConfigDict(from_attributes=True, frozen=True)

    omit_when_zero: ClassVar[frozenset[str]] = frozenset()

    id: str
    timestamp: int

    @model_validator(mode="before")
    @classmethod
    def _nulls_to_zero(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            data = {name: getattr(data, name, None) for name in cls.model_fields}
        return {key: value for key, value in data.items() if value is not None}

    @model_serializer(mode="wrap")
    def _omit_zero_values(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        for name in self.omit_when_zero:
            if name in data and not data[name]:
                del data[name]
        return data


class FsEventRecord(EventRecord):
    omit_when_zero: ClassVar[frozenset[str]] = frozenset(
        {
            "fs_target_path",
            "virtual_target_path",
            "ssh_cmd",
            "file_size",
            "elapsed",
            "ip",
            "bucket",
            "endpoint",
            "open_flags",
            "role",
            "instance_id",
        }
    )

    action: str = ""
    username: str = ""
    fs_path: str = ""
    fs_target_path: str = ""
    virtual_path: str = ""
    virtual_target_path: str = ""
    ssh_cmd: str = ""
    file_size: int = 0
    elapsed: int = 0
    status: int = 0
    protocol: str = ""
    ip: str = ""
    session_id: str = ""
    fs_provider: int = 0
    bucket: str = ""
    endpoint: str = ""
    open_flags: int = 0
    role: str = ""
    instance_id: str = ""


class ProviderEventRecord(EventRecord):
    """Provider event; ``object_data`` travels as standard base64."""

    omit_when_zero: ClassVar[frozenset[str]] = frozenset({"ip", "role", "instance_id"})

    action: str = ""
    username: str = ""
    ip: str = ""
    object_type: str = ""
    object_name: str = ""
    object_data: bytes = b""
    role: str = ""
    instance_id: str = ""

    @field_validator("object_data", mode="before")
    @classmethod
    def _decode_object_data(cls, value: Any) -> Any:
        if isinstance(value, str):
            try:
                return base64.b64decode(value, validate=True)
            except binascii.Error as exc:
                msg = "object_data must be standard base64"
                raise ValueError(msg) from exc
        return value

    @field_serializer("object_data", when_used="json")
    def _encode_object_data(self, value: bytes) -> str:
        return base64.b64encode(value).decode("ascii")


class LogEventRecord(EventRecord):
    omit_when_zero: ClassVar[frozenset[str]] = frozenset(
        {"protocol", "username", "ip", "message", "role", "instance_id"}
    )

    event: int = 0
    protocol: str = ""
    username: str = ""
    ip: str = ""
    message: str = ""
    role: str = ""
    instance_id: str = ""


__all__ = [
    "CommonSearchParams",
    "EventRecord",
    "FsEventRecord",
    "FsEventSearch",
    "LogEventRecord",
    "LogEventSearch",
    "ProviderEventRecord",
    "ProviderEventSearch",
]
