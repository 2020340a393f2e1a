"""Unit tests for event records and payload encoding."""
from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from eventsearch.features.events import (
    FsEventRecord,
    FsEventSearch,
    LogEventRecord,
    ProviderEventRecord,
    decode_events,
    encode_events,
)
from eventsearch.features.events.models import FsEvent, ProviderEvent


class TestRecordsFromRows:
    """Records built from ORM rows."""

    def test_nulls_become_zero_values(self):
        row = FsEvent(id="1", timestamp=10, action="upload", username="alice", ip=None)

        record = FsEventRecord.model_validate(row)

        assert record.ip == ""
        assert record.file_size == 0
        assert record.action == "upload"

    def test_provider_null_blob(self):
        row = ProviderEvent(id="1", timestamp=10, action="add", object_data=None)

        assert ProviderEventRecord.model_validate(row).object_data == b""


class TestSerialization:
    """Zero-valued optional fields are omitted from the JSON form."""

    def test_fs_optional_fields_omitted(self):
        record = FsEventRecord(id="1", timestamp=10, action="upload", status=1)

        data = json.loads(record.model_dump_json())

        assert data["action"] == "upload"
        assert data["fs_path"] == ""
        assert data["fs_provider"] == 0
        for name in ("ip", "role", "instance_id", "bucket", "file_size", "open_flags"):
            assert name not in data

    def test_fs_optional_fields_kept_when_set(self):
        record = FsEventRecord(id="1", timestamp=10, ip="10.0.0.1", file_size=5, open_flags=512)

        data = json.loads(record.model_dump_json())

        assert data["ip"] == "10.0.0.1"
        assert data["file_size"] == 5
        assert data["open_flags"] == 512

    def test_log_event_field_always_present(self):
        data = json.loads(LogEventRecord(id="1", timestamp=1).model_dump_json())

        assert data == {"id": "1", "timestamp": 1, "event": 0}

    def test_object_data_is_base64(self):
        record = ProviderEventRecord(id="1", timestamp=1, object_data=b"\x00\xff")

        data = json.loads(record.model_dump_json())

        assert data["object_data"] == "AP8="
        assert record.model_dump()["object_data"] == b"\x00\xff"

    def test_object_data_accepts_base64(self):
        record = ProviderEventRecord.model_validate_json(
            '{"id": "1", "timestamp": 1, "object_data": "AP8="}'
        )

        assert record.object_data == b"\x00\xff"

    def test_object_data_rejects_invalid_base64(self):
        with pytest.raises(ValidationError, match="standard base64"):
            ProviderEventRecord.model_validate_json(
                '{"id": "1", "timestamp": 1, "object_data": "not base64!"}'
            )


class TestPayload:
    """encode_events / decode_events."""

    def test_empty(self):
        assert encode_events([]) == b"[]"
        assert decode_events(b"[]", FsEventRecord) == []

    def test_round_trip(self):
        records = [
            ProviderEventRecord(id="1", timestamp=1, object_data=b'{"a":1}', role="admins"),
            ProviderEventRecord(id="2", timestamp=2),
        ]

        payload = encode_events(records)

        assert json.loads(payload)[1] == {
            "id": "2",
            "timestamp": 2,
            "action": "",
            "username": "",
            "object_type": "",
            "object_name": "",
            "object_data": "",
        }
        assert decode_events(payload, ProviderEventRecord) == records

    def test_decode_rejects_other_shapes(self):
        with pytest.raises(ValidationError):
            decode_events(b'{"id": "1"}', FsEventRecord)


class TestSearchParams:
    """Search parameter models."""

    def test_defaults(self):
        params = FsEventSearch()

        assert params.limit == 0
        assert params.order == 0
        assert params.fs_provider == -1
        assert params.actions == []

    def test_unknown_fields_rejected(self):
        with pytest.raises(ValidationError):
            FsEventSearch(limit=1, object_types=["user"])
