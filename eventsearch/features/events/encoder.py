"""JSON payload encoding for event pages.

A payload is a JSON array of records. Optional fields holding their zero
value are omitted and ``object_data`` is standard base64, so decoding a
payload yields records equal to the ones encoded.
"""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING, TypeVar

from pydantic import TypeAdapter

if TYPE_CHECKING:
    from collections.abc import Iterable

    from eventsearch.features.events.schemas import EventRecord


R = TypeVar("R", bound="EventRecord")


def encode_events(records: Iterable[EventRecord]) -> bytes:
    """Serialize records to a compact JSON array."""
    return b"[" + b",".join(r.model_dump_json().encode() for r in records) + b"]"


@lru_cache(maxsize=8)
def _list_adapter(record_type: type[R]) -> TypeAdapter[list[R]]:
    return TypeAdapter(list[record_type])


def decode_events(payload: bytes | str, record_type: type[R]) -> list[R]:
    """Parse a payload produced by ``encode_events``.

    Raises:
        pydantic.ValidationError: If the payload is not an array of ``record_type``.
    """
    return _list_adapter(record_type).validate_json(payload)


__all__ = ["decode_events", "encode_events"]
