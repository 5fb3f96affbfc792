from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

logger = logging.getLogger(__name__)

Record = dict[str, Any]


def canonical_key(key: str) -> str:
    """Map server field names onto one casing: ``Status`` -> ``status``, ``LocationId`` -> ``locationId``."""
    if not key:
        return key
    if key.isupper():
        return key.lower()
    return key[0].lower() + key[1:]


def normalize_record(raw: Mapping[str, Any]) -> Record:
    # A non-null value beats a null one; among equals the canonical key beats its capitalized twin.
    record: Record = {}
    ranks: dict[str, tuple[bool, bool]] = {}
    for key, value in raw.items():
        key = str(key)
        name = canonical_key(key)
        rank = (value is not None, key == name)
        if name not in record or rank > ranks[name]:
            record[name] = value
            ranks[name] = rank
    return record


def normalize_collection(items: Iterable[Any]) -> list[Record]:
    records: list[Record] = []
    for item in items:
        if not isinstance(item, Mapping):
            logger.warning("record_skipped_not_mapping", extra={"extra": {"type": type(item).__name__}})
            continue
        records.append(normalize_record(item))
    return records


def coerce_collection(payload: Any, wrapper_key: str | None = None) -> list[Record]:
    if isinstance(payload, list):
        return normalize_collection(payload)
    if isinstance(payload, Mapping):
        if wrapper_key:
            wrapped = payload.get(wrapper_key)
            if wrapped is None:
                wrapped = payload.get(wrapper_key[:1].upper() + wrapper_key[1:])
            if isinstance(wrapped, list):
                return normalize_collection(wrapped)
        return [normalize_record(payload)]
    return []


def record_id(record: Mapping[str, Any], id_field: str = "id") -> Any:
    value = record.get(id_field)
    if value is None and id_field != "id":
        value = record.get("id")
    return value


def status_of(record: Mapping[str, Any], status_field: str = "status") -> str:
    value = record.get(status_field)
    return "" if value is None else str(value)


def to_server_payload(draft: Mapping[str, Any], fields: Mapping[str, str]) -> dict[str, Any]:
    return {server_key: draft.get(name) for name, server_key in fields.items()}
