from __future__ import annotations

from typing import Sequence

from ecotrails_admin.domain.resources.records import Record, status_of

ALL = "All"


def is_all(filter_key: str | None) -> bool:
    return filter_key is None or filter_key.lower() == ALL.lower()


def apply_filter(collection: Sequence[Record], filter_key: str | None, status_field: str = "status") -> list[Record]:
    if is_all(filter_key):
        return list(collection)
    wanted = filter_key.lower()
    return [record for record in collection if status_of(record, status_field).lower() == wanted]
