import pytest

from ecotrails_admin.domain.resources.filtering import ALL, apply_filter, is_all

COLLECTION = [
    {"id": 1, "status": "Pending"},
    {"id": 2, "status": "Confirmed"},
    {"id": 3, "status": "pending"},
    {"id": 4},
]


@pytest.mark.parametrize("key", [ALL, "all", None])
def test_all_returns_every_record_in_order(key):
    result = apply_filter(COLLECTION, key)

    assert result == COLLECTION
    assert result is not COLLECTION


def test_status_match_is_case_insensitive():
    assert [record["id"] for record in apply_filter(COLLECTION, "PENDING")] == [1, 3]


def test_filter_is_idempotent_and_a_subset():
    once = apply_filter(COLLECTION, "Pending")

    assert apply_filter(once, "Pending") == once
    assert all(record in COLLECTION for record in once)


def test_no_match_returns_empty():
    assert apply_filter([{"id": 1, "status": "Pending"}], "Confirmed") == []


def test_custom_status_field():
    records = [{"id": 1, "state": "Open"}, {"id": 2, "state": "Closed"}]

    assert apply_filter(records, "open", status_field="state") == [{"id": 1, "state": "Open"}]


def test_is_all():
    assert is_all("ALL")
    assert not is_all("Pending")
