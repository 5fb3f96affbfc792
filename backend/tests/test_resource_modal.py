import pytest

from ecotrails_admin.domain.resources.errors import ModalTransitionError
from ecotrails_admin.domain.resources.modal import (
    CLOSED,
    Adding,
    Closed,
    ConfirmingDelete,
    ModalController,
    Viewing,
)


def test_view_edit_cancel_flow():
    modal = ModalController()
    record = {"id": 1, "name": "Loop", "tags": ["a"]}

    modal.view(record)
    assert isinstance(modal.state, Viewing)
    assert modal.is_open

    editing = modal.edit()
    editing.draft["tags"].append("b")
    assert record["tags"] == ["a"]

    modal.cancel()
    assert modal.state == CLOSED
    assert modal.draft is None


def test_update_draft_replaces_state():
    modal = ModalController()
    modal.add({"status": "Draft"})

    before = modal.state
    after = modal.update_draft(name="Canyon")

    assert isinstance(after, Adding)
    assert after.draft == {"status": "Draft", "name": "Canyon"}
    assert before.draft == {"status": "Draft"}


def test_request_delete_and_cancel_returns_to_previous():
    modal = ModalController(id_field="locationId")
    modal.view({"locationId": 8})
    modal.edit()
    editing = modal.state

    confirming = modal.request_delete()
    assert isinstance(confirming, ConfirmingDelete)
    assert confirming.record_id == 8

    assert modal.cancel() == editing


def test_opening_a_modal_replaces_the_open_one():
    modal = ModalController()
    modal.add({"status": "Draft"})
    modal.update_draft(name="Unsaved")

    viewing = modal.view({"id": 1})
    assert modal.state == viewing
    assert modal.draft is None

    modal.edit()
    adding = modal.add({"status": "Draft"})
    assert modal.state == adding
    assert adding.draft == {"status": "Draft"}

    modal.view({"id": 2})
    modal.request_delete()
    assert isinstance(modal.add(), Adding)


def test_delete_cannot_be_requested_while_adding():
    modal = ModalController()
    modal.add()

    with pytest.raises(ModalTransitionError):
        modal.request_delete()


@pytest.mark.parametrize("action", ["edit", "request_delete", "update_draft"])
def test_actions_rejected_while_closed(action):
    modal = ModalController()

    with pytest.raises(ModalTransitionError) as exc_info:
        getattr(modal, action)()

    assert exc_info.value.state == "closed"
    assert isinstance(modal.state, Closed)


def test_request_delete_requires_an_id():
    modal = ModalController()
    modal.view({"name": "no id"})

    with pytest.raises(ModalTransitionError):
        modal.request_delete()
    assert isinstance(modal.state, Viewing)


def test_close_from_any_state():
    modal = ModalController()
    modal.view({"id": 3})
    modal.request_delete()

    assert modal.close() == CLOSED
    assert not modal.is_open


def test_reset_returns_to_closed():
    modal = ModalController()
    modal.add({"status": "Draft"})

    assert modal.reset() == CLOSED
    assert modal.draft is None
