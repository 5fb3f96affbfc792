from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Union

from ecotrails_admin.domain.resources.errors import ModalTransitionError
from ecotrails_admin.domain.resources.records import Record, record_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Closed:
    pass


@dataclass(frozen=True)
class Viewing:
    record: Record


@dataclass(frozen=True)
class Editing:
    draft: Record
    source: Record


@dataclass(frozen=True)
class Adding:
    draft: Record


@dataclass(frozen=True)
class ConfirmingDelete:
    record_id: Any
    previous: Union[Viewing, Editing]


ModalState = Union[Closed, Viewing, Editing, Adding, ConfirmingDelete]

CLOSED = Closed()


def state_name(state: ModalState) -> str:
    return type(state).__name__.lower()


class ModalController:
    """Holds the single active modal of a resource screen.

    Transitions:
        any             -> viewing            view(record), replaces any open modal and its draft
        viewing         -> editing            edit()
        any             -> adding             add(defaults), replaces any open modal and its draft
        viewing/editing -> confirmingdelete   request_delete()
        confirmingdelete -> previous state    cancel()
        editing/adding/viewing -> closed      cancel() or close()
        any             -> closed             reset() on screen re-mount, not logged
    """

    def __init__(self, id_field: str = "id") -> None:
        self.id_field = id_field
        self._state: ModalState = CLOSED

    @property
    def state(self) -> ModalState:
        return self._state

    @property
    def is_open(self) -> bool:
        return not isinstance(self._state, Closed)

    @property
    def draft(self) -> Record | None:
        if isinstance(self._state, (Editing, Adding)):
            return self._state.draft
        return None

    def _transition(self, new_state: ModalState) -> ModalState:
        logger.debug(
            "modal_transition",
            extra={"extra": {"from": state_name(self._state), "to": state_name(new_state)}},
        )
        self._state = new_state
        return new_state

    def _require(self, action: str, *allowed: type) -> None:
        if not isinstance(self._state, allowed):
            raise ModalTransitionError(action, state_name(self._state))

    def view(self, record: Mapping[str, Any]) -> Viewing:
        return self._transition(Viewing(record=dict(record)))

    def edit(self) -> Editing:
        self._require("edit", Viewing)
        record = self._state.record
        return self._transition(Editing(draft=copy.deepcopy(record), source=record))

    def add(self, defaults: Mapping[str, Any] | None = None) -> Adding:
        return self._transition(Adding(draft=copy.deepcopy(dict(defaults or {}))))

    def update_draft(self, **changes: Any) -> Editing | Adding:
        self._require("update draft", Editing, Adding)
        state = self._state
        draft = {**state.draft, **changes}
        if isinstance(state, Editing):
            return self._transition(Editing(draft=draft, source=state.source))
        return self._transition(Adding(draft=draft))

    def request_delete(self) -> ConfirmingDelete:
        self._require("request delete", Viewing, Editing)
        state = self._state
        source = state.record if isinstance(state, Viewing) else state.source
        target = record_id(source, self.id_field)
        if target is None:
            raise ModalTransitionError("request delete", "record has no id")
        return self._transition(ConfirmingDelete(record_id=target, previous=state))

    def cancel(self) -> ModalState:
        if isinstance(self._state, ConfirmingDelete):
            return self._transition(self._state.previous)
        return self._transition(CLOSED)

    def close(self) -> Closed:
        return self._transition(CLOSED)

    def reset(self) -> Closed:
        self._state = CLOSED
        return CLOSED
