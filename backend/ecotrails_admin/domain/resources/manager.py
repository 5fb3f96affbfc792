from __future__ import annotations

import asyncio
import logging
from typing import Any, Coroutine, Mapping

import httpx

from ecotrails_admin.domain.resources import fetcher, mutator
from ecotrails_admin.domain.resources.catalog import ResourceSpec
from ecotrails_admin.domain.resources.errors import (
    AdminApiError,
    FetchError,
    ModalTransitionError,
    MutationError,
    MutationValidationError,
)
from ecotrails_admin.domain.resources.filtering import ALL, apply_filter
from ecotrails_admin.domain.resources.modal import (
    Adding,
    ConfirmingDelete,
    Editing,
    ModalController,
    ModalState,
    Viewing,
    state_name,
)
from ecotrails_admin.domain.resources.records import Record, record_id
from ecotrails_admin.infra.http import build_http_client
from ecotrails_admin.settings import Settings
from ecotrails_admin.shared.collaborators import LoggingNotifier, Notifier

logger = logging.getLogger(__name__)


class ResourceListManager:
    """State owner for one admin resource screen.

    The manager keeps the fetched collection, the selected filter key and the
    single active modal, and runs every fetch and mutation for the screen.
    Each list fetch and detail load is numbered; a response that arrives after
    a newer request was issued is dropped, so the committed collection always
    belongs to the latest request.
    """

    def __init__(
        self,
        resource: ResourceSpec,
        *,
        http_client: httpx.AsyncClient | None = None,
        notifier: Notifier | None = None,
        app_settings: Settings | None = None,
    ) -> None:
        self.resource = resource
        self.endpoint = resource.endpoint(app_settings)
        self.notifier: Notifier = notifier or LoggingNotifier()
        self.modal = ModalController(id_field=resource.id_field)
        self.records: list[Record] = []
        self.filter_key: str = ALL
        self.loading = False
        self.refreshing = False
        self.detail_loading = False
        self.saving = False
        self.error: str | None = None
        self.last_error: AdminApiError | None = None
        self._client = http_client or build_http_client()
        self._owns_client = http_client is None
        self._fetch_seq = 0
        self._committed_seq = 0
        self._detail_seq = 0
        self._tasks: set[asyncio.Task[Any]] = set()

    async def __aenter__(self) -> "ResourceListManager":
        self.mount()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    @property
    def filtered(self) -> list[Record]:
        return apply_filter(self.records, self.filter_key, self.resource.status_field)

    @property
    def state(self) -> ModalState:
        return self.modal.state

    @property
    def draft(self) -> Record | None:
        return self.modal.draft

    def set_filter(self, filter_key: str | None) -> list[Record]:
        self.filter_key = filter_key or ALL
        return self.filtered

    def find(self, target_id: Any) -> Record | None:
        for record in self.records:
            if record_id(record, self.resource.id_field) == target_id:
                return record
        return None

    def schedule(self, coro: Coroutine[Any, Any, Any]) -> asyncio.Task[Any]:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def mount(self) -> asyncio.Task[Any]:
        self.modal.reset()
        return self.schedule(self.refresh())

    async def close(self) -> None:
        pending = [task for task in self._tasks if not task.done()]
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
            logger.info("manager_tasks_cancelled", extra={"extra": {"resource": self.resource.name, "count": len(pending)}})
        self.modal.close()
        self.loading = False
        self.refreshing = False
        self.detail_loading = False
        if self._owns_client:
            await self._client.aclose()

    def _fail(self, title: str, exc: AdminApiError) -> None:
        self.error = exc.message
        self.last_error = exc
        self.notifier.alert(title, exc.message)

    async def refresh(self, *, pull: bool = False) -> bool:
        self._fetch_seq += 1
        seq = self._fetch_seq
        if pull:
            self.refreshing = True
        else:
            self.loading = True
        try:
            records = await fetcher.fetch_list(
                self._client,
                self.endpoint.list_url,
                text_fallback=self.resource.text_fallback,
                wrapper_key=self.resource.wrapper_key,
            )
        except FetchError as exc:
            if seq != self._fetch_seq:
                logger.info("fetch_error_superseded", extra={"extra": {"resource": self.resource.name, "seq": seq}})
                return False
            self._fail("Error", exc)
            return False
        finally:
            if seq == self._fetch_seq:
                self.loading = False
                self.refreshing = False

        if seq <= self._committed_seq:
            logger.info(
                "fetch_response_discarded",
                extra={"extra": {"resource": self.resource.name, "seq": seq, "committed": self._committed_seq}},
            )
            return False
        self._committed_seq = seq
        self.records = records
        self.error = None
        self.last_error = None
        return True

    async def retry(self) -> bool:
        return await self.refresh()

    async def select(self, record: Mapping[str, Any]) -> bool:
        if not self.resource.has_detail:
            self.modal.view(record)
            return True

        issued_state = self.modal.state
        self._detail_seq += 1
        seq = self._detail_seq
        self.detail_loading = True
        try:
            detail = await fetcher.load_detail(
                self._client, self.endpoint.list_url, record_id(record, self.resource.id_field)
            )
        except FetchError as exc:
            if seq == self._detail_seq:
                self._fail("Error", exc)
            return False
        finally:
            if seq == self._detail_seq:
                self.detail_loading = False

        # A modal the user opened while the detail was loading stays open.
        opened_since = self.modal.state is not issued_state and isinstance(
            self.modal.state, (Editing, Adding, ConfirmingDelete)
        )
        if seq != self._detail_seq or opened_since:
            logger.info("detail_response_discarded", extra={"extra": {"resource": self.resource.name, "seq": seq}})
            return False
        self.modal.view(detail)
        return True

    def _focus(self, record: Mapping[str, Any] | None, *keep: type) -> None:
        if record is None:
            return
        state = self.modal.state
        if isinstance(state, keep):
            current = state.record if isinstance(state, Viewing) else state.source
            if record_id(current, self.resource.id_field) == record_id(record, self.resource.id_field):
                return
        self.modal.view(record)

    def start_edit(self, record: Mapping[str, Any] | None = None) -> Editing:
        if not self.resource.can_update:
            raise ModalTransitionError("edit", f"{self.resource.name} is read-only")
        self._focus(record, Viewing)
        return self.modal.edit()

    def open_add(self) -> Adding:
        if not self.resource.can_create:
            raise ModalTransitionError("add", f"{self.resource.name} does not support create")
        return self.modal.add(self.resource.add_defaults)

    def update_draft(self, **changes: Any) -> Editing | Adding:
        return self.modal.update_draft(**changes)

    def request_delete(self, record: Mapping[str, Any] | None = None) -> ConfirmingDelete:
        if not self.resource.can_delete:
            raise ModalTransitionError("request delete", f"{self.resource.name} does not support delete")
        self._focus(record, Viewing, Editing)
        return self.modal.request_delete()

    def cancel(self) -> ModalState:
        return self.modal.cancel()

    async def _after_mutation(self, message: str) -> None:
        self.modal.close()
        self.notifier.alert("Success", message)
        await self.refresh()

    async def save(self) -> bool:
        state = self.modal.state
        if not isinstance(state, (Adding, Editing)):
            raise ModalTransitionError("save", state_name(state))
        try:
            cleaned = self.resource.validate(state.draft)
        except MutationValidationError as exc:
            self._fail("Validation Error", exc)
            return False

        self.saving = True
        try:
            if isinstance(state, Adding):
                await mutator.create(self._client, self.endpoint, self.resource.build_create_payload(cleaned))
                message = f"{self.resource.label} created."
            else:
                target = record_id(state.source, self.resource.id_field)
                payload = self.resource.build_update_payload(cleaned, target)
                if self.resource.update_mode == "status":
                    await mutator.update_status(self._client, self.endpoint, target, payload)
                else:
                    await mutator.update(self._client, self.endpoint, target, payload)
                message = f"{self.resource.label} updated."
        except MutationError as exc:
            self._fail("Error", exc)
            return False
        finally:
            self.saving = False
        await self._after_mutation(message)
        return True

    async def set_status(self, status: str, record: Mapping[str, Any] | None = None) -> bool:
        if not self.resource.can_update_status:
            raise ModalTransitionError("update status", f"{self.resource.name} has no status endpoint")
        self._focus(record, Viewing)
        state = self.modal.state
        if not isinstance(state, Viewing):
            raise ModalTransitionError("update status", state_name(state))
        target = record_id(state.record, self.resource.id_field)

        self.saving = True
        try:
            await mutator.update_status(self._client, self.endpoint, target, self.resource.build_status_payload(status))
        except MutationError as exc:
            self._fail("Error", exc)
            return False
        finally:
            self.saving = False
        await self._after_mutation(f"{self.resource.label} {target} marked as {status}.")
        return True

    async def confirm_delete(self) -> bool:
        state = self.modal.state
        if not isinstance(state, ConfirmingDelete):
            logger.warning(
                "delete_without_confirmation",
                extra={"extra": {"resource": self.resource.name, "state": state_name(state)}},
            )
            return False
        try:
            await mutator.delete(self._client, self.endpoint, state)
        except MutationError as exc:
            self._fail("Error", exc)
            return False
        await self._after_mutation(f"{self.resource.label} deleted.")
        return True
