from __future__ import annotations

import logging
from typing import Any, Mapping

import httpx

from ecotrails_admin.domain.resources.catalog import ResourceEndpoint
from ecotrails_admin.domain.resources.errors import (
    ModalTransitionError,
    MutationNetworkError,
    MutationRemoteError,
)
from ecotrails_admin.domain.resources.modal import ConfirmingDelete, state_name
from ecotrails_admin.domain.resources.records import Record, normalize_record
from ecotrails_admin.infra.http import BodyNotJson, decode_body, extract_error_message

logger = logging.getLogger(__name__)


async def _send(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    payload: Mapping[str, Any] | None = None,
) -> Record | None:
    try:
        response = await client.request(method, url, json=dict(payload) if payload is not None else None)
    except httpx.HTTPError as exc:
        logger.warning(
            "mutation_request_failed",
            extra={"extra": {"method": method, "url": url, "reason": type(exc).__name__}},
        )
        raise MutationNetworkError(type(exc).__name__) from exc

    if response.is_error:
        message = extract_error_message(response, default=f"{method} failed with status {response.status_code}")
        logger.warning(
            "mutation_http_error",
            extra={"extra": {"method": method, "url": url, "status_code": response.status_code}},
        )
        raise MutationRemoteError(response.status_code, message)

    logger.info("mutation_ok", extra={"extra": {"method": method, "url": url, "status_code": response.status_code}})
    try:
        body = decode_body(response)
    except BodyNotJson:
        return None
    return normalize_record(body) if isinstance(body, Mapping) else None


async def create(client: httpx.AsyncClient, endpoint: ResourceEndpoint, payload: Mapping[str, Any]) -> Record | None:
    return await _send(client, "POST", endpoint.collection_url, payload)


async def update(
    client: httpx.AsyncClient,
    endpoint: ResourceEndpoint,
    record_id: Any,
    payload: Mapping[str, Any],
) -> Record | None:
    return await _send(client, "PUT", endpoint.item_url(record_id), payload)


async def update_status(
    client: httpx.AsyncClient,
    endpoint: ResourceEndpoint,
    record_id: Any,
    payload: Mapping[str, Any],
) -> Record | None:
    return await _send(client, "PUT", endpoint.status_url(record_id), payload)


async def delete(client: httpx.AsyncClient, endpoint: ResourceEndpoint, confirmation: ConfirmingDelete) -> None:
    """Issue DELETE for a confirmed record.

    The confirmation must be the ``ConfirmingDelete`` modal state itself, so a
    delete cannot be sent for a record the user has not confirmed.
    """
    if not isinstance(confirmation, ConfirmingDelete):
        raise ModalTransitionError("delete", state_name(confirmation) if confirmation is not None else "unconfirmed")
    await _send(client, "DELETE", endpoint.item_url(confirmation.record_id))
