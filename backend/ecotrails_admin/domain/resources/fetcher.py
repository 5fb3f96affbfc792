from __future__ import annotations

import logging
from typing import Any, Mapping

import httpx

from ecotrails_admin.domain.resources.errors import (
    FetchHttpStatusError,
    FetchNetworkError,
    FetchParseError,
)
from ecotrails_admin.domain.resources.records import Record, coerce_collection, normalize_record
from ecotrails_admin.infra.http import BodyNotJson, decode_body, extract_error_message, item_url

logger = logging.getLogger(__name__)


async def _get(client: httpx.AsyncClient, url: str) -> httpx.Response:
    try:
        response = await client.get(url)
    except httpx.HTTPError as exc:
        logger.warning("fetch_request_failed", extra={"extra": {"url": url, "reason": type(exc).__name__}})
        raise FetchNetworkError(type(exc).__name__) from exc
    if response.is_error:
        message = extract_error_message(response)
        logger.warning(
            "fetch_http_error",
            extra={"extra": {"url": url, "status_code": response.status_code}},
        )
        raise FetchHttpStatusError(response.status_code, message)
    return response


def _decode(response: httpx.Response, *, text_fallback: bool) -> Any:
    try:
        return decode_body(response, text_fallback=text_fallback)
    except BodyNotJson as exc:
        logger.warning(
            "fetch_parse_failed",
            extra={"extra": {"url": str(response.request.url), "length": len(exc.raw_text)}},
        )
        raise FetchParseError() from exc


async def fetch_list(
    client: httpx.AsyncClient,
    url: str,
    *,
    text_fallback: bool = False,
    wrapper_key: str | None = None,
) -> list[Record]:
    response = await _get(client, url)
    payload = _decode(response, text_fallback=text_fallback)
    records = coerce_collection(payload, wrapper_key)
    logger.info("fetch_list_ok", extra={"extra": {"url": url, "count": len(records)}})
    return records


async def load_detail(client: httpx.AsyncClient, base_url: str, record_id: Any) -> Record:
    if record_id is None:
        logger.warning("detail_missing_id", extra={"extra": {"url": base_url}})
        raise FetchParseError("This record has no id.")
    url = item_url(base_url, record_id)
    response = await _get(client, url)
    payload = _decode(response, text_fallback=False)
    if isinstance(payload, list) and payload and isinstance(payload[0], Mapping):
        payload = payload[0]
    if not isinstance(payload, Mapping):
        raise FetchParseError("Server returned no details for this record.")
    return normalize_record(payload)
