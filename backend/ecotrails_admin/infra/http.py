from __future__ import annotations

import json
import logging
from typing import Any
from urllib.parse import quote

import httpx

from ecotrails_admin.settings import settings

logger = logging.getLogger(__name__)

API_HTTP_TRANSPORT: httpx.AsyncBaseTransport | None = None
GENERIC_ERROR_MESSAGE = "Something went wrong. Please try again."
JSON_HEADERS = {"Accept": "application/json", "Content-Type": "application/json"}


def build_timeout() -> httpx.Timeout:
    return httpx.Timeout(settings.request_timeout_seconds)


def build_http_client(*, transport: httpx.AsyncBaseTransport | None = None) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        headers=JSON_HEADERS,
        timeout=build_timeout(),
        transport=transport or API_HTTP_TRANSPORT,
    )


class BodyNotJson(ValueError):
    def __init__(self, raw_text: str) -> None:
        super().__init__("response_body_not_json")
        self.raw_text = raw_text


def decode_body(response: httpx.Response, *, text_fallback: bool = False) -> Any:
    """Decode a response body.

    Empty bodies decode to ``None``. A body that is not JSON raises
    ``BodyNotJson`` unless ``text_fallback`` is set, in which case it
    degrades to ``{"message": <raw text>}``.
    """
    raw_text = response.text
    if not raw_text.strip():
        return None
    try:
        return json.loads(raw_text)
    except ValueError:
        if text_fallback:
            logger.info(
                "response_text_fallback",
                extra={"extra": {"url": str(response.request.url), "status_code": response.status_code}},
            )
            return {"message": raw_text}
        raise BodyNotJson(raw_text) from None


def extract_error_message(response: httpx.Response, default: str = GENERIC_ERROR_MESSAGE) -> str:
    raw_text = response.text.strip()
    if raw_text:
        try:
            payload = json.loads(raw_text)
        except ValueError:
            return raw_text[:500]
        if isinstance(payload, dict):
            for key in ("message", "Message", "error", "title"):
                value = payload.get(key)
                if isinstance(value, str) and value.strip():
                    return value.strip()
    return response.reason_phrase or default


def item_url(base_url: str, record_id: Any) -> str:
    return f"{base_url}/{quote(str(record_id), safe='')}"
