from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from ecotrails_admin.domain.analytics.schemas import AnalyticsSummary
from ecotrails_admin.domain.resources.errors import FetchError
from ecotrails_admin.domain.resources.fetcher import fetch_list
from ecotrails_admin.infra.http import build_http_client
from ecotrails_admin.settings import Settings, settings as default_settings

logger = logging.getLogger(__name__)

ANALYTICS_PATH = "admin/analytics"
LOAD_FAILED_MESSAGE = "Unable to load analytics"


class AnalyticsService:
    def __init__(self, *, http_client: httpx.AsyncClient | None = None, app_settings: Settings | None = None) -> None:
        self._settings = app_settings or default_settings
        self._client = http_client or build_http_client()
        self._owns_client = http_client is None
        self.summary: AnalyticsSummary | None = None
        self.loading = False
        self.error: str | None = None

    @property
    def url(self) -> str:
        return f"{self._settings.api_base_url('partners')}/{ANALYTICS_PATH}"

    async def load(self) -> AnalyticsSummary | None:
        self.loading = True
        self.error = None
        try:
            records = await fetch_list(self._client, self.url)
            summary = AnalyticsSummary.model_validate(records[0] if records else {})
        except ValidationError as exc:
            logger.warning("analytics_invalid_payload", extra={"extra": {"errors": exc.error_count()}})
            self.error = LOAD_FAILED_MESSAGE
            return None
        except FetchError as exc:
            logger.warning("analytics_load_failed", extra={"extra": {"reason": exc.message}})
            self.error = LOAD_FAILED_MESSAGE
            return None
        finally:
            self.loading = False
        self.summary = summary
        return summary

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()
