from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

import httpx

from ecotrails_admin.domain.resources.errors import AdminApiError
from ecotrails_admin.infra.http import build_http_client, decode_body
from ecotrails_admin.settings import Settings, settings as default_settings
from ecotrails_admin.shared.collaborators import LoggingNotifier, Navigator, Notifier

logger = logging.getLogger(__name__)

LOGIN_PATH = "user/login"
DASHBOARD_SCREEN = "AdminDashboard"


class LoginError(AdminApiError):
    def __init__(self, code: str, message: str, title: str = "Login Failed") -> None:
        super().__init__(message)
        self.code = code
        self.title = title


@dataclass(frozen=True)
class AdminSession:
    email: str
    role: str


def _login_accepted(payload: Mapping[str, Any]) -> bool:
    if payload.get("success"):
        return True
    message = payload.get("message")
    return isinstance(message, str) and "success" in message.lower()


class AdminAuthService:
    def __init__(
        self,
        navigator: Navigator,
        *,
        notifier: Notifier | None = None,
        http_client: httpx.AsyncClient | None = None,
        app_settings: Settings | None = None,
    ) -> None:
        self._navigator = navigator
        self._notifier: Notifier = notifier or LoggingNotifier()
        self._settings = app_settings or default_settings
        self._client = http_client or build_http_client()
        self._owns_client = http_client is None
        self.loading = False

    @property
    def url(self) -> str:
        return f"{self._settings.api_base_url('users')}/{LOGIN_PATH}"

    async def login(self, email: str, password: str) -> AdminSession:
        if not email or not password:
            raise LoginError("missing_credentials", "Please enter both email and password")

        self.loading = True
        try:
            response = await self._client.post(self.url, json={"Email": email, "PasswordHash": password})
        except httpx.HTTPError as exc:
            logger.warning("admin_login_request_failed", extra={"extra": {"reason": type(exc).__name__}})
            raise LoginError("network", "Network or server error.") from exc
        finally:
            self.loading = False

        body = decode_body(response, text_fallback=True)
        payload: Mapping[str, Any] = body if isinstance(body, Mapping) else {}
        if response.is_error or not _login_accepted(payload):
            message = payload.get("message") or payload.get("error") or response.text or "Unknown error occurred."
            logger.info(
                "admin_login_rejected",
                extra={"extra": {"status_code": response.status_code, "email": email}},
            )
            raise LoginError("rejected", str(message))

        role = payload.get("role")
        if not role:
            raise LoginError("role_missing", "Role information missing from server response.")
        if role != self._settings.admin_role:
            logger.info("admin_login_denied", extra={"extra": {"role": role}})
            raise LoginError("not_admin", "You are not authorized as admin.", title="Access Denied")

        logger.info("admin_login_ok", extra={"extra": {"email": email}})
        self._navigator.navigate_to(DASHBOARD_SCREEN)
        return AdminSession(email=email, role=str(role))

    async def submit(self, email: str, password: str) -> AdminSession | None:
        try:
            session = await self.login(email, password)
        except LoginError as exc:
            self._notifier.alert(exc.title, exc.message)
            return None
        self._notifier.alert("Admin Login Successful", "Welcome Admin!")
        return session

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()
